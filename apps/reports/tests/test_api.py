import pytest
import uuid
from datetime import date
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.reports.exceptions import InvalidAmountError
from apps.reports.aggregation import PeriodTotals
from apps.reports import views as report_views
from apps.recoveries.models import DailyRecovery
from apps.stores.models import Store
from apps.reports.queries import ReportQueries

pytestmark = pytest.mark.django_db


class TestDashboard:

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('reports:dashboard'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_admin_sees_all_stores(self, admin_client, january_recoveries):
        response = admin_client.get(reverse('reports:dashboard'), {'date': '2024-01-05'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['period_start'] == date(2024, 1, 1)
        assert response.data['period_end'] == date(2024, 1, 31)
        assert response.data['today']['expected'] == Decimal('1300')
        assert response.data['today']['recovered'] == Decimal('1200')
        assert response.data['today']['expenses'] == Decimal('60')
        assert response.data['month']['recovered'] == Decimal('1700')
        assert response.data['month']['gap'] == Decimal('100')
        assert response.data['month']['trend'] == 'deficit'
        assert len(response.data['store_stats']) == 2

    def test_store_filter_keeps_comparison(self, admin_client, store, january_recoveries):
        response = admin_client.get(
            reverse('reports:dashboard'),
            {'date': '2024-01-05', 'store_id': str(store.id)},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['today']['recovered'] == Decimal('800')
        assert response.data['month']['recovered'] == Decimal('1300')
        assert len(response.data['store_stats']) == 2

    def test_store_stats_today_and_month(self, admin_client, store, january_recoveries):
        response = admin_client.get(reverse('reports:dashboard'), {'date': '2024-01-05'})

        by_code = {entry['store_code']: entry for entry in response.data['store_stats']}
        assert by_code['MRN']['today']['recovered'] == Decimal('800')
        assert by_code['MRN']['month']['recovered'] == Decimal('1300')
        assert by_code['MTS']['today']['trend'] == 'surplus'

    def test_owner_scoped_to_assigned_store(self, owner_client, assignment, january_recoveries):
        response = owner_client.get(reverse('reports:dashboard'), {'date': '2024-01-05'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['today']['recovered'] == Decimal('800')
        assert response.data['month']['recovered'] == Decimal('1300')
        assert [entry['store_code'] for entry in response.data['store_stats']] == ['MRN']

    def test_owner_foreign_store_forbidden(self, owner_client, assignment, other_store):
        response = owner_client.get(reverse('reports:dashboard'), {'store_id': str(other_store.id)})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_owner_without_stores_sees_zeros(self, owner_client, january_recoveries):
        response = owner_client.get(reverse('reports:dashboard'), {'date': '2024-01-05'})

        assert response.data['month']['expected'] == Decimal('0')
        assert response.data['store_stats'] == []

    def test_bad_store_id(self, admin_client):
        response = admin_client.get(reverse('reports:dashboard'), {'store_id': 'nope'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_display_strings(self, admin_client, january_recoveries):
        response = admin_client.get(reverse('reports:dashboard'), {'date': '2024-01-05'})

        assert response.data['month']['display']['recovered'] == '1\u202f700\u00a0KMF'
        assert response.data['month']['display']['gap'] == '-100\u00a0KMF'

    def test_refreshed_after_new_recovery(self, admin_client, store, january_recoveries):
        url = reverse('reports:dashboard')
        before = admin_client.get(url, {'date': '2024-01-05'})

        created = admin_client.post(reverse('recoveries:recovery-list'), {
            'store': str(store.id),
            'date': '2024-01-05',
            'expected_amount': '100',
            'recovered_amount': '100',
        }, format='json')
        after = admin_client.get(url, {'date': '2024-01-05'})

        assert created.status_code == status.HTTP_201_CREATED
        assert before.data['today']['recovered'] == Decimal('1200')
        assert after.data['today']['recovered'] == Decimal('1300')

    def test_invalid_amount_is_422(self, admin_client, monkeypatch):
        def corrupt(**kwargs):
            raise InvalidAmountError('Invalid expected_amount on recovery 1', record_id=1)

        monkeypatch.setattr(ReportQueries, 'dashboard_stats', corrupt)

        response = admin_client.get(reverse('reports:dashboard'))

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert 'expected_amount' in response.data['error']


class TestMonthlyArchive:

    def test_buckets_most_recent_first(self, admin_client, january_recoveries):
        response = admin_client.get(reverse('reports:archive'))

        assert response.status_code == status.HTTP_200_OK
        assert [bucket['month'] for bucket in response.data] == ['2024-01', '2023-12']
        january = response.data[0]
        assert january['label'] == 'janvier 2024'
        assert january['record_count'] == 3
        assert january['totals']['expected'] == Decimal('1800')
        assert january['recovery_rate'] == Decimal('94.4')
        assert set(january['stores']) == {'Moroni Centre', 'Mutsamudu'}

    def test_owner_archive(self, owner_client, assignment, january_recoveries):
        response = owner_client.get(reverse('reports:archive'))

        january = response.data[0]
        assert january['totals']['expected'] == Decimal('1500')
        assert january['totals']['recovered'] == Decimal('1300')
        assert january['recovery_rate'] == Decimal('86.7')
        assert list(january['stores']) == ['Moroni Centre']

    def test_store_filter(self, admin_client, other_store, january_recoveries):
        response = admin_client.get(reverse('reports:archive'), {'store_id': str(other_store.id)})

        assert [bucket['month'] for bucket in response.data] == ['2024-01']

    def test_empty(self, admin_client):
        response = admin_client.get(reverse('reports:archive'))

        assert response.data == []


class TestPeriodReport:

    def test_month_in_chronological_order(self, admin_client, january_recoveries):
        response = admin_client.get(reverse('reports:period'), {'period': '2024-01'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 3
        assert [row['date'] for row in response.data['records']] == [
            date(2024, 1, 5), date(2024, 1, 5), date(2024, 1, 20),
        ]
        assert response.data['totals']['recovered'] == Decimal('1700')

    def test_date_range(self, admin_client, january_recoveries):
        response = admin_client.get(reverse('reports:period'), {
            'start_date': '2023-12-01',
            'end_date': '2024-01-05',
        })

        assert response.data['count'] == 3
        assert response.data['totals']['expected'] == Decimal('1500')

    def test_inverted_range(self, admin_client):
        response = admin_client.get(reverse('reports:period'), {
            'start_date': '2024-02-01',
            'end_date': '2024-01-01',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_invalid_period(self, admin_client):
        response = admin_client.get(reverse('reports:period'), {'period': 'janvier'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestTimeseries:

    def test_last_recorded_days(self, admin_client, january_recoveries):
        response = admin_client.get(reverse('reports:timeseries'), {'days': 2})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['days'] == 2
        assert [point['date'] for point in response.data['data']] == [
            date(2024, 1, 5), date(2024, 1, 20),
        ]
        assert response.data['data'][0]['recovered'] == Decimal('1200')

    def test_default_window(self, admin_client, january_recoveries):
        response = admin_client.get(reverse('reports:timeseries'))

        assert response.data['days'] == 14
        assert len(response.data['data']) == 3

    def test_empty(self, admin_client):
        response = admin_client.get(reverse('reports:timeseries'))

        assert response.data['data'] == []


class TestExportCsv:

    def test_all_stores(self, admin_client, january_recoveries):
        response = admin_client.get(reverse('reports:export'), {'period': '2024-01'})

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'] == 'text/csv; charset=utf-8'
        assert response['Content-Disposition'] == \
            'attachment; filename="rapport_Tous_les_magasins_janvier_2024.csv"'

        lines = response.content.decode('utf-8').splitlines()
        assert lines[0] == 'Date;Magasin;Attendu;Recouvré;Dépenses;Observations'
        assert len([line for line in lines[1:] if line.count('/') == 2]) == 3
        assert 'Total Recouvré;1700' in lines
        assert 'Total Écart;100' in lines

    def test_owner_own_store(self, owner_client, store, assignment, january_recoveries):
        response = owner_client.get(reverse('reports:export'), {
            'period': '2024-01',
            'store_id': str(store.id),
        })

        assert response.status_code == status.HTTP_200_OK
        assert 'rapport_Moroni_Centre_janvier_2024.csv' in response['Content-Disposition']
        assert 'Mutsamudu' not in response.content.decode('utf-8')

    def test_empty_period_is_204(self, admin_client, january_recoveries):
        response = admin_client.get(reverse('reports:export'), {'period': '2023-11'})

        assert response.status_code == status.HTTP_204_NO_CONTENT

    def test_period_required(self, admin_client):
        response = admin_client.get(reverse('reports:export'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_owner_foreign_store_forbidden(self, owner_client, assignment, other_store, january_recoveries):
        response = owner_client.get(reverse('reports:export'), {
            'period': '2024-01',
            'store_id': str(other_store.id),
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unknown_store_is_404(self, admin_client):
        response = admin_client.get(reverse('reports:export'), {
            'period': '2024-01',
            'store_id': str(uuid.uuid4()),
        })

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_quoted_store_name_keeps_header_intact(self, admin_client):
        store = Store.objects.create(name='Chez "Ali"; x', code='ALI')
        DailyRecovery.objects.create(
            store=store, date=date(2024, 1, 10), expected_amount=10, recovered_amount=10,
        )

        response = admin_client.get(reverse('reports:export'), {
            'period': '2024-01',
            'store_id': str(store.id),
        })

        assert response['Content-Disposition'] == \
            'attachment; filename="rapport_Chez_Ali_x_janvier_2024.csv"'

    def test_non_ascii_filename_is_encoded(self, admin_client):
        store = Store.objects.create(name='Mitsamiouli Île', code='MIT')
        DailyRecovery.objects.create(
            store=store, date=date(2024, 2, 10), expected_amount=10, recovered_amount=10,
        )

        response = admin_client.get(reverse('reports:export'), {
            'period': '2024-02',
            'store_id': str(store.id),
        })

        assert response['Content-Disposition'] == (
            "attachment; filename*=utf-8''rapport_Mitsamiouli_%C3%8Ele_f%C3%A9vrier_2024.csv"
        )

    def test_totals_computed_once_and_passed_to_csv(self, admin_client, january_recoveries, monkeypatch):
        received = {}
        build = report_views.build_recovery_csv

        def capture(records, totals=None):
            received['totals'] = totals
            return build(records, totals)

        monkeypatch.setattr(report_views, 'build_recovery_csv', capture)

        response = admin_client.get(reverse('reports:export'), {'period': '2024-01'})

        assert response.status_code == status.HTTP_200_OK
        assert isinstance(received['totals'], PeriodTotals)
        assert received['totals'].recovered == Decimal('1700')
