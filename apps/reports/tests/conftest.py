import pytest
from datetime import date
from decimal import Decimal
from django.core.cache import caches
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.recoveries.models import DailyRecovery
from apps.stores.models import Store, StoreOwnerAssignment


@pytest.fixture(autouse=True)
def clear_stats_cache():
    """Each test starts with an empty stats cache."""
    caches['stats'].clear()
    yield
    caches['stats'].clear()


def make_row(store='A', day='2024-01-05', expected=1000, recovered=800, expenses=0,
             gap=None, observations='', record_id=None):
    """A record as a plain mapping, the shape QuerySet.values() rows have."""
    return {
        'id': record_id or f"{store}-{day}",
        'store_id': store,
        'store_name': None if store is None else f"Store {store}",
        'store_code': None if store is None else store,
        'date': day,
        'expected_amount': expected,
        'recovered_amount': recovered,
        'expenses': expenses,
        'gap': gap,
        'observations': observations,
    }


@pytest.fixture
def january_rows():
    """Store A, 5 and 20 January 2024."""
    return [
        make_row(day='2024-01-05', expected=1000, recovered=800),
        make_row(day='2024-01-20', expected=500, recovered=500),
    ]


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    """Create and return an administrator."""
    return User.objects.create_user(
        email='admin@example.com',
        password='TestPass123!',
        full_name='Admin User',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def owner_user(db):
    """Create and return a store owner."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        full_name='Store Owner',
    )


@pytest.fixture
def admin_client(api_client, admin_user):
    """Return API client authenticated as administrator."""
    refresh = RefreshToken.for_user(admin_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def owner_client(api_client, owner_user):
    """Return API client authenticated as store owner."""
    refresh = RefreshToken.for_user(owner_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def store(db):
    return Store.objects.create(name='Moroni Centre', code='MRN')


@pytest.fixture
def other_store(db):
    return Store.objects.create(name='Mutsamudu', code='MTS')


@pytest.fixture
def assignment(store, owner_user):
    return StoreOwnerAssignment.objects.create(store=store, user=owner_user)


@pytest.fixture
def january_recoveries(store, other_store):
    """Store A on 5 and 20 January, store B on 5 January, store A on 3 December."""
    rows = [
        (store, date(2024, 1, 5), '1000', '800', '50'),
        (store, date(2024, 1, 20), '500', '500', '0'),
        (other_store, date(2024, 1, 5), '300', '400', '10'),
        (store, date(2023, 12, 3), '200', '100', '0'),
    ]
    return [
        DailyRecovery.objects.create(
            store=s,
            date=d,
            expected_amount=Decimal(expected),
            recovered_amount=Decimal(recovered),
            expenses=Decimal(expenses),
        )
        for s, d, expected, recovered, expenses in rows
    ]
