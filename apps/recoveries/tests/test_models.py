import pytest
from datetime import date
from decimal import Decimal
from apps.recoveries.models import DailyRecovery
from apps.recoveries.signals import recovery_changed


@pytest.mark.django_db
class TestGapInvariant:
    """gap == expected_amount - recovered_amount for every saved row."""

    def test_gap_computed_on_create(self, recovery):
        assert recovery.gap == Decimal('200')

    def test_gap_ignores_supplied_value(self, store):
        recovery = DailyRecovery.objects.create(
            store=store,
            date=date(2024, 1, 7),
            expected_amount=Decimal('500'),
            recovered_amount=Decimal('600'),
            gap=Decimal('999'),
        )

        recovery.refresh_from_db()
        assert recovery.gap == Decimal('-100')

    def test_gap_recomputed_with_update_fields(self, recovery):
        recovery.recovered_amount = Decimal('1000')
        recovery.save(update_fields=['recovered_amount'])

        recovery.refresh_from_db()
        assert recovery.gap == Decimal('0')

    def test_store_delete_keeps_history(self, recovery, store):
        store.delete()

        recovery.refresh_from_db()
        assert recovery.store is None
        assert str(recovery) == 'Unknown store - 2024-01-05'


@pytest.mark.django_db
class TestChangeFeed:
    """recovery_changed fires for every insert, update and delete."""

    @pytest.fixture
    def events(self):
        received = []

        def listener(sender, action, instance, **kwargs):
            received.append((action, instance.pk))

        recovery_changed.connect(listener, weak=False)
        yield received
        recovery_changed.disconnect(listener)

    def test_insert_update_delete(self, events, store):
        recovery = DailyRecovery.objects.create(
            store=store,
            date=date(2024, 1, 5),
            expected_amount=Decimal('100'),
            recovered_amount=Decimal('100'),
        )
        recovery_id = recovery.pk

        recovery.observations = 'ok'
        recovery.save()
        recovery.delete()

        assert events == [
            ('insert', recovery_id),
            ('update', recovery_id),
            ('delete', recovery_id),
        ]
