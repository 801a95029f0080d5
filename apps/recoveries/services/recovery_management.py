"""
Daily recovery service.

Creates, updates and deletes recovery records and answers the filtered,
role-scoped listing every read path uses. Each successful mutation
invalidates the derived statistics once the transaction commits.
"""

import logging
import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.recoveries.models import DailyRecovery
from apps.reports.cache import stats_cache
from apps.stores.models import Store
from apps.stores.services import accessible_store_ids

from .exceptions import (
    RecoveryNotFoundError,
    InactiveStoreError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    'store',
    'date',
    'expected_amount',
    'recovered_amount',
    'expenses',
    'observations',
)


def _invalidate_after_commit():
    transaction.on_commit(stats_cache.invalidate)


def scoped_recoveries(*, user: User) -> QuerySet[DailyRecovery]:
    """
    All recoveries the user may read.

    Admins see everything, including records whose store was deleted.
    Owners see the records of their assigned stores only.
    """
    queryset = DailyRecovery.objects.select_related('store', 'created_by')
    store_ids = accessible_store_ids(user=user)
    if store_ids is not None:
        queryset = queryset.filter(store_id__in=store_ids)
    return queryset


def list_recoveries(
    *,
    user: User,
    store_id: Optional[UUID] = None,
    start_date: Optional[datetime.date] = None,
    end_date: Optional[datetime.date] = None
) -> QuerySet[DailyRecovery]:
    """
    Role-scoped recoveries, newest first, filtered by store and date range.

    Both dates are inclusive.
    """
    queryset = scoped_recoveries(user=user)
    if store_id:
        queryset = queryset.filter(store_id=store_id)
    if start_date:
        queryset = queryset.filter(date__gte=start_date)
    if end_date:
        queryset = queryset.filter(date__lte=end_date)
    return queryset.order_by('-date', '-created_at')


def get_recovery(*, recovery_id: UUID, user: User) -> DailyRecovery:
    """
    Get one recovery the user may read.

    Raises:
        RecoveryNotFoundError: If the record doesn't exist
        InsufficientPermissionsError: If an owner asks for another store's record
    """
    try:
        recovery = DailyRecovery.objects.select_related('store', 'created_by').get(id=recovery_id)
    except DailyRecovery.DoesNotExist:
        raise RecoveryNotFoundError(f"Recovery with ID {recovery_id} not found")

    store_ids = accessible_store_ids(user=user)
    if store_ids is not None and recovery.store_id not in store_ids:
        raise InsufficientPermissionsError("You are not assigned to this store")

    return recovery


@transaction.atomic
def create_recovery(
    *,
    store: Store,
    date: datetime.date,
    expected_amount: Decimal,
    recovered_amount: Decimal,
    expenses: Decimal = Decimal('0'),
    observations: str = '',
    created_by: Optional[User] = None
) -> DailyRecovery:
    """
    Record a store's daily figures.

    The gap is derived by the model, never taken from input.

    Raises:
        InactiveStoreError: If the store has been deactivated
    """
    if not store.is_active:
        raise InactiveStoreError(f"Store {store.code} is inactive")

    recovery = DailyRecovery.objects.create(
        store=store,
        date=date,
        expected_amount=expected_amount,
        recovered_amount=recovered_amount,
        expenses=expenses,
        observations=observations or '',
        created_by=created_by,
    )

    logger.info(
        "Created recovery %s for %s on %s (gap %s)",
        recovery.id, store.code, date, recovery.gap
    )
    _invalidate_after_commit()
    return recovery


@transaction.atomic
def update_recovery(*, recovery_id: UUID, **changes) -> DailyRecovery:
    """
    Update a recovery; only the given fields change.

    Uses select_for_update to prevent concurrent modifications.

    Raises:
        RecoveryNotFoundError: If the record doesn't exist
        InactiveStoreError: If moving the record to a deactivated store
    """
    try:
        recovery = DailyRecovery.objects.select_for_update().get(id=recovery_id)
    except DailyRecovery.DoesNotExist:
        raise RecoveryNotFoundError(f"Recovery with ID {recovery_id} not found")

    unknown = set(changes) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

    new_store = changes.get('store')
    if new_store is not None and new_store.id != recovery.store_id and not new_store.is_active:
        raise InactiveStoreError(f"Store {new_store.code} is inactive")

    for field, value in changes.items():
        setattr(recovery, field, value)

    recovery.save(update_fields=list(changes) + ['updated_at'])

    logger.info("Updated recovery %s fields=%s", recovery.id, sorted(changes))
    _invalidate_after_commit()
    return recovery


@transaction.atomic
def delete_recovery(*, recovery_id: UUID) -> None:
    """
    Delete a recovery.

    Raises:
        RecoveryNotFoundError: If the record doesn't exist
    """
    try:
        recovery = DailyRecovery.objects.select_for_update().get(id=recovery_id)
    except DailyRecovery.DoesNotExist:
        raise RecoveryNotFoundError(f"Recovery with ID {recovery_id} not found")

    recovery.delete()
    logger.info("Deleted recovery %s", recovery_id)
    _invalidate_after_commit()
