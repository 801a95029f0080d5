"""
Store management service.

Handles store CRUD with transaction safety, plus the role-based scoping
every other app uses to decide which stores a user may see.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.stores.models import Store

from .exceptions import (
    StoreNotFoundError,
    DuplicateStoreCodeError,
)

logger = logging.getLogger(__name__)


def create_store(
    *,
    name: str,
    code: str,
    address: Optional[str] = None
) -> Store:
    """
    Create a new active store.

    Args:
        name: Display name
        code: Short unique label shown as a badge
        address: Optional postal address

    Returns:
        Created Store instance

    Raises:
        DuplicateStoreCodeError: If the code is already used
    """
    try:
        with transaction.atomic():
            store = Store.objects.create(name=name, code=code, address=address)
    except IntegrityError:
        raise DuplicateStoreCodeError(f"A store with code {code} already exists")

    logger.info("Created store %s (%s)", store.name, store.code)
    return store


def get_store_by_id(*, store_id: UUID) -> Store:
    """
    Get a store by ID (active or not).

    Raises:
        StoreNotFoundError: If store doesn't exist
    """
    try:
        return Store.objects.get(id=store_id)
    except Store.DoesNotExist:
        raise StoreNotFoundError(f"Store with ID {store_id} not found")


@transaction.atomic
def update_store(
    *,
    store_id: UUID,
    name: Optional[str] = None,
    code: Optional[str] = None,
    address: Optional[str] = None,
    is_active: Optional[bool] = None
) -> Store:
    """
    Update store details.

    Uses select_for_update to prevent concurrent modifications.

    Raises:
        StoreNotFoundError: If store doesn't exist
        DuplicateStoreCodeError: If the new code is already used
    """
    try:
        store = Store.objects.select_for_update().get(id=store_id)
    except Store.DoesNotExist:
        raise StoreNotFoundError(f"Store with ID {store_id} not found")

    update_fields = ['updated_at']

    if name is not None:
        store.name = name
        update_fields.append('name')

    if code is not None:
        if Store.objects.filter(code=code).exclude(id=store.id).exists():
            raise DuplicateStoreCodeError(f"A store with code {code} already exists")
        store.code = code
        update_fields.append('code')

    if address is not None:
        store.address = address
        update_fields.append('address')

    if is_active is not None:
        store.is_active = is_active
        update_fields.append('is_active')

    store.save(update_fields=update_fields)
    logger.info("Updated store %s fields=%s", store.code, update_fields[1:])
    return store


@transaction.atomic
def deactivate_store(*, store_id: UUID) -> Store:
    """
    Soft-delete a store.

    The store disappears from selection lists but its recoveries keep
    contributing to historical aggregates.

    Raises:
        StoreNotFoundError: If store doesn't exist
    """
    try:
        store = Store.objects.select_for_update().get(id=store_id)
    except Store.DoesNotExist:
        raise StoreNotFoundError(f"Store with ID {store_id} not found")

    store.is_active = False
    store.save(update_fields=['is_active', 'updated_at'])
    logger.info("Deactivated store %s", store.code)
    return store


def visible_stores(*, user: User, include_inactive: bool = False) -> QuerySet[Store]:
    """
    Stores the user may see: all of them for admins, assigned ones for owners.
    """
    queryset = Store.objects.all()
    if not user.is_admin:
        queryset = queryset.filter(owner_assignments__user=user).distinct()
    if not include_inactive:
        queryset = queryset.filter(is_active=True)
    return queryset.order_by('name')


def accessible_store_ids(*, user: User) -> Optional[list]:
    """
    Store IDs a user may read, or None when the user is unrestricted.

    Inactive stores are included so owners keep access to their history.
    """
    if user.is_admin:
        return None
    return list(
        Store.objects
        .filter(owner_assignments__user=user)
        .values_list('id', flat=True)
    )


def user_can_access_store(*, user: User, store_id: UUID) -> bool:
    if user.is_admin:
        return True
    return Store.objects.filter(id=store_id, owner_assignments__user=user).exists()
