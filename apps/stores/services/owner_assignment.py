"""
Owner assignment service.

Links owner accounts to the stores they may read. A (store, user) pair
can only be assigned once; repeating it is a conflict, not a no-op.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User, UserRole
from apps.stores.models import Store, StoreOwnerAssignment

from .exceptions import (
    StoreNotFoundError,
    AlreadyAssignedError,
    AssignmentNotFoundError,
    NotAnOwnerError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

ALREADY_ASSIGNED_MESSAGE = 'Ce propriétaire est déjà assigné à ce magasin'


@transaction.atomic
def assign_owner(*, store_id: UUID, user_id: UUID) -> StoreOwnerAssignment:
    """
    Assign an owner account to a store.

    Uses row-level locking on the store to serialize concurrent assignments.

    Args:
        store_id: UUID of the store
        user_id: UUID of a user with the owner role

    Returns:
        Created StoreOwnerAssignment instance

    Raises:
        StoreNotFoundError: If store doesn't exist
        UserNotFoundError: If user doesn't exist
        NotAnOwnerError: If user does not have the owner role
        AlreadyAssignedError: If the pair is already assigned
    """
    try:
        store = Store.objects.select_for_update().get(id=store_id)
    except Store.DoesNotExist:
        raise StoreNotFoundError(f"Store with ID {store_id} not found")

    try:
        user = User.objects.get(id=user_id, is_active=True)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")

    if user.role != UserRole.OWNER:
        raise NotAnOwnerError(f"{user.email} does not have the owner role")

    if store.has_owner(user):
        raise AlreadyAssignedError(ALREADY_ASSIGNED_MESSAGE)

    try:
        with transaction.atomic():
            assignment = StoreOwnerAssignment.objects.create(store=store, user=user)
    except IntegrityError:
        # Database constraint caught a concurrent duplicate
        raise AlreadyAssignedError(ALREADY_ASSIGNED_MESSAGE)

    logger.info("Assigned %s to store %s", user.email, store.code)
    return assignment


@transaction.atomic
def remove_assignment(*, assignment_id: UUID) -> None:
    """
    Remove an owner assignment.

    Raises:
        AssignmentNotFoundError: If the assignment doesn't exist
    """
    try:
        assignment = (
            StoreOwnerAssignment.objects
            .select_for_update()
            .select_related('store', 'user')
            .get(id=assignment_id)
        )
    except StoreOwnerAssignment.DoesNotExist:
        raise AssignmentNotFoundError(f"Assignment with ID {assignment_id} not found")

    logger.info("Removed %s from store %s", assignment.user.email, assignment.store.code)
    assignment.delete()


def get_assignments(*, store_id: Optional[UUID] = None) -> QuerySet[StoreOwnerAssignment]:
    """All assignments, newest first, optionally limited to one store."""
    queryset = StoreOwnerAssignment.objects.select_related('store', 'user')
    if store_id:
        queryset = queryset.filter(store_id=store_id)
    return queryset.order_by('-created_at')


def get_owner_profiles() -> QuerySet[User]:
    """Active users holding the owner role, candidates for assignment."""
    return (
        User.objects
        .filter(role=UserRole.OWNER, is_active=True, is_superuser=False)
        .order_by('full_name', 'email')
    )
