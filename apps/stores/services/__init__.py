"""
Stores app services layer.

Services contain business logic and orchestrate operations across models.
State-changing operations run in transactions.
"""

from .exceptions import (
    StoresServiceError,
    StoreNotFoundError,
    DuplicateStoreCodeError,
    AlreadyAssignedError,
    AssignmentNotFoundError,
    NotAnOwnerError,
    UserNotFoundError,
)

from .store_management import (
    create_store,
    get_store_by_id,
    update_store,
    deactivate_store,
    visible_stores,
    accessible_store_ids,
    user_can_access_store,
)

from .owner_assignment import (
    assign_owner,
    remove_assignment,
    get_assignments,
    get_owner_profiles,
)


__all__ = [
    # Exceptions
    'StoresServiceError',
    'StoreNotFoundError',
    'DuplicateStoreCodeError',
    'AlreadyAssignedError',
    'AssignmentNotFoundError',
    'NotAnOwnerError',
    'UserNotFoundError',

    # Store Management
    'create_store',
    'get_store_by_id',
    'update_store',
    'deactivate_store',
    'visible_stores',
    'accessible_store_ids',
    'user_can_access_store',

    # Owner Assignment
    'assign_owner',
    'remove_assignment',
    'get_assignments',
    'get_owner_profiles',
]
