"""
Recoveries app services layer.

Services contain business logic and orchestrate operations across models.
State-changing operations run in transactions.
"""

from .exceptions import (
    RecoveriesServiceError,
    RecoveryNotFoundError,
    InactiveStoreError,
    InsufficientPermissionsError,
)

from .recovery_management import (
    scoped_recoveries,
    list_recoveries,
    get_recovery,
    create_recovery,
    update_recovery,
    delete_recovery,
)


__all__ = [
    # Exceptions
    'RecoveriesServiceError',
    'RecoveryNotFoundError',
    'InactiveStoreError',
    'InsufficientPermissionsError',

    # Recovery Management
    'scoped_recoveries',
    'list_recoveries',
    'get_recovery',
    'create_recovery',
    'update_recovery',
    'delete_recovery',
]
