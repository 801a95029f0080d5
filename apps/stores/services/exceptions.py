"""
Domain-specific exceptions for stores app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class StoresServiceError(Exception):
    """Base exception for all stores service errors."""
    pass


class StoreNotFoundError(StoresServiceError):
    """Raised when a store does not exist or is inaccessible."""
    pass


class DuplicateStoreCodeError(StoresServiceError):
    """Raised when another store already uses the requested code."""
    pass


class AlreadyAssignedError(StoresServiceError):
    """Raised when an owner is already assigned to the store."""
    pass


class AssignmentNotFoundError(StoresServiceError):
    """Raised when an owner assignment does not exist."""
    pass


class NotAnOwnerError(StoresServiceError):
    """Raised when assigning a user who does not have the owner role."""
    pass


class UserNotFoundError(StoresServiceError):
    """Raised when the user to assign does not exist."""
    pass
