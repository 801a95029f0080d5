"""
Domain-specific exceptions for recoveries app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class RecoveriesServiceError(Exception):
    """Base exception for all recoveries service errors."""
    pass


class RecoveryNotFoundError(RecoveriesServiceError):
    """Raised when a daily recovery does not exist."""
    pass


class InactiveStoreError(RecoveriesServiceError):
    """Raised when recording against a deactivated store."""
    pass


class InsufficientPermissionsError(RecoveriesServiceError):
    """Raised when the user may not read or change the record."""
    pass
