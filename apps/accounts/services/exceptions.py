"""
Domain exceptions for accounts services.

Exception Hierarchy:
    AccountsServiceError (base)
    ├── UserRegistrationError
    ├── InvalidCredentialsError
    └── InactiveAccountError

Views answer 400, 401 and 403 respectively.
"""

INVALID_CREDENTIALS_MESSAGE = 'Email ou mot de passe incorrect'
INACTIVE_ACCOUNT_MESSAGE = 'Ce compte est désactivé'


class AccountsServiceError(Exception):
    pass


class UserRegistrationError(AccountsServiceError):
    """The account could not be created (e.g. the email is taken)."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Unknown email or wrong password; the two are not told apart."""

    def __init__(self, message=INVALID_CREDENTIALS_MESSAGE):
        super().__init__(message)


class InactiveAccountError(AccountsServiceError):
    """Correct credentials for an account an administrator switched off."""

    def __init__(self, message=INACTIVE_ACCOUNT_MESSAGE):
        super().__init__(message)
