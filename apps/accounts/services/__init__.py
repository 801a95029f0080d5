"""Account services: owner self-registration and sign-in."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    INVALID_CREDENTIALS_MESSAGE,
    INACTIVE_ACCOUNT_MESSAGE,
)
from .user_registration import register_user
from .user_authentication import authenticate_user

__all__ = [
    'AccountsServiceError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'INVALID_CREDENTIALS_MESSAGE',
    'INACTIVE_ACCOUNT_MESSAGE',
    'register_user',
    'authenticate_user',
]
