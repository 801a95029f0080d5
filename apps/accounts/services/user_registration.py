"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.accounts.models import UserRole
from .exceptions import UserRegistrationError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    full_name: str = ""
) -> User:
    """
    Register a new store owner account.

    Self-registered accounts always get the owner role; administrators are
    promoted through the Django admin or ``createsuperuser``.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        full_name: Optional full name

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If registration fails
    """
    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            full_name=full_name,
            role=UserRole.OWNER,
        )
    except IntegrityError as e:
        raise UserRegistrationError(f"Registration failed: {str(e)}")

    logger.info("Registered owner account %s", user.email)
    return user
