"""Email/password sign-in for administrators and store owners."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Check credentials and stamp ``last_login``.

    The email match is case-insensitive. The row is locked while
    ``last_login`` is written.

    Raises:
        InvalidCredentialsError: Unknown email or wrong password.
        InactiveAccountError: The account was deactivated.
    """
    user = (
        User.objects
        .select_for_update()
        .filter(email__iexact=email.strip())
        .first()
    )
    if user is None or not user.check_password(password):
        logger.warning("Failed sign-in for %s", email)
        raise InvalidCredentialsError()

    if not user.is_active:
        logger.warning("Sign-in refused for deactivated account %s", user.email)
        raise InactiveAccountError()

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    logger.info("%s %s signed in", user.effective_role, user.email)
    return user
