"""
Role-based capability checks.

The dashboard has two roles. Administrators create, edit and delete
recoveries, stores and owner assignments; store owners only read data for
the stores assigned to them. Every mutating endpoint asks the same
question through ``can_mutate`` at the view boundary, so role gating
lives in one place instead of being repeated per action.

Permission Classes:
    IsAdminRole - Only administrators, for every method
    IsAdminOrReadOnly - Anyone authenticated may read, only admins write

Usage:
    from apps.accounts.permissions import IsAdminOrReadOnly

    class StoreViewSet(viewsets.ModelViewSet):
        permission_classes = [IsAuthenticated, IsAdminOrReadOnly]
"""

from rest_framework.permissions import BasePermission, SAFE_METHODS

from .models import UserRole


def can_mutate(role) -> bool:
    """Return True when ``role`` is allowed to create, update or delete data."""
    return role == UserRole.ADMIN


def user_can_mutate(user) -> bool:
    """Capability check for a request user (anonymous users never mutate)."""
    if not user or not user.is_authenticated:
        return False
    return can_mutate(user.effective_role)


class IsAdminRole(BasePermission):
    """
    Permission: User must have the administrator role.
    """

    message = 'Only administrators can perform this action.'

    def has_permission(self, request, view):
        return user_can_mutate(request.user)


class IsAdminOrReadOnly(BasePermission):
    """
    Permission: Read access for authenticated users, writes for admins.
    """

    message = 'Only administrators can modify this data.'

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return user_can_mutate(request.user)
