import pytest
from django.contrib.auth.models import AnonymousUser
from rest_framework.test import APIRequestFactory
from apps.accounts.models import UserRole
from apps.accounts.permissions import (
    can_mutate,
    user_can_mutate,
    IsAdminRole,
    IsAdminOrReadOnly,
)


class TestCanMutate:

    def test_admin_can_mutate(self):
        assert can_mutate(UserRole.ADMIN) is True
        assert can_mutate('admin') is True

    def test_owner_cannot_mutate(self):
        assert can_mutate(UserRole.OWNER) is False

    def test_unknown_role_cannot_mutate(self):
        assert can_mutate(None) is False
        assert can_mutate('manager') is False

    def test_anonymous_cannot_mutate(self):
        assert user_can_mutate(AnonymousUser()) is False


@pytest.mark.django_db
class TestPermissionClasses:

    @pytest.fixture
    def factory(self):
        return APIRequestFactory()

    def _request(self, factory, method, user):
        request = getattr(factory, method)('/api/anything/')
        request.user = user
        return request

    def test_read_only_allows_owner_get(self, factory, user):
        request = self._request(factory, 'get', user)
        assert IsAdminOrReadOnly().has_permission(request, None) is True

    def test_read_only_blocks_owner_post(self, factory, user):
        request = self._request(factory, 'post', user)
        assert IsAdminOrReadOnly().has_permission(request, None) is False

    def test_read_only_allows_admin_delete(self, factory, admin_user):
        request = self._request(factory, 'delete', admin_user)
        assert IsAdminOrReadOnly().has_permission(request, None) is True

    def test_admin_role_blocks_owner_get(self, factory, user):
        request = self._request(factory, 'get', user)
        assert IsAdminRole().has_permission(request, None) is False

    def test_admin_role_allows_admin(self, factory, admin_user):
        request = self._request(factory, 'get', admin_user)
        assert IsAdminRole().has_permission(request, None) is True
