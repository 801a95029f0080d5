import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.stores.models import Store, StoreOwnerAssignment


def _authenticate(client, user):
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    """Create and return an administrator."""
    return User.objects.create_user(
        email='admin@example.com',
        password='TestPass123!',
        full_name='Admin User',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def owner_user(db):
    """Create and return a store owner."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        full_name='Store Owner',
        role=UserRole.OWNER,
    )


@pytest.fixture
def other_owner(db):
    """Create and return an owner with no assignment."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        full_name='Other Owner',
        role=UserRole.OWNER,
    )


@pytest.fixture
def admin_client(api_client, admin_user):
    """Return API client authenticated as administrator."""
    return _authenticate(api_client, admin_user)


@pytest.fixture
def owner_client(api_client, owner_user):
    """Return API client authenticated as store owner."""
    return _authenticate(api_client, owner_user)


@pytest.fixture
def store(db):
    """Create and return an active store."""
    return Store.objects.create(name='Moroni Centre', code='MRN', address='Rue du Port')


@pytest.fixture
def second_store(db):
    """Create and return another active store."""
    return Store.objects.create(name='Mutsamudu', code='MTS')


@pytest.fixture
def inactive_store(db):
    """Create and return a deactivated store."""
    return Store.objects.create(name='Fomboni', code='FMB', is_active=False)


@pytest.fixture
def assignment(db, store, owner_user):
    """Assign owner_user to store."""
    return StoreOwnerAssignment.objects.create(store=store, user=owner_user)
