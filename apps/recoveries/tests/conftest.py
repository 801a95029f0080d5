import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.recoveries.models import DailyRecovery
from apps.stores.models import Store, StoreOwnerAssignment


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
    )


@pytest.fixture
def admin_client(api_client, admin_user):
    """Return API client authenticated as administrator."""
    refresh = RefreshToken.for_user(admin_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def owner_client(api_client, owner_user):
    """Return API client authenticated as store owner."""
    refresh = RefreshToken.for_user(owner_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def store(db):
    """Store A."""
    return Store.objects.create(name='Moroni Centre', code='MRN')


@pytest.fixture
def other_store(db):
    """Store B, not assigned to the owner."""
    return Store.objects.create(name='Mutsamudu', code='MTS')


@pytest.fixture
def assignment(store, owner_user):
    """Assign owner_user to store A."""
    return StoreOwnerAssignment.objects.create(store=store, user=owner_user)


@pytest.fixture
def recovery(store, admin_user):
    """One day for store A with a 200 deficit."""
    return DailyRecovery.objects.create(
        store=store,
        date=date(2024, 1, 5),
        expected_amount=Decimal('1000'),
        recovered_amount=Decimal('800'),
        expenses=Decimal('50'),
        observations='Caisse 2 en panne',
        created_by=admin_user,
    )


@pytest.fixture
def other_recovery(other_store):
    """One day for store B."""
    return DailyRecovery.objects.create(
        store=other_store,
        date=date(2024, 1, 6),
        expected_amount=Decimal('700'),
        recovered_amount=Decimal('750'),
    )
