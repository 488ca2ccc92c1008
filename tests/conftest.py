"""
Pytest Configuration for BrokerDesk Backend Tests

Key Features:
- Provides database users and matching AuthenticatedUser contexts
- Provides API clients authenticated as an admin or a sub-user
- Tables are created by pytest-django from the models (SQLite in-memory)
"""
from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from apps.core.authentication import AuthenticatedUser
from tests.factories import AdminUserFactory, UserFactory


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def admin_user(db):
    """Admin user row."""
    return AdminUserFactory()


@pytest.fixture
def sub_user(db):
    """Sub-user row."""
    return UserFactory()


# =============================================================================
# API Client Fixtures
# =============================================================================

@pytest.fixture
def api_client():
    """Basic API client without authentication."""
    return APIClient()


def _client_for(user) -> tuple[APIClient, AuthenticatedUser]:
    context = AuthenticatedUser.from_user(user)
    client = APIClient()
    client.force_authenticate(user=context)
    return client, context


@pytest.fixture
def admin_api_client(admin_user):
    """API client authenticated as an admin. Returns (client, AuthenticatedUser)."""
    return _client_for(admin_user)


@pytest.fixture
def authenticated_api_client(sub_user):
    """API client authenticated as a sub-user. Returns (client, AuthenticatedUser)."""
    return _client_for(sub_user)


# =============================================================================
# Common Test Data Fixtures
# =============================================================================

@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def sample_dates(today):
    """Common date fixtures for testing."""
    return {
        'today': today,
        'yesterday': today - timedelta(days=1),
        'in_10_days': today + timedelta(days=10),
        'in_30_days': today + timedelta(days=30),
        'in_31_days': today + timedelta(days=31),
        'in_45_days': today + timedelta(days=45),
        'year_ago': today - timedelta(days=365),
    }
