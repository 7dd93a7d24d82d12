"""
Project-wide pytest fixtures: accounts, JWT-authenticated API clients and
an active Stripe gateway setting. Each app's tests/conftest.py adds its own
catalogue and order fixtures.
"""

import os

import django
import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

E2E_FILES = {"test_integration.py"}
UNIT_FILES = {
    "test_adapters.py",
    "test_exception_handlers.py",
    "test_helpers.py",
    "test_pricing.py",
}


def pytest_configure():
    django.setup()

    from django.conf import settings

    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
    # Test client requests are plain HTTP
    settings.SECURE_SSL_REDIRECT = False
    settings.EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
    settings.EMAIL_ASYNC = False


def pytest_collection_modifyitems(items):
    """Mark tests unit, integration or e2e by file name unless already marked."""
    for item in items:
        if {m.name for m in item.iter_markers()} & {"unit", "integration", "e2e"}:
            continue

        filename = item.path.name
        if filename in E2E_FILES:
            item.add_marker(pytest.mark.e2e)
        elif filename in UNIT_FILES:
            item.add_marker(pytest.mark.unit)
        else:
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def user(db):
    """Customer account; password "TestPass123!"."""
    from authentication.tests.factories import UserFactory

    return UserFactory()


@pytest.fixture
def other_user(db):
    from authentication.tests.factories import UserFactory

    return UserFactory()


@pytest.fixture
def admin_user(db):
    from authentication.tests.factories import AdminFactory

    return AdminFactory()


def _client_for(user):
    from rest_framework.test import APIClient
    from rest_framework_simplejwt.tokens import RefreshToken

    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


@pytest.fixture
def api_client():
    """Unauthenticated API client for public endpoints."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def authenticated_client(user):
    """API client authenticated with a JWT for the default user fixture."""
    return _client_for(user)


@pytest.fixture
def other_client(other_user):
    """API client authenticated as other_user."""
    return _client_for(other_user)


@pytest.fixture
def admin_client(admin_user):
    """API client authenticated as admin_user."""
    return _client_for(admin_user)


@pytest.fixture
def stripe_gateway(db):
    """Active Stripe gateway setting in test mode."""
    from payments.tests.factories import GatewaySettingFactory

    return GatewaySettingFactory()
