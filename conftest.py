# conftest.py
"""
Pytest configuration for SurveyDesk.
Forces the use of test settings regardless of environment variables.
"""
import os
from unittest.mock import MagicMock, patch

import django
import pytest
from django.conf import settings

# Force test settings module before Django setup
os.environ['DJANGO_SETTINGS_MODULE'] = 'surveydesk.settings.test'
os.environ['DJANGO_ENV'] = 'test'


def pytest_configure():
    """Configure Django settings for pytest."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'surveydesk.settings.test')
    os.environ['DJANGO_ENV'] = 'test'

    if not settings.configured:
        django.setup()


@pytest.fixture(autouse=True)
def _clear_cache():
    """Sessions live in the cache, so every test starts logged out."""
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api():
    """The survey API client every view receives, replaced by a mock."""
    client = MagicMock(name='SurveyApiClient')
    with patch('core.services.api_client.get_api_client', return_value=client):
        yield client


@pytest.fixture
def panel_admin():
    return {'_id': 'a1b2c3', 'username': 'root', 'email': 'root@example.com'}


@pytest.fixture
def panel_client(client, panel_admin):
    """Django test client with an admin already in session."""
    session = client.session
    session['admin'] = panel_admin
    session.save()
    return client
