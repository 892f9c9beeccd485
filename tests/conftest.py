"""
Pytest configuration and fixtures for cloudflare-configure tests
"""

import os
import sys
import pytest
from pathlib import Path
from unittest.mock import AsyncMock

# Add src to path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


@pytest.fixture
def mock_env():
    """Fixture to set up mock environment variables."""
    original_env = os.environ.copy()

    for name in ("CF_API_URL", "CF_EMAIL", "CF_KEY", "CF_API_TOKEN", "CF_TIMEOUT"):
        os.environ.pop(name, None)
    os.environ.update({
        "CF_EMAIL": "ops@example.com",
        "CF_KEY": "test-key",
    })

    yield os.environ

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def clean_env():
    """Fixture that removes all CF_* variables for the duration of a test."""
    original_env = os.environ.copy()

    for name in list(os.environ):
        if name.startswith("CF_"):
            del os.environ[name]

    yield os.environ

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def mock_cloudflare_client():
    """Fixture for a mocked CloudFlareClient."""
    client = AsyncMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=None)
    return client


@pytest.fixture
def sample_config_items():
    """Zone settings with every JSON value type."""
    return {
        "always_online": "off",
        "browser_cache_ttl": 14400,
        "mobile_redirect": {
            "mobile_subdomain": None,
            "status": "off",
            "strip_uri": False,
        },
    }


@pytest.fixture
def sample_settings_response():
    """Sample /zones/:id/settings response."""
    return {
        "success": True,
        "errors": [],
        "messages": [],
        "result": [
            {
                "id": "always_online",
                "value": "on",
                "editable": True,
                "modified_on": "2026-10-01T10:00:00.000000Z",
            },
            {
                "id": "browser_cache_ttl",
                "value": 14400,
                "editable": True,
                "modified_on": None,
            },
            {
                "id": "mobile_redirect",
                "value": {
                    "mobile_subdomain": None,
                    "status": "off",
                    "strip_uri": False,
                },
                "editable": True,
            },
        ],
    }


@pytest.fixture
def sample_zones_response():
    """Sample /zones?name= response."""
    return {
        "success": True,
        "errors": [],
        "messages": [],
        "result": [
            {
                "id": "023e105f4ecef8ad9ca31a8372d0c353",
                "name": "example.com",
                "status": "active",
            }
        ],
    }


# Markers
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
