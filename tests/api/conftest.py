"""
API test fixtures and configuration.

Provides a FastAPI test client wired to the shared fixture dataset and a
temporary journal.
"""

import pytest

# Try to import test dependencies
try:
    import httpx  # noqa: F401
    from fastapi.testclient import TestClient

    FASTAPI_AVAILABLE = True
except ImportError:
    FASTAPI_AVAILABLE = False
    TestClient = None


def pytest_collection_modifyitems(config, items):  # noqa: ARG001
    """Skip API tests if FastAPI is not available."""
    if not FASTAPI_AVAILABLE:
        skip_api = pytest.mark.skip(reason="FastAPI not installed")
        for item in items:
            if "api" in item.keywords:
                item.add_marker(skip_api)


@pytest.fixture
def app(dataset, journal):
    """Create the FastAPI application for testing."""
    from filmlab.api.server import create_app

    return create_app(dataset=dataset, journal=journal)


@pytest.fixture
def client(app):
    """Test client for the API."""
    with TestClient(app) as test_client:
        yield test_client
