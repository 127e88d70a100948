"""
Route fixtures: the full application wired to a temporary store and a
mocked oracle through the service container.
"""
import pytest
from fastapi.testclient import TestClient

from taskmind.app.factory import create_app
from taskmind.dependencies.services import ServiceContainer, set_services


@pytest.fixture
def services(store, mock_oracle):
    container = ServiceContainer(store=store, oracle=mock_oracle)
    yield container
    set_services(None)


@pytest.fixture
def app(services):
    """Create the FastAPI app around the test services."""
    return create_app(services)


@pytest.fixture
def client(app):
    """Create a test client."""
    return TestClient(app)
