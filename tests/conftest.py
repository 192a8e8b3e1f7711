# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from todolist.api.main import create_app
from todolist.client import TodoClient
from todolist.config import Settings
from todolist.rpc.service import TodoService
from todolist.store import TaskStore

# Configure pytest
pytest_plugins = []

# Markers for test categorization
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "e2e: marks tests as end-to-end tests")


@pytest.fixture
def store():
    """Empty task store."""
    return TaskStore()


@pytest.fixture
def service(store):
    """TodoService over the test store."""
    return TodoService(store)


@pytest.fixture
def app(service):
    """App serving the test service with default settings."""
    return create_app(service=service, settings=Settings())


@pytest.fixture
def http(app):
    """HTTP client bound to the app (no network)."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def todo_client(http):
    """RPC client speaking to the app through the test HTTP client."""
    return TodoClient(http)


@pytest.fixture
def mock_logger(mocker):
    """Mock structured logger."""
    logger = mocker.MagicMock()
    logger.log_event = mocker.MagicMock()
    logger.log_error = mocker.MagicMock()
    return logger
