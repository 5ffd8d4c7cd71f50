"""
Pytest configuration and fixtures
"""
import pytest
from fastapi.testclient import TestClient

from app.api.v1.endpoints.email import get_submission_handler
from app.core.config import Settings, get_settings
from app.main import app

from fakes import FakeTransport, make_handler


@pytest.fixture
def valid_form():
    return {
        "user_name": "Kolja",
        "user_email": "kolja@example.com",
        "message": "Hello there!"
    }


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def handler(fake_transport):
    return make_handler(fake_transport)


@pytest.fixture
def test_settings():
    return Settings(EXPOSE_REJECTION_REASON=False)


@pytest.fixture
def client(handler, test_settings):
    """Test client wired to the fake transport instead of a real mail server."""
    app.dependency_overrides[get_submission_handler] = lambda: handler
    app.dependency_overrides[get_settings] = lambda: test_settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
