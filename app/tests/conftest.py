import pytest
from fastapi.testclient import TestClient
from app.main import app
from app.core.rate_limiter import reset_rate_limiter_state
from app.tests.fixtures.contact import *


@pytest.fixture(autouse=True)
def clear_rate_limiter():
    """Fixture giving every test a fresh rate limit window."""
    reset_rate_limiter_state()
    yield
    reset_rate_limiter_state()


@pytest.fixture(scope="function")
def client():
    """Fixture providing a TestClient for the contact API."""
    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
