"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from accesscontrol.application.validation import DEFAULT_PERMISSION_PATTERN
from accesscontrol.interfaces.api.app import create_app
from accesscontrol.interfaces.api.middleware.correlation import CorrelationIdMiddleware
from accesscontrol.main import build_dispatcher

from tests.conftest import RecordingEventPublisher


class _TestUser:
    user_id = "test-user-1"


class AuthBypassMiddleware:
    """Middleware that sets context.user for testing."""

    async def process_request(self, req, resp):
        req.context.user = _TestUser()


@pytest.fixture
def dispatcher(uow_factory, event_publisher: RecordingEventPublisher):
    return build_dispatcher(uow_factory, event_publisher, DEFAULT_PERMISSION_PATTERN)


@pytest.fixture
def app(dispatcher):
    """Falcon ASGI app wired to in-memory repositories."""
    return create_app(
        dispatcher,
        middleware=[CorrelationIdMiddleware(), AuthBypassMiddleware()],
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
