"""Tests for the auth middleware with a stubbed Keycloak provider."""

from falcon import testing
import pytest

from accesscontrol.infrastructure.auth.keycloak_provider import OIDCUser
from accesscontrol.interfaces.api.app import create_app
from accesscontrol.interfaces.api.middleware.auth import AuthMiddleware
from accesscontrol.interfaces.api.middleware.correlation import CorrelationIdMiddleware


class StubKeycloak:
    """Accepts only the token 'good'."""

    async def decode_token_async(self, token: str) -> OIDCUser | None:
        if token == "good":
            return OIDCUser(user_id="3f2504e0-4f89-11d3-9a0c-0305e82c3301", username="alice")
        return None


@pytest.fixture
def client(dispatcher) -> testing.TestClient:
    app = create_app(
        dispatcher,
        middleware=[CorrelationIdMiddleware(), AuthMiddleware(StubKeycloak())],
    )
    return testing.TestClient(app)


def test_valid_token_passes(client: testing.TestClient) -> None:
    r = client.simulate_get("/health", headers={"Authorization": "Bearer good"})
    assert r.status_code == 200


def test_invalid_token_returns_401(client: testing.TestClient) -> None:
    r = client.simulate_get("/health", headers={"Authorization": "Bearer bad"})
    assert r.status_code == 401
    assert r.json["title"] == "Unauthorized"
    assert r.headers["www-authenticate"] == "Bearer"


def test_non_bearer_scheme_returns_401(client: testing.TestClient) -> None:
    r = client.simulate_get("/health", headers={"Authorization": "Basic abc"})
    assert r.status_code == 401


def test_no_token_runs_anonymous(client: testing.TestClient) -> None:
    assert client.simulate_get("/health").status_code == 200


def test_without_provider_everything_is_anonymous(dispatcher) -> None:
    app = create_app(dispatcher, middleware=[AuthMiddleware(None)])
    r = testing.TestClient(app).simulate_get(
        "/health", headers={"Authorization": "Bearer whatever"}
    )
    assert r.status_code == 200
