"""
Name: Authentication Gate Tests

Responsibilities:
  - Public paths bypass the gate
  - Missing / badly formatted / invalid tokens -> 401 {message, code}
  - A valid token reaches the handler with a typed CallerIdentity
  - Rejected requests never reach the handler
"""

from uuid import UUID, uuid4

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from olidesk.api.exception_handlers import register_exception_handlers
from olidesk.crosscutting.middleware import RequestContextMiddleware
from olidesk.domain.entities import CallerIdentity
from olidesk.identity.auth_gate import (
    MSG_BAD_FORMAT,
    MSG_INVALID_SUBJECT,
    MSG_MISSING_HEADER,
    AuthenticationGateMiddleware,
    caller_from_claims,
    require_caller,
)
from olidesk.identity.tokens import TokenClaims, TokenService

pytestmark = pytest.mark.unit

SECRET = "gate-test-secret-with-at-least-32-bytes!"


def _build_app(calls: list) -> FastAPI:
    service = TokenService(SECRET)
    app = FastAPI()
    app.add_middleware(
        AuthenticationGateMiddleware,
        token_service_provider=lambda: service,
        public_paths={"/public"},
    )
    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)

    @app.get("/public")
    def public():
        calls.append("public")
        return {"ok": True}

    @app.get("/protected")
    def protected(caller: CallerIdentity = Depends(require_caller)):
        calls.append(caller)
        return {"user_id": str(caller.user_id), "email": caller.email}

    return app


@pytest.fixture
def calls() -> list:
    return []


@pytest.fixture
def client(calls) -> TestClient:
    return TestClient(_build_app(calls))


def test_public_path_without_token(client, calls):
    response = client.get("/public")

    assert response.status_code == 200
    assert calls == ["public"]


def test_missing_header(client, calls):
    response = client.get("/protected")

    assert response.status_code == 401
    body = response.json()
    assert body["message"] == MSG_MISSING_HEADER
    assert body["code"] == "UNAUTHORIZED"
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert calls == []


@pytest.mark.parametrize("header", ["Token abc", "bearer abc", "Basic dXNlcg=="])
def test_bad_format(client, calls, header):
    response = client.get("/protected", headers={"Authorization": header})

    assert response.status_code == 401
    assert response.json()["message"] == MSG_BAD_FORMAT
    assert calls == []


def test_garbage_token_never_reaches_handler(client, calls):
    response = client.get("/protected", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 401
    assert response.json()["message"].startswith("Token inválido:")
    assert calls == []


def test_rejection_carries_request_id(client):
    response = client.get("/protected", headers={"X-Request-Id": "req-123"})

    assert response.status_code == 401
    assert response.json()["request_id"] == "req-123"


def test_valid_token_reaches_handler(client, calls):
    user_id = uuid4()
    token = TokenService(SECRET).issue(str(user_id), "ana@olidesk.com").access_token

    response = client.get(
        "/protected", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 200
    assert response.json() == {"user_id": str(user_id), "email": "ana@olidesk.com"}
    assert calls == [CallerIdentity(user_id=user_id, email="ana@olidesk.com")]


def test_non_uuid_subject_is_rejected(client, calls):
    token = TokenService(SECRET).issue("not-a-uuid").access_token

    response = client.get(
        "/protected", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 401
    assert response.json()["message"] == MSG_INVALID_SUBJECT
    assert calls == []


def test_caller_from_claims():
    user_id = uuid4()

    assert caller_from_claims(None) is None
    assert caller_from_claims(TokenClaims(subject_id="nope")) is None
    assert caller_from_claims(TokenClaims(subject_id=str(user_id))).user_id == UUID(
        str(user_id)
    )
