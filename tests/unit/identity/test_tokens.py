"""
Name: Token Service Tests

Responsibilities:
  - Issue/verify round trip with a controllable clock
  - Expiry boundaries around the 24h TTL
  - Signature, nbf, malformed and missing-subject failures
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest
from olidesk.crosscutting.exceptions import ConfigurationError
from olidesk.identity.tokens import (
    EXPIRED,
    INVALID_SIGNATURE,
    JWT_ALGORITHM,
    MALFORMED,
    MISSING_SUBJECT,
    NOT_YET_VALID,
    TOKEN_TYPE,
    TokenError,
    TokenService,
)

pytestmark = pytest.mark.unit

SECRET = "token-test-secret-with-at-least-32-bytes"
ISSUED_AT = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class _Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _service(clock: _Clock, secret: str = SECRET) -> TokenService:
    return TokenService(secret, clock=clock)


def test_empty_secret_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        TokenService("")


def test_issue_and_verify_round_trip():
    clock = _Clock(ISSUED_AT)
    service = _service(clock)
    user_id = uuid4()

    issued = service.issue(str(user_id), "ana@olidesk.com")
    claims = service.verify(issued.access_token)

    assert issued.token_type == TOKEN_TYPE
    assert issued.expires_in == 24 * 3600
    assert claims.subject_id == str(user_id)
    assert claims.email == "ana@olidesk.com"


def test_token_valid_just_before_expiry():
    clock = _Clock(ISSUED_AT)
    service = _service(clock)
    token = service.issue(str(uuid4())).access_token

    clock.now = ISSUED_AT + timedelta(hours=23, minutes=59)

    assert service.verify(token).subject_id


def test_token_expired_after_ttl():
    clock = _Clock(ISSUED_AT)
    service = _service(clock)
    token = service.issue(str(uuid4())).access_token

    clock.now = ISSUED_AT + timedelta(hours=24, minutes=1)

    with pytest.raises(TokenError) as exc_info:
        service.verify(token)
    assert exc_info.value.code == EXPIRED


def test_wrong_secret_is_invalid_signature():
    clock = _Clock(ISSUED_AT)
    token = _service(clock).issue(str(uuid4())).access_token
    other = _service(clock, secret="another-secret-with-at-least-32-bytes!")

    with pytest.raises(TokenError) as exc_info:
        other.verify(token)
    assert exc_info.value.code == INVALID_SIGNATURE


def test_not_yet_valid():
    clock = _Clock(ISSUED_AT)
    service = _service(clock)
    token = service.issue(str(uuid4())).access_token

    clock.now = ISSUED_AT - timedelta(minutes=5)

    with pytest.raises(TokenError) as exc_info:
        service.verify(token)
    assert exc_info.value.code == NOT_YET_VALID


@pytest.mark.parametrize("token", ["garbage", "a.b.c", ""])
def test_malformed_tokens(token):
    service = _service(_Clock(ISSUED_AT))

    with pytest.raises(TokenError) as exc_info:
        service.verify(token)
    assert exc_info.value.code == MALFORMED


def test_missing_subject():
    now = int(ISSUED_AT.timestamp())
    token = jwt.encode(
        {"iat": now, "nbf": now, "exp": now + 3600, "email": "x@y.com"},
        SECRET,
        algorithm=JWT_ALGORITHM,
    )
    service = _service(_Clock(ISSUED_AT))

    with pytest.raises(TokenError) as exc_info:
        service.verify(token)
    assert exc_info.value.code == MISSING_SUBJECT


def test_missing_exp_is_malformed():
    now = int(ISSUED_AT.timestamp())
    token = jwt.encode(
        {"sub": str(uuid4()), "iat": now, "nbf": now}, SECRET, algorithm=JWT_ALGORITHM
    )
    service = _service(_Clock(ISSUED_AT))

    with pytest.raises(TokenError) as exc_info:
        service.verify(token)
    assert exc_info.value.code == MALFORMED


def test_error_reason_is_human_readable():
    err = TokenError(EXPIRED)
    assert err.reason == "token expirado"
