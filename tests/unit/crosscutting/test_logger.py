"""JSON log formatting: request context enrichment and redaction."""

import json
import logging
import sys

import pytest
from olidesk.context import clear_context, set_request_context
from olidesk.crosscutting.logger import MASK, MAX_VALUE_CHARS, JSONFormatter, redact

pytestmark = pytest.mark.unit


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="olidesk-api",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Login ok",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_sensitive_keys_are_redacted():
    payload = json.loads(
        JSONFormatter().format(_record(password="s3cret", authorization="Bearer x"))
    )

    assert payload["password"] == "***REDACTADO***"
    assert payload["authorization"] == "***REDACTADO***"
    assert payload["message"] == "Login ok"


def test_request_context_is_attached():
    set_request_context(request_id="req-42", method="GET", path="/api/v1/clients/list")
    try:
        payload = json.loads(JSONFormatter().format(_record(user_id="u-1")))
    finally:
        clear_context()

    assert payload["request_id"] == "req-42"
    assert payload["user_id"] == "u-1"


@pytest.mark.parametrize(
    "key", ["cnpj_or_cpf", "phone", "jwt_secret", "Access_Token", "DATABASE_URL"]
)
def test_redact_masks_sensitive_keys_case_insensitively(key):
    assert redact(key, "valor") == MASK


def test_redact_walks_nested_payloads():
    payload = {
        "client_name": "Padaria Central",
        "contact_person": {"phone": "+55 11 99999-0000", "email": "m@p.com"},
        "tokens": [{"token": "abc"}],
    }

    assert redact("client", payload) == {
        "client_name": "Padaria Central",
        "contact_person": {"phone": MASK, "email": "m@p.com"},
        "tokens": [{"token": MASK}],
    }


def test_redact_truncates_long_values_and_keeps_scalars():
    assert redact("note", "x" * (MAX_VALUE_CHARS + 10)).endswith("...[truncated]")
    assert redact("count", 3) == 3
    assert redact("ok", None) is None


def test_extra_with_client_pii_is_masked_in_output():
    payload = json.loads(
        JSONFormatter().format(
            _record(client={"cnpj_or_cpf": "12.345.678/0001-90", "city": "São Paulo"})
        )
    )

    assert payload["client"] == {"cnpj_or_cpf": MASK, "city": "São Paulo"}


def test_exception_info_is_serialized():
    try:
        raise RuntimeError("falhou")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(JSONFormatter().format(record))

    assert payload["exception"]["type"] == "RuntimeError"
    assert payload["exception"]["message"] == "falhou"
