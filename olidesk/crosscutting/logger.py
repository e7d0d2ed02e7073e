# olidesk/crosscutting/logger.py
"""
===============================================================================
MÓDULO: Logging estructurado de la API Olidesk
===============================================================================

Cada línea de log es un objeto JSON con:
  - ts / level / logger / msg
  - contexto del request (request_id, method, path) leído de ContextVars
  - campos `extra=` del call site, con credenciales y PII de clientes ocultas

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componentes:
  redact() / JSONFormatter / setup_logger()

Responsabilidades:
  - Serializar LogRecord -> JSON (una línea)
  - Ocultar valores de claves sensibles (password, token, cnpj_or_cpf, ...)
  - Respetar LOG_LEVEL / LOG_JSON

Colaboradores:
  - olidesk/context.py
  - crosscutting/config.py
===============================================================================
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Final

from pydantic import ValidationError

from ..context import get_context_dict

LOGGER_NAME: Final[str] = "olidesk-api"

MASK: Final[str] = "***REDACTADO***"

# Credenciales + datos personales de clientes/usuarios
SENSITIVE_KEYS: Final[frozenset[str]] = frozenset(
    {
        "password",
        "password_hash",
        "jwt_secret",
        "secret",
        "token",
        "access_token",
        "authorization",
        "database_url",
        "db_password",
        "cnpj_or_cpf",
        "phone",
    }
)

MAX_VALUE_CHARS: Final[int] = 4_000

# Atributos estándar de LogRecord: no son "extra" del call site.
_RESERVED: Final[frozenset[str]] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys() | {"message"}
)


def redact(key: str, value: Any, *, depth: int = 0) -> Any:
    """Devuelve una versión serializable de `value` con claves sensibles ocultas."""
    if key.lower() in SENSITIVE_KEYS:
        return MASK
    if depth >= 3:
        return str(value)
    if isinstance(value, dict):
        return {str(k): redact(str(k), v, depth=depth + 1) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [redact(key, v, depth=depth + 1) for v in value]
    if value is None or isinstance(value, (bool, int, float)):
        return value
    text = str(value)
    if len(text) > MAX_VALUE_CHARS:
        return text[:MAX_VALUE_CHARS] + "...[truncated]"
    return text


class JSONFormatter(logging.Formatter):
    """LogRecord -> JSON de una línea (UTF-8, sin escapar acentos)."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "where": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        entry.update(get_context_dict())

        for key, value in vars(record).items():
            if key not in _RESERVED:
                entry[key] = redact(key, value)

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, exc_tb = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "stacktrace": traceback.format_exception(exc_type, exc_value, exc_tb),
            }

        return json.dumps(entry, ensure_ascii=False, default=str)


def _level_and_format() -> tuple[str, bool]:
    # Settings inválidos no deben impedir loguear el error que los reporta.
    try:
        from .config import get_settings

        settings = get_settings()
    except ValidationError:
        return "INFO", True
    return (settings.log_level or "INFO").upper(), settings.log_json


def setup_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Configura (una sola vez) el logger de la aplicación."""
    log = logging.getLogger(name)
    level, use_json = _level_and_format()
    log.setLevel(getattr(logging, level, logging.INFO))
    log.propagate = False

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter()
            if use_json
            else logging.Formatter("%(asctime)s %(levelname)s %(message)s")
        )
        log.addHandler(handler)

    return log


logger = setup_logger()
