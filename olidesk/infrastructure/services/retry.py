"""
===============================================================================
TARJETA CRC — infrastructure/services/retry.py (Reintentos hacia Nominatim)
===============================================================================

Responsabilidades:
  - Clasificar fallas del geocoder: transitorias (reintentar) o definitivas.
  - Armar el decorator tenacity (backoff exponencial + jitter) con la política
    de RETRY_* del entorno.

Colaboradores:
  - tenacity
  - httpx (HTTPStatusError / TransportError)
  - infrastructure/services/geocoding.py (único consumidor)

Reglas:
  - Transitorias: 408, 429, 5xx de gateway, timeouts y errores de conexión.
  - El resto falla al primer intento (un 4xx no se arregla reintentando).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, TypeVar

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from ...crosscutting.config import get_settings
from ...crosscutting.logger import logger

T = TypeVar("T")

TRANSIENT_HTTP_CODES: frozenset[int] = frozenset({408, 429, 500, 502, 503, 504})


def get_http_status_code(exception: BaseException) -> int | None:
    response = getattr(exception, "response", None)
    for candidate in (getattr(response, "status_code", None), getattr(exception, "status_code", None)):
        if isinstance(candidate, int):
            return candidate
    return None


def is_transient_error(exception: BaseException) -> bool:
    status = get_http_status_code(exception)
    if status is not None:
        return status in TRANSIENT_HTTP_CODES
    return isinstance(
        exception, (httpx.TransportError, TimeoutError, ConnectionError)
    )


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int
    base_delay: float
    max_delay: float

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_delay < 0:
            raise ValueError("base_delay must be >= 0")
        if self.max_delay <= 0:
            raise ValueError("max_delay must be > 0")

    @classmethod
    def from_settings(cls, **overrides: float | int | None) -> "RetryPolicy":
        settings = get_settings()
        defaults = {
            "max_attempts": settings.retry_max_attempts,
            "base_delay": settings.retry_base_delay_seconds,
            "max_delay": settings.retry_max_delay_seconds,
        }
        defaults.update({k: v for k, v in overrides.items() if v is not None})
        return cls(
            max_attempts=int(defaults["max_attempts"]),
            base_delay=float(defaults["base_delay"]),
            max_delay=float(defaults["max_delay"]),
        )


def _before_sleep(state: RetryCallState) -> None:
    error = state.outcome.exception() if state.outcome is not None else None
    logger.warning(
        "Reintentando llamada externa",
        extra={
            "function": getattr(state.fn, "__name__", "?"),
            "attempt": state.attempt_number,
            "sleep_seconds": round(state.next_action.sleep, 2) if state.next_action else 0,
            "error_type": type(error).__name__ if error else None,
        },
    )


def create_retry_decorator(
    max_attempts: int | None = None,
    base_delay: float | None = None,
    max_delay: float | None = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator tenacity; los argumentos omitidos salen de RETRY_* del entorno."""
    policy = RetryPolicy.from_settings(
        max_attempts=max_attempts, base_delay=base_delay, max_delay=max_delay
    )
    return retry(
        stop=stop_after_attempt(policy.max_attempts),
        wait=wait_exponential_jitter(
            initial=policy.base_delay, max=policy.max_delay, jitter=policy.base_delay
        ),
        retry=retry_if_exception(is_transient_error),
        before_sleep=_before_sleep,
        reraise=True,
    )
