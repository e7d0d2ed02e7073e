"""
===============================================================================
TARJETA CRC — infrastructure/db/pool.py (Pool PostgreSQL del proceso)
===============================================================================

Responsabilidades:
  - Abrir un único ConnectionPool por proceso (lifespan de la API).
  - Entregarlo a los repositorios Postgres vía get_pool().
  - Cerrarlo al apagar; reset_pool() para tests.

Colaboradores:
  - psycopg_pool.ConnectionPool
  - crosscutting.config (db_statement_timeout_ms)
  - api.main (init_pool / close_pool)

Reglas:
  - init_pool() dos veces es un bug de wiring -> PoolAlreadyInitializedError.
  - get_pool() sin init -> PoolNotInitializedError.
===============================================================================
"""

from __future__ import annotations

import threading

from psycopg_pool import ConnectionPool

from ...crosscutting.config import get_settings
from ...crosscutting.logger import logger
from .errors import PoolAlreadyInitializedError, PoolNotInitializedError


class _PoolSlot:
    """Celda protegida por lock que guarda el pool activo (o None)."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.pool: ConnectionPool | None = None

    def take(self) -> ConnectionPool | None:
        pool, self.pool = self.pool, None
        return pool


_slot = _PoolSlot()


def _configure_connection(conn) -> None:
    timeout_ms = int(get_settings().db_statement_timeout_ms)
    if timeout_ms <= 0:
        return
    conn.execute(f"SET statement_timeout = {timeout_ms}")
    conn.commit()


def init_pool(database_url: str, min_size: int, max_size: int) -> ConnectionPool:
    with _slot.lock:
        if _slot.pool is not None:
            raise PoolAlreadyInitializedError("Pool de Postgres ya abierto en este proceso.")

        pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            configure=_configure_connection,
            open=True,
        )
        _slot.pool = pool

    logger.info("Pool Postgres abierto", extra={"min_size": min_size, "max_size": max_size})
    return pool


def get_pool() -> ConnectionPool:
    pool = _slot.pool
    if pool is None:
        raise PoolNotInitializedError("Pool de Postgres no inicializado (falta init_pool).")
    return pool


def close_pool() -> None:
    """Cierra el pool si está abierto. Llamarlo de nuevo no hace nada."""
    with _slot.lock:
        pool = _slot.take()
    if pool is None:
        return
    pool.close()
    logger.info("Pool Postgres cerrado")


def reset_pool() -> None:
    """Olvida el pool actual; un close fallido se loguea y no corta el test."""
    with _slot.lock:
        pool = _slot.take()
    if pool is None:
        return
    try:
        pool.close()
    except Exception as exc:
        logger.warning("close() falló durante reset_pool", extra={"error": str(exc)})
