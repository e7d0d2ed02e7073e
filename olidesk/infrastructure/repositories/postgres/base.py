"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/base.py
============================================================
Class: PostgresRepositoryBase

Responsibilities:
- Resolver el pool (inyectado en tests, global en runtime).
- Ejecutar SQL parametrizado con errores consistentes (DatabaseError).
- Loguear fallos con contexto estructurado.

Collaborators:
- psycopg_pool.ConnectionPool
- infrastructure.db.pool.get_pool
- crosscutting.exceptions.DatabaseError
- crosscutting.logger.logger
============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger


class PostgresRepositoryBase:
    """Helpers DRY compartidos por los repositorios PostgreSQL."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        # Pool inyectable para tests. En prod se obtiene por factory global.
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        """Pool lazy-load."""
        if self._pool is not None:
            return self._pool
        from ...db.pool import get_pool

        return get_pool()

    def _fail(self, context_msg: str, exc: Exception, extra: dict) -> DatabaseError:
        logger.exception(context_msg, extra={**extra, "error": str(exc)})
        return DatabaseError(f"{context_msg}: {exc}", original_error=exc)

    def _fetchall(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> list[tuple]:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except Exception as exc:
            raise self._fail(context_msg, exc, extra) from exc

    def _fetchone(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            raise self._fail(context_msg, exc, extra) from exc

    def _execute_rowcount(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> int:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                result = conn.execute(query, tuple(params))
                return result.rowcount or 0
        except Exception as exc:
            raise self._fail(context_msg, exc, extra) from exc

    def ping(self) -> bool:
        """SELECT 1 (health check)."""
        row = self._fetchone(
            query="SELECT 1",
            params=[],
            context_msg=f"{type(self).__name__}: ping failed",
            extra={},
        )
        return row is not None
