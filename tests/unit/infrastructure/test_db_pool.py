"""Postgres pool lifecycle with a patched ConnectionPool (no real DB)."""

from unittest.mock import MagicMock, patch

import pytest
from olidesk.infrastructure.db import pool as pool_module
from olidesk.infrastructure.db.errors import (
    DatabasePoolError,
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
)

pytestmark = pytest.mark.unit

DSN = "postgresql://olidesk@db/olidesk"


@pytest.fixture
def fake_pool_cls():
    pool_module.reset_pool()
    with patch.object(pool_module, "ConnectionPool") as cls:
        cls.return_value = MagicMock(name="pool")
        yield cls
    pool_module.reset_pool()


def test_init_pool_passes_dsn_and_bounds(fake_pool_cls):
    pool = pool_module.init_pool(DSN, min_size=2, max_size=10)

    kwargs = fake_pool_cls.call_args.kwargs
    assert kwargs["conninfo"] == DSN
    assert (kwargs["min_size"], kwargs["max_size"]) == (2, 10)
    assert kwargs["configure"] is pool_module._configure_connection
    assert pool_module.get_pool() is pool


def test_second_init_is_rejected(fake_pool_cls):
    pool_module.init_pool(DSN, min_size=1, max_size=2)

    with pytest.raises(PoolAlreadyInitializedError):
        pool_module.init_pool(DSN, min_size=1, max_size=2)


def test_get_pool_before_init():
    pool_module.reset_pool()

    with pytest.raises(PoolNotInitializedError, match="no inicializado"):
        pool_module.get_pool()


def test_close_pool_closes_and_forgets(fake_pool_cls):
    pool = pool_module.init_pool(DSN, min_size=1, max_size=2)

    pool_module.close_pool()
    pool_module.close_pool()

    pool.close.assert_called_once()
    with pytest.raises(DatabasePoolError):
        pool_module.get_pool()


def test_reset_tolerates_close_failure_and_allows_reinit(fake_pool_cls):
    first = pool_module.init_pool(DSN, min_size=1, max_size=2)
    first.close.side_effect = RuntimeError("socket gone")

    pool_module.reset_pool()
    fake_pool_cls.return_value = MagicMock(name="second")

    assert pool_module.init_pool(DSN, min_size=1, max_size=2) is not first


def test_each_connection_gets_statement_timeout():
    conn = MagicMock()

    pool_module._configure_connection(conn)

    conn.execute.assert_called_once_with("SET statement_timeout = 30000")
    conn.commit.assert_called_once()
