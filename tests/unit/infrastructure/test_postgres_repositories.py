"""
Name: PostgreSQL Repository Tests (offline)

Responsibilities:
  - Row mapping and SQL parameters with a mocked pool
  - Transactions for multi-row writes
  - Error translation (DatabaseError / DuplicateRecordError)
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from olidesk.crosscutting.exceptions import DatabaseError
from olidesk.domain.entities import ClientReference, Form, Member, User
from olidesk.domain.errors import DuplicateRecordError
from olidesk.infrastructure.repositories.postgres import (
    PostgresClientRepository,
    PostgresFormRepository,
    PostgresUserRepository,
)
from psycopg.errors import UniqueViolation

pytestmark = pytest.mark.unit

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _pool_with(conn: MagicMock) -> MagicMock:
    pool = MagicMock()
    pool.connection.return_value.__enter__.return_value = conn
    return pool


def _conn() -> MagicMock:
    conn = MagicMock()
    conn.transaction.return_value.__enter__.return_value = None
    conn.transaction.return_value.__exit__.return_value = False
    return conn


class TestClientRepository:
    def test_delete_reports_rowcount(self):
        conn = _conn()
        conn.execute.return_value.rowcount = 0
        repo = PostgresClientRepository(pool=_pool_with(conn))

        assert repo.delete_client(uuid4()) is False

    def test_ping(self):
        conn = _conn()
        conn.execute.return_value.fetchone.return_value = (1,)
        repo = PostgresClientRepository(pool=_pool_with(conn))

        assert repo.ping() is True

    def test_driver_failure_becomes_database_error(self):
        conn = _conn()
        conn.execute.side_effect = RuntimeError("connection reset")
        repo = PostgresClientRepository(pool=_pool_with(conn))

        with pytest.raises(DatabaseError) as exc_info:
            repo.get_client(uuid4())

        assert exc_info.value.error_id
        assert "connection reset" in exc_info.value.message

    def test_missing_pool_becomes_database_error(self):
        from olidesk.infrastructure.db.pool import reset_pool

        reset_pool()
        repo = PostgresClientRepository()

        with pytest.raises(DatabaseError):
            repo.list_clients()


class TestUserRepository:
    def _user(self) -> User:
        return User(
            id=uuid4(),
            name="Ana",
            email="ana@olidesk.com",
            password_hash="digest",
            role="tecnico",
        )

    def test_create_user_writes_user_and_member_in_one_transaction(self):
        conn = _conn()
        conn.execute.return_value.fetchone.return_value = (NOW, NOW)
        repo = PostgresUserRepository(pool=_pool_with(conn))
        user = self._user()

        created = repo.create_user(user)

        conn.transaction.assert_called_once()
        assert conn.execute.call_count == 2
        member_params = conn.execute.call_args_list[1].args[1]
        assert member_params == (user.id, "tecnico")
        assert created.created_at == NOW

    def test_unique_violation_becomes_duplicate(self):
        conn = _conn()
        conn.execute.side_effect = UniqueViolation("duplicate key")
        repo = PostgresUserRepository(pool=_pool_with(conn))

        with pytest.raises(DuplicateRecordError):
            repo.create_user(self._user())

    def test_update_missing_user_returns_none(self):
        conn = _conn()
        conn.execute.return_value.fetchone.return_value = None
        repo = PostgresUserRepository(pool=_pool_with(conn))

        assert repo.update_user(uuid4(), name="Novo") is None
        assert conn.execute.call_count == 1

    def test_get_members_by_ids_maps_rows(self):
        conn = _conn()
        member_id = uuid4()
        conn.execute.return_value.fetchall.return_value = [
            (member_id, "Ana", "ana@olidesk.com", "tecnico")
        ]
        repo = PostgresUserRepository(pool=_pool_with(conn))

        members = repo.get_members_by_ids([member_id])

        assert members == [
            Member(id=member_id, name="Ana", email="ana@olidesk.com", role="tecnico")
        ]


class TestFormRepository:
    def _form(self, technicians) -> Form:
        return Form(
            id=uuid4(),
            opened_at=NOW,
            technicians=technicians,
            client=ClientReference(id=uuid4(), client_name="Padaria"),
            solicited_by="João",
            difficulty_level="alta",
            defect_description="Sem rede",
            solution_description="Troca do switch",
        )

    def test_update_without_technicians_keeps_associations(self):
        conn = _conn()
        conn.execute.return_value.rowcount = 1
        repo = PostgresFormRepository(pool=_pool_with(conn))

        assert repo.update_form(self._form([Member(id=uuid4())])) is True
        assert conn.execute.call_count == 1

    def test_update_with_technicians_replaces_set(self):
        conn = _conn()
        conn.execute.return_value.rowcount = 1
        repo = PostgresFormRepository(pool=_pool_with(conn))
        first, second = uuid4(), uuid4()
        form = self._form([Member(id=first), Member(id=second)])

        assert repo.update_form(form, technician_ids=[first, second]) is True

        conn.transaction.assert_called_once()
        statements = [c.args[0] for c in conn.execute.call_args_list]
        assert len(statements) == 3
        assert "DELETE FROM form_technicians" in statements[1]
        assert "INSERT INTO form_technicians" in statements[2]
        assert conn.execute.call_args_list[2].args[1][1] == [first, second]

    def test_update_missing_form_returns_false(self):
        conn = _conn()
        conn.execute.return_value.rowcount = 0
        repo = PostgresFormRepository(pool=_pool_with(conn))

        assert repo.update_form(self._form([]), technician_ids=[uuid4()]) is False
        assert conn.execute.call_count == 1

    def test_delete_form_removes_associations_first(self):
        conn = _conn()
        conn.execute.return_value.rowcount = 1
        repo = PostgresFormRepository(pool=_pool_with(conn))

        assert repo.delete_form(uuid4()) is True

        statements = [c.args[0] for c in conn.execute.call_args_list]
        assert "form_technicians" in statements[0]
        assert "DELETE FROM forms" in statements[1]
