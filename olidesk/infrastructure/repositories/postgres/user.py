"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Crear usuarios junto con su fila `members` (misma transacción).
  - Cargar usuarios por email / id (login, details).
  - Update parcial de name/role; delete idempotente.
  - Listar members (proyección users + members) y resolver por ids.
  - Traducir unique violations a DuplicateRecordError.

Collaborators:
  - postgres.base.PostgresRepositoryBase
  - psycopg.errors.UniqueViolation
  - domain.entities.User / Member
  - domain.errors.DuplicateRecordError

Constraints / Notes:
  - Retorna None cuando no existe el recurso (no exception por “not found”).
  - El email se persiste ya normalizado (trim + lower) por el caso de uso.
  - Orden estable en listados: name ASC, id ASC.
============================================================
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from psycopg.errors import UniqueViolation

from ....crosscutting.logger import logger
from ....domain.entities import Member, User
from ....domain.errors import DuplicateRecordError
from .base import PostgresRepositoryBase

# R: Lista explícita de columnas para mantener el contrato estable con el esquema.
_USER_COLUMNS = "u.id, u.name, u.email, u.password_hash, m.role, u.created_at, u.updated_at"

_USER_SELECT = f"""
    SELECT {_USER_COLUMNS}
    FROM users u
    JOIN members m ON m.user_id = u.id
"""

_MEMBER_SELECT = """
    SELECT u.id, u.name, u.email, m.role
    FROM members m
    JOIN users u ON u.id = m.user_id
"""


def _row_to_user(row: tuple) -> User:
    return User(
        id=row[0],
        name=row[1],
        email=row[2],
        password_hash=row[3],
        role=row[4],
        created_at=row[5],
        updated_at=row[6],
    )


def _row_to_member(row: tuple) -> Member:
    return Member(id=row[0], name=row[1], email=row[2], role=row[3])


class PostgresUserRepository(PostgresRepositoryBase):
    """Repositorio PostgreSQL para usuarios y su proyección member."""

    # =========================================================
    # SQL Constantes (Privadas)
    # =========================================================
    _SQL_INSERT_USER = """
        INSERT INTO users (id, name, email, password_hash)
        VALUES (%s, %s, %s, %s)
        RETURNING created_at, updated_at
    """

    _SQL_INSERT_MEMBER = "INSERT INTO members (user_id, role) VALUES (%s, %s)"

    _SQL_GET_BY_ID = _USER_SELECT + " WHERE u.id = %s"

    _SQL_GET_BY_EMAIL = _USER_SELECT + " WHERE u.email = %s"

    _SQL_UPDATE_NAME = """
        UPDATE users SET name = %s, updated_at = NOW() WHERE id = %s
    """

    _SQL_UPDATE_ROLE = "UPDATE members SET role = %s WHERE user_id = %s"

    _SQL_DELETE_MEMBER = "DELETE FROM members WHERE user_id = %s"

    _SQL_DELETE_USER = "DELETE FROM users WHERE id = %s"

    _SQL_LIST_MEMBERS = _MEMBER_SELECT + " ORDER BY u.name ASC, u.id ASC"

    _SQL_MEMBERS_BY_IDS = _MEMBER_SELECT + " WHERE m.user_id = ANY(%s)"

    # =========================================================
    # Public API
    # =========================================================
    def create_user(self, user: User) -> User:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                with conn.transaction():
                    row = conn.execute(
                        self._SQL_INSERT_USER,
                        (user.id, user.name, user.email, user.password_hash),
                    ).fetchone()
                    conn.execute(self._SQL_INSERT_MEMBER, (user.id, user.role))
        except UniqueViolation as exc:
            logger.info(
                "PostgresUserRepository: duplicated user", extra={"user_id": str(user.id)}
            )
            raise DuplicateRecordError(str(exc)) from exc
        except Exception as exc:
            raise self._fail(
                "PostgresUserRepository: Failed to create user",
                exc,
                {"user_id": str(user.id)},
            ) from exc

        return User(
            id=user.id,
            name=user.name,
            email=user.email,
            password_hash=user.password_hash,
            role=user.role,
            created_at=row[0],
            updated_at=row[1],
        )

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        row = self._fetchone(
            query=self._SQL_GET_BY_ID,
            params=[user_id],
            context_msg="PostgresUserRepository: Failed to get user by id",
            extra={"user_id": str(user_id)},
        )
        return _row_to_user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        row = self._fetchone(
            query=self._SQL_GET_BY_EMAIL,
            params=[email],
            context_msg="PostgresUserRepository: Failed to get user by email",
            extra={},
        )
        return _row_to_user(row) if row else None

    def update_user(
        self,
        user_id: UUID,
        *,
        name: Optional[str] = None,
        role: Optional[str] = None,
    ) -> Optional[User]:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                with conn.transaction():
                    exists = conn.execute(
                        "SELECT 1 FROM users WHERE id = %s", (user_id,)
                    ).fetchone()
                    if exists is None:
                        return None
                    if name:
                        conn.execute(self._SQL_UPDATE_NAME, (name, user_id))
                    if role:
                        conn.execute(self._SQL_UPDATE_ROLE, (role, user_id))
        except Exception as exc:
            raise self._fail(
                "PostgresUserRepository: Failed to update user",
                exc,
                {"user_id": str(user_id)},
            ) from exc

        return self.get_user_by_id(user_id)

    def delete_user(self, user_id: UUID) -> bool:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                with conn.transaction():
                    conn.execute(self._SQL_DELETE_MEMBER, (user_id,))
                    result = conn.execute(self._SQL_DELETE_USER, (user_id,))
                    return (result.rowcount or 0) > 0
        except Exception as exc:
            raise self._fail(
                "PostgresUserRepository: Failed to delete user",
                exc,
                {"user_id": str(user_id)},
            ) from exc

    def list_members(self) -> List[Member]:
        rows = self._fetchall(
            query=self._SQL_LIST_MEMBERS,
            params=[],
            context_msg="PostgresUserRepository: Failed to list members",
            extra={},
        )
        return [_row_to_member(row) for row in rows]

    def get_members_by_ids(self, member_ids: List[UUID]) -> List[Member]:
        if not member_ids:
            return []
        rows = self._fetchall(
            query=self._SQL_MEMBERS_BY_IDS,
            params=[list(member_ids)],
            context_msg="PostgresUserRepository: Failed to resolve members",
            extra={"member_count": len(member_ids)},
        )
        return [_row_to_member(row) for row in rows]
