"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/form.py
============================================================
Class: PostgresFormRepository

Responsibilities:
- Persistir atendimentos (`forms`) y sus técnicos (`form_technicians`).
- Escrituras multi-tabla atómicas (create, update con reemplazo de técnicos, delete).
- Resolver técnicos (Member) y cliente (ClientReference) en lecturas.

Collaborators:
- postgres.base.PostgresRepositoryBase
- domain.entities.Form / Member / ClientReference
- Tablas: forms, form_technicians(form_id, member_id, position), members, users, clients

Constraints / Notes:
- Listado: una sola query de técnicos para todos los forms (ANY(%s)).
- `position` preserva el orden de los técnicos tal como se enviaron.
- Orden estable en listados: created_at DESC, id DESC.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional
from uuid import UUID

from ....domain.entities import ClientReference, Form, Member
from .base import PostgresRepositoryBase

_FORM_SELECT = """
    SELECT f.id, f.opened_at, f.client_id, c.client_name,
           f.solicited_by, f.difficulty_level,
           f.defect_description, f.solution_description,
           f.created_at, f.updated_at
    FROM forms f
    LEFT JOIN clients c ON c.id = f.client_id
"""


def _row_to_form(row: tuple, technicians: List[Member]) -> Form:
    return Form(
        id=row[0],
        opened_at=row[1],
        client=ClientReference(id=row[2], client_name=row[3] or ""),
        solicited_by=row[4],
        difficulty_level=row[5],
        defect_description=row[6],
        solution_description=row[7],
        technicians=technicians,
        created_at=row[8],
        updated_at=row[9],
    )


class PostgresFormRepository(PostgresRepositoryBase):
    """Repositorio PostgreSQL para atendimentos y su asociación con técnicos."""

    # =========================================================
    # SQL Constantes (Privadas)
    # =========================================================
    _SQL_INSERT_FORM = """
        INSERT INTO forms (
            id, opened_at, client_id, solicited_by, difficulty_level,
            defect_description, solution_description
        )
        VALUES (%s, %s, %s, %s, %s, %s, %s)
        RETURNING created_at, updated_at
    """

    _SQL_INSERT_TECHNICIANS = """
        INSERT INTO form_technicians (form_id, member_id, position)
        SELECT %s, t.member_id, t.position
        FROM UNNEST(%s::uuid[]) WITH ORDINALITY AS t(member_id, position)
    """

    _SQL_DELETE_TECHNICIANS = "DELETE FROM form_technicians WHERE form_id = %s"

    _SQL_GET_FORM = _FORM_SELECT + " WHERE f.id = %s"

    _SQL_LIST_FORMS = _FORM_SELECT + " ORDER BY f.created_at DESC, f.id DESC"

    _SQL_LIST_TECHNICIANS = """
        SELECT ft.form_id, u.id, u.name, u.email, m.role
        FROM form_technicians ft
        JOIN members m ON m.user_id = ft.member_id
        JOIN users u ON u.id = m.user_id
        WHERE ft.form_id = ANY(%s)
        ORDER BY ft.form_id, ft.position ASC
    """

    _SQL_UPDATE_FORM = """
        UPDATE forms SET
            opened_at = %s,
            client_id = %s,
            solicited_by = %s,
            difficulty_level = %s,
            defect_description = %s,
            solution_description = %s,
            updated_at = NOW()
        WHERE id = %s
    """

    _SQL_DELETE_FORM = "DELETE FROM forms WHERE id = %s"

    # =========================================================
    # Helpers
    # =========================================================
    def _technicians_by_form(self, form_ids: List[UUID]) -> Dict[UUID, List[Member]]:
        if not form_ids:
            return {}
        rows = self._fetchall(
            query=self._SQL_LIST_TECHNICIANS,
            params=[form_ids],
            context_msg="PostgresFormRepository: Failed to list technicians",
            extra={"form_count": len(form_ids)},
        )
        result: Dict[UUID, List[Member]] = {}
        for form_id, member_id, name, email, role in rows:
            result.setdefault(form_id, []).append(
                Member(id=member_id, name=name, email=email, role=role)
            )
        return result

    @staticmethod
    def _scalar_values(form: Form) -> list[object]:
        return [
            form.opened_at,
            form.client.id if form.client else None,
            form.solicited_by,
            form.difficulty_level,
            form.defect_description,
            form.solution_description,
        ]

    # =========================================================
    # Public API
    # =========================================================
    def create_form(self, form: Form) -> Form:
        technician_ids = list(dict.fromkeys(form.technician_ids))
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                with conn.transaction():
                    row = conn.execute(
                        self._SQL_INSERT_FORM,
                        (form.id, *self._scalar_values(form)),
                    ).fetchone()
                    conn.execute(
                        self._SQL_INSERT_TECHNICIANS, (form.id, technician_ids)
                    )
        except Exception as exc:
            raise self._fail(
                "PostgresFormRepository: Failed to create form",
                exc,
                {"form_id": str(form.id)},
            ) from exc

        return replace(form, created_at=row[0], updated_at=row[1])

    def get_form(self, form_id: UUID) -> Optional[Form]:
        row = self._fetchone(
            query=self._SQL_GET_FORM,
            params=[form_id],
            context_msg="PostgresFormRepository: Failed to get form",
            extra={"form_id": str(form_id)},
        )
        if row is None:
            return None
        technicians = self._technicians_by_form([row[0]])
        return _row_to_form(row, technicians.get(row[0], []))

    def list_forms(self) -> List[Form]:
        rows = self._fetchall(
            query=self._SQL_LIST_FORMS,
            params=[],
            context_msg="PostgresFormRepository: Failed to list forms",
            extra={},
        )
        technicians = self._technicians_by_form([row[0] for row in rows])
        return [_row_to_form(row, technicians.get(row[0], [])) for row in rows]

    def update_form(
        self, form: Form, *, technician_ids: Optional[List[UUID]] = None
    ) -> bool:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                with conn.transaction():
                    result = conn.execute(
                        self._SQL_UPDATE_FORM,
                        (*self._scalar_values(form), form.id),
                    )
                    if (result.rowcount or 0) == 0:
                        return False

                    # Reemplazo completo del set de técnicos
                    if technician_ids is not None:
                        unique_ids = list(dict.fromkeys(technician_ids))
                        conn.execute(self._SQL_DELETE_TECHNICIANS, (form.id,))
                        if unique_ids:
                            conn.execute(
                                self._SQL_INSERT_TECHNICIANS, (form.id, unique_ids)
                            )
                    return True
        except Exception as exc:
            raise self._fail(
                "PostgresFormRepository: Failed to update form",
                exc,
                {"form_id": str(form.id)},
            ) from exc

    def delete_form(self, form_id: UUID) -> bool:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                with conn.transaction():
                    conn.execute(self._SQL_DELETE_TECHNICIANS, (form_id,))
                    result = conn.execute(self._SQL_DELETE_FORM, (form_id,))
                    return (result.rowcount or 0) > 0
        except Exception as exc:
            raise self._fail(
                "PostgresFormRepository: Failed to delete form",
                exc,
                {"form_id": str(form_id)},
            ) from exc
