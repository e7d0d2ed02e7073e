"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/client.py
============================================================
Class: PostgresClientRepository

Responsibilities:
- Persistir clientes (datos, contacto y dirección geocodificada) en `clients`.
- Mapear filas crudas -> entidad de dominio `Client`.
- Delete idempotente (rowcount indica si existía).

Collaborators:
- postgres.base.PostgresRepositoryBase (pool + helpers)
- domain.entities.Client / ContactPerson / Address

Constraints / Notes:
- Repo puro: la validación y el geocoding viven en los casos de uso.
- SQL parametrizado siempre.
- Orden estable en listados: created_at DESC, id DESC.
============================================================
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from ....domain.entities import Address, Client, ContactPerson
from .base import PostgresRepositoryBase

# R: Lista explícita de columnas (contrato con el esquema).
_CLIENT_COLUMNS = (
    "id, client_name, client_type, cnpj_or_cpf, "
    "contact_name, contact_phone, contact_email, "
    "postal_code, neighborhood, country, state, city, street, number, complement, "
    "latitude, longitude, created_at, updated_at"
)


def _row_to_client(row: tuple) -> Client:
    return Client(
        id=row[0],
        client_name=row[1],
        client_type=row[2],
        cnpj_or_cpf=row[3],
        contact=ContactPerson(
            responsible_name=row[4],
            phone=row[5],
            email=row[6],
        ),
        address=Address(
            postal_code=row[7],
            neighborhood=row[8] or "",
            country=row[9],
            state=row[10],
            city=row[11],
            street=row[12],
            number=row[13],
            complement=row[14] or "",
            latitude=float(row[15]),
            longitude=float(row[16]),
        ),
        created_at=row[17],
        updated_at=row[18],
    )


def _client_values(client: Client) -> list[object]:
    contact = client.contact
    address = client.address
    return [
        client.client_name,
        client.client_type,
        client.cnpj_or_cpf,
        contact.responsible_name,
        contact.phone,
        contact.email,
        address.postal_code,
        address.neighborhood,
        address.country,
        address.state,
        address.city,
        address.street,
        address.number,
        address.complement,
        address.latitude,
        address.longitude,
    ]


class PostgresClientRepository(PostgresRepositoryBase):
    """Repositorio PostgreSQL para clientes."""

    # =========================================================
    # SQL Constantes (Privadas)
    # =========================================================
    _SQL_INSERT = f"""
        INSERT INTO clients (
            id, client_name, client_type, cnpj_or_cpf,
            contact_name, contact_phone, contact_email,
            postal_code, neighborhood, country, state, city, street, number,
            complement, latitude, longitude
        )
        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
        RETURNING {_CLIENT_COLUMNS}
    """

    _SQL_GET = f"SELECT {_CLIENT_COLUMNS} FROM clients WHERE id = %s"

    _SQL_LIST = f"""
        SELECT {_CLIENT_COLUMNS}
        FROM clients
        ORDER BY created_at DESC, id DESC
    """

    _SQL_UPDATE = """
        UPDATE clients SET
            client_name = %s,
            client_type = %s,
            cnpj_or_cpf = %s,
            contact_name = %s,
            contact_phone = %s,
            contact_email = %s,
            postal_code = %s,
            neighborhood = %s,
            country = %s,
            state = %s,
            city = %s,
            street = %s,
            number = %s,
            complement = %s,
            latitude = %s,
            longitude = %s,
            updated_at = NOW()
        WHERE id = %s
    """

    _SQL_DELETE = "DELETE FROM clients WHERE id = %s"

    # =========================================================
    # Public API
    # =========================================================
    def create_client(self, client: Client) -> Client:
        row = self._fetchone(
            query=self._SQL_INSERT,
            params=[client.id, *_client_values(client)],
            context_msg="PostgresClientRepository: Failed to create client",
            extra={"client_id": str(client.id)},
        )
        if row is None:  # pragma: no cover
            raise self._fail(
                "PostgresClientRepository: INSERT returned no row",
                RuntimeError("no row"),
                {"client_id": str(client.id)},
            )
        return _row_to_client(row)

    def get_client(self, client_id: UUID) -> Optional[Client]:
        row = self._fetchone(
            query=self._SQL_GET,
            params=[client_id],
            context_msg="PostgresClientRepository: Failed to get client",
            extra={"client_id": str(client_id)},
        )
        return _row_to_client(row) if row else None

    def list_clients(self) -> List[Client]:
        rows = self._fetchall(
            query=self._SQL_LIST,
            params=[],
            context_msg="PostgresClientRepository: Failed to list clients",
            extra={},
        )
        return [_row_to_client(row) for row in rows]

    def update_client(self, client: Client) -> bool:
        count = self._execute_rowcount(
            query=self._SQL_UPDATE,
            params=[*_client_values(client), client.id],
            context_msg="PostgresClientRepository: Failed to update client",
            extra={"client_id": str(client.id)},
        )
        return count > 0

    def delete_client(self, client_id: UUID) -> bool:
        count = self._execute_rowcount(
            query=self._SQL_DELETE,
            params=[client_id],
            context_msg="PostgresClientRepository: Failed to delete client",
            extra={"client_id": str(client_id)},
        )
        return count > 0
