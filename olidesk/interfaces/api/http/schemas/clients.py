"""
===============================================================================
TARJETA CRC — schemas/clients.py
===============================================================================

Módulo:
    Schemas HTTP para Clientes

Responsabilidades:
    - DTOs de request/response para /clients/*.
    - Mantener los nombres de campo del contrato JSON de la API.

Notas:
    - Todos los campos de request son opcionales: la validación de negocio
      (campos requeridos, email, tipo) vive en el dominio y devuelve el
      mensaje estable correspondiente.
    - latitude/longitude del request se aceptan pero se ignoran.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from olidesk.application.usecases.clients import (
    AddressInput,
    ClientInput,
    ContactInput,
)
from olidesk.domain.entities import Client


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class ContactPersonReq(BaseModel):
    responsible_name: str | None = None
    phone: str | None = None
    email: str | None = None


class AddressReq(BaseModel):
    postal_code: str | None = None
    neighborhood: str | None = None
    country: str | None = None
    state: str | None = None
    city: str | None = None
    street: str | None = None
    number: str | None = None
    complement: str | None = None
    latitude: float | None = Field(default=None, description="Ignorado: derivado por geocoding")
    longitude: float | None = Field(default=None, description="Ignorado: derivado por geocoding")


class ClientReq(BaseModel):
    """Request de create (completo) y update (parcial)."""

    client_name: str | None = None
    client_type: str | None = None
    cnpj_or_cpf: str | None = None
    contact_person: ContactPersonReq = Field(default_factory=ContactPersonReq)
    address: AddressReq = Field(default_factory=AddressReq)

    def to_input(self) -> ClientInput:
        contact = self.contact_person
        address = self.address
        return ClientInput(
            client_name=self.client_name,
            client_type=self.client_type,
            cnpj_or_cpf=self.cnpj_or_cpf,
            contact=ContactInput(
                responsible_name=contact.responsible_name,
                phone=contact.phone,
                email=contact.email,
            ),
            address=AddressInput(
                postal_code=address.postal_code,
                neighborhood=address.neighborhood,
                country=address.country,
                state=address.state,
                city=address.city,
                street=address.street,
                number=address.number,
                complement=address.complement,
            ),
        )


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class ContactPersonRes(BaseModel):
    responsible_name: str
    phone: str
    email: str


class AddressRes(BaseModel):
    postal_code: str
    neighborhood: str
    country: str
    state: str
    city: str
    street: str
    number: str
    complement: str
    latitude: float
    longitude: float


class ClientRes(BaseModel):
    id: UUID
    client_name: str
    client_type: str
    cnpj_or_cpf: str
    contact_person: ContactPersonRes
    address: AddressRes
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, client: Client) -> "ClientRes":
        contact = client.contact
        address = client.address
        return cls(
            id=client.id,
            client_name=client.client_name,
            client_type=client.client_type,
            cnpj_or_cpf=client.cnpj_or_cpf,
            contact_person=ContactPersonRes(
                responsible_name=contact.responsible_name,
                phone=contact.phone,
                email=contact.email,
            ),
            address=AddressRes(
                postal_code=address.postal_code,
                neighborhood=address.neighborhood,
                country=address.country,
                state=address.state,
                city=address.city,
                street=address.street,
                number=address.number,
                complement=address.complement,
                latitude=address.latitude,
                longitude=address.longitude,
            ),
            created_at=client.created_at,
            updated_at=client.updated_at,
        )


class ClientsListRes(BaseModel):
    clients: list[ClientRes]


class ClientEnvelopeRes(BaseModel):
    client: ClientRes
