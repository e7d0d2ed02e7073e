"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del dominio Olidesk (clientes, atendimentos, usuarios)

Responsabilidades:
    - Modelar Client, Form (atendimento), User y su proyección Member.
    - Validar invariantes en orden determinístico (primer fallo gana).
    - Representar la identidad verificada del caller (CallerIdentity).

Colaboradores:
    - domain.errors: mensajes y DomainValidationError
    - application.usecases: construyen/mergean entidades
    - infrastructure.repositories: persisten/reconstruyen entidades

Notas:
    - Latitud/longitud de Client son derivadas (geocoding), nunca input.
    - Member.id == User.id (un usuario tiene a lo sumo un rol de member).
===============================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import UUID

from .errors import (
    MSG_CITY,
    MSG_CLIENT_ID,
    MSG_CLIENT_NAME,
    MSG_CLIENT_TYPE,
    MSG_CNPJ_OR_CPF,
    MSG_CONTACT_EMAIL,
    MSG_CONTACT_NAME,
    MSG_CONTACT_PHONE,
    MSG_COUNTRY,
    MSG_DEFECT_DESCRIPTION,
    MSG_DIFFICULTY_LEVEL,
    MSG_NUMBER,
    MSG_OPEN_DATE,
    MSG_POSTAL_CODE,
    MSG_SOLICITED_BY,
    MSG_SOLUTION_DESCRIPTION,
    MSG_STATE,
    MSG_STREET,
    MSG_TECHNICIANS,
    MSG_USER_EMAIL,
    MSG_USER_NAME,
    MSG_USER_PASSWORD,
    MSG_USER_ROLE,
    DomainValidationError,
)

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")

NIL_UUID = UUID(int=0)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_valid_email(value: str | None) -> bool:
    return bool(value) and EMAIL_PATTERN.match(value) is not None


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CallerIdentity:
    """Caller autenticado; se pasa explícitamente a cada caso de uso."""

    user_id: UUID
    email: str = ""


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class ClientType(str, Enum):
    """Tipo de cliente: pessoa física o jurídica."""

    FISICA = "fisica"
    JURIDICA = "juridica"


@dataclass
class ContactPerson:
    responsible_name: str = ""
    phone: str = ""
    email: str = ""


@dataclass
class Address:
    postal_code: str = ""
    neighborhood: str = ""
    country: str = ""
    state: str = ""
    city: str = ""
    street: str = ""
    number: str = ""
    complement: str = ""
    latitude: float = 0.0
    longitude: float = 0.0


@dataclass
class Client:
    """Cliente atendido (pessoa física o jurídica) con dirección geocodificada."""

    id: UUID
    client_name: str = ""
    client_type: str = ""
    cnpj_or_cpf: str = ""
    contact: ContactPerson = field(default_factory=ContactPerson)
    address: Address = field(default_factory=Address)

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def validate(self) -> None:
        """Lanza DomainValidationError con el primer campo inválido."""
        if not self.client_name:
            raise DomainValidationError("client_name", MSG_CLIENT_NAME)
        if self.client_type not in {t.value for t in ClientType}:
            raise DomainValidationError("client_type", MSG_CLIENT_TYPE)
        if not self.cnpj_or_cpf:
            raise DomainValidationError("cnpj_or_cpf", MSG_CNPJ_OR_CPF)

        contact = self.contact
        if not contact.responsible_name:
            raise DomainValidationError(
                "contact_person.responsible_name", MSG_CONTACT_NAME
            )
        if not is_valid_email(contact.email):
            raise DomainValidationError("contact_person.email", MSG_CONTACT_EMAIL)
        if not contact.phone:
            raise DomainValidationError("contact_person.phone", MSG_CONTACT_PHONE)

        address = self.address
        required_address = (
            ("postal_code", MSG_POSTAL_CODE),
            ("country", MSG_COUNTRY),
            ("state", MSG_STATE),
            ("city", MSG_CITY),
            ("street", MSG_STREET),
            ("number", MSG_NUMBER),
        )
        for attr, message in required_address:
            if not getattr(address, attr):
                raise DomainValidationError(f"address.{attr}", message)

    def touch(self, *, at: datetime | None = None) -> None:
        self.updated_at = at or _utcnow()


# ---------------------------------------------------------------------------
# Member / User
# ---------------------------------------------------------------------------


@dataclass
class Member:
    """Proyección de User usada como técnico responsable en un atendimento."""

    id: UUID
    name: str = ""
    email: str = ""
    role: str = ""


def validate_user_fields(*, name: str, email: str, role: str, password: str) -> None:
    """Validación de alta de usuario (password en claro o digest, ambos opacos)."""
    if not name:
        raise DomainValidationError("name", MSG_USER_NAME)
    if not is_valid_email(email):
        raise DomainValidationError("email", MSG_USER_EMAIL)
    if not role:
        raise DomainValidationError("role", MSG_USER_ROLE)
    if not password:
        raise DomainValidationError("password", MSG_USER_PASSWORD)


@dataclass
class User:
    """Cuenta de acceso. password_hash nunca se serializa hacia afuera."""

    id: UUID
    name: str
    email: str
    password_hash: str
    role: str

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def validate(self) -> None:
        validate_user_fields(
            name=self.name,
            email=self.email,
            role=self.role,
            password=self.password_hash,
        )

    def to_member(self) -> Member:
        return Member(id=self.id, name=self.name, email=self.email, role=self.role)


# ---------------------------------------------------------------------------
# Form (Atendimento)
# ---------------------------------------------------------------------------


@dataclass
class ClientReference:
    """Referencia al cliente con nombre desnormalizado para listados."""

    id: UUID
    client_name: str = ""


@dataclass
class Form:
    """
    Atendimento (ticket de servicio).

    technicians es un conjunto ordenado (sin repetidos) y debe tener al
    menos un técnico; las filas de asociación pertenecen al form.
    """

    id: UUID
    opened_at: Optional[datetime] = None
    technicians: List[Member] = field(default_factory=list)
    client: Optional[ClientReference] = None
    solicited_by: str = ""
    difficulty_level: str = ""
    defect_description: str = ""
    solution_description: str = ""

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def technician_ids(self) -> List[UUID]:
        return [member.id for member in self.technicians]

    def validate(self) -> None:
        """Lanza DomainValidationError con el primer campo inválido."""
        if not self.defect_description:
            raise DomainValidationError("defect_description", MSG_DEFECT_DESCRIPTION)
        if not self.difficulty_level:
            raise DomainValidationError("difficulty_level", MSG_DIFFICULTY_LEVEL)
        if not self.solicited_by:
            raise DomainValidationError("solicited_by", MSG_SOLICITED_BY)
        if self.client is None or self.client.id in (None, NIL_UUID):
            raise DomainValidationError("cliente_id", MSG_CLIENT_ID)
        if not self.technicians:
            raise DomainValidationError("tecnicos_responsaveis", MSG_TECHNICIANS)
        if self.opened_at is None:
            raise DomainValidationError("data_de_abertura", MSG_OPEN_DATE)
        if not self.solution_description:
            raise DomainValidationError(
                "solution_description", MSG_SOLUTION_DESCRIPTION
            )

    def touch(self, *, at: datetime | None = None) -> None:
        self.updated_at = at or _utcnow()
