"""
===============================================================================
CLIENT USE CASE RESULTS
===============================================================================

Responsibilities:
    - DTOs de entrada (ClientInput) y resultados tipados por caso de uso.

Contrato:
    - Éxito: error == None.
    - Falla: error != None y el resto de campos en su valor neutro.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final, List

from ....domain.entities import Client
from ...errors import UseCaseError

MSG_CLIENT_NOT_FOUND: Final[str] = "client not found"


@dataclass
class ContactInput:
    responsible_name: str | None = None
    phone: str | None = None
    email: str | None = None


@dataclass
class AddressInput:
    postal_code: str | None = None
    neighborhood: str | None = None
    country: str | None = None
    state: str | None = None
    city: str | None = None
    street: str | None = None
    number: str | None = None
    complement: str | None = None


@dataclass
class ClientInput:
    """
    Datos de cliente tal como llegan del borde HTTP.

    None / "" significa "no provisto" en updates parciales. No hay campos
    de coordenadas: siempre se derivan por geocoding.
    """

    client_name: str | None = None
    client_type: str | None = None
    cnpj_or_cpf: str | None = None
    contact: ContactInput = field(default_factory=ContactInput)
    address: AddressInput = field(default_factory=AddressInput)


@dataclass
class CreateClientResult:
    client: Client | None = None
    error: UseCaseError | None = None


@dataclass
class GetClientResult:
    client: Client | None = None
    error: UseCaseError | None = None


@dataclass
class ListClientsResult:
    clients: List[Client] = field(default_factory=list)
    error: UseCaseError | None = None


@dataclass
class UpdateClientResult:
    client: Client | None = None
    geocoded: bool = False
    error: UseCaseError | None = None


@dataclass
class DeleteClientResult:
    deleted: bool = False
    error: UseCaseError | None = None
