"""
===============================================================================
USE CASE: Create Client
===============================================================================

Business Goal:
    Registrar un cliente con su dirección geocodificada.

Flow:
    validate -> geocode -> persist

Rules:
    - Las coordenadas enviadas por el caller se ignoran (siempre geocoding).
    - Un fallo de geocoding aborta la creación: nada se persiste.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    CreateClientUseCase

Collaborators:
    - ClientRepository.create_client
    - GeocodingService.geocode (vía geocode_address)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4

from ....crosscutting.logger import logger
from ....domain.entities import Address, CallerIdentity, Client, ContactPerson
from ....domain.errors import DomainValidationError
from ....domain.repositories import ClientRepository
from ....domain.services import GeocodingService
from ...errors import validation_failure
from .client_results import ClientInput, CreateClientResult
from .geocode_address import geocode_address


def build_client(data: ClientInput) -> Client:
    """Construye la entidad a partir del input (sin coordenadas)."""
    contact = data.contact
    address = data.address
    return Client(
        id=uuid4(),
        client_name=data.client_name or "",
        client_type=data.client_type or "",
        cnpj_or_cpf=data.cnpj_or_cpf or "",
        contact=ContactPerson(
            responsible_name=contact.responsible_name or "",
            phone=contact.phone or "",
            email=contact.email or "",
        ),
        address=Address(
            postal_code=address.postal_code or "",
            neighborhood=address.neighborhood or "",
            country=address.country or "",
            state=address.state or "",
            city=address.city or "",
            street=address.street or "",
            number=address.number or "",
            complement=address.complement or "",
        ),
    )


class CreateClientUseCase:
    def __init__(
        self,
        client_repository: ClientRepository,
        geocoding_service: GeocodingService,
    ) -> None:
        self._clients = client_repository
        self._geocoder = geocoding_service

    def execute(self, caller: CallerIdentity, data: ClientInput) -> CreateClientResult:
        client = build_client(data)

        # 1) Validación (primer campo inválido gana)
        try:
            client.validate()
        except DomainValidationError as exc:
            return CreateClientResult(error=validation_failure(exc))

        # 2) Geocoding (obligatorio)
        coordinates, error = geocode_address(self._geocoder, client.address)
        if error is not None:
            return CreateClientResult(error=error)
        client.address.latitude = coordinates.latitude
        client.address.longitude = coordinates.longitude

        # 3) Persistencia
        created = self._clients.create_client(client)
        logger.info(
            "Cliente criado",
            extra={"client_id": str(created.id), "user_id": str(caller.user_id)},
        )
        return CreateClientResult(client=created)
