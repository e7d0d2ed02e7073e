"""
===============================================================================
USE CASE: Update Client (sparse patch)
===============================================================================

Business Goal:
    Actualizar parcialmente un cliente existente.

Rules:
    - Cada campo provisto y no vacío sobrescribe el valor almacenado.
    - None o "" dejan el valor almacenado intacto (no se puede "vaciar" un campo).
    - El cliente resultante se re-valida antes de persistir.
    - Solo si los 7 campos de geocoding vienen completos en el input
      (street, number, neighborhood, city, state, postal_code, country)
      se re-geocodifica y se sobrescriben las coordenadas.
    - Un fallo de geocoding aborta el update.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    UpdateClientUseCase

Collaborators:
    - ClientRepository.get_client / update_client
    - GeocodingService (vía geocode_address)
===============================================================================
"""

from __future__ import annotations

from typing import Final
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import CallerIdentity, Client
from ....domain.errors import DomainValidationError
from ....domain.repositories import ClientRepository
from ....domain.services import GeocodingService
from ...errors import not_found, validation_failure
from .client_results import (
    MSG_CLIENT_NOT_FOUND,
    AddressInput,
    ClientInput,
    UpdateClientResult,
)
from .geocode_address import geocode_address

GEOCODING_FIELDS: Final[tuple[str, ...]] = (
    "street",
    "number",
    "neighborhood",
    "city",
    "state",
    "postal_code",
    "country",
)

_ADDRESS_FIELDS: Final[tuple[str, ...]] = GEOCODING_FIELDS + ("complement",)
_CONTACT_FIELDS: Final[tuple[str, ...]] = ("responsible_name", "phone", "email")
_CLIENT_FIELDS: Final[tuple[str, ...]] = ("client_name", "client_type", "cnpj_or_cpf")


def _patch(target: object, source: object, names: tuple[str, ...]) -> None:
    for name in names:
        value = getattr(source, name)
        if value:
            setattr(target, name, value)


def merge_client(client: Client, data: ClientInput) -> None:
    """Aplica el sparse patch sobre la entidad (in place)."""
    _patch(client, data, _CLIENT_FIELDS)
    _patch(client.contact, data.contact, _CONTACT_FIELDS)
    _patch(client.address, data.address, _ADDRESS_FIELDS)


def has_full_geocoding_address(address: AddressInput) -> bool:
    return all(getattr(address, name) for name in GEOCODING_FIELDS)


class UpdateClientUseCase:
    def __init__(
        self,
        client_repository: ClientRepository,
        geocoding_service: GeocodingService,
    ) -> None:
        self._clients = client_repository
        self._geocoder = geocoding_service

    def execute(
        self, caller: CallerIdentity, client_id: UUID, data: ClientInput
    ) -> UpdateClientResult:
        client = self._clients.get_client(client_id)
        if client is None:
            return UpdateClientResult(error=not_found(MSG_CLIENT_NOT_FOUND))

        merge_client(client, data)

        try:
            client.validate()
        except DomainValidationError as exc:
            return UpdateClientResult(error=validation_failure(exc))

        geocoded = False
        if has_full_geocoding_address(data.address):
            coordinates, error = geocode_address(self._geocoder, client.address)
            if error is not None:
                return UpdateClientResult(error=error)
            client.address.latitude = coordinates.latitude
            client.address.longitude = coordinates.longitude
            geocoded = True

        client.touch()
        if not self._clients.update_client(client):
            # Borrado concurrente entre el get y el update.
            return UpdateClientResult(error=not_found(MSG_CLIENT_NOT_FOUND))

        logger.info(
            "Cliente atualizado",
            extra={
                "client_id": str(client_id),
                "user_id": str(caller.user_id),
                "geocoded": geocoded,
            },
        )
        return UpdateClientResult(client=client, geocoded=geocoded)
