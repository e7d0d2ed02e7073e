"""
Helper compartido: resolver coordenadas de una Address vía GeocodingService.

Traduce GeocodingError a UseCaseError(UPSTREAM_FAILURE) para que create/update
aborten sin persistir nada.
"""

from __future__ import annotations

from typing import Tuple

from ....crosscutting.logger import logger
from ....domain.entities import Address
from ....domain.services import Coordinates, GeocodingError, GeocodingService
from ...errors import ErrorKind, UseCaseError

_MSG_GEOCODING_FAILED = "error geocoding address"


def geocode_address(
    geocoder: GeocodingService, address: Address
) -> Tuple[Coordinates | None, UseCaseError | None]:
    try:
        coordinates = geocoder.geocode(
            street=address.street,
            number=address.number,
            neighborhood=address.neighborhood,
            city=address.city,
            state=address.state,
            postal_code=address.postal_code,
            country=address.country,
        )
    except GeocodingError as exc:
        logger.error(
            _MSG_GEOCODING_FAILED,
            extra={"geocoding_code": exc.code, "error": exc.message},
        )
        return None, UseCaseError(
            kind=ErrorKind.UPSTREAM_FAILURE,
            message=f"{_MSG_GEOCODING_FAILED}: {exc.message}",
            field=exc.code,
        )
    return coordinates, None
