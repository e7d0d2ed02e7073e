"""
===============================================================================
TARJETA CRC — infrastructure/services/geocoding.py
===============================================================================

Módulo:
    Cliente de Geocoding (Nominatim / OpenStreetMap)

Responsabilidades:
    - Construir la query de dirección en orden fijo y consultar el proveedor.
    - Parsear la primera coincidencia en Coordinates(latitude, longitude).
    - Clasificar fallos en códigos estables (GeocodingError.code).
    - Reintentar fallos transitorios con backoff + jitter.

Colaboradores:
    - httpx.Client: transporte HTTP con timeout acotado.
    - infrastructure.services.retry: política tenacity.
    - domain.services.Coordinates
    - crosscutting.logger

Reglas:
    - GET <base_url>?q=<query>&format=json&limit=1 con User-Agent identificable.
    - lat/lon pueden venir como número o string numérico.
    - Rango válido: lat ∈ [-90, 90], lon ∈ [-180, 180].
===============================================================================
"""

from __future__ import annotations

import math
from typing import Any, Final

import httpx

from ...crosscutting.logger import logger
from ...domain.services import (
    COORDINATE_OUT_OF_RANGE,
    MALFORMED_UPSTREAM_RESPONSE,
    NO_RESULTS_FOUND,
    UPSTREAM_UNAVAILABLE,
    Coordinates,
    GeocodingError,
)
from .retry import TRANSIENT_HTTP_CODES, create_retry_decorator

DEFAULT_USER_AGENT: Final[str] = "OlideskAPI/1.0"


def build_query(
    *,
    street: str,
    number: str,
    neighborhood: str,
    city: str,
    state: str,
    postal_code: str,
    country: str,
) -> str:
    return ", ".join(
        [street, number, neighborhood, city, state, postal_code, country]
    )


def _parse_coordinate(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise GeocodingError(MALFORMED_UPSTREAM_RESPONSE, f"{name} não numérico")
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError as exc:
            raise GeocodingError(
                MALFORMED_UPSTREAM_RESPONSE, f"{name} não numérico"
            ) from exc
    else:
        raise GeocodingError(MALFORMED_UPSTREAM_RESPONSE, f"{name} ausente")

    if not math.isfinite(number):
        raise GeocodingError(MALFORMED_UPSTREAM_RESPONSE, f"{name} não finito")
    return number


def parse_first_match(payload: Any) -> Coordinates:
    """Extrae lat/lon de la primera coincidencia o lanza GeocodingError."""
    if not isinstance(payload, list):
        raise GeocodingError(MALFORMED_UPSTREAM_RESPONSE, "resposta não é uma lista")
    if not payload:
        raise GeocodingError(NO_RESULTS_FOUND, "nenhum resultado para o endereço")

    first = payload[0]
    if not isinstance(first, dict):
        raise GeocodingError(MALFORMED_UPSTREAM_RESPONSE, "resultado inválido")

    latitude = _parse_coordinate(first.get("lat"), "latitude")
    longitude = _parse_coordinate(first.get("lon"), "longitude")

    if not -90.0 <= latitude <= 90.0:
        raise GeocodingError(COORDINATE_OUT_OF_RANGE, "latitude fora do intervalo")
    if not -180.0 <= longitude <= 180.0:
        raise GeocodingError(COORDINATE_OUT_OF_RANGE, "longitude fora do intervalo")

    return Coordinates(latitude=latitude, longitude=longitude)


class NominatimGeocodingClient:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      NominatimGeocodingClient

    Responsabilidades:
      - geocode(...) -> Coordinates | GeocodingError
      - Reintentar 408/429/5xx y errores de transporte

    Colaboradores:
      - httpx.Client (transport inyectable para tests)
      - retry.create_retry_decorator
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        base_url: str,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_seconds: float = 10.0,
        max_attempts: int = 3,
        base_delay_seconds: float = 0.5,
        max_delay_seconds: float = 4.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self._base_url = base_url
        self._client = httpx.Client(
            transport=transport,
            timeout=timeout_seconds,
            headers={"User-Agent": user_agent or DEFAULT_USER_AGENT},
        )
        retry_decorator = create_retry_decorator(
            max_attempts=max_attempts,
            base_delay=base_delay_seconds,
            max_delay=max_delay_seconds,
        )
        self._fetch = retry_decorator(self._request)

    def _request(self, query: str) -> httpx.Response:
        response = self._client.get(
            self._base_url,
            params={"q": query, "format": "json", "limit": 1},
        )
        if response.status_code in TRANSIENT_HTTP_CODES:
            response.raise_for_status()
        return response

    def geocode(
        self,
        *,
        street: str,
        number: str,
        neighborhood: str,
        city: str,
        state: str,
        postal_code: str,
        country: str,
    ) -> Coordinates:
        query = build_query(
            street=street,
            number=number,
            neighborhood=neighborhood,
            city=city,
            state=state,
            postal_code=postal_code,
            country=country,
        )

        try:
            response = self._fetch(query)
        except httpx.HTTPError as exc:
            logger.warning(
                "Geocoding upstream unavailable",
                extra={"error": str(exc), "error_type": type(exc).__name__},
            )
            raise GeocodingError(
                UPSTREAM_UNAVAILABLE, "serviço de geocodificação indisponível"
            ) from exc

        if response.status_code != 200:
            logger.warning(
                "Geocoding upstream returned non-200",
                extra={"status_code": response.status_code},
            )
            raise GeocodingError(
                UPSTREAM_UNAVAILABLE,
                f"serviço de geocodificação retornou {response.status_code}",
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise GeocodingError(
                MALFORMED_UPSTREAM_RESPONSE, "resposta não é JSON válido"
            ) from exc

        coordinates = parse_first_match(payload)
        logger.info(
            "Endereço geocodificado",
            extra={"latitude": coordinates.latitude, "longitude": coordinates.longitude},
        )
        return coordinates

    def close(self) -> None:
        self._client.close()
