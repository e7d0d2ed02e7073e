"""
CRC — domain/services.py

Name
- Domain Service Interfaces (Protocols)

Responsibilities
- Define contracts for external capabilities used by the workflows:
  address geocoding and password hashing.

Collaborators
- infrastructure.services.geocoding.NominatimGeocodingClient
- identity.passwords (argon2)
- application.usecases.clients / users

Constraints
- Implementations raise their own typed errors (e.g. GeocodingError);
  use cases translate them into ErrorKind.
"""

from dataclasses import dataclass
from typing import Final, Protocol

# Códigos de fallo de geocoding
UPSTREAM_UNAVAILABLE: Final[str] = "UPSTREAM_UNAVAILABLE"
NO_RESULTS_FOUND: Final[str] = "NO_RESULTS_FOUND"
MALFORMED_UPSTREAM_RESPONSE: Final[str] = "MALFORMED_UPSTREAM_RESPONSE"
COORDINATE_OUT_OF_RANGE: Final[str] = "COORDINATE_OUT_OF_RANGE"


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


class GeocodingError(Exception):
    """Fallo de geocoding con código estable."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"{code}: {message}")


class GeocodingService(Protocol):
    """R: Resolve a postal address into coordinates."""

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
        ...


class PasswordHasher(Protocol):
    """R: Opaque adaptive hash: hash(password) -> digest, verify(digest, password)."""

    def hash(self, password: str) -> str:
        ...

    def verify(self, digest: str, password: str) -> bool:
        ...
