"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (APP_ENV=test, JWT secret, no .env file)
  - Reset cached singletons between tests
  - Provide reusable fakes (geocoder, hasher) and entity factories

Collaborators:
  - pytest: Test framework
  - olidesk.container / olidesk.crosscutting.config: cached singletons

Notes:
  - Env vars are set BEFORE importing olidesk (the logger reads Settings at import)
  - Fakes are plain classes; unittest.mock is used where call assertions matter
"""

import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ["APP_ENV"] = "test"
os.environ.setdefault("JWT_SECRET", "unit-test-secret-with-at-least-32-chars")

from olidesk.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from olidesk.domain.entities import (  # noqa: E402
    Address,
    Client,
    ContactPerson,
    User,
)
from olidesk.domain.services import Coordinates, GeocodingError  # noqa: E402

TEST_JWT_SECRET = "unit-test-secret-with-at-least-32-chars"


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _reset_singletons():
    """R: Each test starts with fresh settings and container singletons."""
    from olidesk.container import reset_container

    app_config.get_settings.cache_clear()
    reset_container()
    yield
    app_config.get_settings.cache_clear()
    reset_container()


# ============================================================================
# Fakes
# ============================================================================


class FakeGeocoder:
    """Geocoder determinístico: registra llamadas y devuelve coords fijas."""

    def __init__(self, latitude=-23.55, longitude=-46.63, error=None):
        self.latitude = latitude
        self.longitude = longitude
        self.error = error
        self.calls = []

    def geocode(self, **address):
        self.calls.append(address)
        if self.error is not None:
            raise self.error
        return Coordinates(latitude=self.latitude, longitude=self.longitude)


class FakeHasher:
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, digest: str, password: str) -> bool:
        return digest == f"hashed:{password}"


@pytest.fixture
def fake_geocoder() -> FakeGeocoder:
    return FakeGeocoder()


@pytest.fixture
def failing_geocoder() -> FakeGeocoder:
    return FakeGeocoder(
        error=GeocodingError("NO_RESULTS_FOUND", "nenhum resultado para o endereço")
    )


@pytest.fixture
def fake_hasher() -> FakeHasher:
    return FakeHasher()


# ============================================================================
# Entity factories
# ============================================================================


def make_client(**overrides) -> Client:
    client = Client(
        id=uuid4(),
        client_name="Padaria Central",
        client_type="juridica",
        cnpj_or_cpf="12.345.678/0001-90",
        contact=ContactPerson(
            responsible_name="Maria Souza",
            phone="+55 11 99999-0000",
            email="maria@padaria.com.br",
        ),
        address=Address(
            postal_code="01310-100",
            neighborhood="Bela Vista",
            country="Brasil",
            state="SP",
            city="São Paulo",
            street="Avenida Paulista",
            number="1000",
            complement="Loja 2",
        ),
    )
    for key, value in overrides.items():
        setattr(client, key, value)
    return client


def make_user(**overrides) -> User:
    defaults = {
        "id": uuid4(),
        "name": "Técnico Um",
        "email": f"tec-{uuid4().hex[:8]}@olidesk.com",
        "password_hash": "hashed:secret",
        "role": "tecnico",
        "created_at": datetime.now(timezone.utc),
    }
    defaults.update(overrides)
    return User(**defaults)


@pytest.fixture
def client_factory():
    return make_client


@pytest.fixture
def user_factory():
    return make_user
