"""
===============================================================================
TARJETA CRC — olidesk/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, servicios, casos de uso) siguiendo DIP.
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache) para recursos compartidos.
  - Elegir adapters in-memory en ambientes de test.

Colaboradores:
  - olidesk.crosscutting.config.get_settings
  - olidesk.domain.repositories.* / domain.services.* (puertos)
  - olidesk.infrastructure.* (implementaciones)
  - olidesk.identity (TokenService, Argon2PasswordHasher)
  - olidesk.application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO depende de FastAPI (solo expone factories).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases.clients import (
    CreateClientUseCase,
    DeleteClientUseCase,
    GetClientUseCase,
    ListClientsUseCase,
    UpdateClientUseCase,
)
from .application.usecases.forms import (
    CreateFormUseCase,
    DeleteFormUseCase,
    GetFormUseCase,
    ListFormsUseCase,
    UpdateFormUseCase,
)
from .application.usecases.users import (
    DeleteCurrentUserUseCase,
    GetCurrentUserUseCase,
    ListMembersUseCase,
    LoginUserUseCase,
    RegisterUserUseCase,
    UpdateCurrentUserUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import ClientRepository, FormRepository, UserRepository
from .domain.services import GeocodingService, PasswordHasher
from .identity.passwords import Argon2PasswordHasher
from .identity.tokens import TokenService
from .infrastructure.repositories import (
    InMemoryClientRepository,
    InMemoryFormRepository,
    InMemoryUserRepository,
    PostgresClientRepository,
    PostgresFormRepository,
    PostgresUserRepository,
)
from .infrastructure.services import NominatimGeocodingClient

# =============================================================================
# Helpers internos
# =============================================================================


def _is_test_env() -> bool:
    """
    Regla:
      - app_env ∈ {"test", "testing", "ci"} => se favorecen in-memory adapters.
    """
    return get_settings().is_test()


# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_client_repository() -> ClientRepository:
    if _is_test_env():
        return InMemoryClientRepository()
    return PostgresClientRepository()


@lru_cache(maxsize=1)
def get_form_repository() -> FormRepository:
    if _is_test_env():
        return InMemoryFormRepository(
            clients=get_client_repository(), users=get_user_repository()
        )
    return PostgresFormRepository()


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    if _is_test_env():
        return InMemoryUserRepository()
    return PostgresUserRepository()


# =============================================================================
# Servicios
# =============================================================================


@lru_cache(maxsize=1)
def get_geocoding_service() -> GeocodingService:
    settings = get_settings()
    return NominatimGeocodingClient(
        settings.nominatim_url,
        user_agent=settings.geocoding_user_agent,
        timeout_seconds=settings.geocoding_timeout_seconds,
        max_attempts=settings.retry_max_attempts,
        base_delay_seconds=settings.retry_base_delay_seconds,
        max_delay_seconds=settings.retry_max_delay_seconds,
    )


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHasher:
    return Argon2PasswordHasher()


@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    """Falla con ConfigurationError si JWT_SECRET está vacío."""
    return TokenService(get_settings().jwt_secret)


# =============================================================================
# Casos de uso: clients
# =============================================================================


def get_create_client_use_case() -> CreateClientUseCase:
    return CreateClientUseCase(get_client_repository(), get_geocoding_service())


def get_update_client_use_case() -> UpdateClientUseCase:
    return UpdateClientUseCase(get_client_repository(), get_geocoding_service())


def get_get_client_use_case() -> GetClientUseCase:
    return GetClientUseCase(get_client_repository())


def get_list_clients_use_case() -> ListClientsUseCase:
    return ListClientsUseCase(get_client_repository())


def get_delete_client_use_case() -> DeleteClientUseCase:
    return DeleteClientUseCase(get_client_repository())


# =============================================================================
# Casos de uso: forms
# =============================================================================


def get_create_form_use_case() -> CreateFormUseCase:
    return CreateFormUseCase(
        get_form_repository(), get_client_repository(), get_user_repository()
    )


def get_update_form_use_case() -> UpdateFormUseCase:
    return UpdateFormUseCase(
        get_form_repository(), get_client_repository(), get_user_repository()
    )


def get_get_form_use_case() -> GetFormUseCase:
    return GetFormUseCase(get_form_repository())


def get_list_forms_use_case() -> ListFormsUseCase:
    return ListFormsUseCase(get_form_repository())


def get_delete_form_use_case() -> DeleteFormUseCase:
    return DeleteFormUseCase(get_form_repository())


# =============================================================================
# Casos de uso: users / members
# =============================================================================


def get_register_user_use_case() -> RegisterUserUseCase:
    return RegisterUserUseCase(get_user_repository(), get_password_hasher())


def get_login_user_use_case() -> LoginUserUseCase:
    return LoginUserUseCase(
        get_user_repository(), get_password_hasher(), get_token_service()
    )


def get_current_user_use_case() -> GetCurrentUserUseCase:
    return GetCurrentUserUseCase(get_user_repository())


def get_update_current_user_use_case() -> UpdateCurrentUserUseCase:
    return UpdateCurrentUserUseCase(get_user_repository())


def get_delete_current_user_use_case() -> DeleteCurrentUserUseCase:
    return DeleteCurrentUserUseCase(get_user_repository())


def get_list_members_use_case() -> ListMembersUseCase:
    return ListMembersUseCase(get_user_repository())


def reset_container() -> None:
    """Limpia los singletons (tests)."""
    for factory in (
        get_client_repository,
        get_form_repository,
        get_user_repository,
        get_geocoding_service,
        get_password_hasher,
        get_token_service,
    ):
        factory.cache_clear()
