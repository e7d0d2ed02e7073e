# =============================================================================
# FILE: application/dev_seed_user.py
# =============================================================================
"""
===============================================================================
TASK: Dev Seed User (Local-only)
===============================================================================

Qué es:
    Asegura que exista un usuario inicial en desarrollo. Sin él no hay forma
    de llegar al endpoint protegido de alta de usuarios.

Seguridad:
    - Guard estricto: solo corre con APP_ENV == "local".
    - Cualquier otro ambiente con DEV_SEED_USER=true falla en startup.

Patrones:
    - Dependency Injection (repo + hasher)
    - Fail-fast guard
    - Idempotencia (ensure-create)

CRC:
    Component: ensure_dev_user
    Collaborators:
      - UserRepository (get_user_by_email / create_user)
      - PasswordHasher
      - Settings
===============================================================================
"""

from __future__ import annotations

from typing import Final
from uuid import uuid4

from ..crosscutting.config import Settings
from ..crosscutting.exceptions import ConfigurationError
from ..crosscutting.logger import logger
from ..domain.entities import User
from ..domain.errors import DuplicateRecordError
from ..domain.repositories import UserRepository
from ..domain.services import PasswordHasher

_ALLOWED_ENV: Final[str] = "local"


def _assert_allowed_environment(settings: Settings) -> None:
    env = (settings.app_env or "").strip().lower()
    if env != _ALLOWED_ENV:
        raise ConfigurationError(
            f"FATAL: DEV_SEED_USER is enabled but APP_ENV is '{env}' (must be 'local')."
        )


def ensure_dev_user(
    settings: Settings,
    *,
    user_repo: UserRepository,
    password_hasher: PasswordHasher,
) -> User | None:
    """
    Crea el usuario de desarrollo si está habilitado y no existe.

    Returns:
      - El usuario creado, o None si el seed está deshabilitado o ya existía.
    """
    if not settings.dev_seed_user:
        return None

    _assert_allowed_environment(settings)

    email = (settings.dev_seed_user_email or "").strip().lower()
    password = settings.dev_seed_user_password or ""
    if not email or not password:
        raise ConfigurationError("Dev seed user is enabled but email/password are empty")

    if user_repo.get_user_by_email(email) is not None:
        logger.info("Dev seed user: user exists; skipping", extra={"email": email})
        return None

    user = User(
        id=uuid4(),
        name=settings.dev_seed_user_name,
        email=email,
        password_hash=password_hasher.hash(password),
        role=settings.dev_seed_user_role,
    )
    user.validate()

    try:
        created = user_repo.create_user(user)
    except DuplicateRecordError:
        # Otro worker lo creó en paralelo.
        logger.info("Dev seed user: created concurrently; skipping", extra={"email": email})
        return None

    logger.info(
        "Dev seed user: user created",
        extra={"email": email, "role": settings.dev_seed_user_role},
    )
    return created
