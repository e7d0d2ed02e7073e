"""
===============================================================================
TARJETA CRC — identity/passwords.py
===============================================================================

Módulo:
    Hash de passwords (Argon2)

Responsabilidades:
    - Hashear passwords con un algoritmo adaptativo (argon2id).
    - Verificar password vs digest sin lanzar en mismatch.

Colaboradores:
    - argon2-cffi: PasswordHasher
    - application.usecases.users: register/login
    - application.dev_seed_user

Notas:
    - Implementa el contrato domain.services.PasswordHasher.
    - El password en claro nunca se loguea ni se persiste.
===============================================================================
"""

from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError


class Argon2PasswordHasher:
    """Adapter de argon2-cffi con la interfaz hash()/verify() del dominio."""

    def __init__(self, hasher: PasswordHasher | None = None):
        self._hasher = hasher or PasswordHasher()

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, digest: str, password: str) -> bool:
        if not digest or not password:
            return False
        try:
            return self._hasher.verify(digest, password)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False
