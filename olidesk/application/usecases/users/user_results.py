"""
===============================================================================
USER USE CASE RESULTS
===============================================================================

Responsibilities:
    - DTOs de entrada (RegisterUserInput, LoginInput, UpdateUserInput).
    - Resultados tipados por caso de uso.

Notas:
    - Los resultados exponen User, pero la capa HTTP nunca serializa
      password_hash.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ....domain.entities import Member, User
from ...errors import UseCaseError


@dataclass
class RegisterUserInput:
    name: str = ""
    email: str = ""
    role: str = ""
    password: str = ""


@dataclass
class LoginInput:
    email: str = ""
    password: str = ""


@dataclass
class UpdateUserInput:
    name: str | None = None
    role: str | None = None


@dataclass
class RegisterUserResult:
    user: User | None = None
    error: UseCaseError | None = None


@dataclass
class LoginResult:
    access_token: str = ""
    token_type: str = "Bearer"
    expires_in: int = 0
    error: UseCaseError | None = None


@dataclass
class GetUserResult:
    user: User | None = None
    error: UseCaseError | None = None


@dataclass
class UpdateUserResult:
    user: User | None = None
    error: UseCaseError | None = None


@dataclass
class DeleteUserResult:
    deleted: bool = False
    error: UseCaseError | None = None


@dataclass
class ListMembersResult:
    members: List[Member] = field(default_factory=list)
    error: UseCaseError | None = None
