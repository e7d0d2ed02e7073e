"""
User use cases (public API del paquete).
"""

from .list_members import ListMembersUseCase
from .login_user import LoginUserUseCase
from .manage_self import (
    DeleteCurrentUserUseCase,
    GetCurrentUserUseCase,
    UpdateCurrentUserUseCase,
)
from .register_user import RegisterUserUseCase, normalize_email
from .user_results import (
    DeleteUserResult,
    GetUserResult,
    ListMembersResult,
    LoginInput,
    LoginResult,
    RegisterUserInput,
    RegisterUserResult,
    UpdateUserInput,
    UpdateUserResult,
)

__all__ = [
    "DeleteCurrentUserUseCase",
    "DeleteUserResult",
    "GetCurrentUserUseCase",
    "GetUserResult",
    "ListMembersResult",
    "ListMembersUseCase",
    "LoginInput",
    "LoginResult",
    "LoginUserUseCase",
    "RegisterUserInput",
    "RegisterUserResult",
    "RegisterUserUseCase",
    "UpdateCurrentUserUseCase",
    "UpdateUserInput",
    "UpdateUserResult",
    "normalize_email",
]
