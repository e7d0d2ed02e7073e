"""
Client use cases (public API del paquete).
"""

from .client_results import (
    AddressInput,
    ClientInput,
    ContactInput,
    CreateClientResult,
    DeleteClientResult,
    GetClientResult,
    ListClientsResult,
    UpdateClientResult,
)
from .create_client import CreateClientUseCase
from .delete_client import DeleteClientUseCase
from .get_client import GetClientUseCase, ListClientsUseCase
from .update_client import UpdateClientUseCase

__all__ = [
    "AddressInput",
    "ClientInput",
    "ContactInput",
    "CreateClientResult",
    "CreateClientUseCase",
    "DeleteClientResult",
    "DeleteClientUseCase",
    "GetClientResult",
    "GetClientUseCase",
    "ListClientsResult",
    "ListClientsUseCase",
    "UpdateClientResult",
    "UpdateClientUseCase",
]
