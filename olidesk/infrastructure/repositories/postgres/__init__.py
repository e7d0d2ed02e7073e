from .client import PostgresClientRepository
from .form import PostgresFormRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresClientRepository",
    "PostgresFormRepository",
    "PostgresUserRepository",
]
