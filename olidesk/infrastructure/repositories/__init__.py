"""
Repositorios: implementaciones PostgreSQL (runtime) e in-memory (tests / local).
"""

from .in_memory import (
    InMemoryClientRepository,
    InMemoryFormRepository,
    InMemoryUserRepository,
)
from .postgres import (
    PostgresClientRepository,
    PostgresFormRepository,
    PostgresUserRepository,
)

__all__ = [
    "InMemoryClientRepository",
    "InMemoryFormRepository",
    "InMemoryUserRepository",
    "PostgresClientRepository",
    "PostgresFormRepository",
    "PostgresUserRepository",
]
