from .client import InMemoryClientRepository
from .form import InMemoryFormRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryClientRepository",
    "InMemoryFormRepository",
    "InMemoryUserRepository",
]
