"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Almacenar usuarios (y su proyección member) en memoria.
  - Replicar la unicidad de email del esquema (DuplicateRecordError).

Constraints / Notes:
  - Thread-safe: Lock protege el diccionario interno.
  - Lecturas y escrituras trabajan sobre copias (deepcopy).
  - list_members: orden por nombre, luego id (igual que Postgres).
============================================================
"""

from __future__ import annotations

from copy import deepcopy
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID

from ....domain.entities import Member, User
from ....domain.errors import DuplicateRecordError


class InMemoryUserRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, User] = {}

    def create_user(self, user: User) -> User:
        stored = deepcopy(user)
        now = datetime.now(timezone.utc)
        stored.created_at = stored.created_at or now
        stored.updated_at = stored.updated_at or now
        with self._lock:
            if stored.id in self._users or any(
                u.email == stored.email for u in self._users.values()
            ):
                raise DuplicateRecordError(f"duplicated user: {stored.email}")
            self._users[stored.id] = stored
            return deepcopy(stored)

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return deepcopy(user) if user else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return deepcopy(user)
            return None

    def update_user(
        self,
        user_id: UUID,
        *,
        name: Optional[str] = None,
        role: Optional[str] = None,
    ) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            if name:
                user.name = name
            if role:
                user.role = role
            user.updated_at = datetime.now(timezone.utc)
            return deepcopy(user)

    def delete_user(self, user_id: UUID) -> bool:
        with self._lock:
            return self._users.pop(user_id, None) is not None

    def list_members(self) -> List[Member]:
        with self._lock:
            members = [u.to_member() for u in self._users.values()]
        members.sort(key=lambda m: (m.name, str(m.id)))
        return members

    def get_members_by_ids(self, member_ids: List[UUID]) -> List[Member]:
        with self._lock:
            return [
                self._users[mid].to_member() for mid in member_ids if mid in self._users
            ]
