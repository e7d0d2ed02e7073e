"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/client.py
============================================================
Class: InMemoryClientRepository

Responsibilities:
  - Almacenar clientes en memoria (tests / local dev).
  - Implementar el contrato ClientRepository.

Constraints / Notes:
  - Thread-safe: Lock protege el diccionario interno.
  - Lecturas y escrituras trabajan sobre copias (deepcopy).
  - Listado: más recientes primero (replica ORDER BY created_at DESC).
============================================================
"""

from __future__ import annotations

from copy import deepcopy
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID

from ....domain.entities import Client


class InMemoryClientRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._clients: Dict[UUID, Client] = {}

    def create_client(self, client: Client) -> Client:
        stored = deepcopy(client)
        now = datetime.now(timezone.utc)
        stored.created_at = stored.created_at or now
        stored.updated_at = stored.updated_at or now
        with self._lock:
            self._clients[stored.id] = stored
            return deepcopy(stored)

    def get_client(self, client_id: UUID) -> Optional[Client]:
        with self._lock:
            client = self._clients.get(client_id)
            return deepcopy(client) if client else None

    def list_clients(self) -> List[Client]:
        with self._lock:
            return [deepcopy(c) for c in reversed(list(self._clients.values()))]

    def update_client(self, client: Client) -> bool:
        with self._lock:
            current = self._clients.get(client.id)
            if current is None:
                return False
            stored = deepcopy(client)
            stored.created_at = current.created_at
            stored.updated_at = datetime.now(timezone.utc)
            self._clients[client.id] = stored
            return True

    def delete_client(self, client_id: UUID) -> bool:
        with self._lock:
            return self._clients.pop(client_id, None) is not None

    def ping(self) -> bool:
        return True
