"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/form.py
============================================================
Class: InMemoryFormRepository

Responsibilities:
  - Almacenar atendimentos en memoria (tests / local dev).
  - Replicar la semántica transaccional del repo Postgres:
    create/update/delete aplican form + técnicos bajo el mismo lock.
  - Resolver en lectura el nombre del cliente y los técnicos, igual que los
    JOIN del repo Postgres.

Collaborators:
  - domain.entities.Form / Member / ClientReference
  - ClientRepository / UserRepository (opcionales, para la resolución)

Constraints / Notes:
  - Sin repos inyectados se devuelven los snapshots guardados al escribir.
  - Técnicos sin duplicados, en el orden recibido.
============================================================
"""

from __future__ import annotations

from copy import deepcopy
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID

from ....domain.entities import ClientReference, Form, Member
from ....domain.repositories import ClientRepository, UserRepository


def _dedupe_members(members: List[Member]) -> List[Member]:
    seen: set[UUID] = set()
    unique: List[Member] = []
    for member in members:
        if member.id in seen:
            continue
        seen.add(member.id)
        unique.append(member)
    return unique


class InMemoryFormRepository:
    def __init__(
        self,
        clients: Optional[ClientRepository] = None,
        users: Optional[UserRepository] = None,
    ) -> None:
        self._lock = Lock()
        self._forms: Dict[UUID, Form] = {}
        self._clients = clients
        self._users = users

    def _resolve(self, form: Form) -> Form:
        # LEFT JOIN clients: un cliente borrado deja el id con nombre vacío.
        if self._clients is not None and form.client is not None:
            client = self._clients.get_client(form.client.id)
            form.client = ClientReference(
                id=form.client.id, client_name=client.client_name if client else ""
            )
        # JOIN members: técnicos borrados desaparecen, el orden se conserva.
        if self._users is not None:
            form.technicians = self._users.get_members_by_ids(form.technician_ids)
        return form

    def create_form(self, form: Form) -> Form:
        stored = deepcopy(form)
        stored.technicians = _dedupe_members(stored.technicians)
        now = datetime.now(timezone.utc)
        stored.created_at = stored.created_at or now
        stored.updated_at = stored.updated_at or now
        with self._lock:
            self._forms[stored.id] = stored
            created = deepcopy(stored)
        return self._resolve(created)

    def get_form(self, form_id: UUID) -> Optional[Form]:
        with self._lock:
            form = deepcopy(self._forms.get(form_id))
        return self._resolve(form) if form else None

    def list_forms(self) -> List[Form]:
        with self._lock:
            forms = [deepcopy(f) for f in reversed(list(self._forms.values()))]
        return [self._resolve(f) for f in forms]

    def update_form(
        self, form: Form, *, technician_ids: Optional[List[UUID]] = None
    ) -> bool:
        with self._lock:
            current = self._forms.get(form.id)
            if current is None:
                return False

            stored = deepcopy(form)
            stored.created_at = current.created_at
            stored.updated_at = datetime.now(timezone.utc)

            if technician_ids is None:
                stored.technicians = deepcopy(current.technicians)
            else:
                by_id = {m.id: m for m in form.technicians}
                wanted = list(dict.fromkeys(technician_ids))
                stored.technicians = [
                    deepcopy(by_id[tid]) for tid in wanted if tid in by_id
                ]

            self._forms[form.id] = stored
            return True

    def delete_form(self, form_id: UUID) -> bool:
        with self._lock:
            return self._forms.pop(form_id, None) is not None
