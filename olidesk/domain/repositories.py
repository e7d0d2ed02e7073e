"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for clients, forms and users (ports).
- Keep the application layer independent from PostgreSQL / in-memory details.

Collaborators
- domain.entities: Client, Form, User, Member
- infrastructure.repositories: postgres/*, in_memory/* implementations

Constraints
- Pure interfaces only: no side effects, no SQL.
- `get_*` returns None when the record does not exist (no exception).
- `delete_*` returns True only if a row was removed (idempotent delete).
- Form writes that touch technician rows MUST be atomic.
"""

from typing import List, Optional, Protocol
from uuid import UUID

from .entities import Client, Form, Member, User


class ClientRepository(Protocol):
    """R: Interface for client persistence."""

    def create_client(self, client: Client) -> Client:
        """R: Persist a new client (coordinates already resolved)."""
        ...

    def get_client(self, client_id: UUID) -> Optional[Client]:
        """R: Fetch a client by id."""
        ...

    def list_clients(self) -> List[Client]:
        """R: All clients, newest first."""
        ...

    def update_client(self, client: Client) -> bool:
        """R: Overwrite all stored fields of an existing client."""
        ...

    def delete_client(self, client_id: UUID) -> bool:
        """R: Remove a client; False if it was already gone."""
        ...

    def ping(self) -> bool:
        """R: Storage liveness for health checks."""
        ...


class FormRepository(Protocol):
    """R: Interface for form (ticket) persistence with technician rows."""

    def create_form(self, form: Form) -> Form:
        """R: Insert the form and one association row per technician, atomically."""
        ...

    def get_form(self, form_id: UUID) -> Optional[Form]:
        """R: Fetch a form resolving technicians and client reference."""
        ...

    def list_forms(self) -> List[Form]:
        """R: All forms, newest first, with technicians resolved."""
        ...

    def update_form(
        self, form: Form, *, technician_ids: Optional[List[UUID]] = None
    ) -> bool:
        """
        R: Update scalar fields; if technician_ids is given, replace the whole
        association set in the same transaction.
        """
        ...

    def delete_form(self, form_id: UUID) -> bool:
        """R: Remove the form and its association rows atomically."""
        ...


class UserRepository(Protocol):
    """R: Interface for users and their member projection."""

    def create_user(self, user: User) -> User:
        """R: Insert user + member row atomically; DuplicateRecordError on email clash."""
        ...

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    def update_user(
        self,
        user_id: UUID,
        *,
        name: Optional[str] = None,
        role: Optional[str] = None,
    ) -> Optional[User]:
        """R: Sparse update of name/role. None if the user does not exist."""
        ...

    def delete_user(self, user_id: UUID) -> bool:
        ...

    def list_members(self) -> List[Member]:
        ...

    def get_members_by_ids(self, member_ids: List[UUID]) -> List[Member]:
        """R: Members for the given ids (missing ids are omitted)."""
        ...
