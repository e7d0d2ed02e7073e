"""
Schemas HTTP para Usuarios y Members.

password_hash nunca forma parte de una respuesta.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from olidesk.domain.entities import Member, User


class RegisterUserReq(BaseModel):
    name: str = ""
    email: str = ""
    role: str = ""
    password: str = ""


class LoginReq(BaseModel):
    email: str = ""
    password: str = ""


class UpdateUserReq(BaseModel):
    name: str | None = None
    role: str | None = None


class LoginRes(BaseModel):
    access_token: str
    token_type: str
    expires_in: int


class UserRes(BaseModel):
    id: UUID
    name: str
    email: str
    role: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, user: User) -> "UserRes":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserEnvelopeRes(BaseModel):
    user: UserRes


class MemberRes(BaseModel):
    id: UUID
    name: str
    email: str
    role: str

    @classmethod
    def from_entity(cls, member: Member) -> "MemberRes":
        return cls(id=member.id, name=member.name, email=member.email, role=member.role)


class MembersListRes(BaseModel):
    members: list[MemberRes]
