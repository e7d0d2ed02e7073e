"""
Schemas HTTP compartidos (respuestas de mensaje / creación).
"""

from __future__ import annotations

from typing import Final
from uuid import UUID

from pydantic import BaseModel

SUCCESS_MESSAGE: Final[str] = "Operação bem-sucedida"


class MessageRes(BaseModel):
    message: str


class CreatedRes(BaseModel):
    id: UUID
    message: str
