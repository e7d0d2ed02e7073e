"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI con prefix="/api/v1".
  - Centralizar responses de error para OpenAPI.
  - Componer routers por recurso (clients/forms/users/members).

Patrones aplicados:
  - Composition over inheritance: router raíz compone sub-routers.
  - Factory: build_router() para testear composición sin side-effects.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.clients import router as clients_router
from .routers.forms import router as forms_router
from .routers.members import router as members_router
from .routers.users import router as users_router


def build_router() -> APIRouter:
    """Construye el router raíz v1."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(clients_router)
    api_router.include_router(forms_router)
    api_router.include_router(members_router)
    api_router.include_router(users_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
