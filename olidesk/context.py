"""
===============================================================================
TARJETA CRC — olidesk/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Guardar request_id / method / path del request en curso (ContextVar).
  - Exponerlos como dict para el JSONFormatter.

Colaboradores:
  - crosscutting.middleware (escribe al entrar, limpia al salir)
  - crosscutting.logger (lee)

Notas:
  - El usuario autenticado viaja en request.state y en los casos de uso, no acá.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar

_FIELDS = ("request_id", "method", "path")

_vars: dict[str, ContextVar[str]] = {
    name: ContextVar(f"olidesk_{name}", default="") for name in _FIELDS
}


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> None:
    values = {"request_id": request_id, "method": method, "path": path}
    for name, var in _vars.items():
        var.set(values[name] or "")


def get_context_dict() -> dict[str, str]:
    """Sólo las claves con valor."""
    return {name: var.get() for name, var in _vars.items() if var.get()}


def clear_context() -> None:
    for var in _vars.values():
        var.set("")
