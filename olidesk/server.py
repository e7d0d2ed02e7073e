"""
Name: Server Entry Point

Responsibilities:
  - Run the ASGI app with uvicorn on the configured host/port
  - Give in-flight requests a bounded grace period on SIGINT/SIGTERM

Collaborators:
  - uvicorn: ASGI server (signal handling + graceful shutdown)
  - crosscutting.config.get_settings
"""

from __future__ import annotations

import uvicorn

from .crosscutting.config import get_settings
from .crosscutting.logger import logger


def main() -> None:
    settings = get_settings()
    logger.info(
        "Starting server",
        extra={"host": settings.host, "port": settings.port},
    )
    uvicorn.run(
        "olidesk.api.main:app",
        host=settings.host,
        port=settings.port,
        timeout_graceful_shutdown=settings.shutdown_grace_seconds,
        log_config=None,
    )


if __name__ == "__main__":
    main()
