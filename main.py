"""
Voice receptionist entry point.

Serves the /process-voice endpoint with uvicorn, or opens the console
session for development.

Usage:
    HTTP service: python main.py serve
    Console mode: python main.py console
"""

import logging
import sys

from src.config import settings

logger = logging.getLogger(__name__)


def _run_http_mode() -> None:
    """Start the HTTP service on the configured host and port."""
    import uvicorn

    from src.api.app import create_app

    logger.info("Starting %s on %s:%d", settings.agent_name, settings.server.host, settings.server.port)
    uvicorn.run(
        create_app(),
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.log_level.lower(),
    )


def _run_console_mode() -> None:
    """Start the interactive console session."""
    import asyncio

    from console_demo import run_console

    asyncio.run(run_console())


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "console":
        _run_console_mode()
    else:
        _run_http_mode()
