"""Correlation ID logging context for tracing requests across modules.

Provides a session-aware logger that attaches the conversation's session
ID to every log record, so a single caller's utterances can be followed
from the HTTP handler through the resolver and into the ledgers.

Usage:
    from src.logging_context import get_session_logger, set_session_id

    set_session_id("sess-abc123")
    logger = get_session_logger(__name__)
    logger.info("Processing utterance")  # record.session_id == "sess-abc123"
"""

import logging
from contextvars import ContextVar
from typing import IO, Optional

LOG_FORMAT = "%(asctime)s [%(name)s] [%(session_id)s] %(levelname)s: %(message)s"

_session_id: ContextVar[str] = ContextVar("session_id", default="NO_SESSION")


def set_session_id(session_id: str) -> None:
    """Set the correlation ID for the current async context."""
    _session_id.set(session_id)


def get_session_id() -> str:
    """Retrieve the current correlation ID."""
    return _session_id.get()


class SessionIdFilter(logging.Filter):
    """Injects session_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = _session_id.get()  # type: ignore[attr-defined]
        return True


def get_session_logger(name: str) -> logging.Logger:
    """Return a logger with the SessionIdFilter attached.

    The filter adds ``session_id`` to each record so formatters can
    include ``%(session_id)s`` in their format string.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, SessionIdFilter) for f in logger.filters):
        logger.addFilter(SessionIdFilter())
    return logger


def session_log_handler(stream: Optional[IO[str]] = None) -> logging.Handler:
    """Stream handler that stamps every record it emits with the session ID,
    whichever logger produced it. Pair it with ``LOG_FORMAT``.
    """
    handler = logging.StreamHandler(stream)
    handler.addFilter(SessionIdFilter())
    return handler
