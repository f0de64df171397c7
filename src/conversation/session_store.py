"""
Per-session conversation history.

Keeps a bounded, ordered list of turns per session identifier so the
resolver can make sense of follow-ups like "yes, book it". Held in process
memory only: losing it degrades context, never ledger correctness.

Usage:
    store = SessionStore()
    store.append("sess-1", Speaker.USER, "Is Tuesday at 10 free?")
    history = store.recent("sess-1", limit=6)
"""

import logging
import threading
import time
from typing import Optional

from src.schemas.conversation_schema import SessionHistory, SessionTurn, Speaker

logger = logging.getLogger(__name__)

DEFAULT_MAX_TURNS = 40
DEFAULT_IDLE_TTL_SEC = 60 * 60


class SessionStore:
    """Thread-safe in-memory map of session id -> recent turns."""

    def __init__(
        self,
        max_turns: int = DEFAULT_MAX_TURNS,
        idle_ttl_sec: float = DEFAULT_IDLE_TTL_SEC,
    ) -> None:
        self._max_turns = max_turns
        self._idle_ttl = idle_ttl_sec
        self._sessions: dict[str, SessionHistory] = {}
        self._lock = threading.Lock()

    def append(
        self,
        session_id: str,
        speaker: Speaker,
        text: str,
        action: Optional[str] = None,
    ) -> SessionTurn:
        now = time.time()
        turn = SessionTurn(speaker=speaker, text=text, timestamp=now, action=action)
        with self._lock:
            self._evict_idle(now)
            history = self._sessions.setdefault(session_id, SessionHistory(session_id=session_id))
            history.turns.append(turn)
            if len(history.turns) > self._max_turns:
                del history.turns[: len(history.turns) - self._max_turns]
            history.last_seen = now
        return turn

    def recent(self, session_id: str, limit: int) -> list[SessionTurn]:
        """The last ``limit`` turns, oldest first."""
        if limit <= 0:
            return []
        with self._lock:
            history = self._sessions.get(session_id)
            return list(history.turns[-limit:]) if history else []

    def clear(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _evict_idle(self, now: float) -> None:
        expired = [
            sid for sid, h in self._sessions.items() if now - h.last_seen > self._idle_ttl
        ]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.debug("Evicted %d idle session(s)", len(expired))
