"""Conversation history schemas kept per session."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Speaker(str, Enum):
    AGENT = "agent"
    USER = "user"


class SessionTurn(BaseModel):
    """A single exchanged utterance or reply."""

    speaker: Speaker
    text: str
    timestamp: float
    action: Optional[str] = None


class SessionHistory(BaseModel):
    """Ordered turns for one session identifier."""

    session_id: str
    turns: list[SessionTurn] = Field(default_factory=list)
    last_seen: float = 0.0
