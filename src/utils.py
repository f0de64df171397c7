"""Shared utilities used across the conversational transaction engine."""

import re
from datetime import datetime, timezone

from src.errors import DateUnparseable


def normalize_name(value: str) -> str:
    """Normalize a product name for case-insensitive exact matching.

    Examples:
        >>> normalize_name("  Premium   Widget ")
        'premium widget'
        >>> normalize_name("SUPER Gadget")
        'super gadget'
    """
    return re.sub(r"\s+", " ", value.strip()).lower()


def parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 date or datetime into a naive UTC datetime.

    Offsets (including a trailing ``Z``) are converted to UTC; naive values
    are taken as already being UTC. A bare date means midnight.

    Raises:
        DateUnparseable: If the value is empty or not ISO-8601.
    """
    raw = (value or "").strip()
    if not raw:
        raise DateUnparseable(value)
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        raise DateUnparseable(value) from None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def format_instant(value: datetime) -> str:
    """Render an instant the way confirmations read it back, e.g. ``2025-03-18 10:00``."""
    return value.strftime("%Y-%m-%d %H:%M")
