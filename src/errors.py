"""Recoverable engine conditions.

Ledgers and the resolver raise these; the executor and the conversation
engine turn them into spoken replies. Anything outside this hierarchy is
an unexpected fault and surfaces as an internal error.
"""

from typing import Optional


class EngineError(Exception):
    """Base class for conditions that are answered with a spoken sentence."""


class DateUnparseable(EngineError):
    """The requested appointment instant could not be understood."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Unparseable date: {raw!r}")
        self.raw = raw


class SlotConflict(EngineError):
    """A confirmed appointment already exists inside the conflict window."""

    def __init__(self, requested: str, conflicting_ids: Optional[list[int]] = None) -> None:
        super().__init__(f"Slot conflict at {requested}")
        self.requested = requested
        self.conflicting_ids = conflicting_ids or []


class ProductNotFound(EngineError):
    """No active product matches the requested name."""

    def __init__(self, product_name: str) -> None:
        super().__init__(f"Product not found: {product_name!r}")
        self.product_name = product_name


class InsufficientStock(EngineError):
    """The requested quantity exceeds the product's remaining stock."""

    def __init__(self, product_name: str, remaining: int, requested: int) -> None:
        super().__init__(
            f"Insufficient stock for {product_name}: requested {requested}, remaining {remaining}"
        )
        self.product_name = product_name
        self.remaining = remaining
        self.requested = requested


class ServiceUnavailable(EngineError):
    """The language-understanding service could not be reached or answered badly."""


class RecordNotFound(EngineError):
    """A status transition referenced a record that does not exist."""
