"""
Guardrail for free-text replies from the language service.

Bookings and orders are only real once a ledger commits them. A direct
reply that claims otherwise is swapped for a neutral follow-up question.
"""

import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

NEUTRAL_FOLLOW_UP = (
    "Let me check that for you properly. Could you confirm the details you'd like me to use?"
)


@dataclass
class GuardrailResult:
    """Outcome of a single guardrail check."""
    passed: bool
    violation_type: Optional[str] = None
    message: Optional[str] = None


class CommitmentClaimGuardrail:
    """Flags replies that assert a booking, order, or availability outcome."""

    FORBIDDEN_CLAIMS = [
        "i've booked", "i have booked", "you're booked", "you are booked",
        "appointment is confirmed", "appointment has been booked",
        "order placed", "order has been placed", "i've placed your order",
        "i have placed your order", "your order is confirmed",
        "that time is available", "that slot is available",
        "that time is already booked", "that slot is taken",
    ]

    def check_reply(self, reply_text: str) -> GuardrailResult:
        lower = reply_text.lower()
        for claim in self.FORBIDDEN_CLAIMS:
            if claim in lower:
                logger.warning("Unverified commitment in reply: '%s'", claim)
                return GuardrailResult(
                    passed=False,
                    violation_type="unverified_commitment",
                    message=f"Reply contains unverified claim: '{claim}'.",
                )
        return GuardrailResult(passed=True)


class ReplyGuardrail:
    """Applies the reply checks and returns the text that may be spoken."""

    def __init__(self) -> None:
        self.commitment = CommitmentClaimGuardrail()

    def sanitize(self, reply_text: str) -> str:
        result = self.commitment.check_reply(reply_text)
        return reply_text if result.passed else NEUTRAL_FOLLOW_UP
