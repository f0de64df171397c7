from src.conversation.guardrails import CommitmentClaimGuardrail, ReplyGuardrail
from src.conversation.session_store import SessionStore

__all__ = [
    "SessionStore",
    "ReplyGuardrail",
    "CommitmentClaimGuardrail",
]
