"""
Conversation engine — one utterance in, one spoken reply out.

utterance -> IntentResolver -> {reply | action} -> TransactionExecutor
-> composer -> reply. Ledger calls are synchronous SQLAlchemy work and run
in worker threads; once a ledger transaction commits it stays committed
even if the inbound request is abandoned.
"""

import asyncio
from datetime import timedelta
from typing import Optional

from src.agents.intent_resolver import IntentResolver, LLMIntentResolver
from src.config import AppConfig
from src.conversation.guardrails import ReplyGuardrail
from src.conversation.session_store import SessionStore
from src.db.database import Database
from src.engine.composer import compose
from src.engine.executor import ExecutionOutcome, OutcomeKind, TransactionExecutor
from src.errors import ServiceUnavailable
from src.logging_context import get_session_logger, set_session_id
from src.schemas.action_schema import TextReply
from src.schemas.conversation_schema import Speaker
from src.schemas.voice_schema import ProcessVoiceResponse
from src.tools.catalog import seed_catalog
from src.tools.inventory import InventoryLedger
from src.tools.scheduling import SchedulingLedger

logger = get_session_logger(__name__)


class ConversationEngine:
    """Orchestrates resolver, executor, composer, and session history."""

    def __init__(
        self,
        resolver: IntentResolver,
        inventory: InventoryLedger,
        scheduling: SchedulingLedger,
        sessions: Optional[SessionStore] = None,
        history_turns: int = 6,
    ) -> None:
        self.resolver = resolver
        self.inventory = inventory
        self.scheduling = scheduling
        self.executor = TransactionExecutor(inventory, scheduling)
        self.sessions = sessions or SessionStore()
        self._history_turns = history_turns
        self._guardrail = ReplyGuardrail()

    async def process(self, text: str, session_id: str) -> ProcessVoiceResponse:
        set_session_id(session_id)
        products = await asyncio.to_thread(self.inventory.list_active_products)
        history = self.sessions.recent(session_id, self._history_turns)

        try:
            resolution = await self.resolver.resolve(text, products, history)
        except ServiceUnavailable as exc:
            logger.warning("Language service unavailable: %s", exc)
            outcome = ExecutionOutcome(OutcomeKind.SERVICE_UNAVAILABLE)
        else:
            if isinstance(resolution, TextReply):
                outcome = ExecutionOutcome(
                    OutcomeKind.REPLY, text=self._guardrail.sanitize(resolution.text)
                )
            else:
                outcome = await asyncio.to_thread(self.executor.execute, resolution)

        response = compose(outcome)
        logger.info("Turn outcome: %s", outcome.kind.value)
        self.sessions.append(session_id, Speaker.USER, text)
        self.sessions.append(
            session_id,
            Speaker.AGENT,
            response.text_response,
            action=response.action.type.value if response.action else None,
        )
        return response

    async def aclose(self) -> None:
        await self.resolver.aclose()


def build_conversation_engine(
    config: AppConfig,
    resolver: Optional[IntentResolver] = None,
    database: Optional[Database] = None,
) -> ConversationEngine:
    """Wire the engine from configuration: schema, seed catalog, ledgers, resolver."""
    database = database or Database(config.database.url, config.database.busy_timeout_sec)
    database.create_all()

    inventory = InventoryLedger(database, max_attempts=config.database.max_attempts)
    scheduling = SchedulingLedger(
        database,
        conflict_window=timedelta(minutes=config.business.conflict_window_minutes),
        max_attempts=config.database.max_attempts,
    )
    if config.business.seed_catalog:
        seed_catalog(inventory)

    return ConversationEngine(
        resolver=resolver or LLMIntentResolver.from_config(config.model),
        inventory=inventory,
        scheduling=scheduling,
        history_turns=config.model.history_turns,
    )
