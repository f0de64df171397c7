from src.engine.composer import compose
from src.engine.conversation_engine import ConversationEngine, build_conversation_engine
from src.engine.executor import ExecutionOutcome, OutcomeKind, TransactionExecutor

__all__ = [
    "ConversationEngine", "build_conversation_engine",
    "TransactionExecutor", "ExecutionOutcome", "OutcomeKind",
    "compose",
]
