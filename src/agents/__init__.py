from src.agents.intent_resolver import IntentResolver, LLMIntentResolver
from src.agents.tool_manifest import TOOL_MANIFEST, get_tool_names

__all__ = [
    "IntentResolver", "LLMIntentResolver",
    "TOOL_MANIFEST", "get_tool_names",
]
