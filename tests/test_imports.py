"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""


class TestPackageExports:
    def test_db_package(self):
        from src.db import Appointment, Database, Order, Product, run_with_retry
        assert Product.__tablename__ == "products"
        assert callable(run_with_retry)

    def test_engine_package(self):
        from src.engine import ConversationEngine, TransactionExecutor, compose
        assert callable(compose)

    def test_agents_package(self):
        from src.agents import TOOL_MANIFEST, LLMIntentResolver, get_tool_names
        assert get_tool_names() == ["check_availability", "book_appointment", "create_order"]
        assert len(TOOL_MANIFEST) == 3

    def test_conversation_package(self):
        from src.conversation import ReplyGuardrail, SessionStore
        assert SessionStore() is not None

    def test_api_package(self):
        from src.api import create_app
        assert callable(create_app)


class TestSchemaImports:
    def test_speaker_values(self):
        from src.schemas.conversation_schema import Speaker
        assert Speaker.AGENT == "agent"

    def test_action_types(self):
        from src.schemas.voice_schema import ActionType
        assert {a.value for a in ActionType} == {
            "ask_time", "confirm_appointment", "confirm_order", "check_stock", "none",
        }


class TestConfigImport:
    def test_import_config(self):
        from src.config import settings
        assert settings.business.name
        assert settings.model.llm_model
        assert settings.database.max_attempts >= 1


class TestConsoleDemo:
    def test_console_session_imports(self):
        from console_demo import ConsoleSession
        assert set(ConsoleSession.SCENARIOS) == {"booking", "order"}
