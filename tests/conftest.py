"""Shared test fixtures and helpers."""

from typing import Sequence, Union

import pytest

from src.agents.intent_resolver import IntentResolver
from src.db.database import Database
from src.engine.conversation_engine import ConversationEngine
from src.schemas.action_schema import Resolution
from src.schemas.conversation_schema import SessionTurn
from src.schemas.record_schema import ProductRecord
from src.tools.catalog import seed_catalog
from src.tools.inventory import InventoryLedger
from src.tools.scheduling import SchedulingLedger


class ScriptedResolver(IntentResolver):
    """Fake resolver that replays scripted resolutions (or raises scripted errors)."""

    def __init__(self, *script: Union[Resolution, Exception]) -> None:
        self.script = list(script)
        self.calls: list[dict] = []
        self.closed = False

    async def resolve(
        self,
        text: str,
        products: list[ProductRecord],
        history: Sequence[SessionTurn] = (),
    ) -> Resolution:
        self.calls.append({"text": text, "products": products, "history": list(history)})
        if not self.script:
            raise AssertionError(f"No scripted resolution left for {text!r}")
        result = self.script.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def database(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'receptionist.db'}")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def inventory(database):
    return InventoryLedger(database)


@pytest.fixture
def scheduling(database):
    return SchedulingLedger(database)


@pytest.fixture
def seeded_inventory(inventory):
    seed_catalog(inventory)
    return inventory


@pytest.fixture
def make_engine(seeded_inventory, scheduling):
    """Build a ConversationEngine whose resolver replays the given script."""

    def _make(*script: Union[Resolution, Exception]) -> ConversationEngine:
        return ConversationEngine(
            resolver=ScriptedResolver(*script),
            inventory=seeded_inventory,
            scheduling=scheduling,
        )

    return _make
