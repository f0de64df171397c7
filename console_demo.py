"""
Console session — talk to the conversational transaction engine in a terminal.

Runs the real engine (resolver, ledgers, composer) against the configured
database, printing the spoken reply and the action hint for each turn.
Without LLM_API_KEY every turn gets the apologetic fallback reply.

Usage:
    python console_demo.py
    python console_demo.py --scenario order
    python console_demo.py --scenario booking
"""

import argparse
import asyncio
import json
import uuid
from typing import Optional

from src.config import settings
from src.engine.conversation_engine import ConversationEngine, build_conversation_engine

BLUE = "\033[94m"
GREEN = "\033[92m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"


class ConsoleSession:
    """Feeds typed or scripted utterances through one engine session."""

    SCENARIOS: dict[str, list[str]] = {
        "booking": [
            "Is tomorrow at 10am free for an appointment?",
            "Great, book it for Jane Doe, my number is 0412 345 678",
        ],
        "order": [
            "What products do you have?",
            "I'd like 5 Premium Widgets please, my name is Sam Lee",
        ],
    }

    MAX_INPUT_LENGTH = 500

    def __init__(self, engine: ConversationEngine) -> None:
        self.engine = engine
        self.session_id = f"console-{uuid.uuid4().hex[:8]}"

    def agent_say(self, text: str) -> None:
        print(f"{GREEN}{BOLD}[Receptionist]{RESET} {GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def _banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  {title}{RESET}")
        print(f"{BOLD}  Business: {settings.business.name}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()

    async def turn(self, text: str) -> None:
        response = await self.engine.process(text, self.session_id)
        self.agent_say(response.text_response)
        if response.action is not None:
            wire = response.to_wire()["action"]
            self.system_log(f"action: {json.dumps(wire, default=str)}")

    async def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario."""
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return
        self._banner(f"VOICE RECEPTIONIST - Scenario: {scenario}")
        for step in steps:
            print(f"\n{BLUE}[Caller] {RESET}{step}")
            await self.turn(step)

    async def run(self) -> None:
        self._banner("VOICE RECEPTIONIST - Console (type 'quit' to exit)")
        self.agent_say(f"Hello, thanks for contacting {settings.business.name}. How can I help?")
        while True:
            try:
                user_input = (await asyncio.to_thread(input, f"\n{BLUE}[Caller] {RESET}")).strip()
            except EOFError:
                user_input = "quit"
            if not user_input:
                continue
            if user_input.lower() in ("quit", "exit", "q"):
                print(f"\n{DIM}Session ended.{RESET}")
                return
            if len(user_input) > self.MAX_INPUT_LENGTH:
                self.agent_say("That was quite long. Could you keep it brief for me?")
                continue
            await self.turn(user_input)


async def run_console(scenario: Optional[str] = None) -> None:
    engine = build_conversation_engine(settings)
    session = ConsoleSession(engine)
    try:
        if scenario:
            await session.run_scenario(scenario)
        else:
            await session.run()
    finally:
        await engine.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Voice receptionist console")
    parser.add_argument("--scenario", choices=sorted(ConsoleSession.SCENARIOS))
    args = parser.parse_args()
    asyncio.run(run_console(args.scenario))


if __name__ == "__main__":
    main()
