"""Tests for the interactive console session."""

import pytest

from console_demo import ConsoleSession
from src.schemas.action_schema import TextReply


def _scripted_input(*lines):
    remaining = list(lines)

    def _input(prompt=""):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return _input


class TestConsoleSession:
    @pytest.mark.asyncio
    async def test_end_of_input_ends_session(self, make_engine, monkeypatch, capsys):
        engine = make_engine()
        monkeypatch.setattr("builtins.input", _scripted_input())

        await ConsoleSession(engine).run()

        assert "Session ended." in capsys.readouterr().out
        assert engine.resolver.calls == []

    @pytest.mark.asyncio
    async def test_turns_then_end_of_input(self, make_engine, monkeypatch, capsys):
        engine = make_engine(TextReply(text="We open at nine."))
        monkeypatch.setattr("builtins.input", _scripted_input("When do you open?"))

        await ConsoleSession(engine).run()

        out = capsys.readouterr().out
        assert "We open at nine." in out
        assert "Session ended." in out

    @pytest.mark.asyncio
    async def test_quit_command(self, make_engine, monkeypatch, capsys):
        engine = make_engine()
        monkeypatch.setattr("builtins.input", _scripted_input("quit", "never read"))

        await ConsoleSession(engine).run()

        assert "Session ended." in capsys.readouterr().out
