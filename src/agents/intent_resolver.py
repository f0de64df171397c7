"""
Intent resolver — turns an utterance into a reply or one action request.

The resolver is an interface so the conversation engine can run against a
scripted fake in tests. ``LLMIntentResolver`` talks to an OpenAI-compatible
chat-completions endpoint with the capability manifest attached and
``tool_choice="auto"``. Every call is bounded by a timeout; transport
failures and timeouts get at most ``max_retries`` extra attempt. Anything
that still fails, and any rejected or malformed reply, surfaces as
``ServiceUnavailable``.
"""

from __future__ import annotations

import asyncio
import json
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

import httpx
from pydantic import ValidationError

from src.agents.tool_manifest import TOOL_MANIFEST
from src.config import ModelConfig
from src.errors import ServiceUnavailable
from src.logging_context import get_session_logger
from src.prompts.prompt_templates import build_system_prompt
from src.schemas.action_schema import Resolution, TextReply, action_adapter
from src.schemas.conversation_schema import SessionTurn, Speaker
from src.schemas.record_schema import ProductRecord

logger = get_session_logger(__name__)

FALLBACK_REPLY = "I didn't quite catch that."
REPHRASE_REPLY = "Sorry, I didn't quite get the details. Could you say that again?"


class IntentResolver(ABC):
    """Resolves one utterance against the live product catalog."""

    @abstractmethod
    async def resolve(
        self,
        text: str,
        products: list[ProductRecord],
        history: Sequence[SessionTurn] = (),
    ) -> Resolution:
        """Return a ``TextReply`` or exactly one action request.

        Raises:
            ServiceUnavailable: The language service could not be used.
        """

    async def aclose(self) -> None:
        """Release network resources."""


class _TransientFailure(Exception):
    """Internal marker for failures worth one more attempt."""


class LLMIntentResolver(IntentResolver):
    """OpenAI-compatible tool-calling resolver over httpx."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        base_url: str,
        *,
        temperature: float = 0.3,
        timeout_seconds: float = 10.0,
        max_retries: int = 1,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not api_key:
            logger.warning(
                "LLM_API_KEY is not set. Every utterance will get the fallback reply."
            )
        self.api_key = api_key or ""
        self.model = model
        self.temperature = temperature
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries

        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    @classmethod
    def from_config(
        cls, config: ModelConfig, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "LLMIntentResolver":
        return cls(
            api_key=config.llm_api_key,
            model=config.llm_model,
            base_url=config.llm_base_url,
            temperature=config.llm_temperature,
            timeout_seconds=config.llm_timeout_sec,
            max_retries=config.llm_max_retries,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def resolve(
        self,
        text: str,
        products: list[ProductRecord],
        history: Sequence[SessionTurn] = (),
    ) -> Resolution:
        if not self.api_key:
            raise ServiceUnavailable("No API key configured for the language service")
        payload = self.build_payload(text, products, history)
        message = await self._complete(payload)
        return self.parse_message(message)

    # ------------------------------------------------------------------ #
    # Request
    # ------------------------------------------------------------------ #

    def build_payload(
        self,
        text: str,
        products: list[ProductRecord],
        history: Sequence[SessionTurn] = (),
    ) -> dict[str, Any]:
        messages: list[dict[str, str]] = [
            {"role": "system", "content": build_system_prompt(products)}
        ]
        for turn in history:
            role = "user" if turn.speaker == Speaker.USER else "assistant"
            messages.append({"role": role, "content": turn.text})
        messages.append({"role": "user", "content": text})
        return {
            "model": self.model,
            "messages": messages,
            "tools": TOOL_MANIFEST,
            "tool_choice": "auto",
            "temperature": self.temperature,
        }

    async def _complete(self, payload: dict[str, Any]) -> dict[str, Any]:
        attempts = 1 + self.max_retries
        for attempt in range(1, attempts + 1):
            try:
                return await self._post_once(payload)
            except _TransientFailure as exc:
                if attempt >= attempts:
                    raise ServiceUnavailable(str(exc)) from exc
                logger.warning(
                    "Language service attempt %d/%d failed: %s", attempt, attempts, exc
                )
        raise ServiceUnavailable("Language service was not attempted")

    async def _post_once(self, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await asyncio.wait_for(
                self._client.post("/chat/completions", json=payload),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            raise _TransientFailure(
                f"timed out after {self.timeout_seconds:.1f}s"
            ) from None
        except httpx.TransportError as exc:
            raise _TransientFailure(f"transport error: {exc!r}") from exc

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as http_err:
            logger.error(
                "Language service rejected request | status=%s | detail=%s",
                http_err.response.status_code,
                http_err.response.text[:500],
            )
            raise ServiceUnavailable(f"status {http_err.response.status_code}") from http_err

        try:
            body = response.json()
            message = body["choices"][0]["message"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise ServiceUnavailable("Malformed language service response") from exc
        if not isinstance(message, dict):
            raise ServiceUnavailable("Malformed language service message")
        return message

    # ------------------------------------------------------------------ #
    # Response
    # ------------------------------------------------------------------ #

    def parse_message(self, message: dict[str, Any]) -> Resolution:
        """Map a chat-completions message to a Resolution; first tool call wins."""
        self._check_message_shape(message)
        tool_calls = message.get("tool_calls") or []
        if tool_calls:
            if len(tool_calls) > 1:
                names = [c["function"].get("name") for c in tool_calls]
                logger.warning("Multiple tool calls %s; honoring only the first", names)
            return self._parse_tool_call(tool_calls[0])

        content = (message.get("content") or "").strip()
        return TextReply(text=content or FALLBACK_REPLY)

    @staticmethod
    def _check_message_shape(message: dict[str, Any]) -> None:
        content = message.get("content")
        if content is not None and not isinstance(content, str):
            raise ServiceUnavailable("Malformed language service message")
        tool_calls = message.get("tool_calls")
        if tool_calls is None:
            return
        if not isinstance(tool_calls, list) or not all(
            isinstance(call, dict) and isinstance(call.get("function"), dict)
            for call in tool_calls
        ):
            raise ServiceUnavailable("Malformed language service message")

    @staticmethod
    def _parse_tool_call(call: dict[str, Any]) -> Resolution:
        function = call["function"]
        name = function.get("name")
        raw_args = function.get("arguments") or "{}"
        try:
            args = json.loads(raw_args) if isinstance(raw_args, str) else raw_args
            action = action_adapter.validate_python({**args, "name": name})
        except (ValueError, TypeError, ValidationError) as exc:
            logger.warning("Discarding unusable tool call %r: %s", name, exc)
            return TextReply(text=REPHRASE_REPLY)
        logger.info("Resolved action: %s", action.name)
        return action
