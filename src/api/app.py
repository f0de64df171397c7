"""
HTTP surface for the conversational transaction engine.

POST /process-voice (also /api/process-voice)
    {"text": str, "sessionId": str} -> {"textResponse": str, "action"?: {...}}

Malformed bodies answer 400 and unexpected faults answer 500, both as
{"message": str}. Recoverable conditions never reach these handlers; the
engine turns them into spoken replies.
"""

import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.config import AppConfig, settings
from src.engine.conversation_engine import ConversationEngine, build_conversation_engine
from src.schemas.voice_schema import ProcessVoiceRequest

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first.get('msg', 'invalid value')}" if location else first.get("msg", "Invalid request body")


def create_app(
    engine: Optional[ConversationEngine] = None,
    engine_factory: Optional[Callable[[AppConfig], ConversationEngine]] = None,
    config: AppConfig = settings,
) -> FastAPI:
    """Build the FastAPI app around a ready engine or one built at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = engine is None
        app.state.engine = engine or (engine_factory or build_conversation_engine)(config)
        logger.info("Voice endpoint ready (%s)", config.agent_name)
        try:
            yield
        finally:
            if owned:
                await app.state.engine.aclose()
            logger.info("Voice endpoint stopped")

    app = FastAPI(title="Voice Receptionist API", lifespan=lifespan)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"message": _describe_validation_error(exc)})

    @app.exception_handler(Exception)
    async def _internal_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

    @app.get("/health")
    async def health():
        return {"ok": True}

    @app.post("/process-voice")
    @app.post("/api/process-voice")
    async def process_voice(body: ProcessVoiceRequest, request: Request):
        conversation: ConversationEngine = request.app.state.engine
        response = await conversation.process(body.text, body.session_id)
        return JSONResponse(content=response.to_wire())

    return app
