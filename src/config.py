"""
Centralized configuration with environment variable overrides.

Business settings, language-service parameters, and storage settings are
configurable here. Nothing is hardcoded in engine or ledger logic.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from src.logging_context import LOG_FORMAT, session_log_handler

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _safe_bool(env_var: str, default: str) -> bool:
    """Parse a boolean flag from an env var (1/0, true/false, yes/no)."""
    raw = os.getenv(env_var, default).strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Invalid boolean for {env_var}: {raw!r}")


@dataclass(frozen=True)
class BusinessConfig:
    """Business-specific settings loaded from environment or defaults."""

    name: str = os.getenv("BUSINESS_NAME", "Acme Front Desk")
    conflict_window_minutes: int = _safe_int("CONFLICT_WINDOW_MINUTES", "30")
    seed_catalog: bool = _safe_bool("SEED_CATALOG", "true")


@dataclass(frozen=True)
class ModelConfig:
    """Language-understanding service settings."""

    llm_model: str = os.getenv("LLM_MODEL", "gpt-4o-mini")
    llm_base_url: str = os.getenv("LLM_BASE_URL", "https://api.openai.com/v1")
    llm_api_key: str = os.getenv("LLM_API_KEY", "")
    llm_temperature: float = _safe_float("LLM_TEMPERATURE", "0.3")
    llm_timeout_sec: float = _safe_float("LLM_TIMEOUT_SEC", "10.0")
    llm_max_retries: int = _safe_int("LLM_MAX_RETRIES", "1")
    history_turns: int = _safe_int("HISTORY_TURNS", "6")


@dataclass(frozen=True)
class DatabaseConfig:
    """Relational store settings."""

    url: str = os.getenv("DATABASE_URL", "sqlite:///./data/receptionist.db")
    busy_timeout_sec: float = _safe_float("DB_BUSY_TIMEOUT_SEC", "30")
    max_attempts: int = _safe_int("DB_MAX_ATTEMPTS", "3")


@dataclass(frozen=True)
class ServerConfig:
    """HTTP listener settings."""

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = _safe_int("PORT", "5000")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    business: BusinessConfig = field(default_factory=BusinessConfig)
    model: ModelConfig = field(default_factory=ModelConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    agent_name: str = os.getenv("AGENT_NAME", "voice-receptionist")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if not 0.0 <= config.model.llm_temperature <= 2.0:
        raise ValueError(
            f"LLM_TEMPERATURE must be between 0.0 and 2.0, got {config.model.llm_temperature}"
        )
    if config.model.llm_timeout_sec <= 0:
        raise ValueError(
            f"LLM_TIMEOUT_SEC must be > 0, got {config.model.llm_timeout_sec}"
        )
    if not 0 <= config.model.llm_max_retries <= 1:
        raise ValueError(
            f"LLM_MAX_RETRIES must be 0 or 1, got {config.model.llm_max_retries}"
        )
    if config.model.history_turns < 0:
        raise ValueError(
            f"HISTORY_TURNS must be >= 0, got {config.model.history_turns}"
        )
    if config.business.conflict_window_minutes < 1:
        raise ValueError(
            "CONFLICT_WINDOW_MINUTES must be >= 1, "
            f"got {config.business.conflict_window_minutes}"
        )
    if config.database.busy_timeout_sec <= 0:
        raise ValueError(
            f"DB_BUSY_TIMEOUT_SEC must be > 0, got {config.database.busy_timeout_sec}"
        )
    if config.database.max_attempts < 1:
        raise ValueError(
            f"DB_MAX_ATTEMPTS must be >= 1, got {config.database.max_attempts}"
        )
    if not 0 < config.server.port < 65536:
        raise ValueError(f"PORT must be between 1 and 65535, got {config.server.port}")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[session_log_handler()],
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s'", config.business.name)
    return config


# Singleton instance
settings = load_config()
