"""
Settings Module - Centralized Configuration Management
=======================================================

ARCHITECTURAL DECISION:
- All configuration is loaded from environment variables (no hardcoded secrets)
- Settings are immutable dataclass for safety and clarity
- Single source of truth for all configurable values

EXTENSIBILITY:
- To add a store backend: extend StoreSettings and persistence.create_store
- To switch LLM provider: point OPENROUTER_API_URL at any OpenAI-compatible API
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache

import pytz

# Load .env file if present (development convenience)
from dotenv import load_dotenv

load_dotenv()


STORE_BACKENDS = ("sqlite", "memory")


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


@dataclass(frozen=True)
class SlackSettings:
    """Slash command presentation settings."""

    # Shown in the usage message
    command_name: str = field(
        default_factory=lambda: os.getenv("SLASH_COMMAND_NAME", "/workout-wins")
    )

    # Timeout for POSTs to a response_url
    notify_timeout_seconds: float = field(
        default_factory=lambda: _env_float("NOTIFY_TIMEOUT_SECONDS", 5.0)
    )


@dataclass(frozen=True)
class StoreSettings:
    """Star store backend settings."""

    backend: str = field(
        default_factory=lambda: os.getenv("STAR_STORE_BACKEND", "sqlite").lower()
    )
    database_file: str = field(
        default_factory=lambda: os.getenv("STAR_DATABASE_FILE", "workout_wins.db")
    )

    # Prefix that isolates one team's stars from another's
    namespace: str = field(
        default_factory=lambda: os.getenv("STAR_NAMESPACE", "workout")
    )


@dataclass(frozen=True)
class LLMSettings:
    """OpenRouter LLM settings for weekly commentary."""

    api_key: str = field(default_factory=lambda: os.getenv("OPENROUTER_API_KEY", ""))
    api_url: str = field(
        default_factory=lambda: os.getenv(
            "OPENROUTER_API_URL", "https://openrouter.ai/api/v1/chat/completions"
        )
    )

    # Free model from OpenRouter
    model: str = field(
        default_factory=lambda: os.getenv("OPENROUTER_MODEL", "meta-llama/llama-3.2-3b-instruct:free")
    )

    temperature: float = 0.7
    max_tokens: int = 300
    timeout_seconds: int = 20


@dataclass(frozen=True)
class Settings:
    """
    Root settings container - Single source of truth for all configuration.

    Usage:
        from workout_wins.infrastructure.config import get_settings
        settings = get_settings()
        print(settings.timezone)
    """

    # Sub-settings groups
    slack: SlackSettings = field(default_factory=SlackSettings)
    store: StoreSettings = field(default_factory=StoreSettings)
    llm: LLMSettings = field(default_factory=LLMSettings)

    # All DayKeys and weeks are computed in this zone
    timezone: str = field(default_factory=lambda: os.getenv("STAR_TIMEZONE", "UTC"))

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "5000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    def validate(self) -> list[str]:
        """
        Validate settings and return list of warnings/errors.
        Returns empty list if all settings are valid.
        """
        issues = []

        if not self.llm.api_key:
            issues.append(
                "WARNING: OPENROUTER_API_KEY not set. "
                "The 'analyze' command will report that it is not configured."
            )

        if self.store.backend not in STORE_BACKENDS:
            issues.append(
                f"ERROR: STAR_STORE_BACKEND '{self.store.backend}' is not one of "
                f"{', '.join(STORE_BACKENDS)}."
            )
        elif self.store.backend == "memory":
            issues.append(
                "WARNING: STAR_STORE_BACKEND is 'memory'. "
                "Stars are lost when the process restarts."
            )

        if self.timezone not in pytz.all_timezones_set:
            issues.append(f"ERROR: STAR_TIMEZONE '{self.timezone}' is not a known timezone.")

        return issues


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get singleton Settings instance.
    Cached to ensure consistent settings throughout application lifecycle.
    """
    return Settings()
