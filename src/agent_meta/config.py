"""Settings for agent metadata registration and prompt rendering.

Settings can be built directly or loaded from environment variables (.env supported).
Environment variables take priority over the .env file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Literal

from dotenv import load_dotenv

type DuplicateToolPolicy = Literal["reject", "allow"]

_DUPLICATE_POLICIES: frozenset[str] = frozenset({"reject", "allow"})


def _to_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Process-wide defaults.

    Attributes:
        duplicate_tools: What to do when a class registers a second tool under an
            existing name. "reject" raises ConfigurationError; "allow" keeps both and
            the last one registered wins at lookup time.
        prompt_separator: String placed between resolved system prompts.
        concurrent_prompts: Resolve prompt providers with asyncio.gather by default.
        log_level: Level passed to setup_logging.
    """

    duplicate_tools: DuplicateToolPolicy = "reject"
    prompt_separator: str = "\n"
    concurrent_prompts: bool = False
    log_level: int = logging.INFO

    @classmethod
    def from_env(cls, env_file: str = ".env") -> Settings:
        """Load settings from the .env file and the environment."""
        load_dotenv(env_file, override=False)

        duplicate_tools = os.getenv("AGENT_META_DUPLICATE_TOOLS", "reject").strip().lower()
        if duplicate_tools not in _DUPLICATE_POLICIES:
            duplicate_tools = "reject"

        separator = os.getenv("AGENT_META_PROMPT_SEPARATOR")
        if separator is None:
            separator = "\n"
        else:
            separator = separator.replace("\\n", "\n").replace("\\t", "\t")

        level_name = os.getenv("AGENT_META_LOG_LEVEL", "INFO").strip().upper()
        log_level = logging.getLevelNamesMapping().get(level_name, logging.INFO)

        return cls(
            duplicate_tools=duplicate_tools,  # type: ignore[arg-type]
            prompt_separator=separator,
            concurrent_prompts=_to_bool(os.getenv("AGENT_META_CONCURRENT_PROMPTS")),
            log_level=log_level,
        )


_settings: Settings = Settings()


def get_settings() -> Settings:
    return _settings


def configure(settings: Settings) -> Settings:
    """Replace the process default settings and return the previous ones."""
    global _settings
    previous = _settings
    _settings = settings
    return previous
