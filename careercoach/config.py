"""Runtime settings: fetcher limits, chat-model selection and logging.

Every field reads an environment variable with a default.  A `.env` file in
the project root is loaded on import and never overrides variables that are
already set.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_CHROME_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Content fetcher
    # ------------------------------------------------------------------
    user_agent: str = field(
        default_factory=lambda: os.environ.get("FETCH_USER_AGENT", _CHROME_UA)
    )
    static_timeout: float = field(
        default_factory=lambda: float(os.environ.get("STATIC_FETCH_TIMEOUT", "15.0"))
    )
    browser_timeout: float = field(
        default_factory=lambda: float(os.environ.get("BROWSER_FETCH_TIMEOUT", "30.0"))
    )
    selector_wait_timeout: float = field(
        default_factory=lambda: float(os.environ.get("SELECTOR_WAIT_TIMEOUT", "5.0"))
    )
    viewport_width: int = field(
        default_factory=lambda: int(os.environ.get("BROWSER_VIEWPORT_WIDTH", "1920"))
    )
    viewport_height: int = field(
        default_factory=lambda: int(os.environ.get("BROWSER_VIEWPORT_HEIGHT", "1080"))
    )
    min_content_length: int = field(
        default_factory=lambda: int(os.environ.get("MIN_CONTENT_LENGTH", "100"))
    )
    selector_min_length: int = field(
        default_factory=lambda: int(os.environ.get("SELECTOR_MIN_LENGTH", "200"))
    )
    max_content_length: int = field(
        default_factory=lambda: int(os.environ.get("MAX_CONTENT_LENGTH", "15000"))
    )

    # ------------------------------------------------------------------
    # Chat model
    # ------------------------------------------------------------------
    llm_provider: str = field(
        default_factory=lambda: os.environ.get("LLM_PROVIDER", "anthropic")
    )
    anthropic_chat_model: str = field(
        default_factory=lambda: os.environ.get(
            "ANTHROPIC_CHAT_MODEL", "claude-sonnet-4-5-20250929"
        )
    )
    openai_chat_model: str = field(
        default_factory=lambda: os.environ.get("OPENAI_CHAT_MODEL", "gpt-4o-mini")
    )
    ollama_chat_model: str = field(
        default_factory=lambda: os.environ.get("OLLAMA_CHAT_MODEL", "ministral-3:8b")
    )
    ollama_base_url: str = field(
        default_factory=lambda: os.environ.get("OLLAMA_BASE_URL", "http://localhost:11434")
    )
    llm_max_tokens: int = field(
        default_factory=lambda: int(os.environ.get("LLM_MAX_TOKENS", "4096"))
    )
    llm_timeout: float = field(
        default_factory=lambda: float(os.environ.get("LLM_TIMEOUT", "300.0"))
    )
    llm_max_retries: int = field(
        default_factory=lambda: int(os.environ.get("LLM_MAX_RETRIES", "3"))
    )
    llm_retry_delay: float = field(
        default_factory=lambda: float(os.environ.get("LLM_RETRY_DELAY", "1.0"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )
    log_format: str = field(
        default_factory=lambda: os.environ.get("LOG_FORMAT", "text")
    )

    @property
    def chat_model(self) -> str:
        """Name of the chat model for the active ``llm_provider``."""
        if self.llm_provider == "openai":
            return self.openai_chat_model
        if self.llm_provider == "ollama":
            return self.ollama_chat_model
        return self.anthropic_chat_model


# Module-level singleton, import this everywhere:
#   from careercoach.config import settings
settings = Settings()
