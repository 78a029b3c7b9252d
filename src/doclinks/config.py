from dotenv import load_dotenv
from dataclasses import dataclass
from typing import Optional
import os

from doclinks.constants import (
    DEFAULT_DEBUG_SCREENSHOT,
    DEFAULT_FETCH_COMMAND,
    DEFAULT_USER_AGENT,
    LINK_CHECK_TIMEOUT,
    LINK_TEXT_MAX_LENGTH,
    PAGE_FETCH_TIMEOUT,
    RENDER_TIMEOUT_MS,
)

load_dotenv()  # Loads variables from .env file


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() == "true"


class Settings:
    """
    Manages process-level settings loaded from environment variables.
    """
    LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
    LOG_FILE = os.getenv("LOG_FILE")


settings = Settings()


@dataclass
class CrawlConfig:
    """Configuration for a single crawl."""
    user_agent: str = DEFAULT_USER_AGENT
    page_timeout: float = PAGE_FETCH_TIMEOUT
    check_timeout: float = LINK_CHECK_TIMEOUT
    render_timeout_ms: int = RENDER_TIMEOUT_MS
    link_text_max_length: int = LINK_TEXT_MAX_LENGTH
    fetch_command: str = DEFAULT_FETCH_COMMAND
    use_render: bool = False
    verbose: bool = False
    debug: bool = False
    debug_screenshot: Optional[str] = DEFAULT_DEBUG_SCREENSHOT

    @classmethod
    def from_env(cls, **overrides) -> "CrawlConfig":
        """Load configuration from environment variables.

        Numeric variables that fail to parse keep their defaults. Keyword
        overrides (typically from the CLI) win over the environment.

        Returns:
            CrawlConfig: Configuration instance with values from environment
        """
        config = cls(
            user_agent=os.getenv("USER_AGENT", DEFAULT_USER_AGENT),
            page_timeout=_env_number("DOCLINKS_PAGE_TIMEOUT", float, PAGE_FETCH_TIMEOUT),
            check_timeout=_env_number("DOCLINKS_CHECK_TIMEOUT", float, LINK_CHECK_TIMEOUT),
            render_timeout_ms=_env_number("DOCLINKS_RENDER_TIMEOUT_MS", int, RENDER_TIMEOUT_MS),
            fetch_command=os.getenv("DOCLINKS_FETCH_COMMAND", DEFAULT_FETCH_COMMAND),
            debug=_env_flag("DEBUG"),
        )
        for name, value in overrides.items():
            if not hasattr(config, name):
                raise TypeError(f"Unknown crawl setting: {name}")
            setattr(config, name, value)
        return config


def _env_number(name: str, cast, default):
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        return default  # Keep default if conversion fails
