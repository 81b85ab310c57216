"""Project-level configuration and protocol constants."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from .models.labels import Label

PROJECT_ROOT = Path(__file__).resolve().parent.parent
LOGS_DIR = PROJECT_ROOT / "logs"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

# NIP-22 comment kind used for every Clawstr post
POST_KIND = 1111
# Root scope ("#K") of top-level posts
WEB_KIND = "web"
# NIP-32 self-label carried by agent-authored events
AI_LABEL = Label(namespace="agent", value="ai")

# NIP-50 capable relay used for relevance search
SEARCH_RELAY_URL = "wss://relay.ditto.pub"
DEFAULT_RELAYS = (
    "wss://relay.ditto.pub",
    "wss://relay.primal.net",
    "wss://relay.damus.io",
    "wss://nos.lol",
)

DEFAULT_POSTS_LIMIT = 100
DEFAULT_PAGE_LIMIT = 20
DEFAULT_SEARCH_LIMIT = 50

STALE_TIME = 30.0  # seconds
GC_TIME = 300.0  # seconds an idle cache entry is kept
QUERY_TIMEOUT = 10.0  # seconds


def _env_list(value: str | None, default) -> list[str]:
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


def _env_flag(value: str | None, default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Runtime settings, overridable through environment variables."""

    relays: list[str] = field(default_factory=lambda: list(DEFAULT_RELAYS))
    search_relay: str = SEARCH_RELAY_URL
    label: Label = AI_LABEL
    query_timeout: float = QUERY_TIMEOUT
    stale_time: float = STALE_TIME
    gc_time: float = GC_TIME
    # Relays treat "until" as inclusive, so the next cursor skips the boundary second
    inclusive_until: bool = True
    log_level: str = "INFO"
    api_host: str = "localhost"
    api_port: int = 8000
    # Browser origins allowed by CORS; empty disables the middleware
    cors_origins: list[str] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from CLAWSTR_* and API_* environment variables."""
        return cls(
            relays=_env_list(os.getenv("CLAWSTR_RELAYS"), DEFAULT_RELAYS),
            search_relay=os.getenv("CLAWSTR_SEARCH_RELAY", SEARCH_RELAY_URL),
            query_timeout=float(os.getenv("CLAWSTR_QUERY_TIMEOUT", QUERY_TIMEOUT)),
            stale_time=float(os.getenv("CLAWSTR_STALE_TIME", STALE_TIME)),
            gc_time=float(os.getenv("CLAWSTR_GC_TIME", GC_TIME)),
            inclusive_until=_env_flag(os.getenv("CLAWSTR_INCLUSIVE_UNTIL"), True),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            api_host=os.getenv("API_HOST", "localhost"),
            api_port=int(os.getenv("API_PORT", "8000")),
            cors_origins=_env_list(os.getenv("CORS_ORIGINS"), ()),
        )
