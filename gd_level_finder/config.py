"""
Configuration

Settings come from environment variables (a local .env file is loaded if
present). Each getter falls back to a default; malformed numbers raise
ValueError naming the variable.
"""
import os
from typing import Optional

from dotenv import load_dotenv

from .adapters.gdbrowser import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from .core.pagination import SESSION_TTL_SECONDS
from .core.services import DEFAULT_CONCURRENCY

load_dotenv()

DEFAULT_LOG_LEVEL = "INFO"


def _get_number(name: str, default, cast):
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        msg = f"Invalid {name} value: {raw}"
        raise ValueError(msg) from None


def get_bot_token() -> str:
    """Discord bot token (required by the bot only)"""
    token = os.environ.get("BOT_TOKEN", "").strip()
    if not token:
        raise ValueError("BOT_TOKEN is not set")
    return token


def get_guild_id() -> Optional[int]:
    """Guild for fast command sync while testing; None syncs globally"""
    return _get_number("GUILD_ID", None, int)


def get_base_url() -> str:
    return os.environ.get("GDBROWSER_URL", DEFAULT_BASE_URL)


def get_request_timeout() -> float:
    return _get_number("REQUEST_TIMEOUT", DEFAULT_TIMEOUT, float)


def get_concurrency() -> int:
    return _get_number("DETAIL_CONCURRENCY", DEFAULT_CONCURRENCY, int)


def get_session_ttl() -> float:
    return _get_number("SESSION_TTL", SESSION_TTL_SECONDS, float)


def get_log_level() -> str:
    return os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
