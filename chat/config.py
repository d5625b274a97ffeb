"""Configuration helpers shared by the backend and the CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .constants import DEFAULT_BE_LIMIT, DEFAULT_ENDPOINT_URL, END_SESSION_TEXT

load_dotenv()


def _coerce_int(value: Optional[str], fallback: int) -> int:
    try:
        return int(value) if value is not None else fallback
    except ValueError:
        return fallback


def _optional_str(var_name: str) -> Optional[str]:
    value = os.getenv(var_name)
    if value and value.strip():
        return value.strip()
    return None


@dataclass
class ChatConfig:
    """Holds runtime settings for the gateway and the session client."""

    endpoint_url: str
    api_url: Optional[str]
    be_limit: int = DEFAULT_BE_LIMIT
    end_session_text: str = END_SESSION_TEXT
    log_level: str = "WARNING"


def load_chat_config() -> ChatConfig:
    """Load configuration from .env with safe defaults."""

    endpoint_url = _optional_str("CHAT_ENDPOINT_URL") or DEFAULT_ENDPOINT_URL
    api_url = _optional_str("CHAT_API_URL")
    be_limit = _coerce_int(os.getenv("CHAT_BE_LIMIT"), DEFAULT_BE_LIMIT)
    end_session_text = _optional_str("CHAT_END_SESSION_TEXT") or END_SESSION_TEXT
    log_level = os.getenv("CHAT_LOG_LEVEL", "WARNING").upper()

    return ChatConfig(
        endpoint_url=endpoint_url,
        api_url=api_url,
        be_limit=be_limit,
        end_session_text=end_session_text,
        log_level=log_level,
    )
