from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_PORT = 3000
DEFAULT_SERVER_NAME = "weather-mcp"


def _env_bool(key: str, default: bool = True) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_optional(key: str) -> Optional[str]:
    raw = os.getenv(key, "").strip()
    return raw or None


def parse_port(raw: Optional[str], key: str = "PORT", default: int = DEFAULT_PORT) -> int:
    raw = (raw or "").strip()
    if not raw:
        return default
    try:
        port = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}")
    if not 0 < port < 65536:
        raise ValueError(f"{key} must be between 1 and 65535, got {port}")
    return port


@dataclass
class Settings:
    # Raw $PORT. Only the http transport reads it, via parse_port.
    port: Optional[str] = None
    server_name: str = DEFAULT_SERVER_NAME
    register: bool = True
    claude_config_path: Optional[str] = None
    log_file: Optional[str] = None


def load_settings() -> Settings:
    """Build settings from the environment, after loading a local .env file."""
    load_dotenv()
    return Settings(
        port=_env_optional("PORT"),
        server_name=os.getenv("WEATHER_MCP_SERVER_NAME", DEFAULT_SERVER_NAME).strip() or DEFAULT_SERVER_NAME,
        register=_env_bool("WEATHER_MCP_REGISTER", True),
        claude_config_path=_env_optional("WEATHER_MCP_CLAUDE_CONFIG"),
        log_file=_env_optional("WEATHER_MCP_LOG_FILE"),
    )
