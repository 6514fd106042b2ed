"""Register this server in the Claude desktop app's MCP configuration file.

The file is owned by the desktop app. This module only reads it, upserts one
entry under ``mcpServers`` and writes it back; it never creates the file.
"""

from __future__ import annotations

import json
import os
import sys
import tempfile
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

CONFIG_DIR_NAME = "Claude"
CONFIG_FILE_NAME = "claude_desktop_config.json"


class ClaudeConfigError(Exception):
    """Base class for registrar failures."""

    fatal = True


class UnsupportedPlatformError(ClaudeConfigError):
    pass


class ConfigNotFoundError(ClaudeConfigError):
    pass


class MalformedConfigError(ClaudeConfigError):
    pass


class ConfigAccessError(ClaudeConfigError):
    """The file exists but could not be read or written (permissions, disk full)."""

    fatal = False


@dataclass
class RegistrationResult:
    name: str
    path: Optional[str] = None
    error: Optional[ClaudeConfigError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def fatal(self) -> bool:
        return self.error is not None and self.error.fatal


def get_claude_config_path(
    platform: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    home: Optional[str] = None,
) -> str:
    """Return the desktop app's config path for the given (default: current) platform."""
    platform = sys.platform if platform is None else platform
    environ = os.environ if environ is None else environ
    home = os.path.expanduser("~") if home is None else home

    if platform == "darwin":
        base = os.path.join(home, "Library", "Application Support")
    elif platform == "win32":
        base = environ.get("APPDATA") or os.path.join(home, "AppData", "Roaming")
    elif platform.startswith("linux"):
        base = environ.get("XDG_CONFIG_HOME") or os.path.join(home, ".config")
    else:
        raise UnsupportedPlatformError(f"Unsupported platform: {platform}")

    return os.path.join(base, CONFIG_DIR_NAME, CONFIG_FILE_NAME)


def load_config(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        raise ConfigNotFoundError(f"File not found: {path}")
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise ConfigAccessError(f"Could not read {path}: {e}") from e

    try:
        config = json.loads(raw.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(config, dict):
        raise MalformedConfigError(f"Expected a JSON object in {path}, got {type(config).__name__}")
    servers = config.get("mcpServers")
    if servers is not None and not isinstance(servers, dict):
        raise MalformedConfigError(f'"mcpServers" in {path} must be an object')
    return config


def save_config(path: str, config: Mapping[str, Any]) -> None:
    """Write *config* over *path* via a temporary file and an atomic rename."""
    # Replace the link target, not the link.
    path = os.path.realpath(path)
    pretty = json.dumps(config, indent=2, ensure_ascii=False)
    directory = os.path.dirname(os.path.abspath(path))

    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=".claude_config.", suffix=".tmp", dir=directory)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(pretty)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        if os.path.exists(path):
            os.chmod(tmp_path, os.stat(path).st_mode & 0o7777)
        os.replace(tmp_path, path)
        tmp_path = None
    except OSError as e:
        raise ConfigAccessError(f"Could not write {path}: {e}") from e
    finally:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)


def upsert_server_entry(config: Mapping[str, Any], name: str, entry: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of *config* with ``mcpServers[name]`` replaced by *entry*.

    Shallow: other servers and other top-level keys are carried over as-is, and
    an existing entry under *name* is replaced whole rather than merged.
    """
    updated = dict(config)
    updated["mcpServers"] = {**(config.get("mcpServers") or {}), name: dict(entry)}
    return updated


def build_server_entry(
    executable: Optional[str] = None,
    cwd: Optional[str] = None,
    args: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Describe how the desktop app should launch the current process."""
    if executable is None:
        executable = sys.executable
    if args is None:
        # A frozen build is the server itself; a plain interpreter needs the module.
        args = [] if getattr(sys, "frozen", False) else ["-m", "weather_mcp"]
    return {
        "command": os.path.abspath(executable),
        "args": list(args),
        "cwd": os.getcwd() if cwd is None else cwd,
    }


def add_or_update_mcp_server(name: str, entry: Mapping[str, Any], config_path: Optional[str] = None) -> str:
    """Locate, load, upsert and save. Returns the path that was written."""
    path = config_path or get_claude_config_path()
    config = load_config(path)
    save_config(path, upsert_server_entry(config, name, entry))
    return path


def register_server(name: str, entry: Mapping[str, Any], config_path: Optional[str] = None) -> RegistrationResult:
    """Run :func:`add_or_update_mcp_server`, reporting failure as a result instead of raising."""
    path = config_path
    try:
        if path is None:
            path = get_claude_config_path()
        add_or_update_mcp_server(name, entry, path)
    except ClaudeConfigError as e:
        return RegistrationResult(name=name, path=path, error=e)
    return RegistrationResult(name=name, path=path)


__all__ = [
    "ClaudeConfigError",
    "ConfigAccessError",
    "ConfigNotFoundError",
    "MalformedConfigError",
    "RegistrationResult",
    "UnsupportedPlatformError",
    "add_or_update_mcp_server",
    "build_server_entry",
    "get_claude_config_path",
    "load_config",
    "register_server",
    "save_config",
    "upsert_server_entry",
]
