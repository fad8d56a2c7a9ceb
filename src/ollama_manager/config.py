"""
Runtime settings.

Settings are resolved once at startup and handed to every component that
needs them. Precedence, lowest first: built-in defaults, the JSON user config
file, environment variables (a local ``.env`` is honoured), command-line
options.
"""
import json
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from ollama_manager.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "http://127.0.0.1:11434"
CONFIG_FILE = Path.home() / ".ollama_script_config"

ENV_HOST = "OLLAMA_HOST"
ENV_CLIPBOARD = "OLLAMA_MANAGER_CLIPBOARD"
ENV_LOG_LEVEL = "OLLAMA_MANAGER_LOG_LEVEL"
ENV_TIMEOUT = "OLLAMA_MANAGER_TIMEOUT"


@dataclass(frozen=True)
class Settings:
    quiet: bool = False
    host: str = DEFAULT_HOST
    clipboard_manager: Optional[str] = None
    log_level: str = "WARNING"
    request_timeout: Optional[float] = None

    def override(self, **changes: Any) -> "Settings":
        """Return a copy with every non-None keyword applied."""
        applied = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **applied)


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object.")
    return data


def _parse_timeout(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{ENV_TIMEOUT} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{ENV_TIMEOUT} must be positive, got {raw!r}")
    return value


def load_settings(
    config_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Build Settings from the config file and the environment.

    Args:
        config_file: JSON file to read, defaults to ``~/.ollama_script_config``
        environ: mapping used instead of ``os.environ`` (tests pass their own)
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    path = config_file if config_file is not None else CONFIG_FILE
    data = _read_config_file(path)
    logger.debug("loaded config file %s with keys %s", path, sorted(data))

    settings = Settings().override(
        quiet=data.get("QUIET"),
        host=data.get("HOST"),
        clipboard_manager=data.get("CLIPBOARD_MANAGER"),
    )

    timeout = environ.get(ENV_TIMEOUT)
    return settings.override(
        host=environ.get(ENV_HOST) or None,
        clipboard_manager=environ.get(ENV_CLIPBOARD) or None,
        log_level=environ.get(ENV_LOG_LEVEL) or None,
        request_timeout=_parse_timeout(timeout) if timeout else None,
    )
