"""
Config file support for underscoreai.

The config lives in ~/.underscoreai.json (%USERPROFILE%\\.underscoreai.json
on Windows). A file with placeholder values is written on first run so the
user has something to edit; loading itself never touches the disk beyond
reading.
"""

import json
import logging
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".underscoreai.json"

PLACEHOLDER_API_KEY = "#HuggingFace API Key#"

# Written verbatim when no config file exists yet
DEFAULT_CONFIG: Dict[str, Any] = {
    "hf_api_key": PLACEHOLDER_API_KEY,
    "prompt_context_path": "~/.underscoreai/prompt_context_linux",
}


@dataclass(frozen=True)
class Configuration:
    hf_api_key: str
    prompt_context_path: str
    debug: bool = False


def config_path(home: Optional[Path] = None) -> Path:
    """
    Return the location of the config file.

    Path.home() is $HOME on POSIX systems and %USERPROFILE% on Windows.
    """
    if home is None:
        try:
            home = Path.home()
        except RuntimeError as e:
            raise ConfigError(f"cannot determine home directory: {e}") from e
    return Path(home) / CONFIG_FILENAME


def ensure_default_config(path: Path) -> bool:
    """
    Write DEFAULT_CONFIG to path unless a file is already there.

    Returns True if a new file was created.
    """
    path = Path(path)
    if path.exists():
        return False

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(DEFAULT_CONFIG, f, indent=4)
    except OSError as e:
        raise ConfigError(f"cannot create config file {path}: {e}") from e

    logger.debug("Created default config at %s", path)
    return True


def _require_string(data: Dict[str, Any], key: str, path: Path) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ConfigError(f"{path}: '{key}' must be a string")
    return value


def load_config(path: Path) -> Configuration:
    """
    Read and parse the config file at path.

    Raises ConfigError if the file is missing, unreadable or malformed.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"config file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path} is not valid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"{path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a JSON object")

    debug = data.get("debug", False)
    if not isinstance(debug, bool):
        print("underscoreai: config 'debug' must be true or false, ignoring", file=sys.stderr)
        debug = False

    cfg = Configuration(
        hf_api_key=_require_string(data, "hf_api_key", path),
        prompt_context_path=_require_string(data, "prompt_context_path", path),
        debug=debug,
    )
    logger.debug("Loaded config from %s (context=%s)", path, cfg.prompt_context_path)
    return cfg


def apply_overrides(cfg: Configuration, overrides: Dict[str, Any]) -> Configuration:
    """Return a copy of cfg with any non-empty override values applied."""
    changes = {k: v for k, v in overrides.items() if v not in (None, "")}
    if not changes:
        return cfg
    return replace(cfg, **changes)


def validate_config(cfg: Configuration, path: Optional[Path] = None) -> None:
    """Raise ConfigError unless cfg is usable for an inference call."""
    where = f" in {path}" if path else ""
    if not cfg.hf_api_key.strip() or cfg.hf_api_key == PLACEHOLDER_API_KEY:
        raise ConfigError(f"set 'hf_api_key' to your Hugging Face API key{where}")
    if not cfg.prompt_context_path.strip():
        raise ConfigError(f"set 'prompt_context_path'{where}")
