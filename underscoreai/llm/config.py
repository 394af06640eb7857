"""
Environment settings for underscoreai.

Loads overrides from a .env file (project root or CWD) and the process
environment. Values here take precedence over ~/.underscoreai.json.
"""

import os
import sys
import logging
from pathlib import Path
from typing import Any, Dict
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# underscoreai/llm/config.py -> underscoreai/ -> project root
_env_paths = [
    Path(__file__).parent.parent.parent / ".env",
    Path.cwd() / ".env",
]

_env_loaded = False
for _env_path in _env_paths:
    if _env_path.exists():
        load_dotenv(dotenv_path=_env_path)
        logger.debug(f"Loaded .env from {_env_path}")
        _env_loaded = True
        break

if not _env_loaded:
    logger.debug(".env not found; using environment variables if set.")

HF_API_ENDPOINT = os.getenv(
    "UNDERSCOREAI_ENDPOINT",
    "https://api-inference.huggingface.co/models/bigscience/bloom",
)

DEFAULT_TIMEOUT = 30.0


def _parse_timeout(value: str | None) -> float:
    """Seconds from UNDERSCOREAI_TIMEOUT; invalid values fall back to the default."""
    if value is None or value.strip() == "":
        return DEFAULT_TIMEOUT
    try:
        timeout = float(value)
    except ValueError:
        print("underscoreai: UNDERSCOREAI_TIMEOUT must be a number, ignoring", file=sys.stderr)
        return DEFAULT_TIMEOUT
    if not timeout > 0:
        print("underscoreai: UNDERSCOREAI_TIMEOUT must be > 0, ignoring", file=sys.stderr)
        return DEFAULT_TIMEOUT
    return timeout


# Cold models can take a while with wait_for_model set
HTTP_TIMEOUT = _parse_timeout(os.getenv("UNDERSCOREAI_TIMEOUT"))


def _env_flag(name: str) -> bool | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value.strip().lower() in ("1", "true", "yes", "on")


def env_overrides() -> Dict[str, Any]:
    """Config values set through the environment, keyed like Configuration fields."""
    return {
        "hf_api_key": os.getenv("UNDERSCOREAI_HF_API_KEY"),
        "prompt_context_path": os.getenv("UNDERSCOREAI_PROMPT_CONTEXT_PATH"),
        "debug": _env_flag("UNDERSCOREAI_DEBUG"),
    }
