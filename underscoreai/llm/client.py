"""
Hugging Face Inference API client.

One blocking POST per call against a text-generation model; the
generation parameters are fixed so answers stay reproducible.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

from . import config
from ..errors import InferenceError, ResponseFormatError

logger = logging.getLogger(__name__)

# Debug log directory
_DEBUG_LOG_DIR = Path.home() / ".local" / "share" / "underscoreai"
_DEBUG_LOG_FILE = _DEBUG_LOG_DIR / "debug.log"

# Beam search, early stopping and repetition penalties are sent but disabled
GENERATION_PARAMETERS: Dict[str, Any] = {
    "max_new_tokens": 64,
    "temperature": 0.3,
    "top_p": 0.9,
    "do_sample": True,
    "seed": 42,
    "return_full_text": True,
    "num_beams": 1,
    "early_stopping": False,
    "repetition_penalty": 1.0,
    "no_repeat_ngram_size": 0,
}

INVOCATION_OPTIONS: Dict[str, Any] = {
    "use_cache": True,
    "wait_for_model": True,
}


def _debug_log(label: str, data: Any) -> None:
    """Append a timestamped entry to the debug log file."""
    try:
        _DEBUG_LOG_DIR.mkdir(parents=True, exist_ok=True)
        with open(_DEBUG_LOG_FILE, "a") as f:
            ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
            f.write(f"\n{'='*72}\n")
            f.write(f"[{ts}] {label}\n")
            f.write(f"{'='*72}\n")
            if isinstance(data, (dict, list)):
                f.write(json.dumps(data, indent=2, default=str))
            else:
                f.write(str(data))
            f.write("\n")
    except Exception as e:
        logger.debug(f"Could not write debug log: {e}")


def build_payload(prompt: str) -> Dict[str, Any]:
    """Request body for a single generation."""
    return {
        "inputs": prompt,
        "parameters": dict(GENERATION_PARAMETERS),
        "options": dict(INVOCATION_OPTIONS),
    }


def _api_error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.reason_phrase


class InferenceClient:
    """
    Blocking client for a hosted text-generation endpoint.

    Usable as a context manager; the underlying httpx.Client is closed on exit.
    """

    def __init__(
        self,
        api_key: str,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        debug: bool = False,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.endpoint = endpoint or config.HF_API_ENDPOINT
        self.timeout = timeout if timeout is not None else config.HTTP_TIMEOUT
        self.debug = debug
        self.client = httpx.Client(timeout=self.timeout, transport=transport)

    def __enter__(self) -> "InferenceClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def generate(self, prompt: str) -> str:
        """
        Send prompt to the model and return the first candidate's generated_text.

        Raises:
            InferenceError: the request could not be completed or was rejected.
            ResponseFormatError: the body is not a non-empty list of results.
        """
        payload = build_payload(prompt)
        if self.debug:
            _debug_log("REQUEST", {"endpoint": self.endpoint, "payload": payload})

        logger.debug(f"POST {self.endpoint} ({len(prompt)} chars)")
        try:
            response = self.client.post(
                self.endpoint,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except httpx.TimeoutException as e:
            raise InferenceError(f"request to {self.endpoint} timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise InferenceError(f"request to {self.endpoint} failed: {e}") from e

        if self.debug:
            _debug_log(f"RESPONSE status={response.status_code}", response.text)

        if response.status_code >= 400:
            raise InferenceError(
                f"inference API returned {response.status_code}: {_api_error_message(response)}",
                status_code=response.status_code,
            )

        try:
            results = response.json()
        except ValueError as e:
            raise ResponseFormatError(f"inference API returned invalid JSON: {e}") from e

        if not isinstance(results, list) or not results:
            raise ResponseFormatError("inference API returned no results")

        first = results[0]
        generated = first.get("generated_text") if isinstance(first, dict) else None
        if not isinstance(generated, str):
            raise ResponseFormatError("inference API result has no 'generated_text'")

        logger.debug(f"Received {len(generated)} chars of generated text")
        return generated
