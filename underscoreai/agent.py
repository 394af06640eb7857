"""
Orchestration for underscoreai.

Composes the prompt, calls the model, and pulls the answer for the
user's request out of the echoed generation.
"""

import logging
from typing import List, Optional

from .config_file import Configuration
from .errors import ResponseFormatError
from .llm.client import InferenceClient
from .prompts import compose_prompt

logger = logging.getLogger(__name__)

# Separates the few-shot examples in the prompt context and in the echo
DELIMITER = "..."

ANSWER_PREFIX = "A: "


def _select_segment(segments: List[str], prompt: Optional[str]) -> str:
    if prompt is None:
        if len(segments) < 2:
            raise ResponseFormatError(f"no '{DELIMITER}' delimiter in generated text")
        return segments[-2]

    for segment in segments:
        if prompt in segment:
            return segment
    raise ResponseFormatError(f"prompt {prompt!r} not found in generated text")


def extract_answer(generated_text: str, prompt: Optional[str] = None) -> str:
    """
    Return the answer line the model produced for prompt.

    The generation echoes the whole input, so it is split on DELIMITER and
    the segment holding the user's prompt is kept; its second line is the
    answer. Without a prompt the second-to-last segment is used.

    Assumes the model echoes the delimiter and writes at least one line
    after the "P: ..." line; anything else raises ResponseFormatError.
    """
    segments = generated_text.split(DELIMITER)
    segment = _select_segment(segments, prompt)

    lines = segment.strip("\n").split("\n")
    if len(lines) < 2:
        raise ResponseFormatError("generated text has no answer line")

    answer = lines[1]
    if answer.startswith(ANSWER_PREFIX):
        answer = answer[len(ANSWER_PREFIX):]
    return answer


def suggest_command(
    config: Configuration,
    user_input: str,
    client: Optional[InferenceClient] = None,
) -> str:
    """
    Turn a natural language request into a suggested shell command.

    Args:
        config: Loaded and validated configuration
        user_input: The user's words joined with spaces
        client: Inference client to use; one is created (and closed) if omitted

    Returns:
        The extracted command line
    """
    prompt = compose_prompt(config, user_input)
    logger.debug(f"Composed prompt ({len(prompt)} chars)")

    if client is None:
        with InferenceClient(config.hf_api_key, debug=config.debug) as own_client:
            generated = own_client.generate(prompt)
    else:
        generated = client.generate(prompt)

    answer = extract_answer(generated, user_input)
    logger.debug(f"Extracted answer: {answer!r}")
    return answer
