"""
Prompt composition for underscoreai.

The prompt context is a few-shot file of "P: ...\\nA: ..." pairs separated
by "..."; the user's request is appended as one more unanswered pair.
"""

import logging
from pathlib import Path

from .config_file import Configuration
from .errors import PromptContextError

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = "P: {user_input}\nA:"


def load_prompt_context(path: str) -> str:
    """Read the prompt context file (``~`` is expanded)."""
    context_path = Path(path).expanduser()
    try:
        return context_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PromptContextError(f"cannot read prompt context {context_path}: {e}") from e


def build_prompt(context: str, user_input: str) -> str:
    """
    Append the user's request to the context.

    user_input goes in verbatim; a "..." typed by the user will confuse
    answer extraction later on.
    """
    prompt = context + PROMPT_TEMPLATE.format(user_input=user_input)
    return prompt.replace("\r\n", "\n")


def compose_prompt(config: Configuration, user_input: str) -> str:
    """Build the full model input for user_input."""
    context = load_prompt_context(config.prompt_context_path)
    logger.debug("Prompt context: %d chars from %s", len(context), config.prompt_context_path)
    return build_prompt(context, user_input)
