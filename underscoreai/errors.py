"""
Error types for underscoreai.

Everything below main() raises one of these; main() is the only place
that turns them into a message and an exit status.
"""


class UnderscoreAIError(Exception):
    """Base class for all underscoreai failures."""

    kind = "unexpected"


class ConfigError(UnderscoreAIError):
    """Config file missing, unreadable, malformed, or still holding placeholders."""

    kind = "configuration"


class PromptContextError(UnderscoreAIError):
    """The prompt context file could not be read."""

    kind = "I/O"


class InferenceError(UnderscoreAIError):
    """The inference request failed at the network or HTTP level."""

    kind = "network"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ResponseFormatError(UnderscoreAIError):
    """The generated text (or the response around it) has an unexpected shape."""

    kind = "response format"
