"""Exception types raised by the bot core."""


class NlpBotError(Exception):
    """Base class for errors raised by this application."""


class AnnotationError(NlpBotError):
    """Raised when the NLP pipeline cannot annotate a message."""


class AnnotationTimeoutError(AnnotationError):
    """Raised when an annotation call exceeds its time budget.

    Attributes:
        timeout: The budget in seconds that was exceeded.
    """

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Annotation did not finish within {timeout:g}s")


class BotIdentityError(NlpBotError):
    """Raised when the bot's own Slack user cannot be resolved."""
