"""Pure function-based classifier for direct message text.

Every direct message maps to exactly one MessageKind, so at most one
handler fires per message.
"""

from dataclasses import dataclass
from enum import Enum

ENTITY_TAGS_PREFIX = "!"


class MessageKind(Enum):
    """Kinds of direct message the bot distinguishes."""

    ENTITY_TAGS = "entity_tags"
    FULL_ANNOTATION = "full_annotation"
    IGNORED = "ignored"


@dataclass(frozen=True)
class ClassifiedMessage:
    """A direct message tagged with the handler that should process it.

    Attributes:
        kind: Which handler the message routes to.
        body: The text the handler operates on (prefix removed).
    """

    kind: MessageKind
    body: str


def classify_message(text: str | None) -> ClassifiedMessage:
    """Classify direct message text.

    Args:
        text: Raw message text from the Slack event.

    Returns:
        ClassifiedMessage whose kind is ENTITY_TAGS for `!text`,
        IGNORED for empty text or a bare `!`, and FULL_ANNOTATION
        for everything else.

    Examples:
        >>> classify_message("!Barack Obama was born in Hawaii")
        ClassifiedMessage(kind=<MessageKind.ENTITY_TAGS: 'entity_tags'>, body='Barack Obama was born in Hawaii')

        >>> classify_message("The cat sat.")
        ClassifiedMessage(kind=<MessageKind.FULL_ANNOTATION: 'full_annotation'>, body='The cat sat.')

        >>> classify_message("!")
        ClassifiedMessage(kind=<MessageKind.IGNORED: 'ignored'>, body='')
    """
    text = (text or "").strip()

    if not text:
        return ClassifiedMessage(kind=MessageKind.IGNORED, body="")

    if text.startswith(ENTITY_TAGS_PREFIX):
        body = text[len(ENTITY_TAGS_PREFIX) :].strip()
        if not body:
            return ClassifiedMessage(kind=MessageKind.IGNORED, body="")
        return ClassifiedMessage(kind=MessageKind.ENTITY_TAGS, body=body)

    return ClassifiedMessage(kind=MessageKind.FULL_ANNOTATION, body=text)
