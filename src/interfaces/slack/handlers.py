# src/interfaces/slack/handlers.py
"""Event handlers for Slack bot.

Provides handlers for:
- @mentions (app_mention event): greeting with the bot's name
- Direct messages (message event, channel_type="im"): NLP replies
- Pinned items (pin_added event): acknowledgement

Direct messages use the lazy listener pattern: ack immediately and run
annotation in the background.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from src.core.errors import AnnotationTimeoutError
from src.core.identity import get_bot_identity
from src.core.nlp import format_annotation, format_entity_tags, get_annotator
from src.core.routing import MessageKind, classify_message
from src.interfaces.slack.slack_api import _send_multipart_message
from src.utils.logging import set_request_id

logger = logging.getLogger(__name__)

GREETING_TEMPLATE = "Hi, I am {name}"
PIN_ACKNOWLEDGEMENT = (
    "Thanks for the pin! You can find all pinned items under channel details."
)
TIMEOUT_TEMPLATE = ":hourglass: Annotation took longer than {timeout:g}s and was abandoned."


def _event_request_id(event: dict[str, Any]) -> str:
    return event.get("client_msg_id") or event.get("event_ts") or event.get("ts", "")


# ============================================================================
# App Mention Handler
# ============================================================================


async def handle_mention(event: dict[str, Any], say: Callable) -> None:
    """Reply to a direct mention with a greeting naming the bot."""
    set_request_id(_event_request_id(event))
    identity = get_bot_identity()
    logger.info("Greeting %s in %s", event.get("user", "unknown"), event.get("channel"))
    await say(
        text=GREETING_TEMPLATE.format(name=identity.name),
        thread_ts=event.get("thread_ts"),
    )


# ============================================================================
# DM Message Handlers (Lazy Listener Pattern)
# ============================================================================


async def reply_entity_tags(text: str, event: dict[str, Any], client: Any) -> None:
    """Reply with the named-entity tag of every token in text."""
    logger.info("Entity tags for: %s", text[:100])
    document = await get_annotator().tag_entities_async(text)
    await client.chat_postMessage(
        channel=event["channel"],
        thread_ts=event.get("thread_ts"),
        text=format_entity_tags(document),
    )


async def reply_full_annotation(text: str, event: dict[str, Any], client: Any) -> None:
    """Reply with tokens, parse trees, dependencies and coreference for text."""
    logger.info("Full annotation for: %s", text[:100])
    document = await get_annotator().annotate_async(text)
    logger.info("Annotation completed (%d sentences)", len(document.sentences))
    await _send_multipart_message(
        client, event["channel"], event.get("thread_ts"), format_annotation(document)
    )


MESSAGE_HANDLERS: dict[
    MessageKind, Callable[[str, dict[str, Any], Any], Awaitable[None]]
] = {
    MessageKind.ENTITY_TAGS: reply_entity_tags,
    MessageKind.FULL_ANNOTATION: reply_full_annotation,
}


def _is_direct_user_message(event: dict[str, Any]) -> bool:
    if event.get("channel_type") != "im":
        return False
    # Skip bot echoes and edits/joins/deletes, which carry a subtype
    if event.get("bot_id") or event.get("subtype"):
        return False
    return True


async def ack_message(ack: Callable) -> None:
    """Acknowledge message event immediately.

    Args:
        ack: Slack ack function to acknowledge receipt.
    """
    await ack()


async def process_message(event: dict[str, Any], client: Any) -> None:
    """Route a direct message to exactly one NLP handler.

    Runs as a lazy listener, where bolt would reduce an escaped exception
    to a one-line message, so failures are logged here with traceback.
    """
    if not _is_direct_user_message(event):
        return

    set_request_id(_event_request_id(event))
    classified = classify_message(event.get("text"))
    handler = MESSAGE_HANDLERS.get(classified.kind)
    if handler is None:
        logger.debug("Ignoring DM from %s (%s)", event.get("user"), classified.kind.value)
        return

    try:
        await handler(classified.body, event, client)
    except AnnotationTimeoutError as e:
        logger.warning("Annotation timed out after %ss for %s", e.timeout, event.get("user"))
        await client.chat_postMessage(
            channel=event["channel"],
            thread_ts=event.get("thread_ts"),
            text=TIMEOUT_TEMPLATE.format(timeout=e.timeout),
        )
    except Exception as e:
        logger.exception("Error processing DM (%s): %s", classified.kind.value, e)


# ============================================================================
# Pin Added Handler
# ============================================================================


async def handle_pin_added(event: dict[str, Any], client: Any) -> None:
    """Acknowledge a pinned item in its channel."""
    set_request_id(_event_request_id(event))
    channel = event.get("channel_id") or event.get("item", {}).get("channel")
    if not channel:
        logger.warning("Missing channel in pin_added event")
        return
    await client.chat_postMessage(channel=channel, text=PIN_ACKNOWLEDGEMENT)


# ============================================================================
# Global Error Handler
# ============================================================================


async def handle_listener_error(error: Exception, body: dict[str, Any]) -> None:
    """Log exceptions that escape a listener."""
    event = body.get("event", {}) if isinstance(body, dict) else {}
    logger.error(
        "Error handling %s event: %s",
        event.get("type", "unknown"),
        error,
        exc_info=error,
    )
