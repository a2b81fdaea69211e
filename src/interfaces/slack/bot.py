# src/interfaces/slack/bot.py
"""Slack bot implementation with AsyncApp and AsyncSocketModeHandler.

Registers handlers for:
- @mentions (app_mention event)
- Direct messages (message event, channel_type="im")
- Pinned items (pin_added event)

Startup resolves the bot's own identity and loads the NLP pipelines
before connecting, so failures there are fatal.
"""

import asyncio
import logging

from dotenv import load_dotenv
from slack_bolt.async_app import AsyncApp

# Load environment variables from .env file
load_dotenv()
from slack_bolt.adapter.socket_mode.async_handler import AsyncSocketModeHandler

from src.config import settings
from src.core.errors import BotIdentityError
from src.core.identity import resolve_bot_identity
from src.core.lifecycle import get_lifecycle_manager
from src.core.nlp import get_annotator
from src.interfaces.slack.handlers import (
    ack_message,
    handle_listener_error,
    handle_mention,
    handle_pin_added,
    process_message,
)
from src.utils.logging import configure_logging
from src.utils.observability import log_memory_usage, setup_logfire

logger = logging.getLogger(__name__)


# ============================================================================
# Bot Factory and Startup Functions
# ============================================================================


def register_handlers(app: AsyncApp) -> AsyncApp:
    """Attach the bot's event listeners and error handler to app."""
    app.event("app_mention")(handle_mention)
    app.event("message")(ack=ack_message, lazy=[process_message])
    app.event("pin_added")(handle_pin_added)
    app.error(handle_listener_error)
    return app


def create_bot(
    bot_token: str | None = None, app_token: str | None = None
) -> tuple[AsyncApp, AsyncSocketModeHandler]:
    """Create and configure the Slack bot.

    Args:
        bot_token: Slack bot token (xoxb-*). Defaults to SLACK_BOT_TOKEN env var.
        app_token: Slack app token (xapp-*). Defaults to SLACK_APP_TOKEN env var.

    Returns:
        Tuple of (AsyncApp instance, AsyncSocketModeHandler instance).
    """
    resolved_bot_token = bot_token or settings.slack_bot_token
    resolved_app_token = app_token or settings.slack_app_token

    app = register_handlers(AsyncApp(token=resolved_bot_token))
    handler = AsyncSocketModeHandler(app, resolved_app_token)
    return app, handler


async def start_bot(bot_token: str | None = None, app_token: str | None = None) -> None:
    """Start the Slack bot with Socket Mode."""
    slack_app, handler = create_bot(bot_token, app_token)

    try:
        await resolve_bot_identity(slack_app.client)
    except BotIdentityError:
        logger.exception("Could not authenticate with Slack")
        raise

    lifecycle = get_lifecycle_manager()
    lifecycle.register("nlp", get_annotator())
    await lifecycle.startup()
    log_memory_usage()

    logger.info("Starting Slack bot with Socket Mode...")
    try:
        await handler.start_async()
    except asyncio.CancelledError:
        logger.info("Received shutdown signal")
    finally:
        await lifecycle.shutdown()
        await handler.close_async()
        logger.info("Slack bot stopped")


def main() -> None:
    """Entry point with graceful shutdown handling."""
    configure_logging(settings.log_level, json_format=settings.use_json_logs)
    setup_logfire()

    try:
        asyncio.run(start_bot())
    except KeyboardInterrupt:
        logger.info("Shutdown complete")


if __name__ == "__main__":
    main()
