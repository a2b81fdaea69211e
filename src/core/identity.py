"""The bot's own Slack identity, resolved once at startup.

Example:
    >>> identity = await resolve_bot_identity(app.client)
    >>> get_bot_identity().name
    'nlpbot'
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from slack_sdk.errors import SlackApiError

from src.core.errors import BotIdentityError
from src.interfaces.slack.slack_api import _slack_api_with_retry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BotIdentity:
    """The bot user as seen by Slack.

    Attributes:
        user_id: Slack user ID of the bot (U...).
        name: Display name used in greetings.
    """

    user_id: str
    name: str


_bot_identity: BotIdentity | None = None


def _display_name(user: dict[str, Any]) -> str:
    profile = user.get("profile") or {}
    return (
        profile.get("display_name")
        or profile.get("real_name")
        or user.get("real_name")
        or user.get("name")
        or ""
    )


def _error_detail(error: Exception) -> str:
    if isinstance(error, SlackApiError):
        return str(error.response.get("error", error))
    return f"timed out ({type(error).__name__})"


async def resolve_bot_identity(client: Any) -> BotIdentity:
    """Look up the bot user and store it process-wide.

    Uses auth.test for the user ID and name, then users.info for the
    profile display name when available.

    Args:
        client: Slack AsyncWebClient authenticated with the bot token.

    Returns:
        The resolved BotIdentity.

    Raises:
        BotIdentityError: If Slack rejects the token or returns no user.
    """
    global _bot_identity

    try:
        auth = await _slack_api_with_retry(client.auth_test)
    except (SlackApiError, TimeoutError, asyncio.TimeoutError) as e:
        raise BotIdentityError(f"auth.test failed: {_error_detail(e)}") from e

    user_id = auth.get("user_id")
    name = auth.get("user") or ""
    if not user_id:
        raise BotIdentityError("auth.test returned no user_id")

    try:
        info = await _slack_api_with_retry(client.users_info, user=user_id)
        name = _display_name(info.get("user") or {}) or name
    except (SlackApiError, TimeoutError, asyncio.TimeoutError) as e:
        logger.warning(
            "users.info failed for %s, using auth.test name: %s",
            user_id,
            _error_detail(e),
        )

    if not name:
        raise BotIdentityError(f"No name found for bot user {user_id}")

    _bot_identity = BotIdentity(user_id=user_id, name=name)
    logger.info("Resolved bot identity: %s (%s)", name, user_id)
    return _bot_identity


def get_bot_identity() -> BotIdentity:
    """Return the identity resolved at startup.

    Raises:
        BotIdentityError: If resolve_bot_identity() has not succeeded.
    """
    if _bot_identity is None:
        raise BotIdentityError("Bot identity has not been resolved")
    return _bot_identity


def set_bot_identity(identity: BotIdentity | None) -> None:
    """Replace the stored identity (for testing)."""
    global _bot_identity
    _bot_identity = identity
