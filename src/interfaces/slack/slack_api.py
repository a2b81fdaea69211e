# src/interfaces/slack/slack_api.py
"""Slack API utilities for message handling and retry logic."""

import asyncio
from collections.abc import Callable
from typing import Any

from slack_sdk.errors import SlackApiError

MAX_RETRIES = 3
RETRY_DELAYS = [1, 2, 4]
SLACK_MESSAGE_LIMIT = 3500
FALLBACK_MESSAGE_LIMIT = 1000


async def _slack_api_with_retry(coro_func: Callable, *args, **kwargs) -> Any:
    """Execute Slack API call with retry on timeout."""
    last_error: BaseException = TimeoutError("Max retries exceeded")
    for attempt in range(MAX_RETRIES):
        try:
            return await coro_func(*args, **kwargs)
        except (TimeoutError, asyncio.TimeoutError) as e:
            last_error = e
            if attempt < MAX_RETRIES - 1:
                await asyncio.sleep(RETRY_DELAYS[attempt])
    raise last_error


def _split_message_at_boundaries(
    text: str, limit: int = SLACK_MESSAGE_LIMIT
) -> list[str]:
    """Split message text at natural boundaries to fit Slack's message limit.

    Annotation output is line-oriented, so newlines are preferred over
    spaces. Falls back to a hard cut if no suitable break point is found.

    Args:
        text: Message text to split.
        limit: Maximum characters per chunk (default: SLACK_MESSAGE_LIMIT).

    Returns:
        List of text chunks, each within the character limit.
    """
    if len(text) <= limit:
        return [text]

    chunks = []
    remaining = text

    while remaining:
        if len(remaining) <= limit:
            chunks.append(remaining)
            break

        chunk = remaining[:limit]
        split_at = chunk.rfind("\n")
        if split_at < limit * 0.3:
            split_at = chunk.rfind(" ")
        if split_at < limit * 0.3:
            split_at = limit

        chunks.append(remaining[:split_at].rstrip())
        remaining = remaining[split_at:].lstrip()

    return chunks


async def _send_multipart_message(
    client: Any,
    channel: str,
    thread_ts: str | None,
    text: str,
) -> None:
    """Send plain text to Slack, splitting into multiple parts if needed.

    Args:
        client: Slack AsyncWebClient instance.
        channel: Target channel ID.
        thread_ts: Thread timestamp for replies, or None for the channel.
        text: Message text.
    """
    chunks = _split_message_at_boundaries(text)

    for i, chunk in enumerate(chunks):
        part_indicator = f"({i + 1}/{len(chunks)})" if len(chunks) > 1 else ""
        try:
            await client.chat_postMessage(
                channel=channel,
                thread_ts=thread_ts,
                text=f"{chunk}\n{part_indicator}" if part_indicator else chunk,
            )
        except SlackApiError as e:
            if e.response.get("error") != "msg_too_long":
                raise
            for sub in _split_message_at_boundaries(chunk, limit=FALLBACK_MESSAGE_LIMIT):
                await client.chat_postMessage(
                    channel=channel, thread_ts=thread_ts, text=sub
                )
