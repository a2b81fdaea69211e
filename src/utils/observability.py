"""Observability: optional Pydantic Logfire and startup diagnostics."""

import logging
import sys

from src.config import settings

logger = logging.getLogger(__name__)


def setup_logfire() -> None:
    """Configure Logfire for observability.

    Only activates if LOGFIRE_TOKEN environment variable is set.
    Call this at application startup before the Slack handler connects.
    """
    if not settings.logfire_token:
        return

    try:
        import logfire

        logfire.configure(token=settings.logfire_token, service_name="nlp-slack-bot")
        logfire.instrument_aiohttp_client()
        logging.root.addHandler(logfire.LogfireLoggingHandler())
    except Exception as e:
        # Log but don't fail - observability is optional
        logger.warning("Failed to configure Logfire: %s", str(e))


def log_memory_usage() -> None:
    """Log the process's peak resident memory in MB.

    NLP models dominate memory, so this is logged once after they load.
    """
    try:
        import resource
    except ImportError:
        logger.debug("resource module unavailable, skipping memory stats")
        return

    max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # ru_maxrss is bytes on macOS, kilobytes elsewhere
    divisor = 1024 * 1024 if sys.platform == "darwin" else 1024
    logger.info("Peak memory usage: %d MB", max_rss // divisor)
