"""Utility functions for the NLP Slack bot."""

from src.utils.logging import (
    configure_logging,
    get_request_id,
    set_request_id,
)
from src.utils.observability import log_memory_usage, setup_logfire

__all__ = [
    "setup_logfire",
    "log_memory_usage",
    "set_request_id",
    "get_request_id",
    "configure_logging",
]
