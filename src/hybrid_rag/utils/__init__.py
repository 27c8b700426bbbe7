"""Shared utilities."""

from .helpers import (
    collapse_newlines,
    find_timestamp,
    get_llm,
    message_text,
    model_label,
    setup_logging,
    timed_url,
    timestamp_to_seconds,
    truncate,
)

__all__ = [
    "collapse_newlines",
    "find_timestamp",
    "get_llm",
    "message_text",
    "model_label",
    "setup_logging",
    "timed_url",
    "timestamp_to_seconds",
    "truncate",
]
