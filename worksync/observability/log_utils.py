"""
Structured logging helpers.

Context values are flattened to short strings before they reach the log
record: checklist maps become "completed/total steps", identifiers become
their string form, and anything long is truncated.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

from collections.abc import Mapping
import logging
from typing import Any
from uuid import UUID

MAX_VALUE_LENGTH = 200


def summarize_checklist(progress: Mapping[str, bool] | None) -> str:
    """
    Summarise a checklist map without logging its step keys.

    Args:
        progress: stepKey -> completed map

    Returns:
        str: e.g. "2/5 steps"
    """
    if not progress:
        return "0/0 steps"
    completed = sum(1 for done in progress.values() if done)
    return f"{completed}/{len(progress)} steps"


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Convert a context value to a bounded string for logging.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    if value is None:
        return "None"
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Mapping):
        if all(isinstance(done, bool) for done in value.values()):
            return summarize_checklist(value)
        text = f"dict({len(value)} keys)"
    elif isinstance(value, (list, tuple, set)):
        text = f"{type(value).__name__}({len(value)} items)"
    else:
        try:
            text = str(value)
        except Exception as e:
            return f"<unable to log: {type(e).__name__}>"

    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} total)"
    return text


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with its context attached as record attributes.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: session_id, document_id, steps, ...
    """
    logger.log(
        level,
        message,
        extra={key: safe_log_value(val) for key, val in context.items()},
    )


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """Log an exception with traceback, its type and message, and context."""
    extra = {key: safe_log_value(val) for key, val in context.items()}
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(exc)
    logger.exception(message, extra=extra)
