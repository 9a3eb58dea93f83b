"""
Error message sanitization utilities.

Clients get a generic message; the full error (paths, stack trace) is only
logged server-side.
"""

from __future__ import annotations

import logging
import re

_PATH_PATTERN = re.compile(r'(?:[A-Za-z]:)?(?:[/\\][^\s:<>"|?*]+)+')

BUILD_FAILED_MESSAGE = "Failed to build flow tree"


def sanitize_path_in_message(message: str) -> str:
    """
    Replace file paths in a message with "[file path]".

    Examples:
        >>> sanitize_path_in_message("File not found: /app/input/data.csv")
        'File not found: [file path]'
    """
    return _PATH_PATTERN.sub("[file path]", message)


def sanitize_error_message(error: Exception | str, generic_message: str) -> str:
    """
    Return the message that is safe to send to a client for `error`.

    Exception text can carry row contents (account numbers, phone numbers) and
    paths, so only the generic message leaves the service.

    Examples:
        >>> sanitize_error_message(ValueError("bad row 9876543210"), "Failed to build flow tree")
        'Failed to build flow tree'
    """
    return generic_message


def log_error_with_context(
    logger_instance: logging.Logger,
    generic_message: str,
    error: Exception | str,
    request_id: str | None = None,
    **context: str | int,
) -> None:
    """
    Log the full error with context under the generic message.

    Example:
        >>> log_error_with_context(
        ...     logging.getLogger(__name__),
        ...     "Failed to build flow tree",
        ...     ValueError("boom"),
        ...     request_id="req-123",
        ...     rows_count=12,
        ... )
    """
    parts = [f"{key}={value}" for key, value in context.items()]
    parts.append(f"error={error}")
    extra = {"request_id": request_id} if request_id else {}
    logger_instance.error(
        f"{generic_message}: {', '.join(parts)}",
        extra=extra,
        exc_info=isinstance(error, Exception),
    )
