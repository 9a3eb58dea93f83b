"""
Shared configuration utilities for microservices.

Provides environment variable management following 12-factor app principles.
All configuration comes from environment variables with sensible defaults.
"""

from __future__ import annotations

import logging
import os

DEFAULT_PORT = 8004
DEFAULT_MAX_ROWS = 100_000
DEFAULT_MAX_REQUEST_BYTES = 100 * 1024 * 1024
DEFAULT_CACHE_SIZE = 1000
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _get_positive_int(env_var: str, default: int) -> int:
    """
    Read a positive integer from an environment variable.

    Raises:
        ValueError: If the value is not an integer or not positive.
    """
    raw = os.getenv(env_var)
    if raw is None:
        return default

    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"Invalid {env_var} environment variable: {raw} (must be integer)") from e
    if value <= 0:
        raise ValueError(f"Invalid {env_var}: {value} (must be positive)")
    return value


def get_port(default: int | None = DEFAULT_PORT) -> int:
    """
    Get port number from PORT environment variable.

    Args:
        default: Default port if PORT env var not set. If None, raises ValueError.

    Returns:
        Port number as integer

    Raises:
        ValueError: If PORT env var is not set and no default provided, or if value is invalid

    Example:
        >>> import os
        >>> os.environ["PORT"] = "8001"
        >>> get_port()
        8001
    """
    port_str = os.getenv("PORT")
    if port_str is None:
        if default is None:
            raise ValueError("PORT environment variable not set and no default provided")
        return default

    try:
        port = int(port_str)
    except ValueError as e:
        raise ValueError(f"Invalid PORT environment variable: {port_str} (must be integer)") from e
    if port < 1 or port > 65535:
        raise ValueError(f"Invalid port number: {port} (must be 1-65535)")
    return port


def get_max_rows(default: int = DEFAULT_MAX_ROWS) -> int:
    """
    Get the row limit for a single build from MAX_ROWS.

    The linker can degrade toward quadratic time when one account repeats
    across most rows, so input size is bounded at the service edge.
    """
    return _get_positive_int("MAX_ROWS", default)


def get_max_request_bytes(default: int = DEFAULT_MAX_REQUEST_BYTES) -> int:
    """Get the request body limit in bytes from MAX_REQUEST_BYTES (default: 100MB)."""
    return _get_positive_int("MAX_REQUEST_BYTES", default)


def get_cache_size(default: int = DEFAULT_CACHE_SIZE) -> int:
    """Get the idempotency cache size from CACHE_SIZE (default: 1000)."""
    return _get_positive_int("CACHE_SIZE", default)


def get_log_level(default: str = "INFO") -> str:
    """
    Get logging level name from LOG_LEVEL environment variable.

    Returns:
        Upper-cased level name

    Raises:
        ValueError: If LOG_LEVEL is not a standard logging level name
    """
    level = os.getenv("LOG_LEVEL", default).upper()
    if level not in LOG_LEVELS or not isinstance(getattr(logging, level, None), int):
        raise ValueError(f"Invalid LOG_LEVEL: {level} (must be one of {list(LOG_LEVELS)})")
    return level
