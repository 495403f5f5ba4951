"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

# Default gate settings
DEFAULT_CONCURRENCY_LIMIT = 10
MIN_CONCURRENCY_LIMIT = 1

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "concurrency_limit": DEFAULT_CONCURRENCY_LIMIT,
        "log_level": DEFAULT_LOG_LEVEL,
    }
