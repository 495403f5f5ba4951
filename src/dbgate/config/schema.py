"""Pydantic model for resolved gate settings."""

from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import BaseModel, field_validator

from dbgate.config.defaults import (
    DEFAULT_CONCURRENCY_LIMIT,
    DEFAULT_LOG_LEVEL,
    MIN_CONCURRENCY_LIMIT,
)

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}

# Leading integer, like parseInt: "2.5" -> 2, "12 conns" -> 12
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class GateSettings(BaseModel):
    """Validated settings for the shared gate.

    Nothing here can come out unusable: a missing or non-numeric limit falls
    back to the default, fractions are truncated, zero and negatives are
    raised to 1, and an unknown log level falls back to the default level.
    """

    concurrency_limit: int = DEFAULT_CONCURRENCY_LIMIT
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("concurrency_limit", mode="before")
    @classmethod
    def _sanitize_limit(cls, value: Any) -> int:
        limit = _parse_limit(value)
        if limit is None:
            if value is not None:
                logger.warning(
                    "Invalid concurrency limit %r, using default %d",
                    value,
                    DEFAULT_CONCURRENCY_LIMIT,
                )
            return DEFAULT_CONCURRENCY_LIMIT
        if limit < MIN_CONCURRENCY_LIMIT:
            logger.warning(
                "Concurrency limit %d is below %d, clamping",
                limit,
                MIN_CONCURRENCY_LIMIT,
            )
            return MIN_CONCURRENCY_LIMIT
        return limit

    @field_validator("log_level", mode="before")
    @classmethod
    def _sanitize_log_level(cls, value: Any) -> str:
        level = str(value or DEFAULT_LOG_LEVEL).strip().upper()
        if level not in _LOG_LEVELS:
            logger.warning(
                "Unknown log level %r, using default %s", value, DEFAULT_LOG_LEVEL
            )
            return DEFAULT_LOG_LEVEL
        return level


def _parse_limit(value: Any) -> int | None:
    """Read an integer the way parseInt does; None when there is none."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        try:
            return int(value)
        except (ValueError, OverflowError):
            return None
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None
