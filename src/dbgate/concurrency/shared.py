"""Process-wide gate for database calls.

``get_gate()`` is the single place the shared gate gets built. Code that wants
its own limit (tests, batch jobs) should construct a ConcurrencyGate instead.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from dbgate.concurrency.gate import ConcurrencyGate
from dbgate.config.hierarchy import load_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

_gate: ConcurrencyGate | None = None


def get_gate() -> ConcurrencyGate:
    """Return the shared gate, building it from resolved settings on first use."""
    global _gate
    if _gate is None:
        settings = load_settings()
        _gate = ConcurrencyGate(settings.concurrency_limit)
        logger.info("Shared DB gate initialized (limit=%d)", settings.concurrency_limit)
    return _gate


async def db_limit(operation: Callable[[], Awaitable[T]], *, timeout: float | None = None) -> T:
    """Run a database operation through the shared gate.

    Usage:
        user = await db_limit(lambda: db.user.find_unique(user_id))
    """
    return await get_gate().run(operation, timeout=timeout)


def reset_gate() -> None:
    """Drop the shared gate so the next get_gate() rebuilds it (for testing)."""
    global _gate
    _gate = None
