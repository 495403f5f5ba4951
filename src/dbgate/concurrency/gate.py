"""Bounded-concurrency admission gate for async operations."""

from __future__ import annotations

import asyncio
import contextlib
import functools
import inspect
import logging
from collections import deque
from collections.abc import Awaitable, Callable
from typing import Any, ParamSpec, TypeVar

from dbgate.config.defaults import DEFAULT_CONCURRENCY_LIMIT
from dbgate.errors.exceptions import (
    AdmissionTimeout,
    InvalidConfiguration,
    InvalidOperation,
)
from dbgate.types import GateStats

logger = logging.getLogger(__name__)

T = TypeVar("T")
P = ParamSpec("P")

Operation = Callable[[], Awaitable[T]]


class ConcurrencyGate:
    """Admits at most ``limit`` operations at a time; the rest wait in FIFO order.

    Each operation is a zero-argument callable returning an awaitable. It is
    only invoked once admitted. Its result or exception is handed back to the
    caller untouched, and its slot is released however it finishes.

    A freed slot goes straight to the head of the queue, so a newcomer can
    never overtake a queued operation.
    """

    def __init__(self, limit: int = DEFAULT_CONCURRENCY_LIMIT) -> None:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise InvalidConfiguration(
                f"Gate limit must be a positive integer, got {limit!r}",
                value=limit,
            )
        self._limit = limit
        self._active = 0
        self._waiters: deque[asyncio.Future[None]] = deque()

        # Stats
        self._peak_active = 0
        self._total_admitted = 0
        self._total_completed = 0

        logger.debug("Concurrency gate created with limit=%d", limit)

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def active_count(self) -> int:
        """Operations admitted and not yet finished."""
        return self._active

    @property
    def pending_count(self) -> int:
        """Operations waiting for a slot."""
        return sum(1 for w in self._waiters if not w.done())

    @property
    def stats(self) -> GateStats:
        return GateStats(
            limit=self._limit,
            active=self._active,
            pending=self.pending_count,
            peak_active=self._peak_active,
            total_admitted=self._total_admitted,
            total_completed=self._total_completed,
        )

    async def run(self, operation: Operation[T], *, timeout: float | None = None) -> T:
        """Run ``operation`` once a slot is free and return its result.

        Args:
            operation: Zero-argument callable returning an awaitable.
            timeout: Max seconds to wait in the queue. ``None`` waits forever.
                Time spent executing after admission is not limited.

        Raises AdmissionTimeout if the wait exceeds ``timeout``,
        InvalidOperation for anything that isn't a deferred operation, and
        otherwise whatever the operation itself raises.
        """
        _check_operation(operation)

        await self._acquire(timeout)
        try:
            awaitable = operation()
            if not inspect.isawaitable(awaitable):
                raise InvalidOperation(
                    f"Operation returned {type(awaitable).__name__}, expected an awaitable",
                    operation=operation,
                )
            return await awaitable
        finally:
            self._release()

    async def _acquire(self, timeout: float | None) -> None:
        if self._active < self._limit and not self._waiters:
            self._admit()
            return

        waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            if timeout is None:
                await waiter
            else:
                async with asyncio.timeout(timeout):
                    await waiter
        except BaseException as exc:
            if waiter.done() and not waiter.cancelled():
                # Slot was granted just before we were interrupted; pass it on.
                self._revoke()
            else:
                self._discard(waiter)
                self._wake_next()
            if isinstance(exc, TimeoutError):
                raise AdmissionTimeout(
                    f"Not admitted within {timeout}s ({self.pending_count} still queued)",
                    timeout=timeout,
                    pending=self.pending_count,
                ) from exc
            raise

    def _admit(self) -> None:
        self._active += 1
        self._total_admitted += 1
        self._peak_active = max(self._peak_active, self._active)

    def _release(self) -> None:
        self._active -= 1
        self._total_completed += 1
        self._wake_next()

    def _revoke(self) -> None:
        """Undo an admission whose operation never started."""
        self._active -= 1
        self._total_admitted -= 1
        self._wake_next()

    def _wake_next(self) -> None:
        """Hand free slots to queued waiters, oldest first."""
        while self._waiters and self._active < self._limit:
            waiter = self._waiters.popleft()
            if waiter.done():
                continue
            self._admit()
            waiter.set_result(None)

    def _discard(self, waiter: asyncio.Future[None]) -> None:
        with contextlib.suppress(ValueError):
            self._waiters.remove(waiter)

    def __repr__(self) -> str:
        return (
            f"ConcurrencyGate(limit={self._limit}, active={self._active}, "
            f"pending={self.pending_count})"
        )


def configure(limit: int) -> ConcurrencyGate:
    """Build a gate with the given ceiling.

    Raises InvalidConfiguration unless ``limit`` is a positive integer.
    """
    return ConcurrencyGate(limit)


def limited(
    gate: ConcurrencyGate,
    *,
    timeout: float | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Decorator: route every call of an async function through ``gate``.

    Usage:
        @limited(gate)
        async def find_user(user_id): ...
    """

    def decorator(fn: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        if not callable(fn):
            raise InvalidOperation(f"Cannot limit non-callable {fn!r}", operation=fn)

        @functools.wraps(fn)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return await gate.run(lambda: fn(*args, **kwargs), timeout=timeout)

        return wrapper

    return decorator


def _check_operation(operation: Any) -> None:
    """Reject anything that is already running or cannot be invoked."""
    if inspect.isawaitable(operation):
        raise InvalidOperation(
            "Operation is already started; pass a zero-argument callable instead "
            "(e.g. `lambda: query()` rather than `query()`)",
            operation=operation,
        )
    if not callable(operation):
        raise InvalidOperation(
            f"Operation must be callable, got {type(operation).__name__}",
            operation=operation,
        )
