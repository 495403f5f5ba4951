"""Custom exception hierarchy for dbgate."""

from __future__ import annotations

from typing import Any


class GateError(Exception):
    """Base exception for all dbgate errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class InvalidConfiguration(GateError, ValueError):
    """Gate limit is not a positive integer — the gate cannot be built."""

    def __init__(self, message: str = "", value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class InvalidOperation(GateError, TypeError):
    """Operation is not a deferred callable.

    Examples: an already-created coroutine, a running Task or Future, or a
    callable that does not return an awaitable.
    """

    def __init__(self, message: str = "", operation: Any = None) -> None:
        super().__init__(message)
        self.operation = operation


class AdmissionTimeout(GateError, TimeoutError):
    """Operation waited in the queue longer than its admission timeout.

    The operation was withdrawn and never invoked.
    """

    def __init__(
        self,
        message: str = "",
        timeout: float | None = None,
        pending: int = 0,
    ) -> None:
        super().__init__(message)
        self.timeout = timeout
        self.pending = pending
