"""Concurrency — bounded admission gate for async operations."""

from dbgate.concurrency.gate import ConcurrencyGate, configure, limited
from dbgate.concurrency.shared import db_limit, get_gate, reset_gate

__all__ = [
    "ConcurrencyGate",
    "configure",
    "limited",
    "db_limit",
    "get_gate",
    "reset_gate",
]
