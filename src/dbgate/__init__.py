"""dbgate — bounded-concurrency gate for async database calls."""

from dbgate.concurrency import (
    ConcurrencyGate,
    configure,
    db_limit,
    get_gate,
    limited,
    reset_gate,
)
from dbgate.errors import (
    AdmissionTimeout,
    GateError,
    InvalidConfiguration,
    InvalidOperation,
)
from dbgate.types import GateStats

__all__ = [
    "ConcurrencyGate",
    "configure",
    "limited",
    "db_limit",
    "get_gate",
    "reset_gate",
    "GateStats",
    "GateError",
    "InvalidConfiguration",
    "InvalidOperation",
    "AdmissionTimeout",
]
