"""Error handling — exceptions raised by the gate and its configuration."""

from dbgate.errors.exceptions import (
    AdmissionTimeout,
    GateError,
    InvalidConfiguration,
    InvalidOperation,
)

__all__ = [
    "GateError",
    "InvalidConfiguration",
    "InvalidOperation",
    "AdmissionTimeout",
]
