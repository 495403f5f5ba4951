"""Shared Pydantic models for dbgate."""

from __future__ import annotations

from pydantic import BaseModel


class GateStats(BaseModel):
    """Point-in-time snapshot of a gate's counters."""

    limit: int
    active: int = 0
    pending: int = 0
    peak_active: int = 0
    total_admitted: int = 0
    total_completed: int = 0

    @property
    def saturated(self) -> bool:
        return self.active >= self.limit

    @property
    def utilization(self) -> float:
        return self.active / self.limit if self.limit > 0 else 0.0
