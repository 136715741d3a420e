from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ReconcileState(str, Enum):
    idle = "idle"
    prompted = "prompted"
    confirmed = "confirmed"
    declined = "declined"
    resolved = "resolved"
    failed = "failed"


class ReconcileOutcome(str, Enum):
    success = "success"
    user_declined = "user-declined"
    kill_failed = "kill-failed"


@dataclass(frozen=True, slots=True)
class PortConflict:
    port: int
    pid: int
    name: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    outcome: ReconcileOutcome
    state: ReconcileState
    conflict: Optional[PortConflict] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is ReconcileOutcome.success
