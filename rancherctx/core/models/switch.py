"""
Switch models — the switcher's lifecycle states and its result record.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SwitchState(str, Enum):
    """Lifecycle of a ContextSwitcher."""

    IDLE = "idle"
    RESOLVING = "resolving"
    SWITCHING = "switching"
    FAILED = "failed"


@dataclass
class SwitchResult:
    """Outcome of a successful switch."""

    server_id: str
    current: str
    previous: str | None = None
    history_written: bool = False
    history_error: str | None = None

    @property
    def changed(self) -> bool:
        return self.previous != self.current
