"""Source of "now" for relative expressions.

The evaluator asks its clock for the current instant every time an anchor or
a bare duration needs it. Tests and callers that want a frozen reference pass
a ``FixedClock``.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Protocol

from datemath.civil import TimeUnit
from datemath.models import Instant


class Clock(Protocol):
    def now(self) -> Instant:
        ...


class SystemClock:
    """Wall clock, sampled on every call."""

    def now(self) -> Instant:
        return Instant.of_epoch_millis(time.time_ns() // 1_000_000)

    def __repr__(self) -> str:
        return "SystemClock()"


@dataclass
class FixedClock:
    """Deterministic clock; only moves when told to."""

    instant: Instant

    def now(self) -> Instant:
        return self.instant

    def advance(self, amount: int, unit: TimeUnit = TimeUnit.MILLISECOND) -> None:
        self.instant = self.instant.plus(amount, unit)


SYSTEM_CLOCK = SystemClock()
