"""Named relative anchors such as ``yesterday`` or ``beginning_week``.

Keywords are case-insensitive and ``_`` and whitespace are interchangeable,
so ``Day_Before_Yesterday`` and ``day before  yesterday`` are the same anchor.
Each anchor resolves to a civil timestamp computed from "now" in the zone the
expression is evaluated in.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Callable, Dict, Optional

from datemath.civil import CivilDateTime, TimeUnit, Weekday
from datemath.constants import AT_0AD, AT_Y10K
from datemath.zones import Zone

_SEPARATORS = re.compile(r"[\s_]+")


def normalize_keyword(text: str) -> str:
    """Lowercase and collapse runs of underscores/whitespace to one space."""
    return _SEPARATORS.sub(" ", text.strip()).lower()


class Anchor(Enum):
    NOW = "now"
    MIN = "min"
    MAX = "max"
    DISTANT_PAST = "distant past"
    DISTANT_FUTURE = "distant future"
    MORNING = "morning"
    MIDNIGHT = "midnight"
    NOON = "noon"
    TODAY = "today"
    TOMORROW = "tomorrow"
    YESTERDAY = "yesterday"
    DAY_AFTER_TOMORROW = "day after tomorrow"
    DAY_BEFORE_YESTERDAY = "day before yesterday"
    BEGINNING_MONTH = "beginning month"
    END_MONTH = "end month"
    BEGINNING_YEAR = "beginning year"
    END_YEAR = "end year"
    BEGINNING_WEEK = "beginning week"
    END_WEEK = "end week"
    NEXT_MONTH = "next month"
    LAST_MONTH = "last month"
    NEXT_YEAR = "next year"
    LAST_YEAR = "last year"

    @classmethod
    def lookup(cls, text: str) -> Optional["Anchor"]:
        """Find the anchor named by ``text``; ``None`` for unknown words."""
        try:
            return cls(normalize_keyword(text))
        except ValueError:
            return None


def _days_from_today(days: int) -> Callable[[CivilDateTime, Zone], CivilDateTime]:
    return lambda now, zone: now.truncated_to_day().plus(days, TimeUnit.DAY)


def _at_hour(hour: int) -> Callable[[CivilDateTime, Zone], CivilDateTime]:
    return lambda now, zone: now.at_time(hour)


def _shifted(amount: int, unit: TimeUnit) -> Callable[[CivilDateTime, Zone], CivilDateTime]:
    return lambda now, zone: now.plus(amount, unit)


def _lowest(now: CivilDateTime, zone: Zone) -> CivilDateTime:
    return zone.to_civil(AT_0AD)


def _highest(now: CivilDateTime, zone: Zone) -> CivilDateTime:
    return zone.to_civil(AT_Y10K)


_RESOLVERS: Dict[Anchor, Callable[[CivilDateTime, Zone], CivilDateTime]] = {
    Anchor.NOW: lambda now, zone: now,
    Anchor.MIN: _lowest,
    Anchor.MAX: _highest,
    Anchor.DISTANT_PAST: _lowest,
    Anchor.DISTANT_FUTURE: _highest,
    Anchor.MORNING: _at_hour(9),
    Anchor.MIDNIGHT: _at_hour(0),
    Anchor.NOON: _at_hour(12),
    Anchor.TODAY: _days_from_today(0),
    Anchor.TOMORROW: _days_from_today(1),
    Anchor.YESTERDAY: _days_from_today(-1),
    Anchor.DAY_AFTER_TOMORROW: _days_from_today(2),
    Anchor.DAY_BEFORE_YESTERDAY: _days_from_today(-2),
    Anchor.BEGINNING_MONTH: lambda now, zone: now.truncated_to_day().first_day_of_month(),
    Anchor.END_MONTH: lambda now, zone: now.truncated_to_day().first_day_of_next_month(),
    Anchor.BEGINNING_YEAR: lambda now, zone: now.truncated_to_day().first_day_of_year(),
    Anchor.END_YEAR: lambda now, zone: now.truncated_to_day().first_day_of_next_year(),
    Anchor.BEGINNING_WEEK: lambda now, zone: now.truncated_to_day().previous(Weekday.SUNDAY),
    Anchor.END_WEEK: lambda now, zone: now.truncated_to_day().next(Weekday.SUNDAY),
    Anchor.NEXT_MONTH: _shifted(1, TimeUnit.MONTH),
    Anchor.LAST_MONTH: _shifted(-1, TimeUnit.MONTH),
    Anchor.NEXT_YEAR: _shifted(1, TimeUnit.YEAR),
    Anchor.LAST_YEAR: _shifted(-1, TimeUnit.YEAR),
}

_unresolved = set(Anchor) - set(_RESOLVERS)
if _unresolved:  # pragma: no cover
    raise RuntimeError(f"anchors without resolver: {sorted(a.name for a in _unresolved)}")


def resolve_anchor(anchor: Anchor, now: CivilDateTime, zone: Zone) -> CivilDateTime:
    """Civil timestamp for ``anchor`` given the current civil time ``now`` in ``zone``."""
    return _RESOLVERS[anchor](now, zone)
