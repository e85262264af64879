"""Civil date-time fields and calendar arithmetic.

A ``CivilDateTime`` is the year/month/day/hour/minute/second/millisecond view
of a point in time in some zone. All arithmetic happens on these fields so
that month and year steps respect month lengths and leap years:

- fixed-length units (ms, s, h, d, w) move the civil timeline and carry into
  the higher fields (day 32 of January becomes 1 February)
- months and years move the calendar and clamp the day to the last valid day
  of the landing month (31 January + 1 month = 28/29 February)

The proleptic Gregorian calendar is used throughout, including year 0 and
negative years, which ``datetime`` cannot represent.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum, IntEnum
from typing import Tuple

from datemath.errors import OutOfRange


MILLIS_PER_SECOND = 1000
MILLIS_PER_MINUTE = 60 * MILLIS_PER_SECOND
MILLIS_PER_HOUR = 60 * MILLIS_PER_MINUTE
MILLIS_PER_DAY = 24 * MILLIS_PER_HOUR

# Four digit years only; anything wider does not survive ISO formatting.
MIN_YEAR = -9999
MAX_YEAR = 9999

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


class TimeUnit(Enum):
    """Duration unit codes (case sensitive)."""

    MILLISECOND = "ms"
    SECOND = "s"
    HOUR = "h"
    DAY = "d"
    WEEK = "w"
    MONTH = "m"
    YEAR = "y"


class Weekday(IntEnum):
    """ISO-8601 day of week numbering."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7


_FIXED_UNIT_MILLIS = {
    TimeUnit.MILLISECOND: 1,
    TimeUnit.SECOND: MILLIS_PER_SECOND,
    TimeUnit.HOUR: MILLIS_PER_HOUR,
    TimeUnit.DAY: MILLIS_PER_DAY,
    TimeUnit.WEEK: 7 * MILLIS_PER_DAY,
}

_CALENDAR_UNIT_MONTHS = {
    TimeUnit.MONTH: 1,
    TimeUnit.YEAR: 12,
}


# ---------------------------------------------------------------------------
# Day counting
# ---------------------------------------------------------------------------


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def days_from_civil(year: int, month: int, day: int) -> int:
    """Count days between 1970-01-01 and the given proleptic Gregorian date.

    Works in 400-year eras of 146097 days; floor division keeps it exact for
    negative years.
    """
    year -= month <= 2
    era = year // 400
    year_of_era = year - era * 400
    shifted_month = (month + 9) % 12
    day_of_year = (153 * shifted_month + 2) // 5 + day - 1
    day_of_era = year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
    return era * 146097 + day_of_era - 719468


def civil_from_days(epoch_day: int) -> Tuple[int, int, int]:
    """Inverse of :func:`days_from_civil`."""
    epoch_day += 719468
    era = epoch_day // 146097
    day_of_era = epoch_day - era * 146097
    year_of_era = (
        day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096
    ) // 365
    day_of_year = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
    shifted_month = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * shifted_month + 2) // 5 + 1
    month = shifted_month + 3 if shifted_month < 10 else shifted_month - 9
    year = year_of_era + era * 400 + (month <= 2)
    return year, month, day


# ---------------------------------------------------------------------------
# Civil timestamp
# ---------------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class CivilDateTime:
    """Calendar and clock fields without a zone.

    Always normalized: constructing one with an out-of-range field raises
    ``ValueError``, and every arithmetic result is normalized again.
    """

    year: int
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be in 1..12, got {self.month}")
        if not 1 <= self.day <= days_in_month(self.year, self.month):
            raise ValueError(
                f"day must be in 1..{days_in_month(self.year, self.month)} "
                f"for {self.year}-{self.month:02d}, got {self.day}"
            )
        if not 0 <= self.hour <= 23:
            raise ValueError(f"hour must be in 0..23, got {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"minute must be in 0..59, got {self.minute}")
        if not 0 <= self.second <= 59:
            raise ValueError(f"second must be in 0..59, got {self.second}")
        if not 0 <= self.millisecond <= 999:
            raise ValueError(f"millisecond must be in 0..999, got {self.millisecond}")

    # -- conversions -------------------------------------------------------

    @classmethod
    def from_epoch_millis(cls, epoch_millis: int, offset_seconds: int = 0) -> "CivilDateTime":
        """Civil fields of ``epoch_millis`` seen from a zone ``offset_seconds`` east of UTC."""
        local_millis = epoch_millis + offset_seconds * MILLIS_PER_SECOND
        epoch_day, millis_of_day = divmod(local_millis, MILLIS_PER_DAY)
        year, month, day = civil_from_days(epoch_day)
        hour, rest = divmod(millis_of_day, MILLIS_PER_HOUR)
        minute, rest = divmod(rest, MILLIS_PER_MINUTE)
        second, millisecond = divmod(rest, MILLIS_PER_SECOND)
        return cls(year, month, day, hour, minute, second, millisecond)

    @classmethod
    def from_datetime(cls, value: datetime | date) -> "CivilDateTime":
        """Take the wall-clock fields of ``value``; any tzinfo is ignored."""
        if isinstance(value, datetime):
            return cls(
                value.year,
                value.month,
                value.day,
                value.hour,
                value.minute,
                value.second,
                value.microsecond // 1000,
            )
        return cls(value.year, value.month, value.day)

    def to_epoch_millis(self, offset_seconds: int = 0) -> int:
        return (
            self.epoch_day * MILLIS_PER_DAY
            + self.millis_of_day
            - offset_seconds * MILLIS_PER_SECOND
        )

    @property
    def epoch_day(self) -> int:
        return days_from_civil(self.year, self.month, self.day)

    @property
    def millis_of_day(self) -> int:
        return (
            self.hour * MILLIS_PER_HOUR
            + self.minute * MILLIS_PER_MINUTE
            + self.second * MILLIS_PER_SECOND
            + self.millisecond
        )

    # -- arithmetic --------------------------------------------------------

    def plus(self, amount: int, unit: TimeUnit) -> "CivilDateTime":
        """Add ``amount`` (may be negative) of ``unit``."""
        if unit in _CALENDAR_UNIT_MONTHS:
            return self._plus_months(amount * _CALENDAR_UNIT_MONTHS[unit])
        return self._plus_millis(amount * _FIXED_UNIT_MILLIS[unit])

    def minus(self, amount: int, unit: TimeUnit) -> "CivilDateTime":
        return self.plus(-amount, unit)

    def _plus_millis(self, millis: int) -> "CivilDateTime":
        if millis == 0:
            return self
        return CivilDateTime.from_epoch_millis(self.to_epoch_millis() + millis)

    def _plus_months(self, months: int) -> "CivilDateTime":
        if months == 0:
            return self
        # same clamping as dateutil.relativedelta(months=...)
        year, month_index = divmod(self.year * 12 + self.month - 1 + months, 12)
        month = month_index + 1
        day = min(self.day, days_in_month(year, month))
        return replace(self, year=year, month=month, day=day)

    # -- adjusters ---------------------------------------------------------

    def truncated_to_day(self) -> "CivilDateTime":
        return CivilDateTime(self.year, self.month, self.day)

    def at_time(self, hour: int, minute: int = 0, second: int = 0, millisecond: int = 0) -> "CivilDateTime":
        return replace(self, hour=hour, minute=minute, second=second, millisecond=millisecond)

    def first_day_of_month(self) -> "CivilDateTime":
        return replace(self, day=1)

    def first_day_of_next_month(self) -> "CivilDateTime":
        return self.first_day_of_month()._plus_months(1)

    def first_day_of_year(self) -> "CivilDateTime":
        return replace(self, month=1, day=1)

    def first_day_of_next_year(self) -> "CivilDateTime":
        return replace(self, year=self.year + 1, month=1, day=1)

    def previous(self, weekday: Weekday) -> "CivilDateTime":
        """Same time on the closest ``weekday`` strictly before this date."""
        delta = (self.iso_weekday - weekday) % 7 or 7
        return self.plus(-delta, TimeUnit.DAY)

    def next(self, weekday: Weekday) -> "CivilDateTime":
        """Same time on the closest ``weekday`` strictly after this date."""
        delta = (weekday - self.iso_weekday) % 7 or 7
        return self.plus(delta, TimeUnit.DAY)

    # -- calendar queries --------------------------------------------------

    @property
    def iso_weekday(self) -> Weekday:
        # 1970-01-01 was a Thursday
        return Weekday((self.epoch_day + 3) % 7 + 1)

    @property
    def day_of_year(self) -> int:
        return self.epoch_day - days_from_civil(self.year, 1, 1) + 1

    def iso_week(self) -> Tuple[int, int]:
        """Return ``(week_based_year, week_number)`` per ISO-8601.

        The week belongs to the year that holds its Thursday.
        """
        thursday = self.epoch_day + Weekday.THURSDAY - self.iso_weekday
        year, _, _ = civil_from_days(thursday)
        week = (thursday - days_from_civil(year, 1, 1)) // 7 + 1
        return year, week


def ensure_supported(civil: CivilDateTime) -> CivilDateTime:
    """Reject civil timestamps outside the four digit year window."""
    if not MIN_YEAR <= civil.year <= MAX_YEAR:
        raise OutOfRange(
            f"year {civil.year} outside supported range {MIN_YEAR}..{MAX_YEAR}",
            details={"year": civil.year},
        )
    return civil
