"""Value types shared by the parser and the formatters.

- ``Instant``: a point on the UTC timeline, as signed epoch milliseconds
- ``DurationToken``: a signed amount of one ``TimeUnit``
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from datemath.civil import CivilDateTime, TimeUnit
from datemath.errors import InvalidDuration, InvalidUnit, OutOfRange

_DATETIME_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# sign, digits and unit may be separated by whitespace: "-  100  y"
DURATION_PATTERN = re.compile(r"^(?P<sign>[+-])?\s*(?P<amount>[0-9]+)\s*(?P<unit>[A-Za-z]+)$")

_UNITS_BY_CODE = {unit.value: unit for unit in TimeUnit}


@dataclass(frozen=True, order=True)
class Instant:
    """Absolute point on the UTC timeline.

    Immutable and totally ordered. Calendar arithmetic goes through
    ``CivilDateTime``; ``plus``/``minus`` do that in UTC.
    """

    epoch_millis: int

    @classmethod
    def of_epoch_millis(cls, epoch_millis: int) -> "Instant":
        return cls(int(epoch_millis))

    @classmethod
    def of_epoch_second(cls, epoch_second: int) -> "Instant":
        return cls(int(epoch_second) * 1000)

    @classmethod
    def from_civil(cls, civil: CivilDateTime, offset_seconds: int = 0) -> "Instant":
        return cls(civil.to_epoch_millis(offset_seconds))

    @classmethod
    def from_datetime(cls, value: datetime) -> "Instant":
        """Convert a ``datetime``; naive values are taken as UTC."""
        if value.tzinfo is None or value.utcoffset() is None:
            return cls.from_civil(CivilDateTime.from_datetime(value))
        offset = value.utcoffset()
        return cls.from_civil(CivilDateTime.from_datetime(value), int(offset.total_seconds()))

    def to_civil(self, offset_seconds: int = 0) -> CivilDateTime:
        return CivilDateTime.from_epoch_millis(self.epoch_millis, offset_seconds)

    def to_datetime(self) -> datetime:
        """Aware UTC ``datetime``; fails for years ``datetime`` cannot hold."""
        try:
            return _DATETIME_EPOCH + timedelta(milliseconds=self.epoch_millis)
        except OverflowError as exc:
            raise OutOfRange(
                f"{self} cannot be represented as a datetime",
                details={"epoch_millis": self.epoch_millis},
            ) from exc

    @property
    def epoch_second(self) -> int:
        return self.epoch_millis // 1000

    def plus(self, amount: int, unit: TimeUnit) -> "Instant":
        return Instant.from_civil(self.to_civil().plus(amount, unit))

    def minus(self, amount: int, unit: TimeUnit) -> "Instant":
        return self.plus(-amount, unit)

    def __str__(self) -> str:
        from datemath.formatting import format_iso_date

        return format_iso_date(self)


@dataclass(frozen=True)
class DurationToken:
    """Signed amount of a single time unit, e.g. ``-100y``.

    Weeks are applied as seven days; months and years are calendar steps.
    """

    amount: int
    unit: TimeUnit

    @classmethod
    def parse(cls, text: str) -> "DurationToken":
        """Parse a duration token or raise.

        Raises:
            InvalidUnit: amount is fine but the unit code is unknown
            InvalidDuration: text does not have the duration shape at all
        """
        token = parse_duration(text)
        if token is None:
            raise InvalidDuration(
                f"illegal duration, should match [-]<digits><unit>: {text!r}",
                details={"text": text},
            )
        return token

    def negated(self) -> "DurationToken":
        return DurationToken(-self.amount, self.unit)

    def apply(self, civil: CivilDateTime) -> CivilDateTime:
        return civil.plus(self.amount, self.unit)

    def __str__(self) -> str:
        return f"{self.amount}{self.unit.value}"


def parse_duration(text: str) -> Optional[DurationToken]:
    """Recognize ``<sign>? <digits> <unit>``; ``None`` when the shape does not match.

    The sign is taken from the text, so ``"- 1d"`` is negative too.

    Raises:
        InvalidUnit: the shape matches but the unit code is not in the table
    """
    match = DURATION_PATTERN.match(text.strip())
    if not match:
        return None
    unit = _UNITS_BY_CODE.get(match.group("unit"))
    if unit is None:
        raise InvalidUnit(
            f"illegal time unit {match.group('unit')!r}, should be one of "
            f"[{'|'.join(_UNITS_BY_CODE)}]",
            details={"text": text, "unit": match.group("unit")},
        )
    amount = int(match.group("amount"))
    if match.group("sign") == "-":
        amount = -amount
    return DurationToken(amount, unit)


def to_instant(value: CivilDateTime | datetime | date) -> Instant:
    """Interpret civil fields (or a naive ``datetime``/``date``) as UTC."""
    if isinstance(value, CivilDateTime):
        return Instant.from_civil(value)
    if isinstance(value, datetime):
        return Instant.from_datetime(value)
    return Instant.from_civil(CivilDateTime.from_datetime(value))
