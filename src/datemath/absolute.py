"""Absolute date and time literals.

Formats are tried in a fixed order and the first one that matches wins:

1. ISO-8601 instant with ``Z`` or an offset (``1974-10-20T00:00:00Z``)
2. ISO local date, midnight in the zone (``1974-10-20``)
3. ISO local date-time, in the zone (``1974-10-20T16:30``)
4. ISO local time, today in the zone (``16:30``)
5. partial year or year-month, first of the month/year (``2014``, ``2014/05``)

A text that matches none of them is not an error here; the evaluator moves
on to relative expressions.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from datemath.civil import CivilDateTime, ensure_supported
from datemath.clock import Clock
from datemath.errors import InvalidExpression, OutOfRange
from datemath.models import Instant
from datemath.zones import Zone, parse_offset

logger = logging.getLogger(__name__)


_DATE = r"(?P<year>[+-]?\d{4,})-(?P<month>\d{2})-(?P<day>\d{2})"
_TIME = r"(?P<hour>\d{2}):(?P<minute>\d{2})(?::(?P<second>\d{2})(?:[.,](?P<fraction>\d{1,9}))?)?"

ISO_INSTANT_PATTERN = re.compile(
    _DATE + "T" + _TIME + r"(?P<offset>Z|[+-]\d{2}(?::?\d{2}(?::?\d{2})?)?)",
    re.IGNORECASE,
)
ISO_LOCAL_DATE_PATTERN = re.compile(_DATE)
ISO_LOCAL_DATE_TIME_PATTERN = re.compile(_DATE + "T" + _TIME, re.IGNORECASE)
ISO_LOCAL_TIME_PATTERN = re.compile(_TIME)

# Separator between year and month is any single non-digit.
YEAR_MONTH_PATTERN = re.compile(r"(?P<year>[0-9]{4})(?:[^0-9](?P<month>[0-9]{2}))?")
WIDE_YEAR_MONTH_PATTERN = re.compile(r"[0-9]{5,}(?:[^0-9][0-9]{2})?")


def parse_absolute(text: str, zone: Zone, clock: Clock) -> Optional[Instant]:
    """Parse ``text`` as an absolute literal, or return ``None``.

    Raises:
        OutOfRange: a literal year has more than four digits
        InvalidExpression: a literal was recognised but a field is invalid
    """
    match = ISO_INSTANT_PATTERN.fullmatch(text)
    if match:
        civil = _civil(match, text)
        offset = _literal_offset(match.group("offset"), text)
        logger.debug(f"Parsed {text!r} as ISO instant")
        return Instant.from_civil(civil, offset)

    match = ISO_LOCAL_DATE_PATTERN.fullmatch(text)
    if match:
        logger.debug(f"Parsed {text!r} as ISO local date")
        return zone.to_instant(_civil(match, text))

    match = ISO_LOCAL_DATE_TIME_PATTERN.fullmatch(text)
    if match:
        logger.debug(f"Parsed {text!r} as ISO local date-time")
        return zone.to_instant(_civil(match, text))

    match = ISO_LOCAL_TIME_PATTERN.fullmatch(text)
    if match:
        today = zone.to_civil(clock.now())
        try:
            civil = today.at_time(
                int(match.group("hour")),
                int(match.group("minute")),
                int(match.group("second") or 0),
                _millis(match.group("fraction")),
            )
        except ValueError as exc:
            raise InvalidExpression(f"invalid time {text!r}: {exc}", details={"text": text}) from exc
        logger.debug(f"Parsed {text!r} as ISO local time")
        return zone.to_instant(civil)

    match = YEAR_MONTH_PATTERN.fullmatch(text)
    if match:
        logger.debug(f"Parsed {text!r} as partial year-month")
        return zone.to_instant(
            _build(text, year=int(match.group("year")), month=int(match.group("month") or 1))
        )

    if WIDE_YEAR_MONTH_PATTERN.fullmatch(text):
        raise OutOfRange(f"year in {text!r} has more than four digits", details={"text": text})

    return None


def _civil(match: re.Match, text: str) -> CivilDateTime:
    year = match.group("year")
    if len(year.lstrip("+-")) > 4:
        raise OutOfRange(f"year in {text!r} has more than four digits", details={"text": text})
    fields = match.groupdict()
    return _build(
        text,
        year=int(year),
        month=int(fields["month"]),
        day=int(fields["day"]),
        hour=int(fields.get("hour") or 0),
        minute=int(fields.get("minute") or 0),
        second=int(fields.get("second") or 0),
        millisecond=_millis(fields.get("fraction")),
    )


def _build(text: str, **fields: int) -> CivilDateTime:
    try:
        civil = CivilDateTime(**fields)
    except ValueError as exc:
        raise InvalidExpression(f"invalid date {text!r}: {exc}", details={"text": text}) from exc
    return ensure_supported(civil)


def _millis(fraction: Optional[str]) -> int:
    # sub-millisecond digits are truncated
    if not fraction:
        return 0
    return int(fraction[:3].ljust(3, "0"))


def _literal_offset(offset: str, text: str) -> int:
    if offset.upper() == "Z":
        return 0
    seconds = parse_offset(offset)
    if seconds is None:
        raise InvalidExpression(f"invalid offset in {text!r}", details={"text": text})
    return seconds
