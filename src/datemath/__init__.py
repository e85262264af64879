"""Date math: evaluate expressions like ``now-1y`` or ``yesterday + 100y`` to instants.

Expressions combine absolute literals (``2014-05``, ``16:30``,
``1974-10-20T00:00:00Z``), named anchors (``now``, ``yesterday``,
``beginning_week``) and durations (``-1d``, ``100y``). Results are
``Instant`` values on the UTC timeline; the formatters render them back as
stable ISO-8601 text.

Usage:
    from datemath import parse, format_iso_date

    format_iso_date(parse("1974-10-20"))      # '1974-10-20T00:00:00.000Z'
    parse("16:30", "EST")                     # today 21:30 UTC
"""

from datemath.civil import CivilDateTime, TimeUnit, Weekday
from datemath.clock import Clock, FixedClock, SystemClock
from datemath.constants import AT_0AD, AT_EPOCH, AT_Y2K, AT_Y2K38, AT_Y10K
from datemath.errors import (
    AmbiguousZone,
    DateMathError,
    InvalidDuration,
    InvalidExpression,
    InvalidUnit,
    OutOfRange,
)
from datemath.expressions import DateMathParser, is_valid, parse
from datemath.formatting import (
    format_iso_date,
    format_iso_date_no_ms,
    format_iso_date_now,
    format_simple_iso_timestamp,
    now,
    render_month_year,
    render_week_year,
)
from datemath.models import DurationToken, Instant, to_instant
from datemath.zones import UTC, Zone, resolve_zone

__version__ = "1.0.0"

__all__ = [
    # Evaluation
    "parse",
    "is_valid",
    "DateMathParser",
    # Values
    "Instant",
    "CivilDateTime",
    "DurationToken",
    "TimeUnit",
    "Weekday",
    "to_instant",
    # Zones and clocks
    "Zone",
    "UTC",
    "resolve_zone",
    "Clock",
    "SystemClock",
    "FixedClock",
    # Formatting
    "format_iso_date",
    "format_iso_date_no_ms",
    "format_iso_date_now",
    "format_simple_iso_timestamp",
    "render_month_year",
    "render_week_year",
    "now",
    # Constants
    "AT_EPOCH",
    "AT_0AD",
    "AT_Y2K",
    "AT_Y2K38",
    "AT_Y10K",
    # Errors
    "DateMathError",
    "InvalidExpression",
    "InvalidDuration",
    "InvalidUnit",
    "OutOfRange",
    "AmbiguousZone",
]
