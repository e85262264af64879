"""Zone resolution on top of ``dateutil.tz``.

A ``Zone`` converts between an ``Instant`` and the civil fields seen in that
zone. Offsets are looked up through the tz database at the moment of
conversion; nothing is cached beyond what ``dateutil`` itself caches.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Optional, Union

from dateutil import tz

from datemath.civil import MILLIS_PER_SECOND, CivilDateTime
from datemath.errors import AmbiguousZone
from datemath.models import Instant

logger = logging.getLogger(__name__)


# Classic three letter ids. Three of them are fixed offsets, the rest are
# aliases of region ids.
SHORT_IDS = {
    "ACT": "Australia/Darwin",
    "AET": "Australia/Sydney",
    "AGT": "America/Argentina/Buenos_Aires",
    "ART": "Africa/Cairo",
    "AST": "America/Anchorage",
    "BET": "America/Sao_Paulo",
    "BST": "Asia/Dhaka",
    "CAT": "Africa/Harare",
    "CNT": "America/St_Johns",
    "CST": "America/Chicago",
    "CTT": "Asia/Shanghai",
    "EAT": "Africa/Addis_Ababa",
    "ECT": "Europe/Paris",
    "EST": "-05:00",
    "HST": "-10:00",
    "IET": "America/Indiana/Indianapolis",
    "IST": "Asia/Kolkata",
    "JST": "Asia/Tokyo",
    "MIT": "Pacific/Apia",
    "MST": "-07:00",
    "NET": "Asia/Yerevan",
    "NST": "Pacific/Auckland",
    "PLT": "Asia/Karachi",
    "PNT": "America/Phoenix",
    "PRT": "America/Puerto_Rico",
    "PST": "America/Los_Angeles",
    "SST": "Pacific/Guadalcanal",
    "VST": "Asia/Ho_Chi_Minh",
}

_UTC_NAMES = {"Z", "UTC", "GMT", "UT"}

OFFSET_PATTERN = re.compile(
    r"^(?:UTC|GMT|UT)?(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?(?::?(?P<seconds>\d{2}))?$",
    re.IGNORECASE,
)

_DATETIME_EPOCH = datetime(1970, 1, 1, tzinfo=tz.UTC)
# Probe range for tz database lookups; civil times outside use the nearest edge.
_PROBE_MIN_MILLIS = -62135596800000 + 86400000  # 0001-01-02T00:00Z
_PROBE_MAX_MILLIS = 253402214400000 - 86400000  # 9999-12-30T00:00Z


def parse_offset(text: str) -> Optional[int]:
    """Offset in seconds east of UTC for ``+02:00``, ``-0530``, ``UTC+2``; ``None`` otherwise."""
    match = OFFSET_PATTERN.match(text)
    if not match:
        return None
    hours = int(match.group("hours"))
    minutes = int(match.group("minutes") or 0)
    seconds = int(match.group("seconds") or 0)
    if hours > 18 or minutes > 59 or seconds > 59:
        return None
    total = hours * 3600 + minutes * 60 + seconds
    return -total if match.group("sign") == "-" else total


def format_offset(offset_seconds: int) -> str:
    if offset_seconds == 0:
        return "Z"
    sign = "-" if offset_seconds < 0 else "+"
    hours, rest = divmod(abs(offset_seconds), 3600)
    minutes, seconds = divmod(rest, 60)
    text = f"{sign}{hours:02d}:{minutes:02d}"
    if seconds:
        text += f":{seconds:02d}"
    return text


@dataclass(frozen=True)
class Zone:
    """Either a fixed UTC offset or a tz database zone."""

    zone_id: str
    tzinfo: tzinfo
    fixed_offset: Optional[int] = None

    @classmethod
    def of_offset(cls, offset_seconds: int) -> "Zone":
        if offset_seconds == 0:
            return UTC
        return cls(format_offset(offset_seconds), tz.tzoffset(None, offset_seconds), offset_seconds)

    @property
    def is_fixed(self) -> bool:
        return self.fixed_offset is not None

    def offset_at_instant(self, instant: Instant) -> int:
        """Offset in seconds east of UTC in effect at ``instant``."""
        if self.fixed_offset is not None:
            return self.fixed_offset
        millis = min(max(instant.epoch_millis, _PROBE_MIN_MILLIS), _PROBE_MAX_MILLIS)
        probe = (_DATETIME_EPOCH + timedelta(milliseconds=millis)).astimezone(self.tzinfo)
        return int(probe.utcoffset().total_seconds())

    def to_civil(self, instant: Instant) -> CivilDateTime:
        return instant.to_civil(self.offset_at_instant(instant))

    def to_instant(self, civil: CivilDateTime, preferred_offset: Optional[int] = None) -> Instant:
        """Resolve ``civil`` to an instant using the offset in effect at ``civil``.

        Civil times inside a DST gap are moved forward by the length of the
        gap. Inside an overlap ``preferred_offset`` is kept when it is one of
        the two valid offsets, otherwise the earlier offset wins.
        """
        if self.fixed_offset is not None:
            return Instant.from_civil(civil, self.fixed_offset)
        probe = self._probe(civil)
        if not tz.datetime_exists(probe):
            resolved = tz.resolve_imaginary(probe)
            gap = resolved.replace(tzinfo=None) - probe.replace(tzinfo=None)
            offset = int(resolved.utcoffset().total_seconds())
            return Instant(
                civil.to_epoch_millis(offset) + int(gap.total_seconds()) * MILLIS_PER_SECOND
            )
        if preferred_offset is not None and tz.datetime_ambiguous(probe):
            later = tz.enfold(probe, fold=1)
            if int(later.utcoffset().total_seconds()) == preferred_offset:
                return Instant.from_civil(civil, preferred_offset)
        return Instant.from_civil(civil, int(probe.utcoffset().total_seconds()))

    def _probe(self, civil: CivilDateTime) -> datetime:
        year = min(max(civil.year, 2), 9998)
        day = civil.day
        if year != civil.year and civil.month == 2:
            day = min(day, 28)
        return datetime(
            year, civil.month, day, civil.hour, civil.minute, civil.second, tzinfo=self.tzinfo
        )

    def __str__(self) -> str:
        return self.zone_id


UTC = Zone("Z", tz.UTC, 0)

ZoneLike = Union[Zone, tzinfo, str, None]


def resolve_zone(zone: ZoneLike) -> Zone:
    """Resolve a zone identifier, ``tzinfo`` or ``Zone`` to a ``Zone``.

    ``None`` and ``"Z"``/``"UTC"`` are UTC. Offsets like ``"+02:00"`` become
    fixed zones; short ids like ``"EST"`` follow ``SHORT_IDS``; anything else
    is looked up in the tz database.

    Raises:
        AmbiguousZone: the identifier cannot be resolved
    """
    if zone is None:
        return UTC
    if isinstance(zone, Zone):
        return zone
    if isinstance(zone, tzinfo):
        return _from_tzinfo(zone)

    zone_id = zone.strip()
    if not zone_id:
        raise AmbiguousZone("empty zone id")
    if zone_id.upper() in _UTC_NAMES:
        return UTC

    offset = parse_offset(zone_id)
    if offset is not None:
        return Zone.of_offset(offset)

    alias = SHORT_IDS.get(zone_id)
    if alias is not None:
        logger.debug(f"Zone {zone_id} resolved through short id to {alias}")
        resolved = resolve_zone(alias)
        return Zone(zone_id, resolved.tzinfo, resolved.fixed_offset)

    # tz.gettz reads absolute and relative paths as zone files
    if zone_id.startswith("/") or ".." in zone_id:
        raise AmbiguousZone(f"unknown time zone {zone_id!r}", details={"zone": zone_id})
    try:
        tzinfo_ = tz.gettz(zone_id)
    except (ValueError, OSError) as exc:
        raise AmbiguousZone(
            f"unknown time zone {zone_id!r}: {exc}", details={"zone": zone_id}
        ) from exc
    if tzinfo_ is None:
        raise AmbiguousZone(f"unknown time zone {zone_id!r}", details={"zone": zone_id})
    return Zone(zone_id, tzinfo_)


def _from_tzinfo(value: tzinfo) -> Zone:
    if isinstance(value, tz.tzutc):
        return UTC
    # datetime.timezone and tz.tzoffset answer without a datetime
    fixed = value.utcoffset(None)
    if fixed is not None:
        return Zone.of_offset(int(fixed.total_seconds()))
    name = getattr(value, "key", None) or getattr(value, "zone", None) or str(value)
    return Zone(name, value)
