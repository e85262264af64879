"""Evaluation of date math expressions.

Grammar, first matching rule wins and there is no backtracking between rules:

    expression := absolute                     "2014-05", "10:00", "1974-10-20T00:00:00Z"
                | expression ("+"|"-") duration   "yesterday - 100y", "10:00 -1d"
                | anchor                       "now", "beginning_week"
                | duration                     "-1d", "  -  100  y  "
    duration   := ["-"|"+"] digits unit        unit in ms s h d w m y

A sum is split on its last operator, so the left side may itself be a sum
("now - 1d + 2h") but the right side is always a single duration.

Relative parts are evaluated as civil time in the parser's zone and converted
back to an instant with the offset in effect where the arithmetic lands.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Tuple

from datemath.absolute import parse_absolute
from datemath.anchors import Anchor, resolve_anchor
from datemath.civil import CivilDateTime, ensure_supported
from datemath.clock import SYSTEM_CLOCK, Clock
from datemath.errors import DateMathError, InvalidExpression
from datemath.models import DurationToken, Instant, parse_duration
from datemath.zones import ZoneLike, resolve_zone

logger = logging.getLogger(__name__)

# Greedy left side: the split happens on the last operator.
SUM_PATTERN = re.compile(r"(?P<left>.*\S)\s*(?P<operator>[+-])\s*(?P<right>\S.*)", re.DOTALL)


def split_sum(text: str) -> Optional[Tuple[str, str, str]]:
    """Split ``text`` into ``(left, operator, right)`` or return ``None``."""
    match = SUM_PATTERN.fullmatch(text)
    if not match:
        return None
    return match.group("left").strip(), match.group("operator"), match.group("right").strip()


class DateMathParser:
    """Evaluates expressions in a fixed zone against a clock.

    The clock is read each time "now" is needed, so two anchors in one
    expression may see slightly different instants unless the clock is fixed.

    Example:
        >>> parser = DateMathParser("Europe/Helsinki", FixedClock(AT_Y2K))
        >>> str(parser.parse("tomorrow"))
        '2000-01-01T22:00:00.000Z'
    """

    def __init__(self, zone: ZoneLike = None, clock: Optional[Clock] = None):
        self.zone = resolve_zone(zone)
        self.clock = clock or SYSTEM_CLOCK

    def parse(self, text: Optional[str]) -> Instant:
        """Evaluate ``text`` to an instant.

        Raises:
            InvalidExpression: empty text or no rule matches
            InvalidDuration: right side of a sum is not a duration
            InvalidUnit: a duration uses an unknown unit
            OutOfRange: the result falls outside years -9999..9999
        """
        if text is None or not text.strip():
            raise InvalidExpression("cannot parse empty string")
        return self._evaluate(text.strip())

    def is_valid(self, text: Optional[str]) -> bool:
        try:
            self.parse(text)
        except DateMathError:
            return False
        return True

    def _evaluate(self, text: str) -> Instant:
        instant = parse_absolute(text, self.zone, self.clock)
        if instant is not None:
            return instant

        parts = split_sum(text)
        if parts is not None:
            left, operator, right = parts
            token = DurationToken.parse(right)
            if operator == "-":
                token = token.negated()
            base = self._evaluate(left)
            offset = self.zone.offset_at_instant(base)
            logger.debug(f"Evaluated {text!r} as sum of {left!r} and {token}")
            return self._to_instant(token.apply(base.to_civil(offset)), offset)

        anchor = Anchor.lookup(text)
        if anchor is not None:
            logger.debug(f"Evaluated {text!r} as anchor {anchor.name}")
            now, offset = self._now()
            return self._to_instant(resolve_anchor(anchor, now, self.zone), offset)

        token = parse_duration(text)
        if token is not None:
            logger.debug(f"Evaluated {text!r} as duration {token} from now")
            now, offset = self._now()
            return self._to_instant(token.apply(now), offset)

        raise InvalidExpression(f"illegal time expression {text!r}", details={"text": text})

    def _now(self) -> Tuple[CivilDateTime, int]:
        """Current civil time in the zone and the offset it was read with."""
        instant = self.clock.now()
        offset = self.zone.offset_at_instant(instant)
        return instant.to_civil(offset), offset

    def _to_instant(self, civil: CivilDateTime, offset: Optional[int] = None) -> Instant:
        # the starting offset survives a DST overlap at the landing point
        return self.zone.to_instant(ensure_supported(civil), offset)


def parse(text: Optional[str], zone: ZoneLike = None, *, clock: Optional[Clock] = None) -> Instant:
    """Evaluate ``text``; relative parts are interpreted in ``zone`` (UTC by default)."""
    return DateMathParser(zone, clock).parse(text)


def is_valid(text: Optional[str], zone: ZoneLike = None, *, clock: Optional[Clock] = None) -> bool:
    """``True`` when ``text`` parses; every datemath failure becomes ``False``."""
    try:
        parse(text, zone, clock=clock)
    except DateMathError:
        return False
    return True
