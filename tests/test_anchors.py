"""Unit tests for the relative anchor table."""

import pytest

from datemath.anchors import Anchor, normalize_keyword, resolve_anchor
from datemath.civil import CivilDateTime
from datemath.zones import UTC, resolve_zone

# Thursday 2024-02-29 15:45:30.250
NOW = CivilDateTime(2024, 2, 29, 15, 45, 30, 250)


class TestLookup:
    @pytest.mark.parametrize(
        "text,anchor",
        [
            ("now", Anchor.NOW),
            ("NOW", Anchor.NOW),
            ("Day_Before_Yesterday", Anchor.DAY_BEFORE_YESTERDAY),
            ("day_after_tomorrow", Anchor.DAY_AFTER_TOMORROW),
            ("day before  yesterday", Anchor.DAY_BEFORE_YESTERDAY),
            ("beginning_week", Anchor.BEGINNING_WEEK),
            ("Distant_Future", Anchor.DISTANT_FUTURE),
            ("  noon ", Anchor.NOON),
        ],
    )
    def test_case_and_separator_insensitive(self, text, anchor):
        assert Anchor.lookup(text) is anchor

    @pytest.mark.parametrize("text", ["xxx", "day-before-yesterday", "", "1d"])
    def test_unknown_is_no_match(self, text):
        assert Anchor.lookup(text) is None

    def test_normalize_keyword(self):
        assert normalize_keyword(" End__Of\tMonth ") == "end of month"


class TestResolution:
    @pytest.mark.parametrize(
        "anchor,expected",
        [
            (Anchor.NOW, NOW),
            (Anchor.TODAY, CivilDateTime(2024, 2, 29)),
            (Anchor.TOMORROW, CivilDateTime(2024, 3, 1)),
            (Anchor.YESTERDAY, CivilDateTime(2024, 2, 28)),
            (Anchor.DAY_AFTER_TOMORROW, CivilDateTime(2024, 3, 2)),
            (Anchor.DAY_BEFORE_YESTERDAY, CivilDateTime(2024, 2, 27)),
            (Anchor.MORNING, CivilDateTime(2024, 2, 29, 9)),
            (Anchor.MIDNIGHT, CivilDateTime(2024, 2, 29)),
            (Anchor.NOON, CivilDateTime(2024, 2, 29, 12)),
            (Anchor.BEGINNING_MONTH, CivilDateTime(2024, 2, 1)),
            (Anchor.END_MONTH, CivilDateTime(2024, 3, 1)),
            (Anchor.BEGINNING_YEAR, CivilDateTime(2024, 1, 1)),
            (Anchor.END_YEAR, CivilDateTime(2025, 1, 1)),
            (Anchor.BEGINNING_WEEK, CivilDateTime(2024, 2, 25)),
            (Anchor.END_WEEK, CivilDateTime(2024, 3, 3)),
            (Anchor.NEXT_MONTH, CivilDateTime(2024, 3, 29, 15, 45, 30, 250)),
            (Anchor.LAST_MONTH, CivilDateTime(2024, 1, 29, 15, 45, 30, 250)),
            (Anchor.NEXT_YEAR, CivilDateTime(2025, 2, 28, 15, 45, 30, 250)),
            (Anchor.LAST_YEAR, CivilDateTime(2023, 2, 28, 15, 45, 30, 250)),
            (Anchor.MIN, CivilDateTime(0, 1, 1)),
            (Anchor.DISTANT_PAST, CivilDateTime(0, 1, 1)),
            (Anchor.MAX, CivilDateTime(9999, 12, 31)),
            (Anchor.DISTANT_FUTURE, CivilDateTime(9999, 12, 31)),
        ],
    )
    def test_resolve_in_utc(self, anchor, expected):
        assert resolve_anchor(anchor, NOW, UTC) == expected

    def test_every_anchor_resolves(self):
        for anchor in Anchor:
            assert isinstance(resolve_anchor(anchor, NOW, UTC), CivilDateTime)

    def test_min_and_max_are_fixed_instants(self):
        """In other zones min and max still denote the same instants."""
        est = resolve_zone("EST")
        assert resolve_anchor(Anchor.MIN, NOW, est) == CivilDateTime(-1, 12, 31, 19)
        assert resolve_anchor(Anchor.MAX, NOW, est) == CivilDateTime(9999, 12, 30, 19)
