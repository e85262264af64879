"""Unit tests for ISO formatting and month/week rendering."""

from datetime import date, datetime, timedelta, timezone

import pytest

from datemath.civil import CivilDateTime
from datemath.clock import FixedClock
from datemath.constants import AT_0AD, AT_Y2K38
from datemath.expressions import parse
from datemath.formatting import (
    format_iso_date,
    format_iso_date_no_ms,
    format_iso_date_now,
    format_simple_iso_timestamp,
    month_name,
    now,
    render_month_year,
    render_week_year,
)
from datemath.models import Instant, to_instant


class TestIsoFormatting:
    """Three fractional digits, always, and always UTC."""

    def test_literal_scenarios(self):
        parsed = parse("1974-10-20")
        assert format_iso_date(parsed) == "1974-10-20T00:00:00.000Z"
        assert format_iso_date_no_ms(parsed) == "1974-10-20T00:00:00Z"
        assert format_simple_iso_timestamp(parsed) == "19741020000000"

    def test_whole_seconds_keep_fraction(self):
        assert format_iso_date(AT_Y2K38) == "2038-01-19T03:14:07.000Z"
        assert format_iso_date(Instant(1)) == "1970-01-01T00:00:00.001Z"

    def test_no_ms_drops_millis(self):
        assert format_iso_date_no_ms(Instant(1999)) == "1970-01-01T00:00:01Z"

    def test_years_outside_datetime_range(self):
        assert format_iso_date(AT_0AD) == "0000-01-01T00:00:00.000Z"
        assert format_iso_date(to_instant(CivilDateTime(-44, 3, 15))) == "-0044-03-15T00:00:00.000Z"

    def test_accepts_other_time_values(self):
        assert format_iso_date(date(1974, 10, 20)) == "1974-10-20T00:00:00.000Z"
        assert format_iso_date(datetime(1984, 12, 1)) == "1984-12-01T00:00:00.000Z"
        aware = datetime(1984, 12, 1, 2, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_iso_date(aware) == "1984-12-01T00:00:00.000Z"
        assert format_iso_date(0) == "1970-01-01T00:00:00.000Z"

    def test_rejects_unknown_types(self):
        with pytest.raises(TypeError):
            format_iso_date("1974-10-20")

    def test_now_helpers(self):
        clock = FixedClock(AT_Y2K38)
        assert now(clock) == AT_Y2K38
        assert format_iso_date_now(clock) == "2038-01-19T03:14:07.000Z"


class TestRendering:
    def test_month_year(self):
        ts = parse("1974-10-20T00:00:00Z")
        assert render_month_year(ts, "UTC", "en") == "October, 1974"

    def test_week_year(self):
        ts = parse("1974-10-20T00:00:00Z")
        assert render_week_year(ts, "UTC", "en") == "42, 1974"

    def test_zone_changes_month(self):
        ts = parse("1974-10-31T23:30:00Z")
        assert render_month_year(ts, "UTC", "en") == "October, 1974"
        assert render_month_year(ts, "+02:00", "en") == "November, 1974"

    def test_week_uses_week_based_year(self):
        assert render_week_year(parse("2024-12-30"), "UTC", "en") == "1, 2025"
        assert render_week_year(parse("2021-01-01"), "UTC", "en") == "53, 2020"

    @pytest.mark.parametrize(
        "locale,expected",
        [
            ("en", "October"),
            ("en_US", "October"),
            ("de", "Oktober"),
            ("de-DE", "Oktober"),
            ("fi_FI.UTF-8", "lokakuu"),
            ("fr", "octobre"),
            ("xx", "October"),
            (None, "October"),
        ],
    )
    def test_locale_only_affects_month_name(self, locale, expected):
        ts = parse("1974-10-20T00:00:00Z")
        assert render_month_year(ts, None, locale) == f"{expected}, 1974"
        assert render_week_year(ts, None, locale) == "42, 1974"

    def test_month_name(self):
        assert month_name(1) == "January"
        assert month_name(12, "nl") == "december"
