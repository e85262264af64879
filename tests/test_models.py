"""Unit tests for Instant and DurationToken."""

from datetime import date, datetime, timedelta, timezone

import pytest

from datemath.civil import CivilDateTime, TimeUnit
from datemath.constants import AT_0AD, AT_EPOCH, AT_Y10K, AT_Y2K, AT_Y2K38
from datemath.errors import InvalidDuration, InvalidUnit, OutOfRange
from datemath.models import DurationToken, Instant, parse_duration, to_instant


class TestInstant:
    def test_ordering_and_equality(self):
        assert Instant(1) > Instant(0)
        assert Instant(5) == Instant.of_epoch_millis(5)
        assert sorted([AT_Y10K, AT_EPOCH, AT_0AD]) == [AT_0AD, AT_EPOCH, AT_Y10K]
        assert len({Instant(1), Instant(1)}) == 1

    def test_from_datetime(self):
        aware = datetime(1974, 10, 20, 2, 0, tzinfo=timezone(timedelta(hours=2)))
        assert Instant.from_datetime(aware) == Instant.of_epoch_second(151459200)
        assert Instant.from_datetime(datetime(1974, 10, 20)) == Instant.of_epoch_second(151459200)

    def test_to_datetime(self):
        assert AT_Y2K.to_datetime() == datetime(2000, 1, 1, tzinfo=timezone.utc)
        with pytest.raises(OutOfRange):
            AT_0AD.to_datetime()

    def test_plus_uses_calendar_arithmetic(self):
        jan_31 = to_instant(CivilDateTime(2023, 1, 31))
        assert jan_31.plus(1, TimeUnit.MONTH) == to_instant(CivilDateTime(2023, 2, 28))
        assert AT_Y2K38.plus(10, TimeUnit.DAY).minus(10, TimeUnit.DAY) == AT_Y2K38

    def test_str_is_iso(self):
        assert str(AT_Y2K38) == "2038-01-19T03:14:07.000Z"

    def test_to_instant_accepts_dates(self):
        assert to_instant(date(1974, 10, 20)) == Instant.of_epoch_second(151459200)


class TestConstants:
    def test_values(self):
        assert AT_EPOCH.epoch_millis == 0
        assert AT_Y2K.epoch_millis == 946684800000
        assert AT_Y2K38.epoch_second == 2_147_483_647
        assert AT_0AD.to_civil() == CivilDateTime(0, 1, 1)
        assert AT_Y10K.to_civil() == CivilDateTime(9999, 12, 31)


class TestDurationToken:
    """Duration tokens: optional sign, digits, unit, any whitespace between."""

    @pytest.mark.parametrize(
        "text,amount,unit",
        [
            ("1d", 1, TimeUnit.DAY),
            ("-1d", -1, TimeUnit.DAY),
            ("- 1d", -1, TimeUnit.DAY),
            ("  -  100  y  ", -100, TimeUnit.YEAR),
            ("+2w", 2, TimeUnit.WEEK),
            ("500ms", 500, TimeUnit.MILLISECOND),
            ("10s", 10, TimeUnit.SECOND),
            ("3h", 3, TimeUnit.HOUR),
            ("100m", 100, TimeUnit.MONTH),
        ],
    )
    def test_parse(self, text, amount, unit):
        assert parse_duration(text) == DurationToken(amount, unit)

    def test_unit_is_case_sensitive(self):
        with pytest.raises(InvalidUnit):
            parse_duration("1D")
        with pytest.raises(InvalidUnit):
            parse_duration("1min")

    def test_non_duration_shape_is_no_match(self):
        assert parse_duration("now") is None
        assert parse_duration("d1") is None
        assert parse_duration("1") is None

    def test_strict_parse_raises(self):
        with pytest.raises(InvalidDuration):
            DurationToken.parse("xyz")
        with pytest.raises(InvalidUnit):
            DurationToken.parse("1x")

    def test_invalid_unit_is_an_invalid_duration(self):
        assert issubclass(InvalidUnit, InvalidDuration)

    def test_apply_and_negate(self):
        token = DurationToken(1, TimeUnit.MONTH)
        assert token.apply(CivilDateTime(2024, 1, 31)) == CivilDateTime(2024, 2, 29)
        assert token.negated() == DurationToken(-1, TimeUnit.MONTH)
        assert str(token.negated()) == "-1m"
