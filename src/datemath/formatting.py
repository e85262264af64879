"""Rendering instants as text.

ISO output is always UTC and always carries exactly three fractional digits,
so formatted timestamps sort and compare as strings regardless of whether
the instant happens to fall on a whole second.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Optional, Union

from datemath.civil import CivilDateTime
from datemath.clock import SYSTEM_CLOCK, Clock
from datemath.models import Instant, to_instant
from datemath.zones import ZoneLike, resolve_zone

logger = logging.getLogger(__name__)

InstantLike = Union[Instant, datetime, date, int]

DEFAULT_LOCALE = "en"

MONTH_NAMES = {
    "en": ("January", "February", "March", "April", "May", "June",
           "July", "August", "September", "October", "November", "December"),
    "de": ("Januar", "Februar", "März", "April", "Mai", "Juni",
           "Juli", "August", "September", "Oktober", "November", "Dezember"),
    "nl": ("januari", "februari", "maart", "april", "mei", "juni",
           "juli", "augustus", "september", "oktober", "november", "december"),
    "fr": ("janvier", "février", "mars", "avril", "mai", "juin",
           "juillet", "août", "septembre", "octobre", "novembre", "décembre"),
    "es": ("enero", "febrero", "marzo", "abril", "mayo", "junio",
           "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre"),
    "it": ("gennaio", "febbraio", "marzo", "aprile", "maggio", "giugno",
           "luglio", "agosto", "settembre", "ottobre", "novembre", "dicembre"),
    "pt": ("janeiro", "fevereiro", "março", "abril", "maio", "junho",
           "julho", "agosto", "setembro", "outubro", "novembro", "dezembro"),
    "sv": ("januari", "februari", "mars", "april", "maj", "juni",
           "juli", "augusti", "september", "oktober", "november", "december"),
    "fi": ("tammikuu", "helmikuu", "maaliskuu", "huhtikuu", "toukokuu", "kesäkuu",
           "heinäkuu", "elokuu", "syyskuu", "lokakuu", "marraskuu", "joulukuu"),
}

_LOCALE_SEPARATORS = re.compile(r"[-_.@]")


def _coerce(value: InstantLike) -> Instant:
    if isinstance(value, Instant):
        return value
    if isinstance(value, int):
        return Instant.of_epoch_millis(value)
    if isinstance(value, (datetime, date)):
        return to_instant(value)
    raise TypeError(f"cannot format {type(value).__name__} as an instant")


def _format_year(year: int) -> str:
    if year > 9999:
        return f"+{year}"
    if year < 0:
        return f"-{-year:04d}"
    return f"{year:04d}"


def _utc_fields(value: InstantLike) -> CivilDateTime:
    return _coerce(value).to_civil()


def format_iso_date(value: InstantLike) -> str:
    """Render as ``1974-10-20T00:00:00.000Z``, three fractional digits always.

    Accepts an ``Instant``, epoch milliseconds, an aware ``datetime``, or a
    naive ``datetime``/``date`` taken as UTC.
    """
    c = _utc_fields(value)
    return (
        f"{_format_year(c.year)}-{c.month:02d}-{c.day:02d}"
        f"T{c.hour:02d}:{c.minute:02d}:{c.second:02d}.{c.millisecond:03d}Z"
    )


def format_iso_date_no_ms(value: InstantLike) -> str:
    """Render as ``1974-10-20T00:00:00Z``; milliseconds are dropped."""
    c = _utc_fields(value)
    return (
        f"{_format_year(c.year)}-{c.month:02d}-{c.day:02d}"
        f"T{c.hour:02d}:{c.minute:02d}:{c.second:02d}Z"
    )


def format_simple_iso_timestamp(value: InstantLike) -> str:
    """Render as ``19741020000000`` in UTC."""
    c = _utc_fields(value)
    return (
        f"{_format_year(c.year)}{c.month:02d}{c.day:02d}"
        f"{c.hour:02d}{c.minute:02d}{c.second:02d}"
    )


def now(clock: Optional[Clock] = None) -> Instant:
    return (clock or SYSTEM_CLOCK).now()


def format_iso_date_now(clock: Optional[Clock] = None) -> str:
    return format_iso_date(now(clock))


def month_name(month: int, locale: Optional[str] = None) -> str:
    """Full month name for ``month`` (1-12) in ``locale``; English if unknown."""
    language = _LOCALE_SEPARATORS.split(locale or DEFAULT_LOCALE)[0].lower()
    names = MONTH_NAMES.get(language)
    if names is None:
        logger.debug(f"No month names for locale {locale!r}, using {DEFAULT_LOCALE}")
        names = MONTH_NAMES[DEFAULT_LOCALE]
    return names[month - 1]


def render_month_year(instant: InstantLike, zone: ZoneLike = None, locale: Optional[str] = None) -> str:
    """``"October, 1974"``: month name and year of ``instant`` in ``zone``."""
    civil = resolve_zone(zone).to_civil(_coerce(instant))
    return f"{month_name(civil.month, locale)}, {civil.year}"


def render_week_year(instant: InstantLike, zone: ZoneLike = None, locale: Optional[str] = None) -> str:
    """``"42, 1974"``: ISO week number and week-based year of ``instant`` in ``zone``.

    ``locale`` is accepted for symmetry with :func:`render_month_year`; week
    numbering does not depend on it.
    """
    civil = resolve_zone(zone).to_civil(_coerce(instant))
    week_year, week = civil.iso_week()
    return f"{week}, {week_year}"
