"""Shared fixtures for datemath tests.

Provides:
- A fixed clock so relative expressions can be asserted exactly
- Isolation from DATEMATH_* environment overrides
"""

from __future__ import annotations

import pytest

from datemath.clock import FixedClock
from datemath.configuration.settings import ENV_OVERRIDES
from datemath.models import Instant
from datemath.absolute import parse_absolute
from datemath.zones import UTC


# Thursday, leap day, afternoon in UTC
FIXED_NOW_TEXT = "2024-02-29T15:45:30.250Z"


def instant(text: str) -> Instant:
    """Decode an ISO instant without going through the evaluator."""
    value = parse_absolute(text, UTC, FixedClock(Instant(0)))
    assert value is not None, text
    return value


@pytest.fixture
def fixed_now() -> Instant:
    return instant(FIXED_NOW_TEXT)


@pytest.fixture
def clock(fixed_now: Instant) -> FixedClock:
    return FixedClock(fixed_now)


@pytest.fixture(autouse=True)
def _clear_env_overrides(monkeypatch):
    for env_name in ENV_OVERRIDES.values():
        monkeypatch.delenv(env_name, raising=False)


@pytest.fixture
def iso():
    """Callable decoding ISO instants, for building expected values."""
    return instant
