"""Typed settings for the datemath command line and embedding services.

Settings are kept in pydantic models so every consumer gets a validated zone
and locale. They can be persisted as JSON and overridden from the
environment (``DATEMATH_ZONE``, ``DATEMATH_LOCALE``, ``DATEMATH_NOW``).
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from datemath.clock import FixedClock
from datemath.errors import AmbiguousZone, DateMathError, InvalidConfigError
from datemath.expressions import DateMathParser, parse
from datemath.zones import resolve_zone


DEFAULT_CONFIG_PATH = Path.home() / ".datemath" / "config.json"

ENV_OVERRIDES = {
    "default_zone": "DATEMATH_ZONE",
    "locale": "DATEMATH_LOCALE",
    "pinned_now": "DATEMATH_NOW",
}


class DateMathSettings(BaseModel):
    """Evaluation defaults."""

    default_zone: str = Field("UTC", description="Zone for relative expressions")
    locale: str = Field("en", description="Locale for month names")
    pinned_now: Optional[str] = Field(
        default=None, description="Expression that freezes 'now', e.g. 2020-01-01T00:00:00Z"
    )

    @field_validator("default_zone")
    def _validate_zone(cls, value: str) -> str:
        try:
            resolve_zone(value)
        except AmbiguousZone as exc:
            raise ValueError(str(exc)) from exc
        return value

    @field_validator("locale")
    def _validate_locale(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("locale must not be empty")
        return value

    @field_validator("pinned_now")
    def _validate_pinned_now(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        try:
            parse(value)
        except DateMathError as exc:
            raise ValueError(f"pinned_now is not a valid expression: {exc}") from exc
        return value


class Settings(BaseModel):
    """Root configuration state."""

    datemath: DateMathSettings = Field(default_factory=DateMathSettings)

    def build_parser(self) -> DateMathParser:
        """Parser in the configured zone; a pinned "now" becomes a fixed clock."""
        zone = resolve_zone(self.datemath.default_zone)
        clock = None
        if self.datemath.pinned_now:
            clock = FixedClock(parse(self.datemath.pinned_now, zone))
        return DateMathParser(zone, clock)


def load_settings(path: Path = DEFAULT_CONFIG_PATH) -> Settings:
    """Load settings from disk or raise if invalid."""

    if not path.exists():
        raise FileNotFoundError(f"Settings file not found at {path}")
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        return Settings.model_validate(payload)
    except (ValidationError, json.JSONDecodeError) as exc:
        raise InvalidConfigError(
            f"Invalid configuration: {exc}", details={"path": str(path)}
        ) from exc


def save_settings(settings: Settings, path: Path = DEFAULT_CONFIG_PATH) -> None:
    """Persist settings to disk."""

    payload = settings.model_dump(mode="json")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def bootstrap_settings(
    *,
    path: Path = DEFAULT_CONFIG_PATH,
    overrides: Optional[Dict[str, Any]] = None,
    persist: bool = True,
) -> Settings:
    """Create or load settings, then apply explicit and environment overrides."""

    overrides = overrides or {}

    if path.exists():
        settings = load_settings(path)
    else:
        settings = Settings()
        if persist:
            save_settings(settings, path)

    merged = settings.model_dump(mode="python")
    merged["datemath"].update(overrides)
    _apply_env_overrides(merged["datemath"])

    try:
        resolved = Settings.model_validate(merged)
    except ValidationError as exc:
        raise InvalidConfigError(f"Invalid configuration: {exc}") from exc
    if persist and overrides:
        save_settings(resolved, path)
    return resolved


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    for key, env_name in ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw is not None:
            data[key] = raw
    return data
