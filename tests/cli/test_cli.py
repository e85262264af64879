"""Tests for the datemath command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from datemath.cli import cli


runner = CliRunner()

PINNED_NOW = "2024-02-29T15:45:30.250Z"


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "config.json"


@pytest.fixture
def pinned(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATEMATH_NOW", PINNED_NOW)


def _invoke(*args: str):
    return runner.invoke(cli, list(args))


class TestParseCommand:
    def test_parse_literal(self, config_path: Path) -> None:
        result = _invoke("parse", "1974-10-20", "--config-path", str(config_path))
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "1974-10-20T00:00:00.000Z"

    @pytest.mark.parametrize(
        "output_format,expected",
        [
            ("iso", "1974-10-20T00:00:00.000Z"),
            ("no-ms", "1974-10-20T00:00:00Z"),
            ("simple", "19741020000000"),
            ("millis", "151459200000"),
        ],
    )
    def test_formats(self, config_path: Path, output_format: str, expected: str) -> None:
        result = _invoke(
            "parse", "1974-10-20", "--format", output_format, "--config-path", str(config_path)
        )
        assert result.exit_code == 0, result.output
        assert result.output.strip() == expected

    def test_pinned_now_from_environment(self, config_path: Path, pinned: None) -> None:
        result = _invoke("parse", "yesterday", "--config-path", str(config_path))
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "2024-02-28T00:00:00.000Z"

    def test_zone_option(self, config_path: Path, pinned: None) -> None:
        result = _invoke("parse", "16:30", "--zone", "EST", "--config-path", str(config_path))
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "2024-02-29T21:30:00.000Z"

    def test_json_output(self, config_path: Path, pinned: None) -> None:
        result = _invoke("parse", "now - 1d", "--json", "--config-path", str(config_path))
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["expression"] == "now - 1d"
        assert payload["zone"] == "Z"
        assert payload["instant"] == "2024-02-28T15:45:30.250Z"

    def test_parse_does_not_create_config(self, config_path: Path) -> None:
        _invoke("parse", "2014", "--config-path", str(config_path))
        assert not config_path.exists()

    def test_invalid_expression_exits_nonzero(self, config_path: Path) -> None:
        result = _invoke("parse", "xxx", "--config-path", str(config_path))
        assert result.exit_code == 1
        assert "INVALID_EXPRESSION" in result.output

    def test_invalid_unit_reported(self, config_path: Path) -> None:
        result = _invoke("parse", "now-1Y", "--config-path", str(config_path))
        assert result.exit_code == 1
        assert "INVALID_UNIT" in result.output

    def test_unknown_zone_reported(self, config_path: Path) -> None:
        result = _invoke("parse", "now", "--zone", "Nowhere/Atlantis", "--config-path", str(config_path))
        assert result.exit_code == 1
        assert "AMBIGUOUS_ZONE" in result.output


class TestOtherCommands:
    def test_validate(self, config_path: Path) -> None:
        ok = _invoke("validate", "yesterday - 100y", "--config-path", str(config_path))
        assert ok.exit_code == 0
        assert "valid" in ok.output

        bad = _invoke("validate", "1d + now", "--config-path", str(config_path))
        assert bad.exit_code == 1
        assert "invalid" in bad.output

    def test_render(self, config_path: Path) -> None:
        result = _invoke(
            "render", "1974-10-20T00:00:00Z", "--locale", "de", "--config-path", str(config_path)
        )
        assert result.exit_code == 0, result.output
        assert "Month: Oktober, 1974" in result.output
        assert "Week:  42, 1974" in result.output

    def test_constants(self) -> None:
        result = _invoke("constants")
        assert result.exit_code == 0, result.output
        assert "AT_Y2K38" in result.output
        assert "2038-01-19T03:14:07.000Z" in result.output


class TestConfigCommands:
    def test_init_and_show(self, config_path: Path) -> None:
        result = _invoke("config", "init", "--config-path", str(config_path), "--zone", "Europe/Helsinki")
        assert result.exit_code == 0, result.output
        assert config_path.exists()

        shown = _invoke("config", "show", "--config-path", str(config_path))
        assert shown.exit_code == 0
        assert json.loads(shown.output)["datemath"]["default_zone"] == "Europe/Helsinki"

    def test_corrupt_file_is_reported(self, config_path: Path) -> None:
        config_path.write_text("{not json")
        result = _invoke("config", "show", "--config-path", str(config_path))
        assert result.exit_code == 1
        assert "INVALID_CONFIG" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

        result = _invoke("config", "set", "datemath.locale", "fi", "--config-path", str(config_path))
        assert result.exit_code == 1
        assert "INVALID_CONFIG" in result.output
        assert config_path.read_text() == "{not json"

    def test_init_rejects_unknown_zone(self, config_path: Path) -> None:
        result = _invoke("config", "init", "--config-path", str(config_path), "--zone", "Nowhere/Atlantis")
        assert result.exit_code == 1

    def test_set_updates_file(self, config_path: Path) -> None:
        result = _invoke("config", "set", "datemath.locale", "fi", "--config-path", str(config_path))
        assert result.exit_code == 0, result.output
        data = json.loads(config_path.read_text())
        assert data["datemath"]["locale"] == "fi"

        render = _invoke("render", "1974-10-20", "--config-path", str(config_path))
        assert "Month: lokakuu, 1974" in render.output

    def test_set_rejects_invalid_zone(self, config_path: Path) -> None:
        result = _invoke(
            "config", "set", "datemath.default_zone", "Nowhere/Atlantis", "--config-path", str(config_path)
        )
        assert result.exit_code == 1
        assert not config_path.exists()
