"""Tests for the format_result dispatcher and OutputSettings."""

from __future__ import annotations

import json

from zonepulse.output.formatters import OutputSettings, format_result
from zonepulse.services.result import ServiceError, ServiceResult


def _ok(op: str = "test", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str = "test", msg: str = "fail") -> ServiceResult:
    return ServiceResult(ok=False, op=op, error=ServiceError(code="ERR", message=msg))


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestFormatResultJSON:
    def test_json_mode_returns_valid_json(self) -> None:
        output = format_result(_ok("zone_scores", zone="78704"), json_output=True)
        data = json.loads(output)
        assert data["ok"] is True
        assert data["data"]["zone"] == "78704"

    def test_json_mode_error(self) -> None:
        output = format_result(_err("layer_data", "Bad"), settings=OutputSettings(json_output=True))
        assert json.loads(output)["error"]["message"] == "Bad"

    def test_settings_take_precedence(self) -> None:
        output = format_result(_ok(), settings=OutputSettings(), json_output=True)
        assert not output.startswith("{")


class TestFormatResultQuiet:
    def test_quiet_status_line(self) -> None:
        assert format_result(_ok("db_init"), settings=OutputSettings(quiet=True)) == "OK: db_init"

    def test_quiet_error(self) -> None:
        output = format_result(_err("layer_data", "nope"), settings=OutputSettings(quiet=True))
        assert output.startswith("ERROR: layer_data")


class TestFormatResultHuman:
    def test_generic_fields(self) -> None:
        output = format_result(_ok("db_status", configured=False))
        assert "OK" in output
        assert "configured:" in output
        assert "False" in output
