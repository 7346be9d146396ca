"""Tests for the db command group."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from zonepulse.cli import cli


class TestDbInit:
    def test_requires_url(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "db", "init"])
        assert result.exit_code == 1

    def test_creates_store(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        url = f"sqlite:///{tmp_path / 'pulse.db'}"
        result = cli_runner.invoke(cli, ["--json", "--db", url, "db", "init"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["revision"] == "001_pulse_tables"

        status = cli_runner.invoke(cli, ["--json", "--db", url, "db", "status"])
        assert json.loads(status.stdout)["data"]["available"] is True

    def test_empty_store_still_synthesizes(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        url = f"sqlite:///{tmp_path / 'pulse.db'}"
        cli_runner.invoke(cli, ["--db", url, "db", "init"])
        result = cli_runner.invoke(cli, ["--json", "--db", url, "layers", "show", "home_value"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["meta"]["resolved_from"] == "synthetic"


class TestDbStatus:
    def test_absent(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "db", "status"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["configured"] is False
