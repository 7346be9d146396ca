"""Tests for the serve command."""

from __future__ import annotations

from typing import Any

import pytest
from click.testing import CliRunner
from fastapi.testclient import TestClient

from zonepulse.cli import cli


class TestServe:
    def test_runs_uvicorn_with_config(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[dict[str, Any]] = []

        def fake_run(app: Any, **kwargs: Any) -> None:
            calls.append({"app": app, **kwargs})

        monkeypatch.setattr("uvicorn.run", fake_run)
        result = cli_runner.invoke(cli, ["serve", "--port", "9001"])
        assert result.exit_code == 0
        assert calls[0]["host"] == "127.0.0.1"
        assert calls[0]["port"] == 9001
        with TestClient(calls[0]["app"]) as client:
            response = client.get("/api/pulse/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
