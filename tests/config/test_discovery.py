"""Tests for config file discovery and parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from zonepulse.config.discovery import (
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    ConfigError,
    find_config,
    read_toml,
)


class TestFindConfig:
    def test_none_when_absent(self, tmp_path: Path) -> None:
        assert find_config(tmp_path) is None

    def test_walks_up(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        nested = tmp_path / "x" / "y"
        nested.mkdir(parents=True)
        assert find_config(nested) == tmp_path.resolve() / CONFIG_FILENAME

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        other = tmp_path / "other.toml"
        other.write_text("")
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(other))
        assert find_config(tmp_path) == other

    def test_dangling_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "gone.toml"))
        assert find_config(tmp_path) is None


class TestReadToml:
    def test_sections(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text("[synthesis]\nloan_term_years = 15\n")
        assert read_toml(path) == {"synthesis": {"loan_term_years": 15}}

    def test_invalid_file_names_the_path(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text("[synthesis\n")
        with pytest.raises(ConfigError, match=CONFIG_FILENAME):
            read_toml(path)
