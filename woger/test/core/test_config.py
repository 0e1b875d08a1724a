"""Tests for woger.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from woger.core.config import (
    DEFAULT_NOTES_FILE,
    GNU_POLL_ATTEMPTS,
    GNU_POLL_DELAY_SECONDS,
    Config,
    GnuConfig,
    load_config,
    load_config_or_default,
)
from woger.core.result import Err, Ok


class TestConfigDefaults:
    def test_defaults(self) -> None:
        config = Config()
        assert config.notes_file == DEFAULT_NOTES_FILE
        assert config.editor is None
        assert config.variables == {}
        assert config.gnu == GnuConfig(GNU_POLL_ATTEMPTS, GNU_POLL_DELAY_SECONDS)

    def test_frozen(self) -> None:
        config = Config()
        with pytest.raises(AttributeError):
            config.notes_file = "x"  # type: ignore[misc]


class TestFromDict:
    def test_editor_from_environment(self) -> None:
        config = Config.from_dict({}, {"EDITOR": "vim -n"})
        assert config.editor == "vim -n"

    def test_blank_editor_is_unset(self) -> None:
        assert Config.from_dict({}, {"EDITOR": "  "}).editor is None

    def test_file_editor_wins_over_environment(self) -> None:
        config = Config.from_dict({"editor": "nano"}, {"EDITOR": "vim"})
        assert config.editor == "nano"

    def test_full_table(self) -> None:
        config = Config.from_dict(
            {
                "notes_file": "NEWS.txt",
                "variables": {"package": "foo", "home": "https://example.org"},
                "gnu": {"poll_attempts": 3, "poll_delay": 5},
            },
            {},
        )
        assert config.notes_file == "NEWS.txt"
        assert config.variables == {"package": "foo", "home": "https://example.org"}
        assert config.gnu == GnuConfig(poll_attempts=3, poll_delay=5.0)

    def test_non_string_variable_rejected(self) -> None:
        with pytest.raises(ValueError, match="variables"):
            Config.from_dict({"variables": {"version": 1}}, {})

    def test_zero_attempts_rejected(self) -> None:
        with pytest.raises(ValueError, match="poll_attempts"):
            Config.from_dict({"gnu": {"poll_attempts": 0}}, {})


class TestLoadConfig:
    def test_load_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "woger.toml"
        path.write_text('[variables]\npackage = "foo"\n', encoding="utf-8")

        result = load_config(path, {})
        assert isinstance(result, Ok)
        assert result.value.variables == {"package": "foo"}

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "woger.toml", {})
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "woger.toml"
        path.write_text("[variables\n", encoding="utf-8")

        result = load_config(path, {})
        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path

    def test_invalid_structure(self, tmp_path: Path) -> None:
        path = tmp_path / "woger.toml"
        path.write_text("[gnu]\npoll_delay = -1\n", encoding="utf-8")

        result = load_config(path, {})
        assert isinstance(result, Err)
        assert "Invalid config structure" in result.error.message


class TestLoadConfigOrDefault:
    def test_absent_file_gives_default(self, tmp_path: Path) -> None:
        result = load_config_or_default(tmp_path / "woger.toml", {"EDITOR": "ed"})
        assert isinstance(result, Ok)
        assert result.value.editor == "ed"
        assert result.value.notes_file == DEFAULT_NOTES_FILE

    def test_broken_file_is_error(self, tmp_path: Path) -> None:
        path = tmp_path / "woger.toml"
        path.write_text("not toml at all =", encoding="utf-8")

        assert isinstance(load_config_or_default(path, {}), Err)
