"""Tests for woger.release.notes module."""

from __future__ import annotations

from pathlib import Path

from woger.core.config import Config
from woger.core.result import Err, Ok
from woger.platform.process import ProcessError, RecordingRunner
from woger.release.notes import acquire_notes, default_notes_path, read_notes
from woger.release.variables import VariableStore


def test_default_notes_path(tmp_path: Path) -> None:
    assert default_notes_path(tmp_path, Config()) == tmp_path / "release-notes"
    assert default_notes_path(tmp_path, Config(notes_file="NEWS")) == tmp_path / "NEWS"


class TestAcquireNotes:
    def test_given_notes_untouched(self, tmp_path: Path) -> None:
        store = VariableStore({"notes": "mine.txt"})
        runner = RecordingRunner()

        result = acquire_notes(store, cwd=tmp_path, config=Config(), runner=runner)

        assert result == Ok(None)
        assert store.get("notes") == "mine.txt"
        assert runner.calls == []

    def test_existing_file_adopted_without_editor(self, tmp_path: Path) -> None:
        notes = tmp_path / "release-notes"
        notes.write_text("Fixed things.\n", encoding="utf-8")
        store = VariableStore()
        runner = RecordingRunner()

        result = acquire_notes(store, cwd=tmp_path, config=Config(), runner=runner)

        assert result == Ok(notes)
        assert store.get("notes") == str(notes)
        assert runner.calls == []
        assert notes.read_text(encoding="utf-8") == "Fixed things.\n"

    def test_editor_launched_for_missing_file(self, tmp_path: Path) -> None:
        store = VariableStore({"notes": ""})
        runner = RecordingRunner()
        config = Config(editor="emacs -nw")

        result = acquire_notes(store, cwd=tmp_path, config=config, runner=runner)

        path = tmp_path / "release-notes"
        assert result == Ok(path)
        assert runner.commands == [("emacs", "-nw", str(path))]
        assert runner.calls[0].interactive
        assert store.get("notes") == str(path)

    def test_no_editor_is_config_error(self, tmp_path: Path) -> None:
        store = VariableStore()
        runner = RecordingRunner()

        result = acquire_notes(store, cwd=tmp_path, config=Config(editor=None), runner=runner)

        assert isinstance(result, Err)
        assert result.error.kind == "config"
        assert "EDITOR" in result.error.message
        assert runner.calls == []
        assert not store.has("notes")

    def test_unbalanced_quotes_in_editor(self, tmp_path: Path) -> None:
        result = acquire_notes(
            VariableStore(), cwd=tmp_path, config=Config(editor="vi '"), runner=RecordingRunner()
        )
        assert isinstance(result, Err)
        assert result.error.kind == "config"

    def test_editor_failure_aborts(self, tmp_path: Path) -> None:
        store = VariableStore()
        runner = RecordingRunner()
        runner.script("vi", Err(ProcessError(("vi",), 1, "", "")))

        result = acquire_notes(store, cwd=tmp_path, config=Config(editor="vi"), runner=runner)

        assert isinstance(result, Err)
        assert result.error.kind == "editor_failed"
        assert not store.has("notes")


class TestReadNotes:
    def test_strips_one_trailing_newline(self, tmp_path: Path) -> None:
        path = tmp_path / "notes"
        path.write_text("line 1\nline 2\n\n", encoding="utf-8")
        assert read_notes(path) == Ok("line 1\nline 2\n")

    def test_missing_file(self, tmp_path: Path) -> None:
        result = read_notes(tmp_path / "absent")
        assert isinstance(result, Err)
        assert result.error.kind == "action_failed"
