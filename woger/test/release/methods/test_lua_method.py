"""Tests for woger.release.methods.lua module."""

from __future__ import annotations

from pathlib import Path

from woger.core.result import Err, Ok
from woger.output.console import MockConsole
from woger.platform.process import DryRunRunner, ProcessError, ProcessRunner, RecordingRunner
from woger.release.methods.base import ReleaseContext
from woger.release.methods.lua import LUA_LIST, LuaMethod, compose_announcement
from woger.release.variables import VariableStore

VALUES = {
    "package": "foo",
    "version": "1.0",
    "description": "A library for frobnicating bars.",
    "notes": "release-notes",
    "home": "https://example.org/foo",
    "email": "me@example.org",
}


def _ctx(tmp_path: Path, runner: ProcessRunner, console: MockConsole | None = None) -> ReleaseContext:
    return ReleaseContext(
        store=VariableStore(VALUES),
        runner=runner,
        console=console or MockConsole(),
        cwd=tmp_path,
    )


def test_compose_announcement_wraps_description() -> None:
    body = compose_announcement(
        package="foo",
        version="1.0",
        description="word " * 30,
        notes="* one\n* two",
        home="https://example.org/foo",
    )
    paragraphs = body.split("\n\n")
    assert all(len(line) <= 72 for line in paragraphs[0].splitlines())
    assert paragraphs[1] == "* one\n* two"
    assert paragraphs[2] == "Home page: https://example.org/foo\n"


def test_compose_announcement_without_notes() -> None:
    body = compose_announcement(package="foo", version="1.0", description="d", notes="  ", home="h")
    assert body == "foo 1.0 is now available. d\n\nHome page: h\n"


def test_mails_announcement(tmp_path: Path) -> None:
    (tmp_path / "release-notes").write_text("Fixed the frobnicator.\n", encoding="utf-8")
    runner = RecordingRunner()

    assert LuaMethod().release(_ctx(tmp_path, runner)) == Ok(None)

    call = runner.calls[0]
    assert call.command == ("mail", "-s", "[ANN] foo 1.0", "-r", "me@example.org", LUA_LIST)
    assert call.input_text is not None
    assert "Fixed the frobnicator." in call.input_text
    assert "Home page: https://example.org/foo" in call.input_text


def test_unreadable_notes_fail_before_mail(tmp_path: Path) -> None:
    runner = RecordingRunner()

    result = LuaMethod().release(_ctx(tmp_path, runner))

    assert isinstance(result, Err)
    assert result.error.kind == "action_failed"
    assert runner.calls == []


def test_mail_failure(tmp_path: Path) -> None:
    (tmp_path / "release-notes").write_text("n\n", encoding="utf-8")
    runner = RecordingRunner()
    runner.script("mail", Err(ProcessError(("mail",), 75, "", "")))

    result = LuaMethod().release(_ctx(tmp_path, runner))

    assert isinstance(result, Err)
    assert LUA_LIST in result.error.message


def test_dry_run_without_notes_file(tmp_path: Path) -> None:
    console = MockConsole()

    result = LuaMethod().release(_ctx(tmp_path, DryRunRunner(console), console))

    assert result == Ok(None)
    assert console.messages[0].startswith("would run: mail -s '[ANN] foo 1.0'")
    assert "  | [contents of release-notes]" in console.messages
