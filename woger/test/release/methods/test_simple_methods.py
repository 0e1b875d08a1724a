"""Tests for the null, luarocks, github and sourceforge methods."""

from __future__ import annotations

from pathlib import Path

from woger.core.result import Err, Ok
from woger.output.console import MockConsole
from woger.platform.process import ProcessError, RecordingRunner
from woger.release.methods.base import ReleaseContext
from woger.release.methods.github import GithubMethod
from woger.release.methods.luarocks import LuarocksMethod, find_rockspecs
from woger.release.methods.null import NullMethod
from woger.release.methods.sourceforge import SourceforgeMethod, frs_destination
from woger.release.variables import VariableStore


def _ctx(tmp_path: Path, runner: RecordingRunner, **values: str) -> ReleaseContext:
    return ReleaseContext(
        store=VariableStore(values),
        runner=runner,
        console=MockConsole(),
        cwd=tmp_path,
    )


def test_null_does_nothing(tmp_path: Path) -> None:
    runner = RecordingRunner()
    assert NullMethod().release(_ctx(tmp_path, runner)) == Ok(None)
    assert runner.calls == []


class TestLuarocks:
    def test_uploads_every_matching_rockspec(self, tmp_path: Path) -> None:
        for name in ("foo-1.0-2.rockspec", "foo-1.0-1.rockspec", "foo-1.1-1.rockspec", "bar-1.0-1.rockspec"):
            (tmp_path / name).write_text("", encoding="utf-8")
        runner = RecordingRunner()

        result = LuarocksMethod().release(_ctx(tmp_path, runner, package="foo", version="1.0"))

        assert result == Ok(None)
        assert runner.commands == [
            ("luarocks", "upload", "foo-1.0-1.rockspec"),
            ("luarocks", "upload", "foo-1.0-2.rockspec"),
        ]

    def test_revision_restricts_upload(self, tmp_path: Path) -> None:
        for name in ("foo-1.0-1.rockspec", "foo-1.0-2.rockspec"):
            (tmp_path / name).write_text("", encoding="utf-8")

        assert find_rockspecs(tmp_path, "foo", "1.0", "2") == [tmp_path / "foo-1.0-2.rockspec"]

    def test_no_rockspec_fails(self, tmp_path: Path) -> None:
        runner = RecordingRunner()
        result = LuarocksMethod().release(_ctx(tmp_path, runner, package="foo", version="1.0"))

        assert isinstance(result, Err)
        assert result.error.kind == "action_failed"
        assert runner.calls == []

    def test_upload_failure_stops(self, tmp_path: Path) -> None:
        for name in ("foo-1.0-1.rockspec", "foo-1.0-2.rockspec"):
            (tmp_path / name).write_text("", encoding="utf-8")
        runner = RecordingRunner()
        runner.script("luarocks", Err(ProcessError(("luarocks",), 1, "", "Error: not authorized\n")))

        result = LuarocksMethod().release(_ctx(tmp_path, runner, package="foo", version="1.0"))

        assert isinstance(result, Err)
        assert "foo-1.0-1.rockspec" in result.error.message
        assert result.error.hint == "Error: not authorized"
        assert len(runner.calls) == 1


class TestGithub:
    def test_creates_release_with_archives(self, tmp_path: Path) -> None:
        (tmp_path / "foo-1.0.tar.gz").write_bytes(b"")
        runner = RecordingRunner()
        runner.script("gh", Ok("https://github.com/me/foo/releases/tag/v1.0\n"))
        ctx = _ctx(tmp_path, runner, package="foo", version="1.0", notes="release-notes", dist_type="tar.gz")

        assert GithubMethod().release(ctx) == Ok(None)
        assert runner.commands == [
            (
                "gh",
                "release",
                "create",
                "v1.0",
                "--title",
                "foo 1.0",
                "--notes-file",
                str(tmp_path / "release-notes"),
                "foo-1.0.tar.gz",
            )
        ]
        assert isinstance(ctx.console, MockConsole)
        assert ctx.console.find("releases/tag/v1.0")

    def test_missing_archive_fails_before_gh(self, tmp_path: Path) -> None:
        runner = RecordingRunner()
        ctx = _ctx(tmp_path, runner, package="foo", version="1.0", notes="n", dist_type="tar.gz")

        result = GithubMethod().release(ctx)

        assert isinstance(result, Err)
        assert runner.calls == []


class TestSourceforge:
    def test_rsyncs_archives(self, tmp_path: Path) -> None:
        (tmp_path / "foo-1.0.zip").write_bytes(b"")
        runner = RecordingRunner()
        ctx = _ctx(tmp_path, runner, package="foo", version="1.0", user="me", dist_type="zip")

        assert SourceforgeMethod().release(ctx) == Ok(None)
        assert runner.commands == [
            ("rsync", "-av", "--progress", "foo-1.0.zip", "me@frs.sourceforge.net:/home/frs/project/foo/1.0/")
        ]

    def test_destination(self) -> None:
        assert frs_destination("u", "p", "2") == "u@frs.sourceforge.net:/home/frs/project/p/2/"
