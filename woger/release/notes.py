"""Release notes: interactive acquisition and reading.

The notes are the one variable woger can obtain on its own. When a selected
method needs `notes` and none was given, the default notes file is used; if
it does not exist yet the user's editor is opened to write it.
"""

from __future__ import annotations

import shlex
from pathlib import Path

from woger.core.config import EDITOR_ENV, Config
from woger.core.result import Err, Ok, Result
from woger.platform.process import ProcessRunner
from woger.release.errors import ReleaseError
from woger.release.variables import NOTES, VariableStore

__all__ = ["acquire_notes", "default_notes_path", "read_notes"]


def default_notes_path(cwd: Path, config: Config) -> Path:
    return cwd / config.notes_file


def _editor_command(config: Config) -> Result[list[str], ReleaseError]:
    if not config.editor:
        return Err(
            ReleaseError(
                kind="config",
                message=f"{EDITOR_ENV} is not set; cannot write the release notes",
                hint=f"set {EDITOR_ENV} or pass {NOTES}=FILE",
            )
        )
    try:
        argv = shlex.split(config.editor)
    except ValueError as e:
        return Err(ReleaseError(kind="config", message=f"invalid {EDITOR_ENV}: {e}"))
    if not argv:
        return Err(ReleaseError(kind="config", message=f"{EDITOR_ENV} is empty"))
    return Ok(argv)


def acquire_notes(
    store: VariableStore,
    *,
    cwd: Path,
    config: Config,
    runner: ProcessRunner,
) -> Result[Path | None, ReleaseError]:
    """Make sure `notes` names a file, writing it with the editor if needed.

    Returns:
        Ok(path) when the default notes file was adopted, Ok(None) when the
        user already supplied `notes`, Err on configuration or editor failure.
    """
    if store.has(NOTES):
        return Ok(None)

    path = default_notes_path(cwd, config)
    if not path.exists():
        editor = _editor_command(config)
        if isinstance(editor, Err):
            return editor

        edited = runner.interactive([*editor.value, str(path)])
        if isinstance(edited, Err):
            return Err(
                ReleaseError(
                    kind="editor_failed",
                    message=f"editor failed: {edited.error}",
                    hint=str(path),
                )
            )

    store.set_default(NOTES, str(path))
    return Ok(path)


def read_notes(path: Path) -> Result[str, ReleaseError]:
    """Read the notes file, dropping its final newline."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return Err(
            ReleaseError(
                kind="action_failed",
                message=f"failed to read release notes: {e}",
                hint=str(path),
            )
        )
    return Ok(text.removesuffix("\n"))
