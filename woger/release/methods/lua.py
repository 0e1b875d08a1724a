"""The `lua` method: announce the release on the lua-l mailing list."""

from __future__ import annotations

import textwrap
from pathlib import Path

from woger.core.result import Err, Ok, Result
from woger.release.errors import ReleaseError, from_process_error
from woger.release.methods.base import MethodSpec, ReleaseContext, ReleaseMethod
from woger.release.notes import read_notes

__all__ = ["LUA_LIST", "LuaMethod", "compose_announcement"]

LUA_LIST = "lua-l@lists.lua.org"
WRAP_WIDTH = 72


def compose_announcement(
    *,
    package: str,
    version: str,
    description: str,
    notes: str,
    home: str,
) -> str:
    """Build the announcement body; only the description is re-wrapped."""
    intro = textwrap.fill(f"{package} {version} is now available. {description}", WRAP_WIDTH)
    parts = [intro]
    if notes.strip():
        parts.append(notes.rstrip())
    parts.append(f"Home page: {home}")
    return "\n\n".join(parts) + "\n"


def _notes_for(ctx: ReleaseContext) -> Result[str, ReleaseError]:
    path = ctx.cwd / Path(ctx.value("notes"))
    if ctx.dry_run and not path.exists():
        # The editor did not really run, so there is nothing to read yet.
        return Ok(f"[contents of {path.name}]")
    return read_notes(path)


class LuaMethod(ReleaseMethod):
    spec = MethodSpec(
        name="lua",
        summary=f"announce on {LUA_LIST}",
        requires=frozenset({"package", "version", "description", "notes", "home", "email"}),
    )

    def release(self, ctx: ReleaseContext) -> Result[None, ReleaseError]:
        package = ctx.value("package")
        version = ctx.value("version")

        notes = _notes_for(ctx)
        if isinstance(notes, Err):
            return notes

        body = compose_announcement(
            package=package,
            version=version,
            description=ctx.value("description"),
            notes=notes.value,
            home=ctx.value("home"),
        )
        subject = f"[ANN] {package} {version}"
        sent = ctx.runner.capture(
            ["mail", "-s", subject, "-r", ctx.value("email"), LUA_LIST],
            input_text=body,
        )
        if isinstance(sent, Err):
            return Err(from_process_error(sent.error, f"mail to {LUA_LIST} failed"))

        if not ctx.dry_run:
            ctx.console.success(f"announced {package} {version} on {LUA_LIST}")
        return Ok(None)
