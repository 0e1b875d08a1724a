"""The `github` method: create a GitHub release with the GitHub CLI.

The release is tagged `vVERSION`, titled `PACKAGE VERSION`, described by the
notes file and carries one archive per `dist_type`.
"""

from __future__ import annotations

from pathlib import Path

from woger.core.result import Err, Ok, Result
from woger.release.errors import ReleaseError, from_process_error
from woger.release.methods.base import MethodSpec, ReleaseContext, ReleaseMethod, existing_archives

__all__ = ["GithubMethod"]


class GithubMethod(ReleaseMethod):
    spec = MethodSpec(
        name="github",
        summary="create a GitHub release",
        requires=frozenset({"package", "version", "notes"}),
    )

    def release(self, ctx: ReleaseContext) -> Result[None, ReleaseError]:
        package = ctx.value("package")
        version = ctx.value("version")

        archives = existing_archives(ctx)
        if isinstance(archives, Err):
            return archives

        tag = f"v{version}"
        notes = ctx.cwd / Path(ctx.value("notes"))
        created = ctx.runner.capture(
            [
                "gh",
                "release",
                "create",
                tag,
                "--title",
                f"{package} {version}",
                "--notes-file",
                str(notes),
                *archives.value,
            ]
        )
        if isinstance(created, Err):
            return Err(from_process_error(created.error, f"gh release create {tag} failed"))

        if not ctx.dry_run:
            url = created.value.strip()
            ctx.console.success(f"created release {tag}" + (f": {url}" if url else ""))
        return Ok(None)
