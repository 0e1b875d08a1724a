"""The `sourceforge` method: push archives to the SourceForge file release system."""

from __future__ import annotations

from woger.core.result import Err, Ok, Result
from woger.release.errors import ReleaseError, from_process_error
from woger.release.methods.base import MethodSpec, ReleaseContext, ReleaseMethod, existing_archives

__all__ = ["FRS_HOST", "SourceforgeMethod", "frs_destination"]

FRS_HOST = "frs.sourceforge.net"


def frs_destination(user: str, package: str, version: str) -> str:
    return f"{user}@{FRS_HOST}:/home/frs/project/{package}/{version}/"


class SourceforgeMethod(ReleaseMethod):
    spec = MethodSpec(
        name="sourceforge",
        summary=f"upload archives to {FRS_HOST}",
        requires=frozenset({"package", "version", "user"}),
    )

    def release(self, ctx: ReleaseContext) -> Result[None, ReleaseError]:
        archives = existing_archives(ctx)
        if isinstance(archives, Err):
            return archives

        destination = frs_destination(ctx.value("user"), ctx.value("package"), ctx.value("version"))
        pushed = ctx.runner.capture(["rsync", "-av", "--progress", *archives.value, destination])
        if isinstance(pushed, Err):
            return Err(from_process_error(pushed.error, f"upload to {FRS_HOST} failed"))

        if not ctx.dry_run:
            ctx.console.success(f"uploaded {', '.join(archives.value)} to {FRS_HOST}")
        return Ok(None)
