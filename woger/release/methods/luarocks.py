"""The `luarocks` method: upload rockspecs to luarocks.org.

Every `PACKAGE-VERSION-REVISION.rockspec` in the project directory is
uploaded with `luarocks upload`; setting `revision` restricts the upload to
that one revision.
"""

from __future__ import annotations

from pathlib import Path

from woger.core.result import Err, Ok, Result
from woger.release.errors import ReleaseError, from_process_error
from woger.release.methods.base import MethodSpec, ReleaseContext, ReleaseMethod

__all__ = ["LuarocksMethod", "find_rockspecs"]


def find_rockspecs(cwd: Path, package: str, version: str, revision: str | None) -> list[Path]:
    pattern = f"{package}-{version}-{revision or '*'}.rockspec"
    return sorted(p for p in cwd.glob(pattern) if p.is_file())


class LuarocksMethod(ReleaseMethod):
    spec = MethodSpec(
        name="luarocks",
        summary="upload rockspecs to luarocks.org",
        requires=frozenset({"package", "version"}),
    )

    def release(self, ctx: ReleaseContext) -> Result[None, ReleaseError]:
        package = ctx.value("package")
        version = ctx.value("version")
        revision = ctx.store.get("revision")

        rockspecs = find_rockspecs(ctx.cwd, package, version, revision)
        if not rockspecs:
            return Err(
                ReleaseError(
                    kind="action_failed",
                    message=f"no rockspec found for {package} {version}",
                    hint=f"expected {package}-{version}-{revision or '*'}.rockspec in {ctx.cwd}",
                )
            )

        for rockspec in rockspecs:
            uploaded = ctx.runner.capture(["luarocks", "upload", rockspec.name])
            if isinstance(uploaded, Err):
                return Err(from_process_error(uploaded.error, f"upload of {rockspec.name} failed"))
            if not ctx.dry_run:
                ctx.console.success(f"uploaded {rockspec.name}")

        return Ok(None)
