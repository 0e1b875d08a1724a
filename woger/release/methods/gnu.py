"""The `gnu` method: upload to ftp.gnu.org (or alpha.gnu.org) and announce.

The project's gnulib maintainer makefile knows where the release goes, so
woger asks it (`make emit_upload_commands`), then:

1. uploads the archive with gnupload
2. waits for the archive to appear on the mirror
3. downloads it again with its signature and checks it with gpg
4. mails the announcement gnulib prepared
"""

from __future__ import annotations

import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from time import sleep

from woger.core.result import Err, Ok, Result
from woger.release.errors import ReleaseError, from_process_error
from woger.release.methods.base import MethodSpec, ReleaseContext, ReleaseMethod
from woger.release.upload_commands import (
    UploadCommands,
    parse_upload_commands,
    render_upload_commands,
)

__all__ = ["RELEASE_TYPES", "GnuMethod", "wait_until_available"]

RELEASE_TYPES = ("alpha", "beta", "stable")
GNUPLOAD = "build-aux/gnupload"


def _default_host(release_type: str) -> str:
    return "ftp.gnu.org" if release_type == "stable" else "alpha.gnu.org"


def wait_until_available(
    ctx: ReleaseContext,
    url: str,
    *,
    attempts: int,
    delay: float,
) -> Result[None, ReleaseError]:
    """Poll `url` until it exists, giving up after `attempts` tries."""
    for attempt in range(attempts):
        probe = ctx.runner.capture(["wget", "--spider", "-q", url])
        if isinstance(probe, Ok):
            return Ok(None)
        if attempt < attempts - 1:
            ctx.console.print(f"not available yet, retrying in {delay:g}s ({attempt + 1}/{attempts})")
            sleep(delay)

    return Err(
        ReleaseError(
            kind="action_failed",
            message=f"{url} did not become available after {attempts} attempts",
        )
    )


@contextmanager
def _download_dir(ctx: ReleaseContext) -> Iterator[Path]:
    if ctx.dry_run:
        # Keep dry-run output stable between runs.
        yield Path(tempfile.gettempdir()) / "woger-verify"
        return
    with tempfile.TemporaryDirectory(prefix="woger-verify-") as tmp:
        yield Path(tmp)


def _verify_download(ctx: ReleaseContext, upload: UploadCommands) -> Result[None, ReleaseError]:
    with _download_dir(ctx) as tmp:
        archive = tmp / upload.archive
        signature = tmp / upload.signature
        for url, dest in ((upload.url, archive), (upload.signature_url, signature)):
            fetched = ctx.runner.capture(["wget", "-q", "-O", str(dest), url])
            if isinstance(fetched, Err):
                return Err(from_process_error(fetched.error, f"download of {url} failed"))

        verified = ctx.runner.capture(["gpg", "--verify", str(signature), str(archive)])
        if isinstance(verified, Err):
            return Err(from_process_error(verified.error, f"signature check of {upload.archive} failed"))

    return Ok(None)


class GnuMethod(ReleaseMethod):
    spec = MethodSpec(
        name="gnu",
        summary="upload to the GNU ftp site and mail the announcement",
        requires=frozenset({"package", "version", "release_type"}),
    )

    def _upload_commands(self, ctx: ReleaseContext) -> Result[UploadCommands, ReleaseError]:
        package = ctx.value("package")
        version = ctx.value("version")
        release_type = ctx.value("release_type")
        if release_type not in RELEASE_TYPES:
            return Err(
                ReleaseError(
                    kind="action_failed",
                    message=f"unknown release_type {release_type!r}",
                    hint=f"use one of: {', '.join(RELEASE_TYPES)}",
                )
            )

        emitted = ctx.runner.capture(
            ["make", "-s", "emit_upload_commands", f"RELEASE_TYPE={release_type}"],
            simulated=render_upload_commands(
                host=_default_host(release_type), package=package, version=version
            ),
        )
        if isinstance(emitted, Err):
            return Err(from_process_error(emitted.error, "make emit_upload_commands failed"))

        parsed = parse_upload_commands(emitted.value)
        if isinstance(parsed, Err):
            return parsed

        upload = parsed.value
        if (upload.package, upload.version) != (package, version):
            return Err(
                ReleaseError(
                    kind="action_failed",
                    message=(
                        f"make reports {upload.package} {upload.version}, "
                        f"but releasing {package} {version}"
                    ),
                    hint="rebuild the distribution or fix package/version",
                )
            )
        return Ok(upload)

    def release(self, ctx: ReleaseContext) -> Result[None, ReleaseError]:
        upload = self._upload_commands(ctx)
        if isinstance(upload, Err):
            return upload
        commands = upload.value

        uploaded = ctx.runner.capture(
            [GNUPLOAD, "--to", f"{commands.host}:{commands.package}", commands.archive]
        )
        if isinstance(uploaded, Err):
            return Err(from_process_error(uploaded.error, f"upload of {commands.archive} failed"))

        available = wait_until_available(
            ctx,
            commands.url,
            attempts=ctx.config.gnu.poll_attempts,
            delay=ctx.config.gnu.poll_delay,
        )
        if isinstance(available, Err):
            return available

        verified = _verify_download(ctx, commands)
        if isinstance(verified, Err):
            return verified

        sent = ctx.runner.capture(["sendmail", "-t"], input_path=commands.announce_path)
        if isinstance(sent, Err):
            return Err(from_process_error(sent.error, f"sending {commands.announce_file} failed"))

        if not ctx.dry_run:
            ctx.console.success(f"released {commands.archive} on {commands.host}")
        return Ok(None)
