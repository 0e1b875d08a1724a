"""Parser for gnulib's upload instructions.

`make emit_upload_commands` (from gnulib's maintainer makefile) prints the
commands a maintainer should run after `make release`:

    =====================================
    build-aux/gnupload $(GNUPLOADFLAGS) \\
        --to ftp.gnu.org:foo \\
      foo-1.0.tar.gz
    # send the ~/announce-foo-1.0 e-mail
    =====================================

The `gnu` method needs the upload host, package, version, archive suffix
and announcement file from that text. Anything that does not match is an
error; guessing would upload the wrong file.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from woger.core.result import Err, Ok, Result
from woger.release.errors import ReleaseError

__all__ = ["UploadCommands", "parse_upload_commands", "render_upload_commands"]

_TO_RE = re.compile(r"--to\s+(?P<host>[A-Za-z0-9.-]+):(?P<package>[A-Za-z0-9._+-]+)")
_ANNOUNCE_RE = re.compile(r"#\s*send the (?P<file>\S+) e-mail")
_SUFFIX = r"(?P<suffix>tar\.[a-z0-9]+|zip)"


@dataclass(frozen=True, slots=True)
class UploadCommands:
    """What gnulib told us to upload and announce."""

    host: str
    package: str
    version: str
    suffix: str
    announce_file: str

    @property
    def archive(self) -> str:
        return f"{self.package}-{self.version}.{self.suffix}"

    @property
    def signature(self) -> str:
        return f"{self.archive}.sig"

    @property
    def url(self) -> str:
        return f"https://{self.host}/gnu/{self.package}/{self.archive}"

    @property
    def signature_url(self) -> str:
        return f"{self.url}.sig"

    @property
    def announce_path(self) -> Path:
        return Path(self.announce_file).expanduser()


def _parse_failed(what: str) -> Err[ReleaseError]:
    return Err(
        ReleaseError(
            kind="parse_failed",
            message=f"could not find {what} in the upload commands",
            hint="check the output of `make emit_upload_commands`",
        )
    )


def parse_upload_commands(text: str) -> Result[UploadCommands, ReleaseError]:
    to = _TO_RE.search(text)
    if to is None:
        return _parse_failed("the upload destination (--to HOST:PACKAGE)")

    package = to.group("package")
    archive_re = re.compile(
        rf"(?<![\w.-]){re.escape(package)}-(?P<version>\d[\w.+~-]*?)\.{_SUFFIX}(?![\w.])"
    )
    archive = archive_re.search(text, to.end())
    if archive is None:
        return _parse_failed(f"an archive for {package}")

    announce = _ANNOUNCE_RE.search(text)
    if announce is None:
        return _parse_failed("the announcement e-mail file")

    return Ok(
        UploadCommands(
            host=to.group("host"),
            package=package,
            version=archive.group("version"),
            suffix=archive.group("suffix"),
            announce_file=announce.group("file"),
        )
    )


def render_upload_commands(
    *,
    host: str,
    package: str,
    version: str,
    suffix: str = "tar.gz",
) -> str:
    """Produce text in the format parse_upload_commands accepts.

    Used as the simulated output of `make` in dry runs.
    """
    rule = "=" * 37
    return "\n".join(
        [
            rule,
            "build-aux/gnupload $(GNUPLOADFLAGS) \\",
            f"    --to {host}:{package} \\",
            f"  {package}-{version}.{suffix}",
            f"# send the ~/announce-{package}-{version} e-mail",
            rule,
            "",
        ]
    )
