"""Error type for the release engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from woger.platform.process import ProcessError

ReleaseErrorKind = Literal[
    "usage",
    "unknown_method",
    "duplicate_method",
    "missing_variables",
    "config",
    "editor_failed",
    "action_failed",
    "parse_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error payload.

    Produced by every stage of a run and rendered once, by the CLI.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


def from_process_error(error: ProcessError, message: str) -> ReleaseError:
    """Wrap a failed external command as an action failure."""
    detail = error.stderr.strip().splitlines()
    return ReleaseError(
        kind="action_failed",
        message=f"{message}: {error}",
        hint=detail[-1] if detail else None,
    )
