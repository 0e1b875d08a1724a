"""Base definitions for release methods.

This module defines the core abstractions:
- MethodSpec: immutable method metadata (name, required variables)
- ReleaseContext: everything a method may touch while releasing
- ReleaseMethod: abstract base class for all methods
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from woger.core.config import Config
from woger.core.result import Err, Ok, Result
from woger.release.errors import ReleaseError

if TYPE_CHECKING:
    from woger.output.console import ConsoleProtocol
    from woger.platform.process import ProcessRunner
    from woger.release.variables import VariableStore

__all__ = [
    "MethodSpec",
    "ReleaseContext",
    "ReleaseMethod",
    "existing_archives",
]


@dataclass(frozen=True, slots=True)
class MethodSpec:
    """Immutable method metadata.

    Attributes:
        name: Name used in the method selection (e.g. "luarocks")
        summary: One-line description for listings
        requires: Variables the release action reads
    """

    name: str
    summary: str
    requires: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Method name cannot be empty")
        if not self.name.isidentifier() or not self.name.islower():
            raise ValueError(f"Method name must be lowercase identifier: {self.name!r}")


@dataclass(frozen=True, slots=True)
class ReleaseContext:
    """State handed to a method's release action.

    The store is fully validated by the time a method runs: every name in
    the method's `requires` has a non-empty value.
    """

    store: VariableStore
    runner: ProcessRunner
    console: ConsoleProtocol
    cwd: Path
    config: Config = field(default_factory=Config)

    @property
    def dry_run(self) -> bool:
        return self.runner.dry_run

    def value(self, name: str) -> str:
        """Value of a required variable.

        Raises:
            KeyError: If the variable is absent, which means the method
                forgot to declare it in `requires`.
        """
        value = self.store.get(name)
        if value is None:
            raise KeyError(f"variable {name!r} is not set")
        return value

    def archives(self) -> list[str]:
        """Archive file names for `package-version` in every requested dist_type."""
        stem = f"{self.value('package')}-{self.value('version')}"
        types = (self.store.get("dist_type") or "").split(",")
        return [f"{stem}.{t.strip().lstrip('.')}" for t in types if t.strip()]


class ReleaseMethod(ABC):
    """Abstract base class for all release methods.

    Subclasses define `spec` and implement `release()`. A method should
    return Err on the first failure; the dispatcher stops the whole run.
    """

    spec: MethodSpec

    @property
    def name(self) -> str:
        return self.spec.name

    @abstractmethod
    def release(self, ctx: ReleaseContext) -> Result[None, ReleaseError]:
        """Publish the release.

        Args:
            ctx: Variables, process runner and console for this run

        Returns:
            Ok(None) on success, Err(ReleaseError) on failure
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.spec.name!r})"


def existing_archives(ctx: ReleaseContext) -> Result[list[str], ReleaseError]:
    """Archive names for this release, checked against the project directory.

    In a dry run a missing archive is only a warning, since archives are
    usually built right before the real release.
    """
    names = ctx.archives()
    missing = [name for name in names if not (ctx.cwd / name).is_file()]
    if missing and not ctx.dry_run:
        return Err(
            ReleaseError(
                kind="action_failed",
                message=f"archive not found: {', '.join(missing)}",
                hint=f"build the distribution in {ctx.cwd} first",
            )
        )
    for name in missing:
        ctx.console.warning(f"archive not found: {name}")
    return Ok(names)
