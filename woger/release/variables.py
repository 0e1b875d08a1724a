"""Release variables.

A variable is a named piece of release metadata given on the command line as
`name=value`. The vocabulary below lists the names the built-in methods know
about; the store itself accepts any name so that newer methods can be fed
from older scripts.

An empty value counts as absent: `notes=` on the command line is the same as
not mentioning notes at all.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from woger.core.result import Err, Ok, Result
from woger.release.errors import ReleaseError

__all__ = [
    "NOTES",
    "VARIABLES",
    "Variable",
    "VariableStore",
    "help_for",
    "parse_assignment",
]


@dataclass(frozen=True, slots=True)
class Variable:
    """A known release variable.

    Attributes:
        name: Name used on the command line.
        help: One-line description shown by `--vars`.
        default: Value used when the user gives none.
        interactive: Whether a missing value can be acquired interactively.
    """

    name: str
    help: str
    default: str | None = None
    interactive: bool = False


NOTES = "notes"

_VOCABULARY: tuple[Variable, ...] = (
    Variable("package", "package name"),
    Variable("version", "version of the release"),
    Variable("revision", "rockspec revision to upload (all revisions if unset)"),
    Variable("description", "one-line description of the package"),
    Variable("dist_type", "comma-separated archive types to publish", default="tar.gz"),
    Variable("email", "address announcements are sent from"),
    Variable(NOTES, "file containing the release notes", interactive=True),
    Variable("home", "URL of the package home page"),
    Variable("release_type", "GNU release type: alpha, beta or stable", default="stable"),
    Variable("user", "account name on the source forge"),
)

VARIABLES: Mapping[str, Variable] = MappingProxyType({v.name: v for v in _VOCABULARY})


def help_for(name: str) -> str:
    variable = VARIABLES.get(name)
    if variable is None:
        return "(undocumented)"
    return variable.help


def parse_assignment(arg: str) -> Result[tuple[str, str], ReleaseError]:
    """Split a `name=value` argument on its first `=`.

    The value may be empty or contain further `=` signs. A bare name without
    `=` is rejected rather than guessed at.
    """
    name, sep, value = arg.partition("=")
    name = name.strip()
    if not sep:
        return Err(
            ReleaseError(
                kind="usage",
                message=f"expected name=value, got {arg!r}",
                hint=f"use {arg}= to pass an empty value",
            )
        )
    if not name.isidentifier():
        return Err(ReleaseError(kind="usage", message=f"invalid variable name in {arg!r}"))
    return Ok((name, value))


class VariableStore:
    """Mutable mapping of variable name to string value.

    Filled from the command line before dispatch starts; afterwards only
    absent names are ever filled in (defaults, acquired notes).
    """

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    @classmethod
    def from_assignments(cls, args: Iterable[str]) -> Result[VariableStore, ReleaseError]:
        """Build a store from `name=value` strings; a repeated name keeps its last value."""
        store = cls()
        for arg in args:
            parsed = parse_assignment(arg)
            if isinstance(parsed, Err):
                return parsed
            name, value = parsed.value
            store.set(name, value)
        return Ok(store)

    def set(self, name: str, value: str) -> None:
        self._values[name] = value

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the value of `name`, or `default` when it is absent or empty."""
        value = self._values.get(name)
        if not value:
            return default
        return value

    def has(self, name: str) -> bool:
        return bool(self._values.get(name))

    def set_default(self, name: str, value: str) -> bool:
        """Set `name` only if it is absent. Returns True if the value was used."""
        if self.has(name):
            return False
        self._values[name] = value
        return True

    def apply_defaults(self, defaults: Mapping[str, str]) -> None:
        for name, value in defaults.items():
            self.set_default(name, value)

    def apply_vocabulary_defaults(self) -> None:
        """Fill in the built-in defaults of the vocabulary."""
        self.apply_defaults(
            {v.name: v.default for v in VARIABLES.values() if v.default is not None}
        )

    def names(self) -> frozenset[str]:
        """Names with a usable (non-empty) value."""
        return frozenset(name for name, value in self._values.items() if value)

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.names()))

    def __repr__(self) -> str:
        return f"VariableStore({self._values!r})"
