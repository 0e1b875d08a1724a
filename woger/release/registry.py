"""Method registry.

The registry is built once at startup and is read-only afterwards. It checks
the static method data while it is built: names must be unique and every
required variable must be part of the known vocabulary.

Usage:
    registry = default_registry()
    method = registry.lookup("luarocks")
    if method is None:
        ...  # no such method
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from woger.release.methods import ALL_METHODS
from woger.release.methods.base import ReleaseMethod
from woger.release.variables import VARIABLES

__all__ = ["MethodRegistry", "default_registry"]


class MethodRegistry:
    """Read-only mapping of method name to ReleaseMethod."""

    def __init__(
        self,
        methods: Iterable[ReleaseMethod],
        *,
        vocabulary: Mapping[str, object] = VARIABLES,
    ) -> None:
        """Build the registry.

        Args:
            methods: Method instances, in listing order
            vocabulary: Known variable names

        Raises:
            ValueError: If two methods share a name or a method requires
                a variable outside the vocabulary
        """
        by_name: dict[str, ReleaseMethod] = {}
        for method in methods:
            name = method.spec.name
            if name in by_name:
                raise ValueError(f"duplicate release method: {name}")
            unknown = sorted(method.spec.requires.difference(vocabulary))
            if unknown:
                raise ValueError(f"method {name} requires unknown variables: {', '.join(unknown)}")
            by_name[name] = method
        self._methods: Mapping[str, ReleaseMethod] = MappingProxyType(by_name)

    def lookup(self, name: str) -> ReleaseMethod | None:
        return self._methods.get(name)

    def names(self) -> tuple[str, ...]:
        return tuple(self._methods)

    def __contains__(self, name: object) -> bool:
        return name in self._methods

    def __iter__(self) -> Iterator[ReleaseMethod]:
        return iter(self._methods.values())

    def __len__(self) -> int:
        return len(self._methods)


def default_registry() -> MethodRegistry:
    """Registry of the built-in methods."""
    return MethodRegistry(ALL_METHODS)
