"""Required-variable arithmetic.

Pure functions: given methods and a store, work out which variables are
needed and which of those are still missing.
"""

from __future__ import annotations

from collections.abc import Iterable

from woger.release.methods.base import ReleaseMethod
from woger.release.variables import VariableStore, help_for

__all__ = ["describe", "missing", "union_of"]


def union_of(methods: Iterable[ReleaseMethod]) -> frozenset[str]:
    """All variables required by any of `methods`."""
    required: set[str] = set()
    for method in methods:
        required |= method.spec.requires
    return frozenset(required)


def missing(required: Iterable[str], store: VariableStore) -> frozenset[str]:
    """Required variables with no usable value in `store`."""
    return frozenset(name for name in required if not store.has(name))


def describe(names: Iterable[str]) -> list[tuple[str, str]]:
    """(name, help) pairs sorted by name."""
    return [(name, help_for(name)) for name in sorted(set(names))]
