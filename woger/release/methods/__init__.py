"""Built-in release methods.

Usage:
    from woger.release.methods import ALL_METHODS, get_method

    for method in ALL_METHODS:
        print(f"{method.spec.name}: {method.spec.summary}")

    luarocks = get_method("luarocks")

Adding a method means adding a module here and an instance to ALL_METHODS;
the dispatcher never names methods itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from woger.release.methods.github import GithubMethod
from woger.release.methods.gnu import GnuMethod
from woger.release.methods.lua import LuaMethod
from woger.release.methods.luarocks import LuarocksMethod
from woger.release.methods.null import NullMethod
from woger.release.methods.sourceforge import SourceforgeMethod

if TYPE_CHECKING:
    from woger.release.methods.base import ReleaseMethod

__all__ = [
    # Method classes
    "GithubMethod",
    "GnuMethod",
    "LuaMethod",
    "LuarocksMethod",
    "NullMethod",
    "SourceforgeMethod",
    # Registry data
    "ALL_METHODS",
    "get_method",
]


ALL_METHODS: tuple[ReleaseMethod, ...] = (
    NullMethod(),
    GnuMethod(),
    LuaMethod(),
    LuarocksMethod(),
    GithubMethod(),
    SourceforgeMethod(),
)

_METHODS_BY_NAME: dict[str, ReleaseMethod] = {m.spec.name: m for m in ALL_METHODS}


def get_method(name: str) -> ReleaseMethod | None:
    """Get a built-in method by name, or None if there is no such method."""
    return _METHODS_BY_NAME.get(name)
