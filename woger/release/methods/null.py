"""The `null` method: releases nowhere.

Useful to check a selection parses, or to write the release notes without
publishing anything yet (`woger null,github --vars`).
"""

from __future__ import annotations

from woger.core.result import Ok, Result
from woger.release.errors import ReleaseError
from woger.release.methods.base import MethodSpec, ReleaseContext, ReleaseMethod

__all__ = ["NullMethod"]


class NullMethod(ReleaseMethod):
    spec = MethodSpec(name="null", summary="do nothing")

    def release(self, ctx: ReleaseContext) -> Result[None, ReleaseError]:
        del ctx
        return Ok(None)
