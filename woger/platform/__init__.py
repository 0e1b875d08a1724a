"""Platform adapters (external processes)."""

from .process import (
    DryRunRunner,
    ProcessError,
    ProcessRunner,
    RecordingRunner,
    SubprocessRunner,
)

__all__ = [
    "DryRunRunner",
    "ProcessError",
    "ProcessRunner",
    "RecordingRunner",
    "SubprocessRunner",
]
