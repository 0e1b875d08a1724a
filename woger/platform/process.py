"""Subprocess execution with Result-based error handling.

Release methods never call subprocess directly. They go through a
ProcessRunner, which is either a SubprocessRunner (the real thing) or a
DryRunRunner that only describes what it would do. This keeps every external
side effect behind one switch.

Usage:
    runner = SubprocessRunner(cwd=Path("."))
    match runner.capture(["make", "-s", "emit_upload_commands"]):
        case Ok(stdout):
            print(stdout)
        case Err(error):
            print(f"Failed: {error}")
"""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from woger.core.result import Err, Ok, Result
from woger.output.console import ConsoleProtocol, Style

__all__ = [
    "DryRunRunner",
    "ProcessError",
    "ProcessRunner",
    "RecordingRunner",
    "SubprocessRunner",
    "describe",
    "run",
    "run_interactive",
]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it never ran).
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def run(
    cmd: Sequence[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
    input_text: str | None = None,
    input_path: Path | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return its stdout or an error.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).
        input_text: Text fed to the command's stdin.
        input_path: File whose contents are fed to stdin (wins over input_text).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    command = tuple(cmd)
    try:
        if input_path is not None:
            with input_path.open("r", encoding="utf-8") as stdin:
                proc = subprocess.run(
                    command,
                    cwd=str(cwd),
                    env=env,
                    stdin=stdin,
                    capture_output=True,
                    text=True,
                    timeout=timeout,
                    check=False,
                )
        else:
            proc = subprocess.run(
                command,
                cwd=str(cwd),
                env=env,
                input=input_text,
                capture_output=True,
                text=True,
                timeout=timeout,
                check=False,
            )
    except subprocess.TimeoutExpired:
        return Err(
            ProcessError(
                command=command,
                returncode=-1,
                stdout="",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=command, returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=command,
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_interactive(cmd: Sequence[str], cwd: Path) -> Result[None, ProcessError]:
    """Execute a command attached to the terminal (e.g. an editor).

    Returns:
        Ok(None) on success, Err(ProcessError) on failure.
    """
    command = tuple(cmd)
    try:
        proc = subprocess.run(command, cwd=str(cwd), check=False)
    except OSError as e:
        return Err(ProcessError(command=command, returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(command=command, returncode=proc.returncode, stdout="", stderr=""))

    return Ok(None)


def describe(cmd: Sequence[str], *, input_path: Path | None = None) -> str:
    """Render a command the way a shell user would type it."""
    text = shlex.join(cmd)
    if input_path is not None:
        text += f" < {shlex.quote(str(input_path))}"
    return text


class ProcessRunner(Protocol):
    """Protocol for running external programs on behalf of release methods."""

    @property
    def dry_run(self) -> bool: ...

    def capture(
        self,
        cmd: Sequence[str],
        *,
        simulated: str = "",
        input_text: str | None = None,
        input_path: Path | None = None,
    ) -> Result[str, ProcessError]:
        """Run a command and return its stdout.

        Args:
            cmd: Command and arguments.
            simulated: Output a dry run reports instead of running the command.
            input_text: Text fed to stdin.
            input_path: File fed to stdin.
        """
        ...

    def interactive(self, cmd: Sequence[str]) -> Result[None, ProcessError]:
        """Run a command attached to the user's terminal."""
        ...


class SubprocessRunner:
    """Runs commands for real in a fixed working directory."""

    def __init__(self, cwd: Path, *, timeout: float | None = None) -> None:
        self._cwd = cwd
        self._timeout = timeout

    @property
    def dry_run(self) -> bool:
        return False

    def capture(
        self,
        cmd: Sequence[str],
        *,
        simulated: str = "",
        input_text: str | None = None,
        input_path: Path | None = None,
    ) -> Result[str, ProcessError]:
        del simulated
        return run(
            cmd,
            cwd=self._cwd,
            timeout=self._timeout,
            input_text=input_text,
            input_path=input_path,
        )

    def interactive(self, cmd: Sequence[str]) -> Result[None, ProcessError]:
        return run_interactive(cmd, cwd=self._cwd)


class DryRunRunner:
    """Describes commands on the console instead of running them.

    Every command "succeeds"; captured commands report their simulated output.
    """

    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console

    @property
    def dry_run(self) -> bool:
        return True

    def capture(
        self,
        cmd: Sequence[str],
        *,
        simulated: str = "",
        input_text: str | None = None,
        input_path: Path | None = None,
    ) -> Result[str, ProcessError]:
        self._console.print(f"would run: {describe(cmd, input_path=input_path)}")
        if input_text is not None and input_path is None:
            for line in input_text.splitlines():
                self._console.print(f"  | {line}", Style.DIM)
        return Ok(simulated)

    def interactive(self, cmd: Sequence[str]) -> Result[None, ProcessError]:
        self._console.print(f"would run: {describe(cmd)}")
        return Ok(None)


@dataclass(frozen=True, slots=True)
class RecordedCall:
    """One command seen by RecordingRunner."""

    command: tuple[str, ...]
    input_text: str | None = None
    input_path: Path | None = None
    interactive: bool = False


def _empty_calls() -> list[RecordedCall]:
    return []


def _empty_results() -> dict[str, list[Result[str, ProcessError]]]:
    return {}


@dataclass
class RecordingRunner:
    """Runner that records commands and replays scripted results.

    Results are keyed by program name (the first word of the command) and
    consumed in order; unscripted commands succeed with empty output.
    Use this in tests instead of patching subprocess.
    """

    calls: list[RecordedCall] = field(default_factory=_empty_calls)
    results: dict[str, list[Result[str, ProcessError]]] = field(default_factory=_empty_results)
    dry_run: bool = False

    def script(self, program: str, *results: Result[str, ProcessError]) -> None:
        """Queue results for the next invocations of `program`."""
        self.results.setdefault(program, []).extend(results)

    def _next(self, cmd: Sequence[str]) -> Result[str, ProcessError]:
        queue = self.results.get(cmd[0]) if cmd else None
        if queue:
            return queue.pop(0)
        return Ok("")

    def capture(
        self,
        cmd: Sequence[str],
        *,
        simulated: str = "",
        input_text: str | None = None,
        input_path: Path | None = None,
    ) -> Result[str, ProcessError]:
        del simulated
        self.calls.append(
            RecordedCall(command=tuple(cmd), input_text=input_text, input_path=input_path)
        )
        return self._next(cmd)

    def interactive(self, cmd: Sequence[str]) -> Result[None, ProcessError]:
        self.calls.append(RecordedCall(command=tuple(cmd), interactive=True))
        result = self._next(cmd)
        if isinstance(result, Err):
            return result
        return Ok(None)

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [c.command for c in self.calls]

    @property
    def programs(self) -> list[str]:
        """First word of each recorded command, in order."""
        return [c.command[0] for c in self.calls if c.command]
