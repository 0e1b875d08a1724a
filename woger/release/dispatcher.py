"""Run a release: pick methods, check their variables, execute them.

A run walks through these steps, stopping at the first error:

    parsing_selection -> resolving_requirements -> acquiring_missing
        -> validating -> executing -> done

Methods execute strictly in the order they were selected. A failing method
ends the run; methods that already ran are not undone.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum
from pathlib import Path

from woger.core.config import Config
from woger.core.result import Err, Ok, Result
from woger.output.console import ConsoleProtocol, Style
from woger.platform.process import ProcessRunner
from woger.release.errors import ReleaseError
from woger.release.fsm import FINISH, StepHandler, StepOutcome, advance, run_state_machine
from woger.release.methods.base import ReleaseContext, ReleaseMethod
from woger.release.notes import acquire_notes
from woger.release.registry import MethodRegistry
from woger.release.resolver import describe, missing, union_of
from woger.release.variables import NOTES, VariableStore

__all__ = [
    "DispatchReport",
    "DispatchState",
    "Dispatcher",
    "Step",
    "parse_selection",
]


class Step(StrEnum):
    PARSING_SELECTION = "parsing_selection"
    RESOLVING_REQUIREMENTS = "resolving_requirements"
    ACQUIRING_MISSING = "acquiring_missing"
    VALIDATING = "validating"
    EXECUTING = "executing"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True, slots=True)
class DispatchState:
    step: Step
    selection: str
    list_vars: bool = False
    methods: tuple[ReleaseMethod, ...] = ()
    required: frozenset[str] = frozenset()
    executed: tuple[str, ...] = ()
    listed: bool = False


@dataclass(frozen=True, slots=True)
class DispatchReport:
    """Outcome of a successful run."""

    executed: tuple[str, ...]
    required: frozenset[str]
    listed: bool = False


def parse_selection(
    text: str,
    registry: MethodRegistry,
) -> Result[tuple[ReleaseMethod, ...], ReleaseError]:
    """Turn `a,b,c` into methods, failing on the first unknown name.

    Blank entries (`a,,b`, trailing commas) are ignored; naming a method
    twice is an error.
    """
    names = [name.strip() for name in text.split(",")]
    names = [name for name in names if name]
    if not names:
        return Err(ReleaseError(kind="usage", message="no release method given"))

    methods: list[ReleaseMethod] = []
    seen: set[str] = set()
    for name in names:
        method = registry.lookup(name)
        if method is None:
            return Err(
                ReleaseError(
                    kind="unknown_method",
                    message=f"no such method {name}",
                    hint=f"available: {', '.join(registry.names())}",
                )
            )
        if name in seen:
            return Err(
                ReleaseError(kind="duplicate_method", message=f"method {name} selected more than once")
            )
        seen.add(name)
        methods.append(method)

    return Ok(tuple(methods))


class Dispatcher:
    """Orchestrates one release run.

    The store is the only mutable input; it is filled in (never overwritten)
    while acquiring the release notes, and only read once methods execute.
    """

    def __init__(
        self,
        *,
        registry: MethodRegistry,
        store: VariableStore,
        runner: ProcessRunner,
        console: ConsoleProtocol,
        cwd: Path,
        config: Config | None = None,
    ) -> None:
        self._registry = registry
        self._store = store
        self._runner = runner
        self._console = console
        self._cwd = cwd
        self._config = config or Config()
        self.trail: list[Step] = []

    @property
    def store(self) -> VariableStore:
        return self._store

    def run(self, selection: str, *, list_vars: bool = False) -> Result[DispatchReport, ReleaseError]:
        """Release to every method in `selection` (comma-separated names).

        Args:
            selection: Method names in execution order
            list_vars: Print the required variables and stop instead of releasing

        Returns:
            Ok(DispatchReport) on success, Err(ReleaseError) for the first failure
        """
        self.trail = []
        handlers: dict[str, StepHandler[DispatchState]] = {
            Step.PARSING_SELECTION: self._parse_selection,
            Step.RESOLVING_REQUIREMENTS: self._resolve_requirements,
            Step.ACQUIRING_MISSING: self._acquire_missing,
            Step.VALIDATING: self._validate,
            Step.EXECUTING: self._execute,
            Step.DONE: self._done,
        }
        result = run_state_machine(
            initial_state=DispatchState(
                step=Step.PARSING_SELECTION,
                selection=selection,
                list_vars=list_vars,
            ),
            get_step=lambda s: s.step,
            handlers=handlers,
            on_step=lambda s: self.trail.append(s.step),
        )
        if isinstance(result, Err):
            self.trail.append(Step.ABORTED)
            return result

        final = result.value
        return Ok(DispatchReport(executed=final.executed, required=final.required, listed=final.listed))

    # Steps

    def _parse_selection(self, state: DispatchState) -> Result[StepOutcome[DispatchState], ReleaseError]:
        methods = parse_selection(state.selection, self._registry)
        if isinstance(methods, Err):
            return methods
        return Ok(advance(replace(state, step=Step.RESOLVING_REQUIREMENTS, methods=methods.value)))

    def _resolve_requirements(
        self, state: DispatchState
    ) -> Result[StepOutcome[DispatchState], ReleaseError]:
        required = union_of(state.methods)
        return Ok(advance(replace(state, step=Step.ACQUIRING_MISSING, required=required)))

    def _acquire_missing(self, state: DispatchState) -> Result[StepOutcome[DispatchState], ReleaseError]:
        if NOTES in state.required and not self._store.has(NOTES):
            acquired = acquire_notes(
                self._store,
                cwd=self._cwd,
                config=self._config,
                runner=self._runner,
            )
            if isinstance(acquired, Err):
                return acquired
            if acquired.value is not None:
                self._console.info(f"release notes: {acquired.value.name}")
        return Ok(advance(replace(state, step=Step.VALIDATING)))

    def _validate(self, state: DispatchState) -> Result[StepOutcome[DispatchState], ReleaseError]:
        absent = missing(state.required, self._store)
        if state.list_vars or absent:
            self._print_variables(state.required, absent)

        if absent:
            return Err(
                ReleaseError(
                    kind="missing_variables",
                    message=f"missing variables: {', '.join(sorted(absent))}",
                    hint="pass them as NAME=VALUE",
                )
            )
        if state.list_vars:
            return Ok(advance(replace(state, step=Step.DONE, listed=True)))
        return Ok(advance(replace(state, step=Step.EXECUTING)))

    def _execute(self, state: DispatchState) -> Result[StepOutcome[DispatchState], ReleaseError]:
        ctx = ReleaseContext(
            store=self._store,
            runner=self._runner,
            console=self._console,
            cwd=self._cwd,
            config=self._config,
        )
        executed: list[str] = []
        for method in state.methods:
            self._console.header(f"{method.spec.name}: {method.spec.summary}")
            released = method.release(ctx)
            if isinstance(released, Err):
                return Err(replace(released.error, message=f"{method.spec.name}: {released.error.message}"))
            executed.append(method.spec.name)

        return Ok(advance(replace(state, step=Step.DONE, executed=tuple(executed))))

    def _done(self, state: DispatchState) -> Result[StepOutcome[DispatchState], ReleaseError]:
        del state
        return Ok(FINISH)

    def _print_variables(self, required: frozenset[str], absent: frozenset[str]) -> None:
        if not required:
            self._console.print("No variables needed.")
            return
        self._console.print("Variables needed:", Style.BOLD)
        for name, help_text in describe(required):
            if name in absent:
                self._console.print(f"  {name}: {help_text} (missing)", Style.WARNING)
            else:
                self._console.print(f"  {name}: {help_text}", Style.DIM)
