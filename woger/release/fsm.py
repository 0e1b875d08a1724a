from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

from woger.core.result import Err, Ok, Result
from woger.release.errors import ReleaseError

S = TypeVar("S")


@dataclass(frozen=True, slots=True)
class StepAdvance(Generic[S]):
    state: S


@dataclass(frozen=True, slots=True)
class StepFinish:
    pass


StepOutcome = StepAdvance[S] | StepFinish
StepHandler = Callable[[S], Result[StepOutcome[S], ReleaseError]]
GetStep = Callable[[S], str]
OnStep = Callable[[S], None]


FINISH = StepFinish()


def advance(state: S) -> StepAdvance[S]:
    return StepAdvance(state=state)


def run_state_machine(
    *,
    initial_state: S,
    get_step: GetStep[S],
    handlers: Mapping[str, StepHandler[S]],
    on_step: OnStep[S] | None = None,
) -> Result[S, ReleaseError]:
    """Run handlers until one finishes or fails.

    Returns the state that finished, or the first handler error.
    """
    current = initial_state

    while True:
        if on_step is not None:
            on_step(current)

        step = get_step(current)
        handler = handlers.get(step)
        if handler is None:
            return Err(ReleaseError(kind="usage", message=f"unknown dispatch step: {step}"))

        outcome = handler(current)
        if isinstance(outcome, Err):
            return outcome

        if isinstance(outcome.value, StepFinish):
            return Ok(current)

        current = outcome.value.state
