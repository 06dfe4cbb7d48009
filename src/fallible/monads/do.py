"""Short-circuiting sequential composition of fallible steps.

Two ways to write a chain of steps as straight-line code:

- sequence()/Pipeline: an explicit left fold over Result.bind. Each step
  receives the previous step's success payload; the first Failure is the
  outcome and no later step runs.
- @do: a generator function yields Results and receives their payloads.
  The first Failure closes the generator inside the decorator's own call
  and becomes the return value.

Example:
    >>> def validate(n: int) -> Result[int, str]:
    ...     return Success(n) if n > 0 else Failure("neg")
    >>> sequence([validate, lambda n: Success(n * 2)], 5)
    Success(10)

    >>> @do
    ... def double_positive(n: int):
    ...     v = yield validate(n)
    ...     return v * 2
    >>> double_positive(-1)
    Failure('neg')
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from functools import reduce, wraps
from typing import TYPE_CHECKING, Any, Callable, Generator, ParamSpec, TypeAlias, TypeVar

from .result import Failure, Result, Success

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..logging import BoundLogger

P = ParamSpec("P")
S = TypeVar("S")
F = TypeVar("F")

# A step maps the accumulated state to the next Result
Step: TypeAlias = Callable[[Any], Result[Any, Any]]


# ═════════════════════════════════════════════════════════════════════════════
# Step tracing
# ═════════════════════════════════════════════════════════════════════════════


def _step_logger(name: str | None) -> BoundLogger | None:
    """Debug-level logger for step tracing, or None when FALLIBLE_TRACE_STEPS is off.

    Renderer and format come from FALLIBLE_LOG_*; enabling tracing is what
    lets the per-step debug entries through.
    """
    from ..config import get_settings
    from ..logging import get_logger

    if not get_settings().trace_steps:
        return None
    return get_logger("fallible.sequence", sequence=name or "<anonymous>").with_level(logging.DEBUG)


def _step_name(step: Step) -> str:
    return getattr(step, "__qualname__", None) or getattr(step, "__name__", None) or repr(step)


def _traced(step: Step, index: int, log: BoundLogger, ran: list[int]) -> Step:
    def run(state: Any) -> Result[Any, Any]:
        ran.append(index)
        outcome = step(state)
        log.debug("step finished", index=index, step=_step_name(step), outcome=outcome.tag.value)
        return outcome
    return run


# ═════════════════════════════════════════════════════════════════════════════
# Sequencer
# ═════════════════════════════════════════════════════════════════════════════


def sequence(steps: Iterable[Step], initial: Any = None, *, name: str | None = None) -> Result[Any, Any]:
    """Run steps strictly in order, stopping at the first Failure.

    Step 1 receives ``initial``; every later step receives the previous
    step's success payload. Steps after the first Failure are never invoked.
    With no steps the outcome is ``Success(initial)``.

    The sequencer has no failure of its own: any Failure it returns was
    produced by a step. Exceptions raised by a step propagate unchanged.

    Type signature: [state -> Result[S, F]] -> state -> Result[S, F]

    Example:
        >>> calls = []
        >>> def fail(_):
        ...     return Failure("E")
        >>> sequence([lambda _: Success("A"), fail, calls.append])
        Failure('E')
        >>> calls
        []
    """
    if (log := _step_logger(name)) is None:
        return reduce(Result.bind, steps, Success(initial))

    steps = tuple(steps)
    ran: list[int] = []
    outcome = reduce(Result.bind, (_traced(s, i, log, ran) for i, s in enumerate(steps)), Success(initial))
    log.debug("sequence finished", outcome=outcome.tag.value, ran=len(ran), skipped=len(steps) - len(ran))
    return outcome


@dataclass(frozen=True, slots=True)
class Pipeline:
    """Reusable, named list of steps. Calling it runs sequence() over them.

    Pipelines compose with ``>>``, accepting a step or another pipeline.

    Example:
        >>> add_one = lambda n: Success(n + 1)
        >>> inc_twice = pipeline(add_one, name="inc") >> add_one
        >>> inc_twice(1)
        Success(3)
    """

    steps: tuple[Step, ...] = ()
    name: str | None = None

    def __call__(self, initial: Any = None) -> Result[Any, Any]:
        return sequence(self.steps, initial, name=self.name)

    def then(self, step: Step | Pipeline) -> Pipeline:
        more = step.steps if isinstance(step, Pipeline) else (step,)
        return Pipeline((*self.steps, *more), self.name)

    __rshift__ = then

    def __len__(self) -> int:
        return len(self.steps)


def pipeline(*steps: Step, name: str | None = None) -> Pipeline:
    """Capture steps into a Pipeline callable as ``initial -> Result``."""
    return Pipeline(steps, name)


# ═════════════════════════════════════════════════════════════════════════════
# Do-notation
# ═════════════════════════════════════════════════════════════════════════════


def do(func: Callable[P, Generator[Result[Any, F], Any, Any]]) -> Callable[P, Result[Any, F]]:
    """Write a chain of fallible steps as a generator.

    ``value = yield result`` unwraps a Success payload; a Failure ends the
    generator (its ``finally`` blocks run) and is returned as the outcome.
    A plain ``return v`` becomes ``Success(v)``; a returned Result is
    passed through as is.

    Example:
        >>> @do
        ... def create_user(params: dict):
        ...     name = yield validate_name(params.get("name"))
        ...     email = yield validate_email(params.get("email"))
        ...     user = yield save_user(name, email)
        ...     return user

    Raises:
        TypeError: If func is not a generator function, or yields a non-Result
    """
    if not inspect.isgeneratorfunction(func):
        raise TypeError(f"@do requires a generator function, got {func!r}")

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[Any, F]:
        gen = func(*args, **kwargs)
        sent: Any = None
        try:
            while True:
                yielded = gen.send(sent)
                if not isinstance(yielded, Result):
                    gen.close()
                    raise TypeError(f"{func.__qualname__} yielded {yielded!r}; only Result values may be yielded")
                if yielded.is_failure():
                    gen.close()
                    return Failure(yielded.unwrap_failure())
                sent = yielded.unwrap()
        except StopIteration as stop:
            value = stop.value
            return value if isinstance(value, Result) else Success(value)

    return wrapper
