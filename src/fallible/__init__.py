"""fallible - composable fallible computations without None or exceptions.

Result and Maybe containers, their combinators, and short-circuiting
sequencing of steps that may fail.

Quick Start:
    >>> from fallible import Failure, Maybe, Success, do
    >>>
    >>> Success(5).bind(lambda n: Success(n * 2) if n > 0 else Failure("neg")).bind(lambda n: Success(n + 1))
    Success(11)
    >>>
    >>> Maybe.some(3).map(lambda n: n + 1).value_or(0)
    4

Do-notation:
    >>> @do
    ... def create_user(params: dict):
    ...     name = yield validate_name(params.get("name"))
    ...     email = yield validate_email(params.get("email"))
    ...     return (yield save_user(name, email))

Dispatch on the outcome with match(); both handlers are required:
    >>> result.match(success=render_user, failure=render_error)
"""

from .config import FallibleSettings, get_settings
from .errors import FallibleError, StepFailure, UnwrapError, failure_from_exc, step_failure
from .monads import (
    Failure,
    Maybe,
    Nothing,
    Pipeline,
    Presence,
    Result,
    Some,
    Step,
    Success,
    Variant,
    collect_results,
    combine,
    do,
    maybe,
    pipeline,
    sequence,
    traverse,
    try_fn,
)

__version__ = "0.1.0"

__all__ = [
    # Containers
    "Result", "Success", "Failure", "Variant",
    "Maybe", "Some", "Nothing", "Presence", "maybe",
    # Sequencing
    "sequence", "pipeline", "Pipeline", "Step", "do",
    # Collection operations
    "combine", "traverse", "collect_results", "try_fn",
    # Errors
    "FallibleError", "UnwrapError", "StepFailure", "step_failure", "failure_from_exc",
    # Config
    "FallibleSettings", "get_settings",
]
