"""Result and Maybe monads with short-circuiting composition.

Example:
    >>> from fallible.monads import Failure, Result, Success, sequence
    >>>
    >>> def halve(n: int) -> Result[int, str]:
    ...     return Success(n // 2) if n % 2 == 0 else Failure(f"odd: {n}")
    >>>
    >>> sequence([halve, halve, halve], 8)
    Success(1)
    >>> sequence([halve, halve, halve], 12)
    Failure('odd: 3')
"""

from .do import Pipeline, Step, do, pipeline, sequence
from .maybe import Maybe, Nothing, Presence, Some, maybe
from .result import (
    Failure,
    Result,
    Success,
    Variant,
    collect_results,
    combine,
    traverse,
    try_fn,
)

__all__ = [
    # Core types
    "Result",
    "Success",
    "Failure",
    "Variant",
    "Maybe",
    "Some",
    "Nothing",
    "Presence",
    "maybe",
    # Sequencing
    "sequence",
    "pipeline",
    "Pipeline",
    "Step",
    "do",
    # Collection operations
    "combine",
    "traverse",
    "collect_results",
    "try_fn",
]
