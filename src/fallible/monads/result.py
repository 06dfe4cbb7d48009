"""Result monad for type-safe fallible computations.

A discriminated union of Success/Failure with the monadic operations:
- Functor: map, map_failure
- Monad: bind (and_then, flat_map)
- Recovery: or_else, value_or
- Exhaustive dispatch: match
- Conversion: to_maybe
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Generic, NoReturn, TypeVar, cast

from ..errors import UnwrapError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .maybe import Maybe

S = TypeVar("S")  # Success type
F = TypeVar("F")  # Failure type
U = TypeVar("U")  # Mapped success type
G = TypeVar("G")  # Mapped failure type
T = TypeVar("T")  # Item type for collection operations


class Variant(Enum):
    """Tag distinguishing the two states of a Result."""

    SUCCESS = "Success"
    FAILURE = "Failure"


class Result(Generic[S, F]):
    """Tagged union representing success or failure with typed payloads.

    One class carries both variants; the tag decides which payload is held.
    Consumers dispatch on the tag via match(), which requires a handler for
    each variant.

    Examples:
        >>> Success(5).map(lambda x: x * 2)
        Success(10)

        >>> Failure("neg").map(lambda x: x * 2)
        Failure('neg')

        Railway-oriented chaining:
        >>> def positive(n: int) -> Result[int, str]:
        ...     return Success(n * 2) if n > 0 else Failure("neg")
        >>> Success(5).bind(positive).bind(lambda n: Success(n + 1))
        Success(11)

    Notes:
        - Immutable: every operation returns a new Result
        - Structural pattern matching: ``case Result(Variant.SUCCESS, v)``
    """

    __slots__ = ("_tag", "_value")
    __match_args__ = ("tag", "value")

    def __init__(self, value: S | F, tag: Variant) -> None:
        """Private constructor. Use Success() or Failure() instead."""
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_tag", tag)

    def __setattr__(self, name: str, value: object) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[type, tuple[object, ...]]:
        """Rebuild through the constructor so copy and pickle bypass __setattr__."""
        return (type(self), (self._value, self._tag))

    @classmethod
    def success(cls, value: S) -> Result[S, F]:
        """Construct the Success variant."""
        return cls(value, Variant.SUCCESS)

    @classmethod
    def failure(cls, error: F) -> Result[S, F]:
        """Construct the Failure variant."""
        return cls(error, Variant.FAILURE)

    # ─────────────────────────────────────────────────────────────────
    # Inspection
    # ─────────────────────────────────────────────────────────────────

    @property
    def tag(self) -> Variant:
        return self._tag

    @property
    def value(self) -> S | F:
        """Raw payload of whichever variant is held."""
        return self._value

    def is_success(self) -> bool:
        return self._tag is Variant.SUCCESS

    def is_failure(self) -> bool:
        return self._tag is Variant.FAILURE

    def success_value(self) -> S | None:
        """Success payload, or None on Failure."""
        return cast(S, self._value) if self.is_success() else None

    def failure_value(self) -> F | None:
        """Failure payload, or None on Success."""
        return cast(F, self._value) if self.is_failure() else None

    # ─────────────────────────────────────────────────────────────────
    # Value Extraction
    # ─────────────────────────────────────────────────────────────────

    def value_or(self, f: Callable[[F], S]) -> S:
        """Success payload, or a fallback computed from the failure.

        Total: always yields an S, so the chain ends here instead of
        propagating the failure further.
        """
        if self.is_success():
            return cast(S, self._value)
        return f(cast(F, self._value))

    def unwrap(self) -> S:
        """Extract the Success payload.

        Raises:
            UnwrapError: If the Result is a Failure
        """
        if self.is_success():
            return cast(S, self._value)
        raise UnwrapError(self, f"Called unwrap() on {self!r}")

    def unwrap_failure(self) -> F:
        """Extract the Failure payload.

        Raises:
            UnwrapError: If the Result is a Success
        """
        if self.is_failure():
            return cast(F, self._value)
        raise UnwrapError(self, f"Called unwrap_failure() on {self!r}")

    # ─────────────────────────────────────────────────────────────────
    # Functor Operations
    # ─────────────────────────────────────────────────────────────────

    def map(self, f: Callable[[S], U]) -> Result[U, F]:
        """Map function over the Success payload (Functor).

        Same as ``bind(lambda v: Success(f(v)))`` without requiring f to
        return a Result. f is never invoked on Failure.

        Type signature: Result[S, F] -> (S -> U) -> Result[U, F]
        """
        if self.is_success():
            return Success(f(cast(S, self._value)))
        return Failure(cast(F, self._value))

    def map_failure(self, f: Callable[[F], G]) -> Result[S, G]:
        """Map function over the Failure payload.

        Type signature: Result[S, F] -> (F -> G) -> Result[S, G]
        """
        if self.is_failure():
            return Failure(f(cast(F, self._value)))
        return Success(cast(S, self._value))

    # ─────────────────────────────────────────────────────────────────
    # Monad Operations
    # ─────────────────────────────────────────────────────────────────

    def bind(self, f: Callable[[S], Result[U, F]]) -> Result[U, F]:
        """Monadic bind (>>=) - chain operations that can fail.

        On Success the result of f is returned as is, so a failure produced
        inside f propagates unchanged. On Failure f is never invoked and the
        first failure in evaluation order is the one that survives.

        Type signature: Result[S, F] -> (S -> Result[U, F]) -> Result[U, F]

        Example:
            >>> def parse_int(s: str) -> Result[int, str]:
            ...     return Success(int(s)) if s.isdigit() else Failure(f"invalid int: {s}")
            >>> Success("42").bind(parse_int)
            Success(42)
        """
        if self.is_success():
            return f(cast(S, self._value))
        return Failure(cast(F, self._value))

    def and_then(self, f: Callable[[S], Result[U, F]]) -> Result[U, F]:
        """Alias for bind."""
        return self.bind(f)

    flat_map = and_then

    def or_else(self, f: Callable[[F], Result[S, G]]) -> Result[S, G]:
        """Chain an alternative on Failure.

        If Failure, applies f to recover or translate the failure type.
        If Success, passes through without invoking f.

        Type signature: Result[S, F] -> (F -> Result[S, G]) -> Result[S, G]
        """
        if self.is_failure():
            return f(cast(F, self._value))
        return Success(cast(S, self._value))

    def flatten(self: Result[Result[S, F], F]) -> Result[S, F]:
        """Join a nested Result. Never applied implicitly.

        Result[Result[S, F], F] -> Result[S, F]
        """
        if self.is_success():
            return cast("Result[S, F]", self._value)
        return Failure(cast(F, self._value))

    # ─────────────────────────────────────────────────────────────────
    # Side-effect taps
    # ─────────────────────────────────────────────────────────────────

    def inspect(self, f: Callable[[S], Any]) -> Result[S, F]:
        """Call f with the Success payload, return an equal Result."""
        if self.is_success():
            f(cast(S, self._value))
        return Result(self._value, self._tag)

    def inspect_failure(self, f: Callable[[F], Any]) -> Result[S, F]:
        """Call f with the Failure payload, return an equal Result."""
        if self.is_failure():
            f(cast(F, self._value))
        return Result(self._value, self._tag)

    # ─────────────────────────────────────────────────────────────────
    # Pattern Matching
    # ─────────────────────────────────────────────────────────────────

    def match(self, *, success: Callable[[S], U], failure: Callable[[F], U]) -> U:
        """Exhaustive case analysis over both variants.

        Both handlers are required keyword arguments; there is no default
        branch, so a failure cannot be silently ignored.

        Example:
            >>> Success(42).match(success=lambda x: f"ok: {x}", failure=lambda e: f"failed: {e}")
            'ok: 42'
        """
        if self.is_success():
            return success(cast(S, self._value))
        return failure(cast(F, self._value))

    # ─────────────────────────────────────────────────────────────────
    # Conversion
    # ─────────────────────────────────────────────────────────────────

    def to_maybe(self) -> Maybe[S]:
        """Some(payload) on Success, Nothing on Failure (payload discarded)."""
        from .maybe import Maybe

        if self.is_success():
            return Maybe.some(cast(S, self._value))
        return Maybe.none()

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __bool__(self) -> bool:
        """True if Success."""
        return self.is_success()

    def __repr__(self) -> str:
        return f"{self._tag.value}({self._value!r})"

    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        """Structural equality."""
        if not isinstance(other, Result):
            return NotImplemented
        return self._tag is other._tag and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._tag, self._value))

    def __iter__(self) -> Iterator[S]:
        """Yield the Success payload (0 or 1 element)."""
        if self.is_success():
            yield cast(S, self._value)


# ═════════════════════════════════════════════════════════════════════════════
# Constructor Functions
# ═════════════════════════════════════════════════════════════════════════════


def Success(value: S) -> Result[S, Any]:  # noqa: N802
    """Construct Success variant.

    Type signature: S -> Result[S, F]
    """
    return Result(value, Variant.SUCCESS)


def Failure(error: F) -> Result[Any, F]:  # noqa: N802
    """Construct Failure variant.

    Type signature: F -> Result[S, F]
    """
    return Result(error, Variant.FAILURE)


# ═════════════════════════════════════════════════════════════════════════════
# Collection Operations
# ═════════════════════════════════════════════════════════════════════════════


def combine(results: Iterable[Result[S, F]]) -> Result[list[S], F]:
    """Convert Results into a Result of list, failing fast on the first Failure.

    Type signature: [Result[S, F]] -> Result[[S], F]

    Example:
        >>> combine([Success(1), Success(2)])
        Success([1, 2])
        >>> combine([Success(1), Failure("fail"), Success(3)])
        Failure('fail')
    """
    values: list[S] = []
    for result in results:
        if result.is_failure():
            return Failure(result.unwrap_failure())
        values.append(result.unwrap())
    return Success(values)


def traverse(items: Iterable[T], f: Callable[[T], Result[U, F]]) -> Result[list[U], F]:
    """Apply f to each item in order, collecting successes.

    Stops at the first Failure; f is not invoked for the remaining items.

    Type signature: [T] -> (T -> Result[U, F]) -> Result[[U], F]
    """
    return combine(f(item) for item in items)


def collect_results(results: Iterable[Result[S, F]]) -> Result[list[S], list[F]]:
    """Collect all Results, accumulating every failure.

    Unlike combine this does not fail fast.

    Type signature: [Result[S, F]] -> Result[[S], [F]]

    Example:
        >>> collect_results([Success(1), Failure("e1"), Success(3), Failure("e2")])
        Failure(['e1', 'e2'])
    """
    values: list[S] = []
    errors: list[F] = []
    for result in results:
        if result.is_success():
            values.append(result.unwrap())
        else:
            errors.append(result.unwrap_failure())
    return Success(values) if not errors else Failure(errors)


def try_fn(
    f: Callable[..., S],
    *args: Any,
    map_error: Callable[[Exception], F] | None = None,
    **kwargs: Any,
) -> Result[S, F]:
    """Run an exception-raising callable and capture the outcome as a Result.

    This is the boundary adapter for collaborators that signal failure by
    raising. The raised exception becomes the Failure payload, or whatever
    map_error turns it into.

    Example:
        >>> try_fn(int, "42")
        Success(42)
        >>> try_fn(int, "x", map_error=lambda e: type(e).__name__)
        Failure('ValueError')
    """
    try:
        return Success(f(*args, **kwargs))
    except Exception as e:
        return Failure(map_error(e) if map_error else cast(F, e))
