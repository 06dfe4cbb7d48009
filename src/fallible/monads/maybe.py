"""Maybe monad for optional values without None checks."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Generic, NoReturn, TypeVar, cast

from ..errors import UnwrapError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .result import Result

T = TypeVar("T")
U = TypeVar("U")
F = TypeVar("F")


class Presence(Enum):
    """Tag distinguishing the two states of a Maybe."""

    SOME = "Some"
    NOTHING = "Nothing"


class Maybe(Generic[T]):
    """Tagged union of Some(value) and Nothing.

    ``Some(None)`` is a present value; use Maybe.of() to lift an Optional.
    Containers are never flattened implicitly.

    Examples:
        >>> Maybe.some(3).map(lambda n: n + 1).value_or(0)
        4
        >>> Maybe.none().map(lambda n: n + 1).value_or(0)
        0
    """

    __slots__ = ("_tag", "_value")
    __match_args__ = ("tag", "value")

    def __init__(self, value: T | None, tag: Presence) -> None:
        """Private constructor. Use Some() or Nothing() instead."""
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_tag", tag)

    def __setattr__(self, name: str, value: object) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[type, tuple[object, ...]]:
        """Rebuild through the constructor so copy and pickle bypass __setattr__."""
        return (type(self), (self._value, self._tag))

    @classmethod
    def some(cls, value: T) -> Maybe[T]:
        return cls(value, Presence.SOME)

    @classmethod
    def none(cls) -> Maybe[T]:
        return cls(None, Presence.NOTHING)

    @classmethod
    def of(cls, value: T | None) -> Maybe[T]:
        """Nothing if value is None, otherwise Some(value)."""
        return cls.none() if value is None else cls.some(value)

    @property
    def tag(self) -> Presence:
        return self._tag

    @property
    def value(self) -> T | None:
        return self._value

    def is_present(self) -> bool:
        return self._tag is Presence.SOME

    def is_absent(self) -> bool:
        return self._tag is Presence.NOTHING

    # ─────────────────────────────────────────────────────────────────
    # Combinators
    # ─────────────────────────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Maybe[U]:
        """Some(f(v)), or Nothing without invoking f.

        f is a plain transform; a fallible one belongs in Result.bind.
        """
        if self.is_present():
            return Some(f(cast(T, self._value)))
        return Nothing()

    def bind(self, f: Callable[[T], Maybe[U]]) -> Maybe[U]:
        if self.is_present():
            return f(cast(T, self._value))
        return Nothing()

    flat_map = bind

    def filter(self, predicate: Callable[[T], bool]) -> Maybe[T]:
        if self.is_present() and predicate(cast(T, self._value)):
            return Some(cast(T, self._value))
        return Nothing()

    def or_else(self, f: Callable[[], Maybe[T]]) -> Maybe[T]:
        """This value if present, otherwise the alternative produced by f."""
        if self.is_present():
            return Some(cast(T, self._value))
        return f()

    def value_or(self, default: T) -> T:
        return cast(T, self._value) if self.is_present() else default

    def value_or_else(self, thunk: Callable[[], T]) -> T:
        """Like value_or, but the default is only computed when absent."""
        return cast(T, self._value) if self.is_present() else thunk()

    def unwrap(self) -> T:
        """Extract the value.

        Raises:
            UnwrapError: If the Maybe is Nothing
        """
        if self.is_present():
            return cast(T, self._value)
        raise UnwrapError(self, "Called unwrap() on Nothing")

    def match(self, *, some: Callable[[T], U], nothing: Callable[[], U]) -> U:
        """Exhaustive case analysis; both handlers are required."""
        if self.is_present():
            return some(cast(T, self._value))
        return nothing()

    # ─────────────────────────────────────────────────────────────────
    # Conversion
    # ─────────────────────────────────────────────────────────────────

    def to_result(self, failure: F) -> Result[T, F]:
        """Success(v) if present, otherwise Failure(failure)."""
        from .result import Failure, Success

        if self.is_present():
            return Success(cast(T, self._value))
        return Failure(failure)

    def to_optional(self) -> T | None:
        return self._value if self.is_present() else None

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __bool__(self) -> bool:
        return self.is_present()

    def __repr__(self) -> str:
        return f"Some({self._value!r})" if self.is_present() else "Nothing"

    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Maybe):
            return NotImplemented
        return self._tag is other._tag and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._tag, self._value))

    def __iter__(self) -> Iterator[T]:
        if self.is_present():
            yield cast(T, self._value)


def Some(value: T) -> Maybe[T]:  # noqa: N802
    return Maybe(value, Presence.SOME)


def Nothing() -> Maybe[Any]:  # noqa: N802
    return Maybe(None, Presence.NOTHING)


def maybe(value: T | None) -> Maybe[T]:
    """Lift an Optional into Maybe."""
    return Maybe.of(value)
