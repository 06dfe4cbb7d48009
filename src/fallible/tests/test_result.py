"""Tests for Result monad implementation.

Validates:
- Functor and monad laws
- Short-circuit behaviour of bind/map/or_else
- Exhaustive dispatch and conversions
- Collection operations
"""

from __future__ import annotations

import copy
import pickle
from typing import Callable

import pytest

from fallible import Failure, Maybe, Result, Success, UnwrapError, Variant
from fallible.monads import collect_results, combine, traverse, try_fn


def positive_double(n: int) -> Result[int, str]:
    return Success(n * 2) if n > 0 else Failure("neg")


# ═════════════════════════════════════════════════════════════════════════════
# Property Tests - Functor Laws
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize("result", [Success(42), Failure("fail")])
def test_functor_identity(result: Result[int, str]) -> None:
    """Functor law: fmap id = id"""
    assert result.map(lambda x: x) == result


def test_functor_composition() -> None:
    """Functor law: fmap (f . g) = fmap f . fmap g"""
    f: Callable[[int], int] = lambda x: x + 1
    g: Callable[[int], int] = lambda x: x * 2
    result: Result[int, str] = Success(5)

    assert result.map(lambda x: f(g(x))) == result.map(g).map(f)


# ═════════════════════════════════════════════════════════════════════════════
# Property Tests - Monad Laws
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize("x", [-3, 0, 7])
def test_monad_left_identity(x: int) -> None:
    """Monad law: return a >>= f = f a"""
    assert Success(x).bind(positive_double) == positive_double(x)


@pytest.mark.parametrize("m", [Success(42), Failure("fail")])
def test_monad_right_identity(m: Result[int, str]) -> None:
    """Monad law: m >>= return = m"""
    assert m.bind(lambda v: Success(v)) == m


@pytest.mark.parametrize("m", [Success(5), Success(-5), Failure("fail")])
def test_monad_associativity(m: Result[int, str]) -> None:
    """Monad law: (m >>= f) >>= g = m >>= (\\x -> f x >>= g)"""
    g: Callable[[int], Result[int, str]] = lambda x: Success(x + 1) if x < 100 else Failure("big")

    assert m.bind(positive_double).bind(g) == m.bind(lambda x: positive_double(x).bind(g))


@pytest.mark.parametrize("m", [Success(5), Failure("fail")])
def test_map_is_bind_with_success(m: Result[int, str]) -> None:
    f: Callable[[int], int] = lambda x: x * 3
    assert m.map(f) == m.bind(lambda v: Success(f(v)))


# ═════════════════════════════════════════════════════════════════════════════
# Operational Tests
# ═════════════════════════════════════════════════════════════════════════════


def test_success_construction() -> None:
    result: Result[int, str] = Success(42)

    assert result.is_success()
    assert not result.is_failure()
    assert result.tag is Variant.SUCCESS
    assert result.unwrap() == 42
    assert result.success_value() == 42
    assert result.failure_value() is None


def test_failure_construction() -> None:
    result: Result[int, str] = Failure("failed")

    assert result.is_failure()
    assert result.tag is Variant.FAILURE
    assert result.unwrap_failure() == "failed"
    assert result.success_value() is None
    assert result.failure_value() == "failed"


def test_classmethod_constructors_match_functions() -> None:
    assert Result.success(1) == Success(1)
    assert Result.failure("e") == Failure("e")


def test_success_and_failure_with_same_payload_differ() -> None:
    assert Success("x") != Failure("x")


def test_payload_may_be_a_container() -> None:
    """No implicit flattening."""
    nested = Success(Success(1))
    assert nested.unwrap() == Success(1)
    assert nested.map(lambda r: r.is_success()) == Success(True)


def test_unwrap_wrong_variant_raises() -> None:
    with pytest.raises(UnwrapError) as info:
        Failure("boom").unwrap()
    assert info.value.container == Failure("boom")

    with pytest.raises(UnwrapError):
        Success(1).unwrap_failure()


def test_immutable() -> None:
    result = Success(1)
    with pytest.raises(AttributeError):
        result._value = 2  # type: ignore[misc]


@pytest.mark.parametrize("result", [Success([1, 2]), Failure({"code": "E"})])
def test_copy_and_pickle_preserve_variant(result: Result[list[int], dict[str, str]]) -> None:
    shallow = copy.copy(result)
    deep = copy.deepcopy(result)
    restored = pickle.loads(pickle.dumps(result))

    for clone in (shallow, deep, restored):
        assert clone == result
        assert clone.tag is result.tag
    assert shallow.value is result.value
    assert deep.value is not result.value
    with pytest.raises(AttributeError):
        restored._value = None  # type: ignore[misc]


def test_bind_on_failure_never_invokes_function() -> None:
    calls: list[int] = []

    def step(x: int) -> Result[int, str]:
        calls.append(x)
        return Success(x)

    chained = Failure("fail").bind(step)

    assert chained == Failure("fail")
    assert calls == []


def test_bind_invokes_function_once() -> None:
    calls: list[int] = []

    def step(x: int) -> Result[int, str]:
        calls.append(x)
        return Success(x + 1)

    assert Success(1).bind(step) == Success(2)
    assert calls == [1]


def test_bind_propagates_inner_failure_unchanged() -> None:
    assert Success(5).bind(lambda _: Failure("failed")) == Failure("failed")


def test_and_then_and_flat_map_alias_bind() -> None:
    result: Result[int, str] = Success(5)
    assert result.and_then(positive_double) == result.flat_map(positive_double) == result.bind(positive_double)


def test_map_on_failure_does_not_apply() -> None:
    calls: list[int] = []
    mapped = Failure("fail").map(calls.append)

    assert mapped == Failure("fail")
    assert calls == []


def test_map_failure() -> None:
    assert Failure("fail").map_failure(lambda e: f"Error: {e}") == Failure("Error: fail")
    assert Success(42).map_failure(lambda e: f"Error: {e}") == Success(42)


def test_or_else_recovers_failure() -> None:
    assert Failure("fail").or_else(lambda _: Success(42)) == Success(42)


def test_or_else_translates_failure_type() -> None:
    assert Failure("fail").or_else(lambda e: Failure(len(e))) == Failure(4)


def test_or_else_noop_on_success() -> None:
    calls: list[str] = []

    def recover(e: str) -> Result[int, str]:
        calls.append(e)
        return Success(0)

    assert Success(5).or_else(recover) == Success(5)
    assert calls == []


def test_value_or() -> None:
    assert Success(5).value_or(lambda _: 10) == 5
    assert Failure("fail").value_or(len) == 4


def test_value_or_fallback_not_called_on_success() -> None:
    calls: list[str] = []
    Success(5).value_or(calls.append)
    assert calls == []


def test_noop_combinators_return_new_instances() -> None:
    ok: Result[int, str] = Success(1)
    err: Result[int, str] = Failure("e")

    for original, derived in [
        (ok, ok.or_else(Failure)),
        (ok, ok.map_failure(str.upper)),
        (ok, ok.inspect_failure(print)),
        (err, err.bind(Success)),
        (err, err.map(lambda x: x + 1)),
        (err, err.inspect(print)),
    ]:
        assert derived == original
        assert derived is not original


def test_match() -> None:
    handlers = {"success": lambda x: f"success: {x}", "failure": lambda e: f"failed: {e}"}

    assert Success(42).match(**handlers) == "success: 42"
    assert Failure("fail").match(**handlers) == "failed: fail"


def test_match_requires_both_handlers() -> None:
    with pytest.raises(TypeError):
        Success(1).match(success=lambda x: x)  # type: ignore[call-arg]


def test_structural_pattern_matching() -> None:
    def render(result: Result[int, str]) -> str:
        match result:
            case Result(Variant.SUCCESS, value):
                return f"ok {value}"
            case Result(Variant.FAILURE, error):
                return f"err {error}"
        return "unreachable"

    assert render(Success(1)) == "ok 1"
    assert render(Failure("x")) == "err x"


def test_inspect() -> None:
    seen: list[object] = []

    Success(42).inspect(seen.append).inspect_failure(seen.append)
    Failure("fail").inspect(seen.append).inspect_failure(seen.append)

    assert seen == [42, "fail"]


def test_flatten() -> None:
    assert Success(Success(42)).flatten() == Success(42)
    assert Success(Failure("fail")).flatten() == Failure("fail")
    assert Failure("outer").flatten() == Failure("outer")


def test_to_maybe() -> None:
    assert Success(3).to_maybe() == Maybe.some(3)
    assert Failure("gone").to_maybe() == Maybe.none()


def test_truthiness_iteration_and_repr() -> None:
    assert bool(Success(42)) is True
    assert bool(Failure("fail")) is False
    assert list(Success(42)) == [42]
    assert list(Failure("fail")) == []
    assert repr(Success(3)) == "Success(3)"
    assert repr(Failure("neg")) == "Failure('neg')"


def test_hashable() -> None:
    assert len({Success(1), Success(1), Failure(1)}) == 2


# ═════════════════════════════════════════════════════════════════════════════
# Collection Operations
# ═════════════════════════════════════════════════════════════════════════════


def test_combine() -> None:
    assert combine([Success(1), Success(2), Success(3)]) == Success([1, 2, 3])
    assert combine([Success(1), Failure("first"), Failure("second")]) == Failure("first")
    assert combine([]) == Success([])


def test_traverse_stops_at_first_failure() -> None:
    seen: list[str] = []

    def parse_int(s: str) -> Result[int, str]:
        seen.append(s)
        return Success(int(s)) if s.lstrip("-").isdigit() else Failure(f"invalid: {s}")

    assert traverse(["1", "2", "3"], parse_int) == Success([1, 2, 3])

    seen.clear()
    assert traverse(["1", "bad", "3"], parse_int) == Failure("invalid: bad")
    assert seen == ["1", "bad"]


def test_collect_results() -> None:
    assert collect_results([Success(1), Success(2)]) == Success([1, 2])
    assert collect_results([Success(1), Failure("e1"), Success(3), Failure("e2")]) == Failure(["e1", "e2"])


def test_try_fn() -> None:
    assert try_fn(int, "42") == Success(42)

    err = try_fn(int, "x")
    assert err.is_failure()
    assert isinstance(err.unwrap_failure(), ValueError)

    assert try_fn(int, "x", map_error=lambda e: type(e).__name__) == Failure("ValueError")


# ═════════════════════════════════════════════════════════════════════════════
# Railway-Oriented Programming Patterns
# ═════════════════════════════════════════════════════════════════════════════


def test_bind_chain_success() -> None:
    assert Success(5).bind(positive_double).bind(lambda n: Success(n + 1)) == Success(11)


def test_bind_chain_short_circuits() -> None:
    calls: list[int] = []

    def increment(n: int) -> Result[int, str]:
        calls.append(n)
        return Success(n + 1)

    assert Success(-1).bind(positive_double).bind(increment) == Failure("neg")
    assert calls == []


def test_fallback_chain() -> None:
    result = (
        Failure("primary unavailable")
        .or_else(lambda _: Failure("backup unavailable"))
        .or_else(lambda _: Success("cached data"))
    )

    assert result == Success("cached data")
