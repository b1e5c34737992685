"""Tests for resultkit.core.result module."""

import pytest

from resultkit.core.errors import (
    EmptyFieldError,
    InvalidFormatError,
    ParseError,
    ResultKitError,
    UnwrapError,
)
from resultkit.core.result import (
    Err,
    Ok,
    Result,
    collect_all_errors,
    collect_results,
    from_bool,
    from_optional,
    partition_results,
    try_result,
    try_result_with,
)


class TestOk:
    """Test Ok class."""

    def test_create_ok(self):
        result = Ok(42)
        assert result.value == 42
        assert result.is_ok() is True
        assert result.is_err() is False

    def test_unwrap(self):
        assert Ok("hello").unwrap() == "hello"

    def test_unwrap_err_raises(self):
        with pytest.raises(UnwrapError, match="unwrap_err on Ok"):
            Ok(1).unwrap_err()

    def test_optional_accessors(self):
        assert Ok(5).ok() == 5
        assert Ok(5).err() is None

    def test_unwrap_or(self):
        assert Ok(10).unwrap_or(99) == 10

    def test_unwrap_or_else(self):
        assert Ok(20).unwrap_or_else(lambda e: 99) == 20

    def test_map_chaining(self):
        result = Ok(3).map(lambda x: x * 2).map(lambda x: x + 1)
        assert result == Ok(7)

    def test_flat_map(self):
        def double_if_even(x: int) -> Result[int, ValueError]:
            if x % 2 == 0:
                return Ok(x * 2)
            return Err(ValueError("Odd number"))

        assert Ok(4).flat_map(double_if_even) == Ok(8)
        assert Ok(3).flat_map(double_if_even).is_err()

    def test_flat_map_does_not_nest(self):
        result = Ok(1).flat_map(lambda x: Ok(x + 1))
        assert result == Ok(2)
        assert not isinstance(result.value, Ok)

    def test_and_then_is_flat_map(self):
        assert Ok(10).and_then(lambda x: Ok(x + 5)) == Ok(15)

    def test_map_err_no_op(self, spy):
        handler = spy(lambda e: ValueError("new error"))
        assert Ok(42).map_err(handler) == Ok(42)
        assert handler.count == 0

    def test_recover_with_returns_self(self, spy):
        handler = spy(lambda e: Ok(99))
        assert Ok(42).recover_with(handler) == Ok(42)
        assert Ok(42).or_else(handler) == Ok(42)
        assert handler.count == 0

    def test_inspect(self):
        seen = []
        result = Ok(42).inspect(seen.append)
        assert seen == [42]
        assert result == Ok(42)

    def test_inspect_err_no_op(self):
        seen = []
        Ok(42).inspect_err(seen.append)
        assert seen == []

    def test_to_dict(self):
        d = Ok({"key": "value"}).to_dict()
        assert d == {"ok": True, "value": {"key": "value"}}

    def test_ok_is_immutable(self):
        result = Ok(42)
        with pytest.raises(Exception):  # FrozenInstanceError
            result.value = 99

    def test_hashable_when_value_is(self):
        assert len({Ok(1), Ok(1), Ok(2)}) == 2

    def test_repr(self):
        assert repr(Ok("a")) == "Ok('a')"


class TestErr:
    """Test Err class."""

    def test_create_err(self):
        error = ValueError("Bad value")
        result = Err(error)
        assert result.error is error
        assert result.is_ok() is False
        assert result.is_err() is True

    def test_unwrap_raises_unwrap_error_chained(self):
        error = ValueError("Bad value")
        with pytest.raises(UnwrapError, match="Bad value") as excinfo:
            Err(error).unwrap()
        assert excinfo.value.__cause__ is error

    def test_unwrap_err(self):
        error = EmptyFieldError("email")
        assert Err(error).unwrap_err() is error

    def test_optional_accessors(self):
        error = ValueError("x")
        assert Err(error).ok() is None
        assert Err(error).err() is error

    def test_unwrap_or(self):
        assert Err(ValueError("error")).unwrap_or(99) == 99

    def test_unwrap_or_else(self):
        assert Err(ValueError("error")).unwrap_or_else(lambda e: str(e)) == "error"

    def test_map_err(self):
        result = Err(ValueError("original")).map_err(
            lambda e: ParseError("wrapped", cause=e)
        )
        assert isinstance(result.error, ParseError)
        assert isinstance(result.error.cause, ValueError)

    def test_recover(self):
        assert Err(ValueError("error")).recover(lambda e: 0) == Ok(0)

    def test_recover_with(self):
        assert Err(ValueError("error")).recover_with(lambda e: Ok(42)) == Ok(42)

    def test_recover_with_can_fail_again(self):
        second = InvalidFormatError("email", "valid email address")
        result = Err(ValueError("first")).recover_with(lambda e: Err(second))
        assert result == Err(second)

    def test_inspect_no_op(self):
        seen = []
        Err(ValueError("error")).inspect(seen.append)
        assert seen == []

    def test_inspect_err(self):
        seen = []
        error = ValueError("test error")
        result = Err(error).inspect_err(seen.append)
        assert seen == [error]
        assert result.is_err()

    def test_to_dict_with_library_error(self):
        d = Err(EmptyFieldError("email")).to_dict()
        assert d["ok"] is False
        assert d["error"]["error_type"] == "EmptyFieldError"
        assert d["error"]["field"] == "email"

    def test_to_dict_with_plain_exception(self):
        d = Err(KeyError("k")).to_dict()
        assert d == {"ok": False, "error": {"error_type": "KeyError", "message": "'k'"}}

    def test_err_is_immutable(self):
        result = Err(ValueError("error"))
        with pytest.raises(Exception):
            result.error = ValueError("new")

    def test_equality_by_error_value(self):
        assert Err(EmptyFieldError("email")) == Err(EmptyFieldError("email"))
        assert Err(EmptyFieldError("email")) != Err(EmptyFieldError("age"))
        assert Err(EmptyFieldError("email")) != Ok("email")


class TestCombinatorLaws:
    """Behavioural guarantees of the combinators."""

    @pytest.mark.parametrize("value", [0, -3, "text", (1, 2)])
    def test_map_on_ok_applies_function(self, value):
        f = lambda v: (v, "seen")  # noqa: E731
        assert Ok(value).map(f) == Ok(f(value))

    def test_map_never_touches_failure(self, spy):
        error = ValueError("boom")
        f = spy(lambda v: v * 2)
        assert Err(error).map(f) == Err(error)
        assert f.count == 0

    def test_flat_map_on_ok_is_application(self):
        g = lambda v: Ok(v + 1) if v > 0 else Err(ValueError("non-positive"))  # noqa: E731
        assert Ok(5).flat_map(g) == g(5)
        assert Ok(-1).flat_map(g).is_err()

    def test_flat_map_on_failure_never_invokes(self, spy):
        error = ValueError("boom")
        g = spy(lambda v: Ok(v))
        assert Err(error).flat_map(g) == Err(error)
        assert g.count == 0

    def test_recover_on_failure(self):
        error = ValueError("boom")
        h = lambda e: f"recovered from {e}"  # noqa: E731
        assert Err(error).recover(h) == Ok(h(error))

    def test_recover_on_success_never_invokes(self, spy):
        h = spy(lambda e: "fallback")
        assert Ok("value").recover(h) == Ok("value")
        assert h.count == 0

    @pytest.mark.parametrize(
        "result",
        [Ok(1), Ok(None), Err(ValueError("x")), Err(EmptyFieldError("email"))],
    )
    def test_map_err_identity(self, result):
        assert result.map_err(lambda e: e) == result

    def test_exception_inside_transform_propagates(self):
        with pytest.raises(ZeroDivisionError):
            Ok(1).map(lambda x: x / 0)


class TestPatternMatching:
    """Test pattern matching with Result."""

    def test_match_ok(self):
        match Ok(42):
            case Ok(value):
                assert value == 42
            case Err(_):
                pytest.fail("Should not match Err")

    def test_match_err(self):
        match Err(ValueError("error")):
            case Ok(_):
                pytest.fail("Should not match Ok")
            case Err(error):
                assert isinstance(error, ValueError)


class TestConstructors:
    """try_result, try_result_with, from_optional, from_bool."""

    def test_try_result_ok(self):
        assert try_result(lambda: int("5")) == Ok(5)

    def test_try_result_err(self):
        result = try_result(lambda: int("x"))
        assert isinstance(result.error, ValueError)

    def test_try_result_with_mapper(self):
        result = try_result_with(lambda: int("x"), lambda e: ParseError(str(e), cause=e))
        assert isinstance(result.error, ParseError)
        assert isinstance(result.error.__cause__, ValueError)

    def test_try_result_with_without_mapper(self):
        result = try_result_with(lambda: 1 / 0)
        assert isinstance(result.error, ZeroDivisionError)

    def test_from_optional(self):
        assert from_optional(3, KeyError("k")) == Ok(3)
        assert from_optional(0, KeyError("k")) == Ok(0)
        assert from_optional(None, KeyError("k")).is_err()

    def test_from_bool(self):
        error = EmptyFieldError("email")
        assert from_bool(True, "a", error) == Ok("a")
        assert from_bool(False, "a", error) == Err(error)


class TestCollectors:
    """collect_results, collect_all_errors, partition_results."""

    def test_collect_results_all_ok(self):
        assert collect_results([Ok(1), Ok(2), Ok(3)]) == Ok([1, 2, 3])

    def test_collect_results_first_error_wins(self):
        a, b = ValueError("a"), ValueError("b")
        assert collect_results([Ok(1), Err(a), Err(b)]) == Err(a)

    def test_collect_results_stops_consuming(self, spy):
        later = spy(lambda: Ok(3))

        def produce():
            yield Ok(1)
            yield Err(ValueError("stop"))
            yield later()

        assert collect_results(produce()).is_err()
        assert later.count == 0

    def test_collect_results_empty(self):
        assert collect_results([]) == Ok([])

    def test_collect_all_errors_single_error_unwrapped(self):
        error = ValueError("x")
        assert collect_all_errors([Ok(1), Err(error)]) == Err(error)

    def test_collect_all_errors_aggregates(self):
        result = collect_all_errors([Err(ValueError("a")), Ok(1), Err(ValueError("b"))])
        assert isinstance(result.error, ResultKitError)
        assert "Multiple errors (2)" in str(result.error)
        assert result.error.context.metadata["errors"] == ["a", "b"]

    def test_collect_all_errors_combine_always_called(self):
        result = collect_all_errors([Ok(1), Err(ValueError("a"))], combine=tuple)
        assert isinstance(result.error, tuple)
        assert [str(e) for e in result.error] == ["a"]

    def test_collect_all_errors_all_ok(self):
        assert collect_all_errors([Ok(1), Ok(2)], combine=tuple) == Ok([1, 2])

    def test_partition_results(self):
        a = ValueError("a")
        values, errors = partition_results([Ok(1), Err(a), Ok(2)])
        assert values == [1, 2]
        assert errors == [a]
