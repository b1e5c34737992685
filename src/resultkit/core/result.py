"""
Result container for explicit success/failure handling.

Provides a typed ``Result[T, E]`` made of two frozen variants, ``Ok[T]`` and
``Err[E]``, plus combinators that compose fallible steps without branching on
the variant at every call site. Expected failures travel as values; nothing
in this module raises except the explicit ``unwrap*`` accessors.

Manifesto:
    - **Explicit over implicit:** The failure path is part of the return type
    - **Two terminal states:** A Result is Ok or Err for its whole lifetime
    - **Composable:** map / flat_map / recover chain without nested try/except
    - **Batch-friendly:** collect_results() stops at the first error,
      collect_all_errors() keeps going and aggregates

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                     Result[T, E]                            │
        ├─────────────────┬─────────────────┬─────────────────────────┤
        │     Ok[T]       │     Err[E]      │     Utilities           │
        ├─────────────────┼─────────────────┼─────────────────────────┤
        │ • value: T      │ • error: E      │ • try_result()          │
        │ • map()         │ • map_err()     │ • collect_results()     │
        │ • flat_map()    │ • recover()     │ • collect_all_errors()  │
        │ • unwrap()      │ • recover_with()│ • partition_results()   │
        └─────────────────┴─────────────────┴─────────────────────────┘

Examples:
    Pattern matching:

    >>> def divide(a: int, b: int) -> Result[float, ValueError]:
    ...     if b == 0:
    ...         return Err(ValueError("Division by zero"))
    ...     return Ok(a / b)
    >>> match divide(10, 2):
    ...     case Ok(value):
    ...         print(f"Result: {value}")
    ...     case Err(error):
    ...         print(f"Error: {error}")
    Result: 5.0

    Chaining and recovery:

    >>> Ok(10).map(lambda x: x * 2).map(lambda x: x + 1)
    Ok(21)
    >>> Err(ValueError("oops")).map(lambda x: x * 2).recover(lambda e: 0)
    Ok(0)

Guardrails:
    ❌ DON'T: Call unwrap() without checking is_ok() first
    ✅ DO: Use pattern matching, ok(), or unwrap_or()

    ❌ DON'T: Raise inside map/flat_map functions
    ✅ DO: Return Err from flat_map if the step can fail

Tags:
    result-pattern, error-handling, functional-programming, resultkit
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Never, TypeVar, overload

from resultkit.core.errors import ErrorCategory, ResultKitError, UnwrapError


T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=Exception)
F = TypeVar("F", bound=Exception)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """
    Successful result containing a value.

    Immutable, and hashable whenever the wrapped value is. Transformations
    return a new ``Ok``; failure-path operations return ``self``.

    Examples:
        >>> ok = Ok(42)
        >>> ok.is_ok(), ok.is_err()
        (True, False)
        >>> Ok("hello").map(str.upper).unwrap()
        'HELLO'
        >>> Ok(5).flat_map(lambda x: Ok(x) if x > 0 else Err(ValueError("neg")))
        Ok(5)
        >>> Ok(1).recover(lambda e: 99)
        Ok(1)
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def ok(self) -> T | None:
        """The value."""
        return self.value

    def err(self) -> None:
        """Always None for Ok."""
        return None

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def unwrap_err(self) -> Never:
        """Raise UnwrapError; there is no error to return."""
        raise UnwrapError(f"Called unwrap_err on Ok value: {self.value!r}")

    def unwrap_or(self, default: T) -> T:
        """Get value (the default is ignored for Ok)."""
        return self.value

    def unwrap_or_else(self, f: Callable[[Any], T]) -> T:
        """Get value (f is never called for Ok)."""
        return self.value

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the value."""
        return Ok(f(self.value))

    def map_err(self, f: Callable[[Any], F]) -> Ok[T]:
        """No-op for Ok."""
        return self

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain to another Result-returning function."""
        return f(self.value)

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Alias for flat_map."""
        return f(self.value)

    def recover(self, f: Callable[[Any], T]) -> Ok[T]:
        """No-op for Ok; the handler is never invoked."""
        return self

    def recover_with(self, f: Callable[[Any], Result[T, F]]) -> Ok[T]:
        """No-op for Ok; the handler is never invoked."""
        return self

    def or_else(self, f: Callable[[Any], Result[T, F]]) -> Ok[T]:
        """Alias for recover_with."""
        return self

    def inspect(self, f: Callable[[T], None]) -> Ok[T]:
        """Call f with value for side effects, return self."""
        f(self.value)
        return self

    def inspect_err(self, f: Callable[[Any], None]) -> Ok[T]:
        """No-op for Ok."""
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"ok": True, "value": self.value}

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """
    Failed result containing an error.

    Short-circuits ``map``/``flat_map``: the same error flows through a chain
    unchanged until ``recover``, ``recover_with`` or ``map_err`` handles it.

    Examples:
        >>> err = Err(ValueError("something went wrong"))
        >>> err.is_err()
        True
        >>> err.unwrap_or("default")
        'default'
        >>> err.recover_with(lambda e: Ok("backup value"))
        Ok('backup value')
        >>> errors = []
        >>> _ = err.inspect_err(errors.append)
        >>> len(errors)
        1
    """

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def ok(self) -> None:
        """Always None for Err."""
        return None

    def err(self) -> E | None:
        """The error."""
        return self.error

    def unwrap(self) -> Never:
        """Raise UnwrapError chained to the held error."""
        raise UnwrapError(
            f"Called unwrap on Err value: {self.error}", cause=self.error
        )

    def unwrap_err(self) -> E:
        """Get the error. Safe for Err."""
        return self.error

    def unwrap_or(self, default: U) -> U:
        """Get default since this is Err."""
        return default

    def unwrap_or_else(self, f: Callable[[E], U]) -> U:
        """Call f with error to get a value."""
        return f(self.error)

    def map(self, f: Callable[[Any], Any]) -> Err[E]:
        """No-op for Err; f is never invoked."""
        return self

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Transform the error."""
        return Err(f(self.error))

    def flat_map(self, f: Callable[[Any], Result[Any, E]]) -> Err[E]:
        """No-op for Err; f is never invoked."""
        return self

    def and_then(self, f: Callable[[Any], Result[Any, E]]) -> Err[E]:
        """Alias for flat_map."""
        return self

    def recover(self, f: Callable[[E], U]) -> Ok[U]:
        """Turn the error into a success value."""
        return Ok(f(self.error))

    def recover_with(self, f: Callable[[E], Result[U, F]]) -> Result[U, F]:
        """Call f with error to try another Result."""
        return f(self.error)

    def or_else(self, f: Callable[[E], Result[U, F]]) -> Result[U, F]:
        """Alias for recover_with."""
        return f(self.error)

    def inspect(self, f: Callable[[Any], None]) -> Err[E]:
        """No-op for Err."""
        return self

    def inspect_err(self, f: Callable[[E], None]) -> Err[E]:
        """Call f with error for side effects, return self."""
        f(self.error)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        if isinstance(self.error, ResultKitError):
            return {"ok": False, "error": self.error.to_dict()}
        return {
            "ok": False,
            "error": {
                "error_type": type(self.error).__name__,
                "message": str(self.error),
            },
        }

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[E]


# =============================================================================
# RESULT CONSTRUCTORS AND UTILITIES
# =============================================================================


def try_result(f: Callable[[], T]) -> Result[T, Exception]:
    """
    Execute a function and wrap its outcome in a Result.

    The bridge between exception-raising code and Result-returning code.

    Examples:
        >>> import json
        >>> try_result(lambda: json.loads('{"a": 1}'))
        Ok({'a': 1})
        >>> try_result(lambda: json.loads('invalid')).is_err()
        True
    """
    try:
        return Ok(f())
    except Exception as e:
        return Err(e)


def try_result_with(
    f: Callable[[], T],
    error_mapper: Callable[[Exception], F] | None = None,
) -> Result[T, Exception]:
    """
    Execute function and map exceptions to custom error types.

    Examples:
        >>> from resultkit.core.errors import ParseError
        >>> r = try_result_with(lambda: int("x"), lambda e: ParseError(f"bad int: {e}"))
        >>> r.error.category.value
        'PARSE'
    """
    try:
        return Ok(f())
    except Exception as e:
        if error_mapper:
            return Err(error_mapper(e))
        return Err(e)


def collect_results(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """
    Collect Results into a Result of list (fail-fast).

    Iteration stops at the first Err, so with a lazy iterable the remaining
    producers are never run.

    Examples:
        >>> collect_results([Ok(1), Ok(2), Ok(3)])
        Ok([1, 2, 3])
        >>> collect_results([Ok(1), Err(ValueError("a")), Err(ValueError("b"))])
        Err(ValueError('a'))
        >>> collect_results([])
        Ok([])
    """
    values = []
    for result in results:
        match result:
            case Ok(value):
                values.append(value)
            case Err(error):
                return Err(error)
    return Ok(values)


def collect_all_errors(
    results: Iterable[Result[T, E]],
    combine: Callable[[list[E]], F] | None = None,
) -> Result[list[T], Exception]:
    """
    Collect results, accumulating ALL errors.

    Every element is consumed. When ``combine`` is given it always receives
    the full ordered error list, even a list of one. Without it, a single
    error is returned as-is and several are folded into a ResultKitError
    whose ``context.metadata["errors"]`` lists their messages.

    Examples:
        >>> collect_all_errors([Ok(1), Ok(2)])
        Ok([1, 2])
        >>> collect_all_errors([Ok(1), Err(ValueError("x"))])
        Err(ValueError('x'))
        >>> err = collect_all_errors([Err(ValueError("a")), Err(ValueError("b"))])
        >>> err.error.context.metadata["error_count"]
        2
    """
    values = []
    errors = []
    for result in results:
        match result:
            case Ok(value):
                values.append(value)
            case Err(error):
                errors.append(error)

    if not errors:
        return Ok(values)
    if combine is not None:
        return Err(combine(errors))
    if len(errors) == 1:
        return Err(errors[0])

    messages = [str(e) for e in errors]
    aggregated = ResultKitError(
        f"Multiple errors ({len(errors)}): {'; '.join(messages[:3])}{'...' if len(messages) > 3 else ''}",
        category=ErrorCategory.INTERNAL,
    )
    aggregated.context.metadata["error_count"] = len(errors)
    aggregated.context.metadata["errors"] = messages
    return Err(aggregated)


def partition_results(
    results: Iterable[Result[T, E]],
) -> tuple[list[T], list[E]]:
    """
    Split results into successful values and errors, preserving order.

    >>> partition_results([Ok(1), Err(ValueError("a")), Ok(2)])
    ([1, 2], [ValueError('a')])
    """
    values = []
    errors = []
    for result in results:
        match result:
            case Ok(value):
                values.append(value)
            case Err(error):
                errors.append(error)
    return values, errors


@overload
def from_optional(value: None, error: E) -> Err[E]: ...


@overload
def from_optional(value: T, error: E) -> Result[T, E]: ...


def from_optional(value: T | None, error: E) -> Result[T, E]:
    """
    Convert an optional value to a Result.

    >>> from_optional({"a": 1}.get("a"), KeyError("a"))
    Ok(1)
    >>> from_optional({}.get("a"), KeyError("a")).is_err()
    True
    """
    if value is None:
        return Err(error)
    return Ok(value)


def from_bool(condition: bool, ok_value: T, error: E) -> Result[T, E]:
    """Ok(ok_value) when condition holds, Err(error) otherwise."""
    if condition:
        return Ok(ok_value)
    return Err(error)


__all__ = [
    # Types
    "Result",
    "Ok",
    "Err",
    # Constructors
    "try_result",
    "try_result_with",
    "from_optional",
    "from_bool",
    # Collectors
    "collect_results",
    "collect_all_errors",
    "partition_results",
]
