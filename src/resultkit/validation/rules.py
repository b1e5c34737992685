"""
Field rules built from small Result-returning checks.

A ``Check`` is any callable ``value -> Result[value, ValidationError]``. A
``FieldRule`` combines two lists of them:

* ``gate`` - dependent steps (presence, parsing, normalization). Each step
  feeds the next through ``flat_map``, so the first failure ends the field.
* ``checks`` - independent constraints on the gated value. In fail-fast mode
  they short-circuit in order; in collect-all mode every one runs and all
  failures are reported together as ``ValidationErrors``.

Examples:
    >>> validate_email(" User@Example.com ")
    Ok('user@example.com')
    >>> validate_email("")
    Err(EmptyFieldError('email'))
    >>> validate_age("150")
    Err(OutOfRangeError('age', 150, minimum=0, maximum=120))
    >>> validate_password("abc", mode=ValidationMode.COLLECT_ALL).unwrap_err().fields
    ['password', 'password', 'password']
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from resultkit.core.errors import (
    EmptyFieldError,
    InvalidFormatError,
    OutOfRangeError,
    ValidationError,
    ValidationErrors,
)
from resultkit.core.result import Ok, Err, Result, collect_all_errors, try_result_with
from resultkit.core.settings import ValidationMode


Check = Callable[[Any], Result[Any, ValidationError]]

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


# =============================================================================
# CHECK BUILDERS
# =============================================================================


def required(field_name: str, *, strip: bool = True) -> Check:
    """Reject missing or empty content; passes the (stripped) text on."""

    def check(value: Any) -> Result[str, ValidationError]:
        text = "" if value is None else str(value)
        if strip:
            text = text.strip()
        if not text:
            return Err(EmptyFieldError(field_name))
        return Ok(text)

    return check


def matches(field_name: str, pattern: re.Pattern[str] | str, expected: str) -> Check:
    """Require the whole value to match ``pattern``."""
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern

    def check(value: str) -> Result[str, ValidationError]:
        if compiled.fullmatch(value):
            return Ok(value)
        return Err(InvalidFormatError(field_name, expected, value))

    return check


def parse_int(field_name: str) -> Check:
    """Convert text to ``int``; anything but an optionally signed run of digits fails.

    Digit strings past the interpreter's int conversion limit are format
    errors too.
    """

    def check(value: str) -> Result[int, ValidationError]:
        if not INTEGER_PATTERN.fullmatch(value):
            return Err(InvalidFormatError(field_name, "whole number", value))
        return try_result_with(
            lambda: int(value),
            lambda e: InvalidFormatError(field_name, "whole number", value, cause=e),
        )

    return check


def in_range(field_name: str, minimum: int | float, maximum: int | float) -> Check:
    """Require ``minimum <= value <= maximum``."""

    def check(value: int | float) -> Result[int | float, ValidationError]:
        if minimum <= value <= maximum:
            return Ok(value)
        return Err(OutOfRangeError(field_name, value, minimum, maximum))

    return check


def predicate(field_name: str, test: Callable[[Any], bool], expected: str) -> Check:
    """Generic check: ``test(value)`` must hold, else InvalidFormatError(expected)."""

    def check(value: Any) -> Result[Any, ValidationError]:
        if test(value):
            return Ok(value)
        # Offending value is not attached; predicates may guard secrets.
        return Err(InvalidFormatError(field_name, expected))

    return check


def normalize(transform: Callable[[Any], Any]) -> Check:
    """Gate step that rewrites the value and never fails."""

    def check(value: Any) -> Result[Any, ValidationError]:
        return Ok(transform(value))

    return check


def run_chain(value: Any, steps: Sequence[Check]) -> Result[Any, ValidationError]:
    """Thread ``value`` through ``steps`` with flat_map; stops at the first Err."""
    result: Result[Any, ValidationError] = Ok(value)
    for step in steps:
        result = result.flat_map(step)
    return result


def run_all(value: Any, checks: Sequence[Check]) -> Result[Any, ValidationError]:
    """Run every check against ``value``; all failures become one ValidationErrors."""
    outcome = collect_all_errors([check(value) for check in checks], combine=ValidationErrors)
    return outcome.map(lambda _: value)


# =============================================================================
# FIELD RULES
# =============================================================================


@dataclass(frozen=True)
class FieldRule:
    """A named field with its gate steps and independent checks."""

    name: str
    gate: tuple[Check, ...] = ()
    checks: tuple[Check, ...] = field(default_factory=tuple)

    def validate(
        self,
        raw: Any,
        mode: ValidationMode = ValidationMode.FAIL_FAST,
    ) -> Result[Any, ValidationError]:
        gated = run_chain(raw, self.gate)
        if mode is ValidationMode.COLLECT_ALL:
            return gated.flat_map(lambda value: run_all(value, self.checks))
        return gated.flat_map(lambda value: run_chain(value, self.checks))


def email_rule(name: str = "email") -> FieldRule:
    return FieldRule(
        name,
        gate=(
            required(name),
            matches(name, EMAIL_PATTERN, "valid email address"),
            normalize(str.lower),
        ),
    )


def password_rule(name: str = "password", *, min_length: int = 8) -> FieldRule:
    return FieldRule(
        name,
        gate=(required(name, strip=False),),
        checks=(
            predicate(name, lambda v: len(v) >= min_length, f"at least {min_length} characters"),
            predicate(name, lambda v: any(c.isupper() for c in v), "at least one uppercase letter"),
            predicate(name, lambda v: any(c.isdigit() for c in v), "at least one digit"),
        ),
    )


def age_rule(name: str = "age", *, minimum: int = 0, maximum: int = 120) -> FieldRule:
    return FieldRule(
        name,
        gate=(required(name), parse_int(name)),
        checks=(in_range(name, minimum, maximum),),
    )


def validate_email(raw: Any, field_name: str = "email") -> Result[str, ValidationError]:
    """Validate and lowercase an email address."""
    return email_rule(field_name).validate(raw)


def validate_password(
    raw: Any,
    field_name: str = "password",
    *,
    min_length: int = 8,
    mode: ValidationMode = ValidationMode.FAIL_FAST,
) -> Result[str, ValidationError]:
    """Length, uppercase and digit checks; ``mode`` decides whether they short-circuit."""
    return password_rule(field_name, min_length=min_length).validate(raw, mode)


def validate_age(
    raw: Any,
    field_name: str = "age",
    *,
    minimum: int = 0,
    maximum: int = 120,
) -> Result[int, ValidationError]:
    return age_rule(field_name, minimum=minimum, maximum=maximum).validate(raw)


__all__ = [
    "Check",
    "FieldRule",
    "required",
    "matches",
    "parse_int",
    "in_range",
    "predicate",
    "normalize",
    "run_chain",
    "run_all",
    "email_rule",
    "password_rule",
    "age_rule",
    "validate_email",
    "validate_password",
    "validate_age",
]
