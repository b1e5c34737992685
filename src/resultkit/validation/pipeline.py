"""
Multi-field validation pipeline.

Runs a fixed, ordered list of ``FieldRule`` objects over a mapping of raw
field values and produces a single Result.

Modes:
    - **FAIL_FAST:** fields are chained with ``flat_map``. The first failure
      is returned as-is (a bare ValidationError kind) and no later rule runs.
    - **COLLECT_ALL:** every rule and every independent check runs. Failures
      are flattened, in declaration order, into one ``ValidationErrors``,
      even when only one field failed.

Success in either mode is ``Ok(dict)`` mapping each declared field to its
validated value. Keys present in the input but not declared are ignored;
declared keys missing from the input validate as the empty string.

Examples:
    >>> result = validate({"email": "User@Example.com", "age": "30", "password": "Secure123"})
    >>> result.unwrap()
    {'email': 'user@example.com', 'age': 30, 'password': 'Secure123'}
    >>> validate({"email": ""})
    Err(EmptyFieldError('email'))
    >>> errors = validate({"email": "x", "age": "500", "password": "Secure123"},
    ...                   ValidationMode.COLLECT_ALL).unwrap_err()
    >>> errors.fields
    ['email', 'age']
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from resultkit.core.errors import ValidationError, ValidationErrors
from resultkit.core.logging import LogContext, get_logger
from resultkit.core.result import Err, Ok, Result
from resultkit.core.settings import ResultKitSettings, ValidationMode, get_settings
from resultkit.validation.rules import FieldRule, age_rule, email_rule, password_rule


logger = get_logger(__name__)


@dataclass(frozen=True)
class ValidationPipeline:
    """Ordered field rules applied as one unit."""

    name: str
    rules: tuple[FieldRule, ...]

    def __post_init__(self) -> None:
        names = [rule.name for rule in self.rules]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"duplicate field rules: {', '.join(duplicates)}")

    @property
    def fields(self) -> list[str]:
        return [rule.name for rule in self.rules]

    def run(
        self,
        data: Mapping[str, Any],
        mode: ValidationMode = ValidationMode.FAIL_FAST,
    ) -> Result[dict[str, Any], ValidationError]:
        with LogContext(pipeline=self.name, mode=mode.value):
            logger.debug("validation_started", fields=self.fields)
            if mode is ValidationMode.COLLECT_ALL:
                result = self._collect_all(data)
            else:
                result = self._fail_fast(data)
            if result.is_err():
                _log_rejections(result.unwrap_err())
            logger.info("validation_finished", ok=result.is_ok())
        return result

    def _fail_fast(self, data: Mapping[str, Any]) -> Result[dict[str, Any], ValidationError]:
        result: Result[dict[str, Any], ValidationError] = Ok({})
        for rule in self.rules:
            result = result.flat_map(lambda validated, rule=rule: _extend(validated, rule, data))
        return result

    def _collect_all(self, data: Mapping[str, Any]) -> Result[dict[str, Any], ValidationError]:
        validated: dict[str, Any] = {}
        errors: list[ValidationError] = []
        for rule in self.rules:
            match rule.validate(data.get(rule.name), ValidationMode.COLLECT_ALL):
                case Ok(value):
                    validated[rule.name] = value
                case Err(ValidationErrors() as many):
                    errors.extend(many.errors)
                case Err(error):
                    errors.append(error)
        if errors:
            return Err(ValidationErrors(errors).with_context(pipeline=self.name))
        return Ok(validated)


def _extend(
    validated: dict[str, Any], rule: FieldRule, data: Mapping[str, Any]
) -> Result[dict[str, Any], ValidationError]:
    return rule.validate(data.get(rule.name)).map(lambda value: {**validated, rule.name: value})


def _log_rejections(error: ValidationError) -> None:
    rejected: Iterable[ValidationError] = error.errors if isinstance(error, ValidationErrors) else (error,)
    for item in rejected:
        logger.debug("field_rejected", field=item.field, kind=item.kind)


def signup_pipeline(settings: ResultKitSettings | None = None) -> ValidationPipeline:
    """Email, age and password, in that order, with bounds from settings."""
    settings = settings or get_settings()
    return ValidationPipeline(
        "signup",
        (
            email_rule(),
            age_rule(minimum=settings.age_min, maximum=settings.age_max),
            password_rule(min_length=settings.password_min_length),
        ),
    )


def validate(
    fields: Mapping[str, Any],
    mode: ValidationMode | None = None,
    *,
    settings: ResultKitSettings | None = None,
) -> Result[dict[str, Any], ValidationError]:
    """
    Validate signup fields.

    Args:
        fields: Raw field values keyed by name (``email``, ``age``, ``password``)
        mode: FAIL_FAST or COLLECT_ALL; defaults to ``settings.default_mode``
        settings: Overrides the cached process settings

    Returns:
        Ok with the validated fields, or Err with the first error (fail-fast)
        or a ValidationErrors aggregate (collect-all)
    """
    settings = settings or get_settings()
    return signup_pipeline(settings).run(fields, mode or settings.default_mode)


__all__ = [
    "ValidationPipeline",
    "signup_pipeline",
    "validate",
]
