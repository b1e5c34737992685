"""
Structured error types for resultkit.

Every failure that travels through an ``Err`` is an exception instance, so it
can carry a message, a category, structured context and an optional chained
cause. Validation failures form a closed family of kinds whose associated data
is fixed at construction and compared by value.

Manifesto:
    - **Errors are values:** Validation errors are returned inside ``Err``,
      never raised
    - **Closed taxonomy:** EmptyField, InvalidFormat, OutOfRange, Custom
    - **Self-describing:** Every validation error can render a human-readable
      reason, and out-of-range errors report the attempted value and bounds
    - **Serializable:** ``to_dict()`` for JSON output and structured logs

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                      ResultKitError                          │
        │        (category, retryable, context, cause)                 │
        ├──────────────────────────────────────────────────────────────┤
        │                                                              │
        │  ValidationError          ParseError       ConfigError       │
        │  (VALIDATION)             (PARSE)          (CONFIG)          │
        │       │                                        │             │
        │  EmptyFieldError                         InvalidConfigError  │
        │  InvalidFormatError                                          │
        │  OutOfRangeError          UnwrapError                        │
        │  CustomValidationError    (INTERNAL)                         │
        │  ValidationErrors (aggregate)                                │
        └──────────────────────────────────────────────────────────────┘

Examples:
    >>> error = OutOfRangeError("age", 150, minimum=0, maximum=120)
    >>> error.describe()
    'must be between 0 and 120 (got 150)'
    >>> error == OutOfRangeError("age", 150, minimum=0, maximum=120)
    True
    >>> error.to_dict()["category"]
    'VALIDATION'

Guardrails:
    ❌ DON'T: ``raise`` a ValidationError out of a validator
    ✅ DO: Return ``Err(EmptyFieldError("email"))``

    ❌ DON'T: Mutate ``field``/``value`` after construction
    ✅ DO: Build a new error; equality and hashing depend on the payload

Tags:
    error-handling, validation, taxonomy, resultkit
"""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from typing import Any, Iterable


class ErrorCategory(str, Enum):
    """Error categories used for classification in logs and output."""

    VALIDATION = "VALIDATION"  # Field content rejected
    PARSE = "PARSE"  # Raw input could not be converted
    CONFIG = "CONFIG"  # Invalid settings
    INTERNAL = "INTERNAL"  # Programmer error, unexpected state
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Examples:
        >>> ErrorContext(field="email", pipeline="signup").to_dict()
        {'field': 'email', 'pipeline': 'signup'}
        >>> ctx = ErrorContext()
        >>> ctx.metadata["attempt"] = 2
        >>> ctx.to_dict()
        {'attempt': 2}
    """

    field: str | None = None
    pipeline: str | None = None
    mode: str | None = None
    path: str | None = None

    metadata: dict[str, Any] = dataclass_field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["field", "pipeline", "mode", "path"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class ResultKitError(Exception):
    """
    Base exception for all resultkit errors.

    Carries a category, a retryable flag, structured ``ErrorContext`` and an
    optional chained cause. Subclasses set ``default_category`` and
    ``default_retryable``.

    Examples:
        >>> error = ResultKitError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(pipeline="signup").context.pipeline
        'signup'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> ResultKitError:
        """
        Add context to this error (fluent API).

        Known ``ErrorContext`` attributes are set directly, anything else lands
        in ``context.metadata``.
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


class UnwrapError(ResultKitError):
    """Raised when ``unwrap()`` is called on an Err or ``unwrap_err()`` on an Ok."""

    default_category = ErrorCategory.INTERNAL


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(ResultKitError):
    """
    Field validation error.

    Never retryable - the input must be fixed. Instances compare and hash by
    type and payload so that ``Err(EmptyFieldError("email"))`` built in two
    places is the same outcome.
    """

    default_category = ErrorCategory.VALIDATION
    default_retryable = False

    kind: str = "validation"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        constraint: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
        self.constraint = constraint
        if field is not None:
            self.context.field = field

    def describe(self) -> str:
        """Human-readable reason, without the field name."""
        return self.message

    def _key(self) -> tuple[Any, ...]:
        # value is left out: it may be unhashable (lists, dicts).
        return (self.field, self.constraint, self.message)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._key()))

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["kind"] = self.kind
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = self.value
        if self.constraint:
            result["constraint"] = self.constraint
        result["reason"] = self.describe()
        return result


class EmptyFieldError(ValidationError):
    """A required field had no content."""

    kind = "empty_field"

    def __init__(self, field: str, **kwargs: Any):
        super().__init__(f"{field} must not be empty", field=field, **kwargs)

    def describe(self) -> str:
        return "must not be empty"

    def __repr__(self) -> str:
        return f"EmptyFieldError({self.field!r})"


class InvalidFormatError(ValidationError):
    """Content was present but did not match the expected shape."""

    kind = "invalid_format"

    def __init__(self, field: str, expected: str, value: Any = None, **kwargs: Any):
        self.expected = expected
        super().__init__(
            f"{field} must be {expected}",
            field=field,
            value=value,
            constraint=expected,
            **kwargs,
        )

    def describe(self) -> str:
        return f"must be {self.expected}"

    def _key(self) -> tuple[Any, ...]:
        # The offending value is reported but does not distinguish the kind.
        return (self.field, self.expected)

    def __repr__(self) -> str:
        return f"InvalidFormatError({self.field!r}, {self.expected!r})"


class OutOfRangeError(ValidationError):
    """Numeric content outside the inclusive ``[minimum, maximum]`` bounds."""

    kind = "out_of_range"

    def __init__(
        self,
        field: str,
        value: int | float,
        minimum: int | float,
        maximum: int | float,
        **kwargs: Any,
    ):
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"{field} must be between {minimum} and {maximum} (got {value})",
            field=field,
            value=value,
            constraint=f"{minimum}..{maximum}",
            **kwargs,
        )

    def describe(self) -> str:
        return f"must be between {self.minimum} and {self.maximum} (got {self.value})"

    def _key(self) -> tuple[Any, ...]:
        return (self.field, self.value, self.minimum, self.maximum)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["minimum"] = self.minimum
        result["maximum"] = self.maximum
        return result

    def __repr__(self) -> str:
        return (
            f"OutOfRangeError({self.field!r}, {self.value!r}, "
            f"minimum={self.minimum!r}, maximum={self.maximum!r})"
        )


class CustomValidationError(ValidationError):
    """Escape hatch for conditions the other kinds do not classify."""

    kind = "custom"

    def __init__(self, message: str, field: str | None = None, **kwargs: Any):
        super().__init__(message, field=field, **kwargs)

    def __repr__(self) -> str:
        return f"CustomValidationError({self.message!r}, field={self.field!r})"


class ValidationErrors(ValidationError):
    """
    Ordered aggregate of validation errors from a collect-all run.

    Examples:
        >>> errors = ValidationErrors([EmptyFieldError("email"), EmptyFieldError("age")])
        >>> len(errors)
        2
        >>> errors.fields
        ['email', 'age']
    """

    kind = "multiple"

    def __init__(self, errors: Iterable[ValidationError], **kwargs: Any):
        self.errors: tuple[ValidationError, ...] = tuple(errors)
        summary = "; ".join(str(e) for e in self.errors[:3])
        if len(self.errors) > 3:
            summary += "..."
        super().__init__(f"{len(self.errors)} validation error(s): {summary}", **kwargs)
        self.context.metadata["error_count"] = len(self.errors)

    @property
    def fields(self) -> list[str]:
        """Field names in reporting order (duplicates kept)."""
        return [e.field for e in self.errors if e.field is not None]

    def __iter__(self):
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def _key(self) -> tuple[Any, ...]:
        return self.errors

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["errors"] = [e.to_dict() for e in self.errors]
        return result

    def __repr__(self) -> str:
        return f"ValidationErrors({list(self.errors)!r})"


# =============================================================================
# PARSE / CONFIG ERRORS
# =============================================================================


class ParseError(ResultKitError):
    """Raw input could not be converted into a typed value."""

    default_category = ErrorCategory.PARSE

    def __init__(self, message: str, *, path: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.path = path
        if path is not None:
            self.context.path = path


class ConfigError(ResultKitError):
    """
    Configuration error.

    Never retryable - configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None, **kwargs: Any):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}", **kwargs)


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """Check if an error is retryable."""
    if isinstance(error, ResultKitError):
        return error.retryable
    return isinstance(error, (ConnectionError, TimeoutError))


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, ResultKitError):
        return error.category
    if isinstance(error, (TypeError, ValueError)):
        return ErrorCategory.PARSE
    if isinstance(error, (KeyError, AttributeError)):
        return ErrorCategory.CONFIG
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "ResultKitError",
    "UnwrapError",
    # Validation
    "ValidationError",
    "EmptyFieldError",
    "InvalidFormatError",
    "OutOfRangeError",
    "CustomValidationError",
    "ValidationErrors",
    # Parse / config
    "ParseError",
    "ConfigError",
    "InvalidConfigError",
    # Utilities
    "is_retryable",
    "categorize_error",
]
