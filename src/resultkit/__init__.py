"""
resultkit: Result container, combinators and field validation.

Usage:
    from resultkit import Ok, Err, validate, ValidationMode

    match validate({"email": "user@example.com", "age": "30", "password": "Secure123"}):
        case Ok(fields):
            save(fields)
        case Err(error):
            report(error)
"""

from resultkit.core.errors import (
    CustomValidationError,
    EmptyFieldError,
    ErrorCategory,
    InvalidFormatError,
    OutOfRangeError,
    ParseError,
    ResultKitError,
    UnwrapError,
    ValidationError,
    ValidationErrors,
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
from resultkit.core.settings import ValidationMode
from resultkit.validation.pipeline import ValidationPipeline, signup_pipeline, validate

__version__ = "0.1.0"

__all__ = [
    "Ok",
    "Err",
    "Result",
    "try_result",
    "try_result_with",
    "from_optional",
    "from_bool",
    "collect_results",
    "collect_all_errors",
    "partition_results",
    "ErrorCategory",
    "ResultKitError",
    "UnwrapError",
    "ValidationError",
    "EmptyFieldError",
    "InvalidFormatError",
    "OutOfRangeError",
    "CustomValidationError",
    "ValidationErrors",
    "ParseError",
    "ValidationMode",
    "ValidationPipeline",
    "signup_pipeline",
    "validate",
]
