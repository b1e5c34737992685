"""
Core primitives: Result container, error taxonomy, tagged values, settings
and logging. Nothing here depends on the validation or CLI layers.
"""

from resultkit.core.errors import (
    ErrorCategory,
    ErrorContext,
    ResultKitError,
    UnwrapError,
)
from resultkit.core.result import Err, Ok, Result

__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "ResultKitError",
    "UnwrapError",
    "Ok",
    "Err",
    "Result",
]
