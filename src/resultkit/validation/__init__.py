"""Field rules and the multi-field validation pipeline."""

from resultkit.validation.pipeline import ValidationPipeline, signup_pipeline, validate
from resultkit.validation.rules import (
    Check,
    FieldRule,
    validate_age,
    validate_email,
    validate_password,
)

__all__ = [
    "Check",
    "FieldRule",
    "ValidationPipeline",
    "signup_pipeline",
    "validate",
    "validate_age",
    "validate_email",
    "validate_password",
]
