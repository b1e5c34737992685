"""Settings for resultkit.

Validation bounds, the default pipeline mode and logging options are read
from ``RESULTKIT_``-prefixed environment variables and an optional ``.env``
file, validated by pydantic at load time.

Examples:
    >>> from resultkit.core.settings import ResultKitSettings
    >>> ResultKitSettings(age_max=99).age_max
    99

Environment::

    RESULTKIT_LOG_LEVEL=DEBUG
    RESULTKIT_DEFAULT_MODE=COLLECT_ALL
    RESULTKIT_PASSWORD_MIN_LENGTH=12
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Any

from pydantic import Field, ValidationError as PydanticValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from resultkit.core.errors import InvalidConfigError


class ValidationMode(str, Enum):
    """How a validation pipeline treats failures."""

    FAIL_FAST = "FAIL_FAST"  # Stop at the first failure
    COLLECT_ALL = "COLLECT_ALL"  # Run every check, report every failure

    @classmethod
    def parse(cls, raw: str) -> ValidationMode:
        """Accept CLI spellings such as ``collect-all``."""
        return cls(raw.strip().upper().replace("-", "_"))


class ResultKitSettings(BaseSettings):
    """Process-wide settings.

    Fields
    ──────
    log_level            : structlog level
    json_logs            : force JSON (True) or console (False); None = auto
    debug                : verbose output
    default_mode         : pipeline mode when the caller does not pick one
    password_min_length  : minimum password length
    age_min / age_max    : inclusive age bounds
    """

    model_config = SettingsConfigDict(
        env_prefix="RESULTKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool | None = None
    debug: bool = False

    # ── Validation ───────────────────────────────────────────────
    default_mode: ValidationMode = ValidationMode.FAIL_FAST
    password_min_length: int = Field(default=8, ge=1)
    age_min: int = 0
    age_max: int = 120

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
            raise ValueError(f"unsupported log level {value!r}")
        return normalized

    @field_validator("default_mode", mode="before")
    @classmethod
    def _parse_mode(cls, value: Any) -> Any:
        if isinstance(value, str):
            return ValidationMode.parse(value)
        return value

    @model_validator(mode="after")
    def _check_age_bounds(self) -> ResultKitSettings:
        if self.age_min > self.age_max:
            raise ValueError(f"age_min ({self.age_min}) must not exceed age_max ({self.age_max})")
        return self


def load_settings(**overrides: Any) -> ResultKitSettings:
    """Build settings, translating pydantic failures into InvalidConfigError."""
    try:
        return ResultKitSettings(**overrides)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        key = ".".join(str(part) for part in first.get("loc", ())) or "settings"
        raise InvalidConfigError(
            key,
            first.get("input"),
            f"Invalid configuration for {key}: {first.get('msg')}",
            cause=exc,
        ) from exc


@lru_cache(maxsize=1)
def get_settings() -> ResultKitSettings:
    """Cached process-wide settings."""
    return load_settings()


def reset_settings() -> None:
    """Forget cached settings (tests, reloading env)."""
    get_settings.cache_clear()


__all__ = [
    "ValidationMode",
    "ResultKitSettings",
    "load_settings",
    "get_settings",
    "reset_settings",
]
