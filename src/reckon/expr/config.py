"""
Configuration for building expressions.

Supports both camelCase and snake_case property names, so a config can be
loaded straight from JSON or YAML produced by other tooling.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .limits import DEFAULT_EXPRESSION_LIMITS, ExpressionLimits
from .literals import DEFAULT_NUMBER_OPTIONS, NumberOptions

_LIMIT_ALIASES = {
    "maxExpressionLength": "max_expression_length",
    "maxTokens": "max_tokens",
    "maxParenDepth": "max_paren_depth",
}


def _known_keys(cls: type, values: Mapping[str, Any], label: str) -> None:
    unknown = set(values) - {f.name for f in fields(cls)}
    if unknown:
        raise ValueError(f"Unknown {label}: {', '.join(sorted(unknown))}")


class ExpressionConfig(BaseModel):
    """Configuration for creating an Expression via create_expression()."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    # Parse limits - a dict or ExpressionLimits
    limits: ExpressionLimits | None = Field(default=None)

    # Numeric literal options - a dict or NumberOptions
    number_options: NumberOptions | None = Field(default=None, alias="numberOptions")

    # Extra read-only symbols
    constants: dict[str, float] = Field(default_factory=dict)

    # Whether to define pi, e, omega, phi, ln2 and sqrt2
    include_default_constants: bool = Field(
        default=True, alias="includeDefaultConstants"
    )

    @field_validator("limits", mode="before")
    @classmethod
    def _normalize_limits(cls, value: Any) -> Any:
        """Builds ExpressionLimits from a dict with camelCase or snake_case keys."""
        if not isinstance(value, Mapping):
            return value
        values = {_LIMIT_ALIASES.get(key, key): v for key, v in value.items()}
        _known_keys(ExpressionLimits, values, "expression limits")
        return ExpressionLimits(**values)

    @field_validator("number_options", mode="before")
    @classmethod
    def _normalize_number_options(cls, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return value
        _known_keys(NumberOptions, value, "number options")
        return NumberOptions(**value)

    def to_limits(self) -> ExpressionLimits:
        """Returns the configured limits, or the defaults."""
        return self.limits if self.limits is not None else DEFAULT_EXPRESSION_LIMITS

    def to_number_options(self) -> NumberOptions:
        """Returns the configured number options, or the defaults."""
        if self.number_options is None:
            return DEFAULT_NUMBER_OPTIONS
        return self.number_options
