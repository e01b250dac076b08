"""
Resource limits for expression parsing.

These limits bound the work done by a single parse() so that embedding
code can accept expressions from untrusted input.
"""

from dataclasses import dataclass, fields
from typing import Optional

from .errors import LimitExceededError


@dataclass(frozen=True)
class ExpressionLimits:
    """Expression limits configuration."""

    # Maximum expression string length in characters
    max_expression_length: int = 4096

    # Maximum number of tokens produced by the tokenizer
    max_tokens: int = 1024

    # Maximum parenthesis nesting depth
    max_paren_depth: int = 64

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"{f.name} must be a positive integer")


DEFAULT_EXPRESSION_LIMITS = ExpressionLimits()


def check_expression_length(
    expression: str, limits: Optional[ExpressionLimits] = None
) -> None:
    """Validates that expression length is within limits."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if len(expression) > limits.max_expression_length:
        raise LimitExceededError(
            "max_expression_length", limits.max_expression_length, len(expression)
        )


def check_token_count(count: int, limits: Optional[ExpressionLimits] = None) -> None:
    """Validates the number of tokens produced by the tokenizer."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if count > limits.max_tokens:
        raise LimitExceededError("max_tokens", limits.max_tokens, count)


def check_paren_depth(depth: int, limits: Optional[ExpressionLimits] = None) -> None:
    """Validates parenthesis nesting depth during conversion."""
    limits = limits or DEFAULT_EXPRESSION_LIMITS
    if depth > limits.max_paren_depth:
        raise LimitExceededError("max_paren_depth", limits.max_paren_depth, depth)
