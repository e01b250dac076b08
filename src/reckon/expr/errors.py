"""
Error types for the expression engine.

All expression errors extend ExpressionError for consistent handling.
Parse-time failures are TokenizerError and ParseError; evaluate-time
failures are EvaluationError tagged with an ErrorKind.
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from .tokenizer import Token


class ErrorKind(Enum):
    """Categories of evaluation failure."""

    STACK_UNDERFLOW = "StackUnderflow"
    UNBOUND_SYMBOL = "UnboundSymbol"
    INVALID_OPERAND = "InvalidOperand"
    MALFORMED_RESULT = "MalformedResult"


class ExpressionError(Exception):
    """
    Base error class for all expression-related errors.
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.position = position
        self.expression = expression

    def format_with_context(self) -> str:
        """
        Returns a formatted error message with position context.
        """
        if self.expression is None or self.position is None:
            return self.message

        pointer = " " * self.position + "^"
        return f"{self.message}\n  {self.expression}\n  {pointer}"


class TokenizerError(ExpressionError):
    """
    Error thrown when the source contains a character no token can start with.
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
        char: Optional[str] = None,
    ):
        super().__init__(message, position, expression)
        self.char = char


class ParseError(ExpressionError):
    """
    Error thrown while converting tokens to postfix (unbalanced parentheses).
    """

    pass


class LimitExceededError(ExpressionError):
    """
    Error thrown when expression limits are exceeded.
    """

    def __init__(self, limit_name: str, limit: int, actual: int):
        message = f"Limit exceeded: {limit_name} (limit: {limit}, actual: {actual})"
        super().__init__(message)
        self.limit_name = limit_name
        self.limit = limit
        self.actual = actual


class ConstantAssignmentError(ExpressionError):
    """
    Error thrown when a read-only constant is assigned through a symbol table.
    """

    def __init__(self, name: str):
        super().__init__(f"Cannot assign to constant value '{name}'")
        self.name = name


class EvaluationError(ExpressionError):
    """
    Error thrown during evaluation of a postfix sequence.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        token: Optional["Token"] = None,
        expression: Optional[str] = None,
    ):
        position = token.position if token is not None else None
        super().__init__(message, position, expression)
        self.kind = kind
        self.token = token


def format_error(error: Union[ExpressionError, str, None]) -> str:
    """
    Renders an error as a single line, e.g. ``[!] Unbound symbol 'y' [position 0]``.

    Returns an empty string when there is no error.
    """
    if error is None:
        return ""
    if isinstance(error, str):
        return f"[!] {error}"

    text = f"[!] {error.message}"
    if error.position is not None:
        text += f" [position {error.position}]"
    return text
