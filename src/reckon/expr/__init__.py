"""
Arithmetic expression engine.

This module provides a tokenizer, a shunting-yard converter and a postfix
evaluator over a mutable symbol table with user-assignable variables.
"""

from .config import ExpressionConfig

# Converter
from .converter import to_rpn
from .errors import (
    ConstantAssignmentError,
    ErrorKind,
    EvaluationError,
    ExpressionError,
    LimitExceededError,
    ParseError,
    TokenizerError,
    format_error,
)

# Evaluator
from .evaluator import (
    EvaluationResult,
    Evaluator,
    evaluate,
)

# Expression facade
from .expression import (
    Expression,
    ParseResult,
)
from .limits import (
    DEFAULT_EXPRESSION_LIMITS,
    ExpressionLimits,
    check_expression_length,
    check_paren_depth,
    check_token_count,
)

# Numeric literals
from .literals import (
    DEFAULT_NUMBER_OPTIONS,
    NumberMatch,
    NumberOptions,
    scan_number,
)

# Operators
from .operators import (
    DEFAULT_ACTIONS,
    OPERATORS,
    Associativity,
    OperatorKind,
    OperatorSpec,
    build_action_table,
)
from .presets import DEFAULT_CONSTANTS, create_expression
from .symbols import SymbolTable

# Tokenizer
from .tokenizer import (
    Token,
    Tokenizer,
    TokenType,
    is_identifier,
    resolve_unary,
    tokenize,
)

__all__ = [
    # Errors
    "ExpressionError",
    "ConstantAssignmentError",
    "TokenizerError",
    "ParseError",
    "EvaluationError",
    "LimitExceededError",
    "ErrorKind",
    "format_error",
    # Limits and configuration
    "ExpressionLimits",
    "DEFAULT_EXPRESSION_LIMITS",
    "check_expression_length",
    "check_token_count",
    "check_paren_depth",
    "ExpressionConfig",
    # Numeric literals
    "NumberOptions",
    "NumberMatch",
    "DEFAULT_NUMBER_OPTIONS",
    "scan_number",
    # Operators
    "OperatorKind",
    "OperatorSpec",
    "Associativity",
    "OPERATORS",
    "DEFAULT_ACTIONS",
    "build_action_table",
    # Symbols
    "SymbolTable",
    # Tokenizer
    "Token",
    "TokenType",
    "Tokenizer",
    "tokenize",
    "resolve_unary",
    "is_identifier",
    # Converter
    "to_rpn",
    # Evaluator
    "Evaluator",
    "EvaluationResult",
    "evaluate",
    # Expression
    "Expression",
    "ParseResult",
    "create_expression",
    "DEFAULT_CONSTANTS",
]
