"""
Postfix (RPN) evaluator.

Consumes a postfix token sequence with an explicit operand stack. Symbols
are resolved when an operator consumes them, so the left-hand side of
``=`` can stay a name.

Assignments are applied as they are reached; an error later in the same
sequence does not undo earlier bindings.
"""

from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Union

from .errors import ErrorKind, EvaluationError
from .operators import DEFAULT_ACTIONS, OperatorAction, OperatorKind
from .symbols import SymbolTable
from .tokenizer import Token, TokenType

# An operand is either a number already computed or a token still to resolve
Operand = Union[float, Token]


@dataclass
class EvaluationResult:
    """Result of expression evaluation."""

    value: Optional[float]
    """The evaluated value."""

    success: bool
    """Whether evaluation succeeded."""

    kind: Optional[ErrorKind] = None
    """Category of failure, if evaluation failed."""

    token: Optional[Token] = None
    """Token at which evaluation failed."""

    error: Optional[str] = None
    """Error message if evaluation failed."""


class Evaluator:
    """Evaluates postfix token sequences against a symbol table."""

    def __init__(
        self,
        symbols: SymbolTable,
        actions: Optional[Mapping[OperatorKind, OperatorAction]] = None,
        source: Optional[str] = None,
    ):
        self._symbols = symbols
        self._actions = actions or DEFAULT_ACTIONS
        self._source = source

    def evaluate(self, tokens: Sequence[Token]) -> float:
        """Evaluates postfix tokens and returns the numeric result."""
        stack: List[Operand] = []

        for token in tokens:
            if token.type != TokenType.OPERATOR:
                stack.append(token)
                continue

            spec = token.spec
            if spec.is_grouping:
                raise self._error(
                    ErrorKind.INVALID_OPERAND,
                    f"Unbalanced parenthesis '{token.value}' at position {token.position}",
                    token,
                )

            if len(stack) < spec.arity:
                raise self._error(
                    ErrorKind.STACK_UNDERFLOW,
                    f"Stack underflow whilst executing operator '{token.value}' "
                    f"(expects {spec.arity} args, got {len(stack)})",
                    token,
                )

            if spec.arity == 1:
                a = self._resolve(stack.pop(), token)
                stack.append(self._actions[spec.kind](a))
                continue

            right = stack.pop()
            left = stack.pop()

            if spec.kind == OperatorKind.ASSIGN:
                stack.append(self._assign(left, self._resolve(right, token), token))
                continue

            b = self._resolve(left, token)
            a = self._resolve(right, token)
            stack.append(self._actions[spec.kind](b, a))

        if len(stack) != 1:
            culprit = stack[1] if len(stack) > 1 else None
            raise self._error(
                ErrorKind.MALFORMED_RESULT,
                f"Expected one item to be in result stack, got {len(stack)}",
                culprit if isinstance(culprit, Token) else None,
            )

        return self._resolve(stack[0], None)

    def _resolve(self, operand: Operand, operator: Optional[Token]) -> float:
        """Resolves an operand to a number."""
        if not isinstance(operand, Token):
            return operand

        if operand.type == TokenType.NUMBER and operand.number is not None:
            return operand.number

        if operand.type == TokenType.SYMBOL:
            if operand.value in self._symbols:
                return self._symbols[operand.value]
            if operator is None:
                message = f"Unbound symbol referenced '{operand.value}'"
            else:
                message = (
                    f"Unbound symbol '{operand.value}' referenced in operator "
                    f"'{operator.value}'"
                )
            raise self._error(ErrorKind.UNBOUND_SYMBOL, message, operand)

        raise self._error(
            ErrorKind.INVALID_OPERAND,
            f"Invalid token '{operand.value}' used as an operand",
            operand,
        )

    def _assign(self, target: Operand, value: float, operator: Token) -> float:
        """Binds ``target`` to ``value`` and returns the value."""
        if not isinstance(target, Token) or target.type != TokenType.SYMBOL:
            raise self._error(
                ErrorKind.INVALID_OPERAND,
                f"Left-hand side of '{operator.value}' must be a symbol",
                target if isinstance(target, Token) else operator,
            )
        if self._symbols.is_constant(target.value):
            raise self._error(
                ErrorKind.INVALID_OPERAND,
                f"Cannot assign to constant value '{target.value}'",
                target,
            )
        self._symbols[target.value] = value
        return value

    def _error(
        self, kind: ErrorKind, message: str, token: Optional[Token]
    ) -> EvaluationError:
        return EvaluationError(kind, message, token, self._source)


def evaluate(
    tokens: Sequence[Token],
    symbols: Optional[SymbolTable] = None,
    actions: Optional[Mapping[OperatorKind, OperatorAction]] = None,
    source: Optional[str] = None,
) -> EvaluationResult:
    """
    Evaluates postfix tokens and returns the result.

    Args:
        tokens: Tokens in postfix order
        symbols: Symbol table to read from and assign into
        actions: Numeric action table (defaults to DEFAULT_ACTIONS)
        source: Source expression for error reporting

    Returns:
        The evaluation result with value and success status
    """
    evaluator = Evaluator(symbols if symbols is not None else SymbolTable(), actions, source)
    try:
        value = evaluator.evaluate(tokens)
        return EvaluationResult(value=value, success=True)
    except EvaluationError as error:
        return EvaluationResult(
            value=None,
            success=False,
            kind=error.kind,
            token=error.token,
            error=error.message,
        )
