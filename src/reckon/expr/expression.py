"""
Expression: a parsed-once, evaluated-many arithmetic expression.

Typical use by a consumer that sweeps a variable::

    expr = Expression("x ** 2 - 1")
    expr.parse()
    for x in range(10):
        expr.set_symbol("x", x)
        result = expr.evaluate()

Only a change of source text requires another parse().
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple, Union

from .converter import to_rpn
from .errors import ExpressionError
from .evaluator import EvaluationResult, evaluate
from .limits import DEFAULT_EXPRESSION_LIMITS, ExpressionLimits
from .literals import DEFAULT_NUMBER_OPTIONS, NumberOptions, NumberScanner
from .operators import OperatorAction, OperatorKind, build_action_table
from .symbols import SymbolTable
from .tokenizer import Token, tokenize

logger = logging.getLogger("reckon.expr.expression")


@dataclass
class ParseResult:
    """Outcome of Expression.parse()."""

    success: bool
    """Whether parsing succeeded."""

    error: Optional[ExpressionError] = None
    """TokenizerError, ParseError or LimitExceededError on failure."""

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error is not None else None


class Expression:
    """
    An expression string together with its symbol table.

    The symbol table is owned by the expression unless one is passed in or
    installed with set_symbol_map(); a table may be shared by several
    expressions.
    """

    def __init__(
        self,
        source: str = "",
        symbols: Optional[SymbolTable] = None,
        actions: Optional[Mapping[OperatorKind, OperatorAction]] = None,
        limits: Optional[ExpressionLimits] = None,
        number_options: Optional[NumberOptions] = None,
        scanner: Optional[NumberScanner] = None,
    ):
        self._source = source
        self._rpn: Optional[Tuple[Token, ...]] = None
        self._symbols = symbols if symbols is not None else SymbolTable()
        self._actions = build_action_table(actions)
        self._limits = limits or DEFAULT_EXPRESSION_LIMITS
        self._number_options = number_options or DEFAULT_NUMBER_OPTIONS
        self._scanner = scanner
        self.error: Optional[ExpressionError] = None

    def __repr__(self) -> str:
        return f"Expression({self._source!r})"

    @property
    def source(self) -> str:
        return self._source

    def get_original(self) -> str:
        """Returns the raw expression string."""
        return self._source

    @property
    def tokens(self) -> Optional[Tuple[Token, ...]]:
        """Postfix tokens from the last successful parse(), or None."""
        return self._rpn

    @property
    def symbols(self) -> SymbolTable:
        return self._symbols

    @property
    def limits(self) -> ExpressionLimits:
        return self._limits

    def load(self, source: str) -> "Expression":
        """Replaces the source text. The new text is not parsed."""
        self._source = source
        self._rpn = None
        self.error = None
        return self

    def reset(self) -> "Expression":
        """Clears parsed tokens and all symbol variables."""
        self._rpn = None
        self.error = None
        self._symbols.clear()
        return self

    def parse(self) -> ParseResult:
        """Tokenizes the source and converts it to postfix order."""
        self._rpn = None
        self.error = None

        try:
            infix = tokenize(
                self._source,
                self._symbols,
                self._limits,
                self._number_options,
                self._scanner,
            )
            self._rpn = tuple(to_rpn(infix, self._source, self._limits))
        except ExpressionError as error:
            if error.expression is None:
                error.expression = self._source
            self.error = error
            logger.debug(
                "expression_parse_failed",
                extra={"position": error.position, "error": error.message},
            )
            return ParseResult(success=False, error=error)

        logger.debug("expression_parsed", extra={"token_count": len(self._rpn)})
        return ParseResult(success=True)

    def evaluate(self) -> EvaluationResult:
        """
        Evaluates the last successful parse against the current symbols.

        Raises:
            ExpressionError: If there is no successfully parsed expression
        """
        if self._rpn is None:
            raise ExpressionError(
                "Expression must be parsed successfully before evaluation",
                expression=self._source,
            )

        result = evaluate(self._rpn, self._symbols, self._actions, self._source)
        if not result.success:
            logger.debug(
                "expression_evaluation_failed",
                extra={
                    "kind": result.kind.value if result.kind else None,
                    "position": result.token.position if result.token else None,
                },
            )
        return result

    # ============================================================
    # Symbol Accessors
    # ============================================================

    def set_symbol(self, name: str, value: float) -> "Expression":
        """
        Binds a variable, returning the expression for chaining.

        Raises:
            ConstantAssignmentError: If ``name`` is a read-only constant
        """
        self._symbols[name] = value
        return self

    def get_symbol(self, name: str) -> Optional[float]:
        return self._symbols.get(name)

    def has_symbol(self, name: str) -> bool:
        return name in self._symbols

    def del_symbol(self, name: str) -> "Expression":
        self._symbols.delete(name)
        return self

    def set_symbol_map(
        self, symbols: Union[SymbolTable, Mapping[str, float]]
    ) -> "Expression":
        """
        Replaces the symbol table.

        A SymbolTable is shared by reference. Any other mapping is copied
        into a new table owned by this expression, which keeps the
        constants of the table it replaces.

        Raises:
            ConstantAssignmentError: If the mapping binds a constant's name
        """
        if isinstance(symbols, SymbolTable):
            self._symbols = symbols
        else:
            table = SymbolTable(constants=self._symbols.constants)
            table.update(symbols)
            self._symbols = table
        return self

    def copy(self, source: Optional[str] = None) -> "Expression":
        """Returns a new, unparsed Expression with a copy of the symbol table."""
        return Expression(
            source if source is not None else self._source,
            symbols=self._symbols.copy(),
            actions=self._actions,
            limits=self._limits,
            number_options=self._number_options,
            scanner=self._scanner,
        )
