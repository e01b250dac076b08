"""
Tokenizer (lexer) for arithmetic expressions.

Converts an expression string into operator, number and symbol tokens,
then rewrites prefix + and - into their unary forms.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Container, List, Optional, Sequence

from .errors import TokenizerError
from .limits import ExpressionLimits, check_expression_length, check_token_count
from .literals import NumberOptions, NumberScanner, scan_number
from .operators import OPERATORS, UNARY_FORMS, OperatorKind, OperatorSpec, match_operator


class TokenType(Enum):
    """Token types produced by the tokenizer."""

    OPERATOR = "OPERATOR"
    NUMBER = "NUMBER"
    SYMBOL = "SYMBOL"


@dataclass(frozen=True)
class Token:
    """A token produced by the tokenizer."""

    type: TokenType
    value: str
    position: int
    operator: Optional[OperatorKind] = None
    number: Optional[float] = None

    @property
    def spec(self) -> OperatorSpec:
        """Registry entry of an operator token."""
        if self.operator is None:
            raise ValueError(f"{self.type.value} token has no operator spec")
        return OPERATORS[self.operator]

    def is_operator(self, *kinds: OperatorKind) -> bool:
        """Is this an operator token, optionally of one of ``kinds``?"""
        if self.type != TokenType.OPERATOR:
            return False
        return not kinds or self.operator in kinds


def _is_letter(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_symbol_part(ch: str) -> bool:
    return _is_letter(ch) or ("0" <= ch <= "9") or ch in ("_", "$")


def is_identifier(name: str) -> bool:
    """Does ``name`` have the shape of a fresh identifier?"""
    return bool(name) and _is_letter(name[0]) and all(_is_symbol_part(c) for c in name)


class Tokenizer:
    """Tokenizer for expression strings."""

    def __init__(
        self,
        source: str,
        symbols: Optional[Container[str]] = None,
        limits: Optional[ExpressionLimits] = None,
        number_options: Optional[NumberOptions] = None,
        scanner: Optional[NumberScanner] = None,
    ):
        self._source = source
        self._symbols: Container[str] = symbols if symbols is not None else ()
        self._limits = limits
        self._number_options = number_options
        self._scanner = scanner or scan_number
        self._position = 0
        self._tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """Tokenizes the source expression and returns all tokens."""
        check_expression_length(self._source, self._limits)

        while not self._is_at_end():
            self._scan_token()

        check_token_count(len(self._tokens), self._limits)
        return self._tokens

    def _is_at_end(self) -> bool:
        return self._position >= len(self._source)

    def _add_token(self, token: Token, length: int) -> None:
        self._tokens.append(token)
        self._position += length

    def _scan_token(self) -> None:
        start = self._position
        ch = self._source[start]

        if ch.isspace():
            self._position += 1
            return

        spec = match_operator(self._source, start)
        if spec is not None:
            token = Token(TokenType.OPERATOR, spec.lexeme, start, operator=spec.kind)
            self._add_token(token, len(spec.lexeme))
            return

        run = self._scan_symbol_run(start)
        if run and (run in self._symbols or is_identifier(run)):
            self._add_token(Token(TokenType.SYMBOL, run, start), len(run))
            return

        match = self._scanner(self._source[start:], self._number_options)
        if match.length > 0:
            token = Token(TokenType.NUMBER, match.text, start, number=match.value)
            self._add_token(token, match.length)
            return

        raise TokenizerError(
            f"Unknown token encountered '{ch}'", start, self._source, char=ch
        )

    def _scan_symbol_run(self, start: int) -> str:
        end = start
        while end < len(self._source) and _is_symbol_part(self._source[end]):
            end += 1
        return self._source[start:end]


def resolve_unary(tokens: Sequence[Token]) -> List[Token]:
    """
    Returns a new token list with prefix + and - rebuilt as unary operators.

    A + or - is unary when it opens the expression or follows any operator
    other than a closing parenthesis.
    """
    resolved: List[Token] = []
    previous: Optional[Token] = None

    for token in tokens:
        unary = UNARY_FORMS.get(token.operator) if token.is_operator() else None
        if unary is not None and (
            previous is None
            or (previous.is_operator() and not previous.is_operator(OperatorKind.RPAREN))
        ):
            token = replace(token, operator=unary)
        resolved.append(token)
        previous = token

    return resolved


def tokenize(
    source: str,
    symbols: Optional[Container[str]] = None,
    limits: Optional[ExpressionLimits] = None,
    number_options: Optional[NumberOptions] = None,
    scanner: Optional[NumberScanner] = None,
) -> List[Token]:
    """
    Tokenizes an expression string and resolves unary operators.

    Args:
        source: The expression string to tokenize
        symbols: Names already bound; these are recognized as symbols even
            when they are not identifier-shaped
        limits: Optional expression limits
        number_options: Literal forms accepted by the number scanner
        scanner: Numeric literal scanner; defaults to scan_number

    Returns:
        List of tokens in source order

    Raises:
        TokenizerError: If the expression contains an unknown character
        LimitExceededError: If the expression is too long or has too many tokens
    """
    tokenizer = Tokenizer(source, symbols, limits, number_options, scanner)
    return resolve_unary(tokenizer.tokenize())
