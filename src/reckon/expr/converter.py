"""
Shunting-yard conversion from infix tokens to postfix (RPN) order.
"""

from typing import List, Optional, Sequence

from .errors import ParseError
from .limits import ExpressionLimits, check_paren_depth
from .operators import Associativity, OperatorKind
from .tokenizer import Token


def _should_pop(top: Token, incoming: Token) -> bool:
    """Does the stacked operator bind before ``incoming``?"""
    if top.is_operator(OperatorKind.LPAREN):
        return False
    top_prec = top.spec.precedence
    incoming_prec = incoming.spec.precedence
    if top_prec > incoming_prec:
        return True
    return (
        top_prec == incoming_prec
        and incoming.spec.associativity == Associativity.LEFT_TO_RIGHT
    )


def to_rpn(
    tokens: Sequence[Token],
    source: Optional[str] = None,
    limits: Optional[ExpressionLimits] = None,
) -> List[Token]:
    """
    Converts infix tokens (after unary resolution) to postfix order.

    Args:
        tokens: Infix tokens
        source: Source expression, used in error messages
        limits: Optional expression limits

    Returns:
        Tokens in postfix order, without parentheses

    Raises:
        ParseError: If the parentheses are unbalanced
        LimitExceededError: If parentheses nest too deeply
    """
    output: List[Token] = []
    stack: List[Token] = []
    depth = 0

    for token in tokens:
        if not token.is_operator():
            output.append(token)
        elif token.is_operator(OperatorKind.LPAREN):
            depth += 1
            check_paren_depth(depth, limits)
            stack.append(token)
        elif token.is_operator(OperatorKind.RPAREN):
            while stack and not stack[-1].is_operator(OperatorKind.LPAREN):
                output.append(stack.pop())
            if not stack:
                raise ParseError(
                    f"Unbalanced parenthesis ')' at position {token.position}",
                    token.position,
                    source,
                )
            stack.pop()
            depth -= 1
        else:
            while stack and _should_pop(stack[-1], token):
                output.append(stack.pop())
            stack.append(token)

    while stack:
        token = stack.pop()
        if token.is_operator(OperatorKind.LPAREN):
            raise ParseError(
                f"Unclosed parenthesis '(' at position {token.position}",
                token.position,
                source,
            )
        output.append(token)

    return output
