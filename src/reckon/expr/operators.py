"""
Operator registry.

Each operator kind maps to immutable registry data (lexeme, precedence,
associativity, arity). Numeric behavior lives in a separate action table
so that an alternative numeric domain can be swapped in without touching
precedence or parsing.

Precedence (higher binds tighter):
1.  Sequencing: ,
3.  Assignment: =
9.  Equality: ==, !=
10. Comparison: <, <=, >, >=
14. Additive: +, -
15. Multiplicative: *, /, %
16. Power: **
17. Unary: !, +, -
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Mapping, Optional, Tuple


class OperatorKind(Enum):
    """Every operator the tokenizer can emit."""

    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    COMMA = "COMMA"
    ASSIGN = "ASSIGN"
    EQ = "EQ"
    NE = "NE"
    LT = "LT"
    LE = "LE"
    GT = "GT"
    GE = "GE"
    ADD = "ADD"
    SUB = "SUB"
    MUL = "MUL"
    DIV = "DIV"
    MOD = "MOD"
    POW = "POW"
    NOT = "NOT"
    POS = "POS"
    NEG = "NEG"


class Associativity(Enum):
    """Grouping of equal-precedence operators."""

    LEFT_TO_RIGHT = "ltr"
    RIGHT_TO_LEFT = "rtl"


@dataclass(frozen=True)
class OperatorSpec:
    """Registry entry for one operator kind."""

    kind: OperatorKind
    lexeme: str
    precedence: int
    associativity: Associativity
    arity: int

    @property
    def is_grouping(self) -> bool:
        return self.kind in (OperatorKind.LPAREN, OperatorKind.RPAREN)


_LTR = Associativity.LEFT_TO_RIGHT
_RTL = Associativity.RIGHT_TO_LEFT

UNARY_PRECEDENCE = 17

OPERATORS: Dict[OperatorKind, OperatorSpec] = {
    spec.kind: spec
    for spec in (
        OperatorSpec(OperatorKind.LPAREN, "(", 0, _LTR, 0),
        OperatorSpec(OperatorKind.RPAREN, ")", 0, _LTR, 0),
        OperatorSpec(OperatorKind.COMMA, ",", 1, _LTR, 2),
        OperatorSpec(OperatorKind.ASSIGN, "=", 3, _RTL, 2),
        OperatorSpec(OperatorKind.EQ, "==", 9, _LTR, 2),
        OperatorSpec(OperatorKind.NE, "!=", 9, _LTR, 2),
        OperatorSpec(OperatorKind.LT, "<", 10, _LTR, 2),
        OperatorSpec(OperatorKind.LE, "<=", 10, _LTR, 2),
        OperatorSpec(OperatorKind.GT, ">", 10, _LTR, 2),
        OperatorSpec(OperatorKind.GE, ">=", 10, _LTR, 2),
        OperatorSpec(OperatorKind.ADD, "+", 14, _LTR, 2),
        OperatorSpec(OperatorKind.SUB, "-", 14, _LTR, 2),
        OperatorSpec(OperatorKind.MUL, "*", 15, _LTR, 2),
        OperatorSpec(OperatorKind.DIV, "/", 15, _LTR, 2),
        OperatorSpec(OperatorKind.MOD, "%", 15, _LTR, 2),
        OperatorSpec(OperatorKind.POW, "**", 16, _RTL, 2),
        OperatorSpec(OperatorKind.NOT, "!", UNARY_PRECEDENCE, _RTL, 1),
        OperatorSpec(OperatorKind.POS, "+", UNARY_PRECEDENCE, _RTL, 1),
        OperatorSpec(OperatorKind.NEG, "-", UNARY_PRECEDENCE, _RTL, 1),
    )
}

# Lexemes the tokenizer matches, longest first. POS/NEG are never matched
# directly; they are produced by the unary resolution pass.
LEXEMES: Tuple[Tuple[str, OperatorKind], ...] = tuple(
    sorted(
        (
            (spec.lexeme, spec.kind)
            for spec in OPERATORS.values()
            if spec.kind not in (OperatorKind.POS, OperatorKind.NEG)
        ),
        key=lambda item: -len(item[0]),
    )
)

# Binary operators that become unary when no operand precedes them
UNARY_FORMS: Dict[OperatorKind, OperatorKind] = {
    OperatorKind.ADD: OperatorKind.POS,
    OperatorKind.SUB: OperatorKind.NEG,
}


def match_operator(source: str, position: int) -> Optional[OperatorSpec]:
    """Returns the longest operator lexeme starting at ``position``, if any."""
    for lexeme, kind in LEXEMES:
        if source.startswith(lexeme, position):
            return OPERATORS[kind]
    return None


# ============================================================
# Numeric actions
# ============================================================


def _divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _modulo(a: float, b: float) -> float:
    if b == 0 or math.isinf(a) or math.isnan(a) or math.isnan(b):
        return math.nan
    return math.fmod(a, b)


def _power(a: float, b: float) -> float:
    if a == 0 and b < 0:
        if float(b).is_integer() and int(b) % 2 == 1:
            return math.copysign(math.inf, a)
        return math.inf
    try:
        return math.pow(a, b)
    except OverflowError:
        if a < 0 and float(b).is_integer() and int(b) % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        return math.nan


def _logical_not(a: float) -> float:
    return 1.0 if a == 0 or math.isnan(a) else 0.0


def _truth(value: bool) -> float:
    return 1.0 if value else 0.0


# Signature of an operator action (one or two float arguments)
OperatorAction = Callable[..., float]

DEFAULT_ACTIONS: Mapping[OperatorKind, OperatorAction] = {
    OperatorKind.COMMA: lambda a, b: b,
    OperatorKind.EQ: lambda a, b: _truth(a == b),
    OperatorKind.NE: lambda a, b: _truth(a != b),
    OperatorKind.LT: lambda a, b: _truth(a < b),
    OperatorKind.LE: lambda a, b: _truth(a <= b),
    OperatorKind.GT: lambda a, b: _truth(a > b),
    OperatorKind.GE: lambda a, b: _truth(a >= b),
    OperatorKind.ADD: lambda a, b: a + b,
    OperatorKind.SUB: lambda a, b: a - b,
    OperatorKind.MUL: lambda a, b: a * b,
    OperatorKind.DIV: _divide,
    OperatorKind.MOD: _modulo,
    OperatorKind.POW: _power,
    OperatorKind.NOT: _logical_not,
    OperatorKind.POS: lambda a: +a,
    OperatorKind.NEG: lambda a: -a,
}


def build_action_table(
    overrides: Optional[Mapping[OperatorKind, OperatorAction]] = None,
) -> Dict[OperatorKind, OperatorAction]:
    """Returns the default actions with ``overrides`` applied on top."""
    actions = dict(DEFAULT_ACTIONS)
    if overrides:
        for kind, action in overrides.items():
            if kind in (OperatorKind.LPAREN, OperatorKind.RPAREN, OperatorKind.ASSIGN):
                raise ValueError(f"Operator {kind.value} has no overridable action")
            actions[kind] = action
    return actions
