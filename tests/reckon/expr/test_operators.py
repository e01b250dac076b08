"""
Tests for the operator registry and default numeric actions.
"""

import math

import pytest

from reckon.expr import (
    DEFAULT_ACTIONS,
    OPERATORS,
    Associativity,
    OperatorKind,
    build_action_table,
)
from reckon.expr.operators import LEXEMES, match_operator


class TestRegistry:
    """Tests for registry data."""

    @pytest.mark.parametrize(
        "kind, precedence, associativity, arity",
        [
            (OperatorKind.POW, 16, Associativity.RIGHT_TO_LEFT, 2),
            (OperatorKind.NOT, 17, Associativity.RIGHT_TO_LEFT, 1),
            (OperatorKind.MUL, 15, Associativity.LEFT_TO_RIGHT, 2),
            (OperatorKind.ADD, 14, Associativity.LEFT_TO_RIGHT, 2),
            (OperatorKind.NEG, 17, Associativity.RIGHT_TO_LEFT, 1),
            (OperatorKind.ASSIGN, 3, Associativity.RIGHT_TO_LEFT, 2),
            (OperatorKind.COMMA, 1, Associativity.LEFT_TO_RIGHT, 2),
        ],
    )
    def test_entries(self, kind, precedence, associativity, arity):
        spec = OPERATORS[kind]
        assert spec.precedence == precedence
        assert spec.associativity == associativity
        assert spec.arity == arity

    def test_lexemes_are_longest_first(self):
        lengths = [len(lexeme) for lexeme, _ in LEXEMES]
        assert lengths == sorted(lengths, reverse=True)

    def test_unary_forms_are_not_matched_directly(self):
        assert match_operator("-", 0).kind == OperatorKind.SUB
        assert match_operator("+", 0).kind == OperatorKind.ADD

    def test_no_match(self):
        assert match_operator("abc", 0) is None

    def test_every_non_structural_operator_has_an_action(self):
        for kind, spec in OPERATORS.items():
            if spec.is_grouping or kind == OperatorKind.ASSIGN:
                assert kind not in DEFAULT_ACTIONS
            else:
                assert kind in DEFAULT_ACTIONS


class TestActions:
    """Tests for the default numeric actions."""

    def test_logical_not_of_nan_is_true(self):
        assert DEFAULT_ACTIONS[OperatorKind.NOT](math.nan) == 1.0

    def test_zero_to_negative_power_is_infinite(self):
        assert DEFAULT_ACTIONS[OperatorKind.POW](0.0, -1.0) == math.inf

    def test_negative_overflow_keeps_sign(self):
        assert DEFAULT_ACTIONS[OperatorKind.POW](-10.0, 401.0) == -math.inf

    def test_build_action_table_overrides(self):
        table = build_action_table({OperatorKind.MUL: lambda a, b: 0.0})
        assert table[OperatorKind.MUL](3.0, 4.0) == 0.0
        assert table[OperatorKind.ADD](3.0, 4.0) == 7.0
        assert DEFAULT_ACTIONS[OperatorKind.MUL](3.0, 4.0) == 12.0

    def test_grouping_has_no_action(self):
        with pytest.raises(ValueError):
            build_action_table({OperatorKind.LPAREN: lambda: 0.0})
