"""
Tests for the Expression facade.
"""

import logging
import math

import pytest

from reckon.expr import (
    ConstantAssignmentError,
    ErrorKind,
    Expression,
    ExpressionError,
    ExpressionLimits,
    LimitExceededError,
    NumberMatch,
    OperatorKind,
    ParseError,
    SymbolTable,
    TokenizerError,
    create_expression,
    format_error,
)


def run(expr: Expression, source: str):
    """Helper to load, parse and evaluate, asserting the parse succeeds."""
    parsed = expr.load(source).parse()
    assert parsed.success, parsed.message
    return expr.evaluate()


class TestLifecycle:
    """Tests for load / parse / evaluate."""

    def test_constructor_source_is_parsed_on_demand(self):
        expr = Expression("1 + 2")
        assert expr.tokens is None
        assert expr.parse().success
        assert expr.evaluate().value == 3

    def test_load_replaces_source_without_parsing(self):
        expr = Expression("1 + 2")
        expr.parse()
        expr.load("3 * 3")
        assert expr.source == "3 * 3"
        assert expr.get_original() == "3 * 3"
        assert expr.tokens is None

    def test_evaluate_before_parse_raises(self):
        with pytest.raises(ExpressionError):
            Expression("1").evaluate()

    def test_evaluate_after_failed_parse_raises(self):
        expr = Expression("(1")
        assert not expr.parse().success
        with pytest.raises(ExpressionError):
            expr.evaluate()

    def test_reparse_is_idempotent(self):
        expr = Expression("x * 2 + 1").set_symbol("x", 4)
        expr.parse()
        first_tokens = expr.tokens
        first = expr.evaluate().value
        expr.parse()
        assert expr.tokens == first_tokens
        assert expr.evaluate().value == first == 9

    def test_parse_once_evaluate_many(self):
        expr = Expression("x ** 2 - 1")
        expr.parse()
        values = []
        for x in range(4):
            expr.set_symbol("x", x)
            values.append(expr.evaluate().value)
        assert values == [-1, 0, 3, 8]

    def test_reset_clears_tokens_and_symbols(self):
        expr = Expression("x").set_symbol("x", 1)
        expr.parse()
        expr.reset()
        assert expr.tokens is None
        assert not expr.has_symbol("x")


class TestParseFailures:
    """Tests for parse-time errors reported as results."""

    def test_unclosed_parenthesis(self):
        result = Expression("(1 + 2").parse()
        assert not result.success
        assert isinstance(result.error, ParseError)

    def test_unopened_parenthesis(self):
        result = Expression("1 + 2)").parse()
        assert not result.success
        assert isinstance(result.error, ParseError)

    def test_unknown_character(self):
        expr = Expression("1 + ?")
        result = expr.parse()
        assert isinstance(result.error, TokenizerError)
        assert result.error.position == 4
        assert expr.error is result.error
        assert expr.tokens is None

    def test_limit_exceeded(self):
        expr = Expression("1 + 2 + 3", limits=ExpressionLimits(max_expression_length=4))
        result = expr.parse()
        assert isinstance(result.error, LimitExceededError)

    def test_error_carries_source(self):
        result = Expression("1 $ 2").parse()
        assert result.error.expression == "1 $ 2"

    def test_format_error(self):
        result = Expression("1 + 2)").parse()
        assert format_error(result.error) == (
            "[!] Unbalanced parenthesis ')' at position 5 [position 5]"
        )
        assert format_error(None) == ""


class TestSymbols:
    """Tests for symbol accessors and assignment."""

    def test_assignment_binds_and_returns(self):
        expr = Expression()
        result = run(expr, "x = 5")
        assert result.success
        assert result.value == 5
        assert expr.get_symbol("x") == 5
        assert run(expr, "x + 1").value == 6

    def test_unbound_symbol_fails_cleanly(self):
        result = run(Expression(), "y + 1")
        assert not result.success
        assert result.kind == ErrorKind.UNBOUND_SYMBOL
        assert result.token.value == "y"

    def test_missing_symbol_can_be_supplied_and_retried(self):
        expr = Expression("y + 1")
        expr.parse()
        assert not expr.evaluate().success
        expr.set_symbol("y", 2)
        assert expr.evaluate().value == 3

    def test_accessors(self):
        expr = Expression().set_symbol("a", 1.5)
        assert expr.has_symbol("a")
        assert expr.get_symbol("a") == 1.5
        expr.del_symbol("a")
        assert not expr.has_symbol("a")
        assert expr.get_symbol("a") is None

    def test_set_symbol_map_from_mapping(self):
        expr = Expression().set_symbol_map({"k": 3})
        assert run(expr, "k * k").value == 9

    def test_set_symbol_rejects_constant(self):
        expr = create_expression()
        with pytest.raises(ConstantAssignmentError) as exc_info:
            expr.set_symbol("pi", 3)
        assert isinstance(exc_info.value, ExpressionError)
        assert expr.get_symbol("pi") == math.pi

    def test_set_symbol_map_keeps_constants(self):
        expr = create_expression().set_symbol_map({"x": 1})
        assert expr.symbols.is_constant("pi")
        assert run(expr, "pi * x").value == pytest.approx(math.pi)

    def test_set_symbol_map_rejects_constant_name(self):
        expr = create_expression().set_symbol("x", 1)
        with pytest.raises(ConstantAssignmentError):
            expr.set_symbol_map({"e": 2})
        assert expr.get_symbol("x") == 1

    def test_shared_symbol_table(self):
        env = SymbolTable()
        writer = Expression("n = 7", symbols=env)
        reader = Expression().set_symbol_map(env)
        writer.parse()
        writer.evaluate()
        assert run(reader, "n + 1").value == 8

    def test_copy_has_independent_symbols(self):
        original = Expression("v").set_symbol("v", 1)
        clone = original.copy()
        clone.set_symbol("v", 2)
        assert original.get_symbol("v") == 1
        assert clone.source == "v"
        assert clone.tokens is None

    def test_known_symbol_recognized_when_reparsed(self):
        expr = Expression().set_symbol("1st", 10)
        assert run(expr, "1st + 1").value == 11


class TestActions:
    """Tests for substituting numeric actions."""

    def test_overrides_division(self):
        def integer_divide(a, b):
            return math.floor(a / b)

        expr = Expression(actions={OperatorKind.DIV: integer_divide})
        assert run(expr, "7 / 2").value == 3

    def test_assignment_action_is_not_overridable(self):
        with pytest.raises(ValueError):
            Expression(actions={OperatorKind.ASSIGN: lambda a, b: b})

    def test_custom_number_scanner(self):
        def tally(text, options):
            count = len(text) - len(text.lstrip("#"))
            return NumberMatch(text[:count], float(count))

        expr = Expression("### * ##", scanner=tally)
        assert run(expr, "### * ##").value == 6
        assert run(expr.copy(), "#").value == 1
        assert not expr.load("1").parse().success


class TestLogging:
    """Tests for diagnostic logging."""

    def test_logs_parse_failure(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="reckon.expr.expression"):
            Expression("(").parse()
        records = [r for r in caplog.records if r.getMessage() == "expression_parse_failed"]
        assert len(records) == 1
        assert records[0].position == 0

    def test_logs_evaluation_failure(self, caplog):
        expr = Expression("*")
        expr.parse()
        with caplog.at_level(logging.DEBUG, logger="reckon.expr.expression"):
            expr.evaluate()
        records = [
            r for r in caplog.records if r.getMessage() == "expression_evaluation_failed"
        ]
        assert records[0].kind == "StackUnderflow"
