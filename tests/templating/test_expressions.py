"""Tests for the when/if expression grammar."""

from __future__ import annotations

import pytest

from skillgen.templating.expressions import (
    evaluate,
    evaluate_when,
    is_supported_expression,
    stringify,
)


@pytest.mark.parametrize(
    ("expr", "context", "expected"),
    [
        ("db === 'postgres'", {"db": "postgres"}, True),
        ("db === 'postgres'", {"db": "mongodb"}, False),
        ('db === "postgres"', {"db": "postgres"}, True),
        ("db !== 'none'", {"db": "postgres"}, True),
        ("db !== 'none'", {"db": "none"}, False),
        ("db !== 'none'", {}, True),
        ("db === ''", {}, False),
    ],
)
def test_equality_forms_compare_stringified_values(
    expr: str, context: dict[str, object], expected: bool
) -> None:
    assert evaluate(expr, context) is expected


def test_equality_pattern_is_greedy_over_quotes() -> None:
    assert evaluate("x === 'a'b'", {"x": "a'b"}) is True


def test_unquoted_literal_is_not_an_equality() -> None:
    # Falls through to a truthiness lookup of the whole text.
    assert evaluate("db === postgres", {"db": "postgres"}) is False


@pytest.mark.parametrize(
    ("value", "expected"),
    [(True, True), (False, False), ("true", True), ("false", False), (None, False), ("yes", False)],
)
def test_boolean_comparison_with_true(value: object, expected: bool) -> None:
    assert evaluate("flag === true", {"flag": value}) is expected


def test_boolean_comparison_with_false_on_missing_name() -> None:
    assert evaluate("flag === false", {}) is True
    assert evaluate("flag === false", {"flag": True}) is False


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, False),
        ("", False),
        ("false", False),
        (False, False),
        ("true", True),
        ("anything", True),
        ("0", True),
        (True, True),
    ],
)
def test_truthiness_rule(value: object, expected: bool) -> None:
    context = {} if value is None else {"flag": value}
    assert evaluate("flag", context) is expected


def test_truthiness_trims_the_expression() -> None:
    assert evaluate("  flag  ", {"flag": "x"}) is True


def test_malformed_expressions_never_raise() -> None:
    for expr in ("", "a && b", "x ===", "{{weird}}", "a b c"):
        assert evaluate(expr, {"a": "1", "b": "2"}) in (True, False)


def test_equality_on_boolean_answer_uses_lowercase_text() -> None:
    assert evaluate("flag === 'true'", {"flag": True}) is True
    assert evaluate("flag !== 'false'", {"flag": False}) is False


def test_stringify_scalars() -> None:
    assert stringify(None) == ""
    assert stringify(True) == "true"
    assert stringify(False) == "false"
    assert stringify(3.0) == "3"
    assert stringify(2.5) == "2.5"
    assert stringify(["rest", "grpc"]) == "rest,grpc"
    assert stringify(7) == "7"


def test_supported_expression_surface() -> None:
    assert is_supported_expression("name")
    assert is_supported_expression("db === 'postgres'")
    assert is_supported_expression("db !== \"none\"")
    assert is_supported_expression("flag === true")
    assert not is_supported_expression("a && b")
    assert not is_supported_expression("db == 'x'")


def test_evaluate_when_accepts_predicates_and_strings() -> None:
    answers = {"cloud": "none"}
    assert evaluate_when(lambda values: values.get("cloud") != "none", answers) is False
    assert evaluate_when("cloud !== 'none'", answers) is False
    assert evaluate_when("cloud === 'none'", answers) is True
