import math
import random

import pytest

from calc_tool.diagnostics import Err, ErrorKind, Ok
from calc_tool.evaluator import evaluate
from calc_tool.targets.app_calc import calculate, calculate_with_trace, parse_source
from calc_tool.tree import Binary, Literal, Operator, render


@pytest.mark.parametrize("source, expected", [
    ("8 - 3 - 2", 3.0),
    ("2 + 3 * 4", 14.0),
    ("(2 + 3) * 4", 20.0),
    ("16 / 4 / 2", 2.0),
    ("1.5 * 2", 3.0),
    ("3.", 3.0),
    ("  (((2)))  ", 2.0),
    ("10 - 2 * 3 + 4 / 2", 6.0),
])
def test_calculate(source, expected):
    assert calculate(source) == Ok(expected)


def test_one_divided_by_zero_is_positive_infinity():
    assert calculate("1 / 0") == Ok(math.inf)


def test_zero_divided_by_zero_is_nan():
    result = calculate("0 / 0")
    assert isinstance(result, Ok)
    assert math.isnan(result.value)


@pytest.mark.parametrize("source, kind, offset", [
    ("3a", ErrorKind.INVALID_CHARACTER, 1),
    (".234", ErrorKind.INVALID_CHARACTER, 0),
    ("23.23.3", ErrorKind.INVALID_CHARACTER, 5),
    ("(2+1))", ErrorKind.UNEXPECTED_TOKEN, 5),
    ("(", ErrorKind.UNEXPECTED_END_OF_INPUT, 1),
    ("23 23", ErrorKind.UNEXPECTED_TOKEN, 3),
    ("", ErrorKind.UNEXPECTED_END_OF_INPUT, 0),
    ("  ", ErrorKind.UNEXPECTED_END_OF_INPUT, 2),
])
def test_diagnostics(source, kind, offset):
    result = calculate(source)
    assert isinstance(result, Err)
    assert (result.kind, result.offset) == (kind, offset)


def test_scan_error_is_reported_before_parse_error():
    # ")" alone would be an unexpected token, but the scanner stops first
    assert calculate(") a").kind is ErrorKind.INVALID_CHARACTER


def test_max_depth_is_passed_through():
    assert calculate("((1))", max_depth=1).kind is ErrorKind.NESTING_TOO_DEEP
    assert calculate("((1))", max_depth=2) == Ok(1.0)


def test_parse_source_returns_tree():
    assert parse_source("1 + 2") == Ok(Binary(Operator.ADD, Literal(1.0), Literal(2.0)))


def test_trace_on_success():
    result, steps = calculate_with_trace("2 + 3 * 4")
    assert result == Ok(14.0)
    assert steps[-2:] == ["ADD  2.0 + 12.0 = 14.0", "RESULT = 14.0"]


def test_trace_on_failure():
    result, steps = calculate_with_trace("3a")
    assert isinstance(result, Err)
    assert steps == ["ERROR Unexpected Character: 'a' (offset 1)"]


def _random_tree(rng, depth):
    if depth == 0 or rng.random() < 0.3:
        return Literal(round(rng.uniform(0, 1000), rng.randint(0, 3)))
    op = rng.choice(list(Operator))
    return Binary(op, _random_tree(rng, depth - 1), _random_tree(rng, depth - 1))


def _same(a, b):
    return a == b or (math.isnan(a) and math.isnan(b))


@pytest.mark.parametrize("seed", range(25))
def test_rendered_trees_evaluate_the_same(seed):
    rng = random.Random(seed)
    tree = _random_tree(rng, 6)
    result = calculate(render(tree))
    assert isinstance(result, Ok)
    assert _same(result.value, evaluate(tree))
    assert parse_source(render(tree)) == Ok(tree)
