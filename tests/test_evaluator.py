import math

from calc_tool.evaluator import StepRecorder, divide, evaluate
from calc_tool.tree import Binary, Literal, Operator


def lit(v):
    return Literal(float(v))


def test_literal():
    assert evaluate(lit(2.5)) == 2.5


def test_each_operator():
    assert evaluate(Binary(Operator.ADD, lit(2), lit(3))) == 5.0
    assert evaluate(Binary(Operator.SUB, lit(2), lit(3))) == -1.0
    assert evaluate(Binary(Operator.MUL, lit(2), lit(3))) == 6.0
    assert evaluate(Binary(Operator.DIV, lit(3), lit(2))) == 1.5


def test_left_chain_order():
    tree = Binary(Operator.SUB, Binary(Operator.SUB, lit(8), lit(3)), lit(2))
    assert evaluate(tree) == 3.0


def test_division_by_zero_is_ieee():
    assert evaluate(Binary(Operator.DIV, lit(1), lit(0))) == math.inf
    assert evaluate(Binary(Operator.DIV, Binary(Operator.SUB, lit(0), lit(1)), lit(0))) == -math.inf
    assert math.isnan(evaluate(Binary(Operator.DIV, lit(0), lit(0))))


def test_divide_signs():
    assert divide(1.0, -0.0) == -math.inf
    assert divide(-1.0, -0.0) == math.inf
    assert math.isnan(divide(math.nan, 0.0))
    assert math.isnan(divide(-0.0, 0.0))
    assert divide(math.inf, 0.0) == math.inf
    assert divide(6.0, 3.0) == 2.0


def test_inf_arithmetic_stays_in_floats():
    tree = Binary(Operator.SUB, lit(math.inf), lit(math.inf))
    assert math.isnan(evaluate(tree))


def test_very_deep_tree_does_not_recurse():
    tree = lit(1)
    for _ in range(20000):
        tree = Binary(Operator.ADD, tree, lit(1))
    assert evaluate(tree) == 20001.0


def test_recorder_steps_are_post_order():
    rec = StepRecorder()
    tree = Binary(Operator.ADD, lit(1), Binary(Operator.MUL, lit(2), lit(3)))
    assert evaluate(tree, rec) == 7.0
    assert rec.steps == [
        "CONST 1.0",
        "CONST 2.0",
        "CONST 3.0",
        "MUL  2.0 * 3.0 = 6.0",
        "ADD  1.0 + 6.0 = 7.0",
    ]
