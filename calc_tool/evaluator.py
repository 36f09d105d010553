"""
Tree-walking evaluator.

evaluate(expr) -> float is total: any tree the parser builds evaluates.
Division follows IEEE 754 (x/0 is a signed infinity, 0/0 is nan) instead of
raising ZeroDivisionError.

Pass a StepRecorder to get the operations back as text lines.
"""

import math
import operator
from typing import List, Optional

from calc_tool.tree import Expression, Literal, Operator


class StepRecorder:
    def __init__(self):
        self.steps: List[str] = []

    def log(self, msg: str):
        self.steps.append(msg)


def divide(left: float, right: float) -> float:
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


_OPERATIONS = {
    Operator.ADD: operator.add,
    Operator.SUB: operator.sub,
    Operator.MUL: operator.mul,
    Operator.DIV: divide,
}


def evaluate(expr: Expression, recorder: Optional[StepRecorder] = None) -> float:
    # post-order with an explicit stack; "1+1+...+1" builds trees deeper than
    # the interpreter's recursion limit
    values: List[float] = []
    stack = [(expr, False)]
    while stack:
        node, children_done = stack.pop()
        if isinstance(node, Literal):
            if recorder is not None:
                recorder.log(f"CONST {node.value!r}")
            values.append(node.value)
        elif children_done:
            right = values.pop()
            left = values.pop()
            res = _OPERATIONS[node.op](left, right)
            if recorder is not None:
                recorder.log(f"{node.op.name:<4} {left!r} {node.op.value} {right!r} = {res!r}")
            values.append(res)
        else:
            stack.append((node, True))
            stack.append((node.right, False))
            stack.append((node.left, False))
    return values[0]
