"""
Expression tree.

Expression is a closed union of Literal and Binary. Nodes are frozen; a Binary
owns its two children and nothing is shared between trees.

render(expr) writes a tree back out as text the scanner and parser accept,
with only the parentheses the grammar needs.
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterator, List, Union


class Operator(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @property
    def precedence(self) -> int:
        return 2 if self in (Operator.MUL, Operator.DIV) else 1


@dataclass(frozen=True)
class Literal:
    value: float


@dataclass(frozen=True)
class Binary:
    op: Operator
    left: "Expression"
    right: "Expression"


Expression = Union[Literal, Binary]


def iter_literals(expr: Expression) -> Iterator[float]:
    """Leaf values, left to right."""
    stack = [expr]
    while stack:
        node = stack.pop()
        if isinstance(node, Literal):
            yield node.value
        else:
            stack.append(node.right)
            stack.append(node.left)


def literal_text(value: float) -> str:
    if not math.isfinite(value) or math.copysign(1.0, value) < 0:
        raise ValueError(f"{value!r} cannot be written as a literal")
    # shortest repr, spelled out positionally: there is no exponent syntax
    return format(Decimal(repr(value)), "f")


def _needs_parens(child: Expression, parent: Operator, right_side: bool) -> bool:
    if not isinstance(child, Binary):
        return False
    if child.op.precedence < parent.precedence:
        return True
    return right_side and child.op.precedence == parent.precedence


def _operand(child: Expression, parent: Operator, right_side: bool) -> list:
    if _needs_parens(child, parent, right_side):
        return ["(", child, ")"]
    return [child]


def render(expr: Expression) -> str:
    parts: List[str] = []
    stack: list = [expr]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, Literal):
            parts.append(literal_text(item.value))
        else:
            pieces = (
                _operand(item.left, item.op, right_side=False)
                + [f" {item.op.value} "]
                + _operand(item.right, item.op, right_side=True)
            )
            stack.extend(reversed(pieces))
    return "".join(parts)
