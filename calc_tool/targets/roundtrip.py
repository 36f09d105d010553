"""
Round-trip target: parse, write the tree back out, parse again.

The rendered text of the first tree must parse, and must render to itself a
second time. Anything else is a bug in the renderer or the parser and raises
RoundTripMismatch so the fuzzer records it as a crash.
"""

import math

from calc_tool.diagnostics import Err, Ok, Result
from calc_tool.evaluator import evaluate
from calc_tool.parser import DEFAULT_MAX_DEPTH
from calc_tool.targets.app_calc import parse_source
from calc_tool.tree import iter_literals, render


class RoundTripMismatch(Exception):
    pass


def check(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Result[float]:
    parsed = parse_source(source, max_depth)
    if isinstance(parsed, Err):
        return parsed
    tree = parsed.value

    # digit runs past float64 range scan as inf, which has no literal spelling
    if all(math.isfinite(v) for v in iter_literals(tree)):
        text = render(tree)
        # rendering adds no nesting, so the limit that admitted the source admits this
        reparsed = parse_source(text, max_depth)
        if isinstance(reparsed, Err):
            raise RoundTripMismatch(
                f"rendered {text!r} from {source!r} but it fails with "
                f"{reparsed.kind.value} at offset {reparsed.offset}"
            )
        again = render(reparsed.value)
        if again != text:
            raise RoundTripMismatch(f"{source!r} rendered as {text!r} then as {again!r}")

    return Ok(evaluate(tree))
