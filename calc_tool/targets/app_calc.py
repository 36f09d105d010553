"""
Calculator pipeline: scan -> parse -> evaluate, with traceable steps.

Public API:
- parse_source(source) -> Ok(tree) | Err(diagnostic)
- calculate(source) -> Ok(number) | Err(diagnostic)
- calculate_with_trace(source) -> (Ok | Err, [steps...])

Bad input never raises. The trace ends with "ERROR <message>" on a diagnostic
so the fuzzer and the REPL can show how far the line got.
"""

import logging
from typing import List, Optional, Tuple

from calc_tool.diagnostics import Err, Ok, Result
from calc_tool.evaluator import StepRecorder, evaluate
from calc_tool.parser import DEFAULT_MAX_DEPTH, parse
from calc_tool.scanner import scan
from calc_tool.tree import Expression

logger = logging.getLogger(__name__)


def parse_source(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Result[Expression]:
    scanned = scan(source)
    if isinstance(scanned, Err):
        return scanned
    logger.debug("scanned %d tokens from %r", len(scanned.value), source)
    return parse(scanned.value, len(source), max_depth)


def _run(source: str, max_depth: int, rec: Optional[StepRecorder] = None) -> Result[float]:
    parsed = parse_source(source, max_depth)
    if isinstance(parsed, Err):
        if rec is not None:
            rec.log(f"ERROR {parsed.diagnostic.message(source)} (offset {parsed.offset})")
        return parsed

    result = evaluate(parsed.value, rec)
    if rec is not None:
        rec.log(f"RESULT = {result!r}")
    return Ok(result)


def calculate_with_trace(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Tuple[Result[float], List[str]]:
    """Return (result, steps)."""
    rec = StepRecorder()
    return _run(source, max_depth, rec), rec.steps


def calculate(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Result[float]:
    """Non-tracing fast path."""
    return _run(source, max_depth)
