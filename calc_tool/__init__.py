"""
Arithmetic expression evaluator: scanner -> recursive-descent parser -> evaluator.

    >>> from calc_tool import calculate
    >>> calculate("(2 + 3) * 4")
    Ok(value=20.0)
"""

from calc_tool.diagnostics import Diagnostic, Err, ErrorKind, Ok, render_diagnostic
from calc_tool.evaluator import evaluate
from calc_tool.parser import parse
from calc_tool.scanner import scan
from calc_tool.targets.app_calc import calculate, calculate_with_trace, parse_source

__version__ = "0.1.0"

__all__ = [
    "Diagnostic",
    "Err",
    "ErrorKind",
    "Ok",
    "calculate",
    "calculate_with_trace",
    "evaluate",
    "parse",
    "parse_source",
    "render_diagnostic",
    "scan",
]
