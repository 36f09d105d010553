"""
Interactive front end.

    $ calc-tool
    >>> (2 + 3) * 4
    20
    >>> 3a
    Error: Unexpected Character: 'a'
        3a
         ^---- Here
    >>> exit

`calc-tool -e "1 / 3"` evaluates a single line and exits 1 on a diagnostic.
"""

import logging
import sys
from typing import Iterable, List, Optional

from rich.console import Console

from calc_tool.config import Settings, build_arg_parser, load_settings
from calc_tool.diagnostics import Err, render_diagnostic
from calc_tool.logs import configure_logging
from calc_tool.reporting import print_trace
from calc_tool.targets import app_calc
from calc_tool.tokens import WHITESPACE

logger = logging.getLogger(__name__)

BANNER = "Basic CLI calculator: + - * / and parentheses\nType '{exit}' to exit"
# same set the scanner skips; other Unicode spaces stay and get reported
_TRIM = "".join(WHITESPACE)


def format_number(value: float) -> str:
    """Six significant digits, like a default std::ostream: 14, 0.333333, inf."""
    return f"{value:g}"


def evaluate_line(source: str, settings: Settings, console: Console) -> bool:
    """Run one line through the pipeline and print the outcome. True on success."""
    if settings.trace:
        result, steps = app_calc.calculate_with_trace(source, settings.max_depth)
    else:
        result, steps = app_calc.calculate(source, settings.max_depth), []

    if isinstance(result, Err):
        console.print(render_diagnostic(result.diagnostic, source, settings.caret_indent),
                      markup=False, highlight=False)
        outcome = f"ERROR: {result.kind.value}"
    else:
        console.print(format_number(result.value), markup=False, highlight=False)
        outcome = f"OK (result {format_number(result.value)})"

    if settings.trace:
        print_trace(console, source, steps, outcome, plain=settings.plain)
    return not isinstance(result, Err)


def run_repl(settings: Settings, lines: Iterable[str], console: Console) -> int:
    """Read lines until EOF or the exit command. Returns how many lines were evaluated."""
    if settings.banner:
        console.print(BANNER.format(exit=settings.exit_command), markup=False, highlight=False)

    evaluated = 0
    console.print(settings.prompt, end="", markup=False, highlight=False)
    for raw in lines:
        line = raw.strip(_TRIM)
        if line == settings.exit_command:
            break
        if line:
            evaluate_line(line, settings, console)
            evaluated += 1
        console.print(settings.prompt, end="", markup=False, highlight=False)
    else:
        # EOF: finish the prompt line
        console.print()
    logger.debug("session ended after %d lines", evaluated)
    return evaluated


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    try:
        settings = load_settings(args)
    except ValueError as e:
        print(f"calc-tool: {e}", file=sys.stderr)
        return 2
    configure_logging(settings.log_level)
    console = Console(highlight=False)

    if args.expr is not None:
        return 0 if evaluate_line(args.expr.strip(_TRIM), settings, console) else 1

    run_repl(settings, sys.stdin, console)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
