"""
Console tables for calculator traces and run summaries.

Rich tables by default; plain=True prints a tabulate grid instead, which reads
better in CI logs and piped output.
"""

from typing import Iterable, Sequence

from rich.console import Console
from rich.table import Table
from tabulate import tabulate

NO_STEPS = "(no steps recorded)"


def print_trace(console: Console, expr: str, steps: Sequence[str], outcome: str, plain: bool = False):
    header = f"\n[Calculator Trace] {outcome}\n  EXPR: {expr!r}\n"
    console.print(header, markup=False, highlight=False)
    if plain:
        rows = [[i, s] for i, s in enumerate(steps, 1)] or [["-", NO_STEPS]]
        console.print(tabulate(rows, headers=["#", "Operation / Result"], tablefmt="grid"),
                      markup=False, highlight=False)
        return

    table = Table(title="Steps")
    table.add_column("#", style="cyan", no_wrap=True)
    table.add_column("Operation / Result", style="magenta")
    if steps:
        for i, s in enumerate(steps, 1):
            table.add_row(str(i), s)
    else:
        table.add_row("-", NO_STEPS)
    console.print(table)


def render_summary(console: Console, rows: Iterable[Sequence], title: str = "Fuzzing Run Summary",
                   plain: bool = False):
    rows = [list(r) for r in rows]
    console.print(f"\n=== {title} ===", markup=False, highlight=False)
    if plain:
        console.print(tabulate(rows, headers=["Metric", "Value"], tablefmt="grid"),
                      markup=False, highlight=False)
        return

    table = Table(title=title)
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="magenta")
    for k, v in rows:
        table.add_row(str(k), str(v))
    console.print(table)
