"""
Settings for the REPL and the one-shot CLI.

Defaults < CALC_TOOL_* environment variables < command-line flags.
"""

import argparse
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from calc_tool.diagnostics import CARET_INDENT
from calc_tool.parser import DEFAULT_MAX_DEPTH

ENV_PREFIX = "CALC_TOOL_"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class Settings:
    prompt: str = ">>> "
    exit_command: str = "exit"
    caret_indent: int = CARET_INDENT
    max_depth: int = DEFAULT_MAX_DEPTH
    trace: bool = False
    plain: bool = False
    banner: bool = True
    log_level: str = "WARNING"


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{ENV_PREFIX}{name} must be at least 1, got {value}")
    return value


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calc-tool",
        description="Evaluate arithmetic expressions with + - * / and parentheses.",
    )
    parser.add_argument("-e", "--expr", default=None,
                        help="Evaluate one expression and exit (status 1 on error).")
    parser.add_argument("--trace", action="store_true",
                        help="Print the evaluation steps after every line.")
    parser.add_argument("--plain", action="store_true",
                        help="Plain grid tables (tabulate) instead of rich tables.")
    parser.add_argument("--no-banner", dest="banner", action="store_false",
                        help="Skip the start-up banner.")
    parser.add_argument("--max-depth", type=int, default=None,
                        help=f"Deepest parenthesis nesting accepted (default {DEFAULT_MAX_DEPTH}).")
    parser.add_argument("--log-level", default=None,
                        choices=LOG_LEVELS)
    return parser


def load_settings(args: Optional[argparse.Namespace] = None,
                  environ: Optional[Mapping[str, str]] = None) -> Settings:
    environ = os.environ if environ is None else environ
    settings = Settings()

    settings.log_level = (environ.get(ENV_PREFIX + "LOG_LEVEL") or settings.log_level).upper()
    if settings.log_level not in LOG_LEVELS:
        raise ValueError(f"{ENV_PREFIX}LOG_LEVEL must be one of {LOG_LEVELS}, got {settings.log_level!r}")
    settings.max_depth = _env_int(environ, "MAX_DEPTH", settings.max_depth)

    if args is None:
        return settings
    if args.max_depth is not None:
        if args.max_depth < 1:
            raise ValueError(f"--max-depth must be at least 1, got {args.max_depth}")
        settings.max_depth = args.max_depth
    if args.log_level is not None:
        settings.log_level = args.log_level
    settings.trace = args.trace
    settings.plain = args.plain
    settings.banner = args.banner
    return settings
