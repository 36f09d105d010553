"""
atheris entry point for the calculator pipeline.

    calc-tool-fuzz --target calc|roundtrip|scan --time_budget 60 --artifacts-dir reports
                   [--continue_on_crash] [--trace_calc N] [--trace_errors]
                   [--structured] [--plain] [--summary_interval SECONDS] [corpus_dir ...]

Diagnostics are expected outcomes; any exception out of a target is a crash.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

import atheris

with atheris.instrument_imports():
    from calc_tool.fuzz_harness import DEFAULT_SUMMARY_INTERVAL, TARGET_FUNCS, FuzzRun, write_seed_corpus

from calc_tool.config import LOG_LEVELS
from calc_tool.logs import configure_logging

logger = logging.getLogger(__name__)

# every byte the scanner accepts, plus a few it must reject
ALPHABET = "0123456789.+-*/() \t" + "ae_,"
MAX_STRUCTURED_LEN = 256


def structured_input(data: bytes) -> str:
    """Spend the fuzz bytes on picks from ALPHABET so most lines are near-valid."""
    fdp = atheris.FuzzedDataProvider(data)
    length = fdp.ConsumeIntInRange(0, MAX_STRUCTURED_LEN)
    return "".join(ALPHABET[fdp.ConsumeIntInRange(0, len(ALPHABET) - 1)] for _ in range(length))


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="calc-tool-fuzz")
    ap.add_argument("--target", choices=sorted(TARGET_FUNCS), default="calc")
    ap.add_argument("--artifacts-dir", default="reports")
    ap.add_argument("--time_budget", type=int, default=60)
    ap.add_argument("--max_len", type=int, default=4096)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--continue_on_crash", action="store_true",
                    help="Record crashes but continue (better console summary).")
    ap.add_argument("--trace_calc", type=int, default=0,
                    help="Print up to N traced calculator evaluations.")
    ap.add_argument("--trace_errors", action="store_true",
                    help="Also print traces for inputs rejected with a diagnostic.")
    ap.add_argument("--structured", action="store_true",
                    help="Build inputs from the calculator alphabet instead of raw bytes.")
    ap.add_argument("--plain", action="store_true",
                    help="tabulate grid summaries instead of rich tables.")
    ap.add_argument("--summary_interval", type=float, default=DEFAULT_SUMMARY_INTERVAL,
                    help="How often to write/print summary during fuzzing (seconds).")
    ap.add_argument("--seed_corpus", default=None,
                    help="Write the built-in seed expressions to this dir and fuzz from it.")
    ap.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS)
    ap.add_argument("corpus", nargs="*")
    return ap


def libfuzzer_flags(args: argparse.Namespace, argv0: str) -> List[str]:
    flags = [argv0, f"-max_total_time={args.time_budget}", f"-max_len={args.max_len}"]
    if args.seed is not None:
        flags.append(f"-seed={args.seed}")
    flags.extend(args.corpus or [])
    return flags


def main(argv: Optional[List[str]] = None) -> int:
    args, _ = build_arg_parser().parse_known_args(argv)
    configure_logging(args.log_level)

    os.makedirs(args.artifacts_dir, exist_ok=True)
    if args.seed_corpus:
        write_seed_corpus(args.seed_corpus)
        args.corpus = [args.seed_corpus] + list(args.corpus or [])

    run = FuzzRun(
        target=args.target,
        artifacts_dir=args.artifacts_dir,
        seed=args.seed,
        continue_on_crash=args.continue_on_crash,
        trace_calc=args.trace_calc,
        trace_errors=args.trace_errors,
        summary_interval=args.summary_interval,
        plain=args.plain,
    )

    def one_input(data: bytes):
        if args.structured:
            s = structured_input(data)
            run.run_text(s, s.encode("utf-8"))
        else:
            run.test_one_input(data)

    # initial summary so the artifacts dir is populated immediately
    run.periodic_summary(force=True)
    logger.info("fuzzing %s for %ss", args.target, args.time_budget)

    atheris.Setup(libfuzzer_flags(args, sys.argv[0]), one_input)
    try:
        atheris.Fuzz()
    finally:
        run.finish()
    return 0


if __name__ == "__main__":
    raise SystemExit(main() or 0)
