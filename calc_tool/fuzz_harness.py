"""
Bookkeeping for a fuzz run, independent of the fuzzing engine.

A fuzz target takes one decoded line and returns Ok or Err. Diagnostics are
the expected way to reject input; any exception is a crash. Crashes are
written to the artifacts dir as <prefix>_<sha1>.input plus a .json with the
traceback, then re-raised so libFuzzer can minimize (unless
continue_on_crash is set).
"""

import base64
import hashlib
import json
import logging
import os
import time
import traceback
from typing import Callable, Dict, List, Optional

from rich.console import Console

from calc_tool.diagnostics import Err
from calc_tool.reporting import print_trace, render_summary
from calc_tool.scanner import scan
from calc_tool.targets import app_calc, roundtrip

logger = logging.getLogger(__name__)

TARGET_FUNCS: Dict[str, Callable] = {
    "calc": app_calc.calculate,
    "roundtrip": roundtrip.check,
    "scan": scan,
}

DEFAULT_SUMMARY_INTERVAL = 5.0

# starting corpus: grammar samples plus one line per known diagnostic
CALC_EXPR_SEEDS = [
    "(1+2)*3-2",
    "8 - 3 - 2",
    "2 + 3 * 4",
    "(100 - 25) / 5",
    "((3+3)*(2+1)) - 4",
    "1 / 0",
    "3a",
    "23.23.3",
    "3++3",
    "()",
    "())",
    "(",
    "(2+1))",
    "23 23",
]


def _b64(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")


def _write_json(path: str, obj: dict):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, sort_keys=True)


def write_seed_corpus(directory: str) -> List[str]:
    """Write CALC_EXPR_SEEDS as one file each; returns the paths."""
    os.makedirs(directory, exist_ok=True)
    paths = []
    for expr in CALC_EXPR_SEEDS:
        data = expr.encode("utf-8")
        path = os.path.join(directory, f"seed_{hashlib.sha1(data).hexdigest()}")
        with open(path, "wb") as f:
            f.write(data)
        paths.append(path)
    return paths


class FuzzRun:
    def __init__(
        self,
        target: str = "calc",
        artifacts_dir: str = "reports",
        seed: Optional[int] = None,
        continue_on_crash: bool = False,
        trace_calc: int = 0,
        trace_errors: bool = False,
        summary_interval: float = DEFAULT_SUMMARY_INTERVAL,
        plain: bool = False,
        console: Optional[Console] = None,
        target_func: Optional[Callable] = None,
    ):
        if target_func is None and target not in TARGET_FUNCS:
            raise ValueError(f"unknown target {target!r}; choose from {sorted(TARGET_FUNCS)}")
        self.target = target
        self.target_func = target_func or TARGET_FUNCS[target]
        self.artifacts_dir = artifacts_dir
        self.continue_on_crash = continue_on_crash
        self.trace_calc = trace_calc
        self.trace_errors = trace_errors
        self.summary_interval = max(0.5, summary_interval)
        self.plain = plain
        self.console = console or Console()
        self.last_summary_ts = 0.0
        self.stats = {
            "target": target,
            "start_time": time.time(),
            "duration_sec": None,
            "total_inputs": 0,
            "ok_results": 0,
            "handled_diagnostics": 0,
            "unexpected_exceptions": 0,
            "artifacts_dir": artifacts_dir,
            "crashes": [],
            "seed": seed,
        }

    # ------------------- artifacts & summary -------------------
    def _write_artifact(self, prefix: str, data_bytes: bytes, meta: dict) -> str:
        base = os.path.join(self.artifacts_dir, f"{prefix}_{hashlib.sha1(data_bytes).hexdigest()}")
        os.makedirs(self.artifacts_dir, exist_ok=True)
        with open(base + ".input", "wb") as f:
            f.write(data_bytes)
        _write_json(base + ".json", meta)
        return base

    def summary_rows(self) -> List[list]:
        return [
            ["Target", self.stats["target"]],
            ["Total Inputs", self.stats["total_inputs"]],
            ["OK Results", self.stats["ok_results"]],
            ["Handled Diagnostics", self.stats["handled_diagnostics"]],
            ["Unexpected (Crashes)", self.stats["unexpected_exceptions"]],
            ["Duration (s)", self.stats["duration_sec"]],
            ["Artifacts dir", self.stats["artifacts_dir"]],
        ]

    def write_summary(self):
        self.stats["duration_sec"] = round(time.time() - self.stats["start_time"], 3)
        _write_json(os.path.join(self.artifacts_dir, "run_summary.json"), self.stats)

    def periodic_summary(self, force: bool = False):
        """Write JSON + print the table every summary_interval seconds."""
        now = time.time()
        if not force and (now - self.last_summary_ts) < self.summary_interval:
            return
        self.last_summary_ts = now
        self.write_summary()
        render_summary(self.console, self.summary_rows(), plain=self.plain)

    # ------------------- fuzz logic -------------------
    def _record_outcome(self, result):
        if isinstance(result, Err):
            self.stats["handled_diagnostics"] += 1
        else:
            self.stats["ok_results"] += 1

    def _handle_exception(self, e: Exception, data_str: str, data_bytes: bytes):
        self.stats["unexpected_exceptions"] += 1
        crash_meta = {
            "target": self.target,
            "exception_type": type(e).__name__,
            "exception_message": str(e),
            "traceback": traceback.format_exc(),
            "input_b64": _b64(data_bytes),
            "input_preview": data_str[:200],
            "seed": self.stats["seed"],
            "ts": time.time(),
        }
        path = self._write_artifact("crash", data_bytes, crash_meta)
        self.stats["crashes"].append(path)
        logger.error("%s crashed on %r: %s: %s", self.target, data_str[:80], type(e).__name__, e)
        if self.continue_on_crash:
            return
        raise

    def _run_traced(self, s: str):
        result, steps = app_calc.calculate_with_trace(s)
        if isinstance(result, Err):
            if self.trace_errors:
                print_trace(self.console, s, steps, f"EXPECTED FAILURE: {result.kind.value}", plain=self.plain)
                self.trace_calc -= 1
        else:
            print_trace(self.console, s, steps, f"OK (result {result.value!r})", plain=self.plain)
            self.trace_calc -= 1
        return result

    def run_text(self, s: str, data: Optional[bytes] = None):
        self.stats["total_inputs"] += 1
        data = s.encode("utf-8") if data is None else data
        try:
            if self.target == "calc" and self.trace_calc > 0:
                result = self._run_traced(s)
            else:
                result = self.target_func(s)
            self._record_outcome(result)
        except Exception as e:
            self._handle_exception(e, s, data)
        finally:
            self.periodic_summary()

    def test_one_input(self, data: bytes):
        self.run_text(data.decode("utf-8", errors="ignore"), data)

    def finish(self):
        self.periodic_summary(force=True)
        with open(os.path.join(self.artifacts_dir, "SUCCESS.txt"), "w", encoding="utf-8") as f:
            f.write("Fuzz run completed. See run_summary.json for details.\n")
