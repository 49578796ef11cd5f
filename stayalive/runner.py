"""
Design (runner.py)
- Purpose: Wire loader -> dispatcher -> aggregator -> reporter for one invocation, and the CLI.
- Inputs: CLI flags (env file, concurrency, timeout, json, verbose) and the environment.
- Outputs: Process exit code (see config.EXIT_*).
- Side effects: Network pings; console output; logging configuration (main only).
- Scheduling is external (cron / CI); one invocation pings every database once.
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .aggregator import exit_code, summarize
from .config import (
    CANDIDATE_PATHS,
    CONNECT_TIMEOUT_SEC,
    EXIT_CONFIG_ERROR,
    EXIT_FAILURES,
    MAX_CONCURRENCY,
    REQUEST_TIMEOUT_SEC,
    worst_case_runtime_sec,
)
from .dispatcher import Dispatcher
from .errors import ConfigError
from .loader import default_env_path, load_targets
from .models import Outcome, Summary, Target
from .prober import Prober
from .report import ConsoleReporter, render_json
from .transport import DEFAULT_TIMEOUT, HttpGet, RequestsTransport, Timeout

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class RunResult:
    outcomes: List[Outcome]
    summary: Summary
    exit_code: int


def run(targets: Sequence[Target], transport: HttpGet,
        concurrency: int = MAX_CONCURRENCY,
        reporter: Optional[ConsoleReporter] = None,
        paths: Sequence[str] = CANDIDATE_PATHS,
        timeout: Timeout = DEFAULT_TIMEOUT) -> RunResult:
    """
    Purpose: Ping every target once and grade the run.
    Outputs: RunResult; with no targets nothing is dispatched and exit_code is EXIT_NO_TARGETS.
    """
    reporter = reporter if reporter is not None else ConsoleReporter()
    reporter.banner(targets)
    if not targets:
        reporter.no_targets()
        summary = summarize([])
        return RunResult([], summary, exit_code(summary))

    prober = Prober(transport, paths=paths, timeout=timeout, observer=reporter)
    dispatcher = Dispatcher(prober, concurrency)
    logger.debug(
        "worst-case run time %.0fs",
        worst_case_runtime_sec(len(targets), dispatcher.concurrency, len(prober.paths),
                               _read_timeout(timeout)),
    )
    outcomes = dispatcher.dispatch(targets)
    summary = summarize(outcomes)
    reporter.summary(summary)
    return RunResult(outcomes, summary, exit_code(summary))


def _read_timeout(timeout: Timeout) -> float:
    return float(timeout[1]) if isinstance(timeout, tuple) else float(timeout)


def _positive_seconds(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {raw!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {raw}")
    return value


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="stayalive",
        description="Ping every configured Supabase database once so it is not auto-paused.",
        epilog="Databases come from DB1_URL/DB1_ANON_KEY/DB1_NAME, DB2_..., in the environment or .env.",
    )
    parser.add_argument("--env-file", type=Path, default=None,
                        help="Path to the .env file (default: ./.env).")
    parser.add_argument("--concurrency", type=int, default=MAX_CONCURRENCY,
                        help=f"Databases pinged at once (default: {MAX_CONCURRENCY}; values < 1 mean 1).")
    parser.add_argument("--sequential", action="store_true",
                        help="Ping one database at a time (same as --concurrency 1).")
    parser.add_argument("--timeout", type=_positive_seconds, default=REQUEST_TIMEOUT_SEC,
                        help=f"Per-request read timeout in seconds (default: {REQUEST_TIMEOUT_SEC}).")
    parser.add_argument("--json", action="store_true",
                        help="Print a JSON document of the results instead of console lines.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point: load databases, ping them, print the report, return the exit code."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format=LOG_FORMAT, stream=sys.stderr)
    reporter = ConsoleReporter(quiet=args.json)
    concurrency = 1 if args.sequential else args.concurrency
    timeout = (min(CONNECT_TIMEOUT_SEC, args.timeout), args.timeout)

    try:
        targets = load_targets(args.env_file or default_env_path(), on_skip=reporter.skipped)
        with RequestsTransport() as transport:
            result = run(targets, transport, concurrency, reporter, timeout=timeout)
    except ConfigError as exc:
        print(f"💥 Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except Exception as exc:
        logger.exception("stay-alive run aborted")
        print(f"💥 Script failed: {exc}", file=sys.stderr)
        return EXIT_FAILURES

    if args.json:
        print(render_json(result.outcomes, result.summary))
    return result.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
