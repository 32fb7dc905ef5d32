from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from repobatch.app import list_tasks, run_task
from repobatch.config import TRACE, ConfigurationError, configure_logging, optional_env_int
from repobatch.domain.batch import ExecutionOptions, InvalidOptionsError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run batch tasks over stored repositories")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Log per-repo progress")
    verbosity.add_argument("--trace", action="store_true", help="Also log throttle delays")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("tasks", help="List available tasks")

    run = subparsers.add_parser("run", help="Run a task")
    run.add_argument("task", type=str, help="Name of the task to run")
    run.add_argument(
        "--limit",
        type=int,
        default=0,
        help="Maximum number of repos to process, 0 for all (default: %(default)s)",
    )
    run.add_argument(
        "--skip",
        type=int,
        default=0,
        help="Number of most recently added repos to skip (default: %(default)s)",
    )
    run.add_argument(
        "--name",
        type=str,
        help="Only process the repo with this full name (owner/name)",
    )
    run.add_argument(
        "--concurrency",
        type=int,
        default=optional_env_int("REPOBATCH_CONCURRENCY", 1),
        help="Maximum number of repos processed at once (default: %(default)s)",
    )
    run.add_argument(
        "--throttle-interval",
        type=int,
        default=optional_env_int("REPOBATCH_THROTTLE_INTERVAL_MS", 0),
        help="Minimum delay in ms between two repo starts, 0 to disable (default: %(default)s)",
    )
    run.add_argument(
        "--fail-fast",
        action="store_true",
        help="Abort the run on the first failing repo",
    )

    return parser.parse_args(list(argv))


def _log_level(args: argparse.Namespace) -> int:
    if args.trace:
        return TRACE
    if args.verbose:
        return logging.DEBUG
    return logging.INFO


def _build_options(args: argparse.Namespace) -> ExecutionOptions:
    return ExecutionOptions(
        limit=args.limit,
        skip=args.skip,
        name_filter=args.name,
        concurrency=args.concurrency,
        throttle_interval_ms=args.throttle_interval,
        fail_fast=args.fail_fast,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
    except ConfigurationError as exc:
        configure_logging()
        log.error("Invalid configuration: %s", exc)  # noqa: TRY400
        sys.exit(2)
    configure_logging(level=_log_level(parsed_args))

    if parsed_args.command == "tasks":
        for task in list_tasks():
            log.info("%s: %s", task.name, task.description)
        return

    try:
        options = _build_options(parsed_args)
    except InvalidOptionsError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        report = run_task(parsed_args.task, options)
    except Exception:
        log.exception("Fatal error while running %s", parsed_args.task)
        sys.exit(1)

    if report.summary.failure_count:
        log.warning("%d repos failed, see errors above", report.summary.failure_count)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
