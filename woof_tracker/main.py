"""Main entry point for the WOOF feeding tracker."""

import argparse
import logging
import os
import sys
from functools import partial

import requests

from .config import AppConfig, load_config, parse_windows, validate_config
from .models import CycleResult
from .pipeline import run_cycle
from .poller import Poller
from .reporter import render_json, render_text
from .source_client import fetch_log

# Configure logging
log_level = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create and return the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="woof",
        description="Poll a beacon event log and show whether the dog has been fed."
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single poll cycle and exit (exit status 1 if the fetch failed)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the status as JSON instead of a text card"
    )
    parser.add_argument(
        "--url",
        type=str,
        default=None,
        help="Beacon log URL (overrides WOOF_SOURCE_URL)"
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Seconds between polls (overrides WOOF_POLL_INTERVAL, default 120)"
    )
    parser.add_argument(
        "--reset-hour",
        type=int,
        default=None,
        help="Hour at which the feeding day rolls over (overrides WOOF_RESET_HOUR, default 2)"
    )
    parser.add_argument(
        "--windows",
        type=str,
        default=None,
        help="Meal windows as 'name:start-end,...' (overrides WOOF_WINDOWS)"
    )
    parser.add_argument(
        "--timezone",
        type=str,
        default=None,
        help="IANA display timezone (overrides WOOF_TIMEZONE, default: host local zone)"
    )
    return parser


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Apply command-line overrides on top of environment configuration."""
    if args.url:
        config.source.url = args.url
    if args.interval is not None:
        config.poll.interval_seconds = args.interval
    if args.reset_hour is not None:
        config.feeding.reset_hour = args.reset_hour
    if args.windows:
        config.feeding.windows = parse_windows(args.windows)
    if args.timezone:
        config.feeding.timezone = args.timezone
    validate_config(config)
    return config


def print_result(result: CycleResult, as_json: bool = False) -> None:
    """Presentation sink: write the rendered result to stdout."""
    print(render_json(result) if as_json else render_text(result), flush=True)


def run_once(config: AppConfig, as_json: bool = False) -> int:
    """Run a single cycle. Returns the process exit status."""
    with requests.Session() as session:
        result = run_cycle(config, fetch=partial(fetch_log, session=session))
    print_result(result, as_json)
    return 0 if result.ok else 1


def run_forever(config: AppConfig, as_json: bool = False) -> int:
    """Poll until interrupted."""
    session = requests.Session()
    poller = Poller(
        cycle=partial(run_cycle, config, partial(fetch_log, session=session)),
        sink=partial(print_result, as_json=as_json),
        interval_seconds=config.poll.interval_seconds,
    )
    poller.start()
    try:
        poller.wait()
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
    finally:
        poller.stop()
        session.close()
    return 0


def main(argv=None) -> int:
    """Main entry point with command-line argument parsing."""
    args = create_parser().parse_args(argv)

    try:
        logger.info("Loading configuration...")
        config = apply_overrides(load_config(), args)
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    windows = ", ".join(
        f"{w.name} {w.start_hour}-{w.end_hour}" for w in config.feeding.windows
    )
    logger.info(f"Source: {config.source.url}")
    logger.info(f"Reset hour: {config.feeding.reset_hour}; windows: {windows or 'none'}")

    if args.once:
        return run_once(config, args.json)
    return run_forever(config, args.json)


if __name__ == "__main__":
    sys.exit(main())
