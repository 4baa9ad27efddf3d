#!/usr/bin/env python3
"""pulseinsight CLI entrypoint (package module)."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from pulseinsight import config as defaults
from pulseinsight.config import InsightConfig
from pulseinsight.errors import DataInconsistency, InputError, InsufficientData
from pulseinsight.insight.runner import InsightRunner
from pulseinsight.util.exit_codes import ExitCode
from pulseinsight.util.logging import configure_logging, get_logger

logger = get_logger(__name__)


def build_config(args: argparse.Namespace) -> InsightConfig:
    return InsightConfig(
        baud_rate=args.baudrate,
        window_size=args.window_size,
        image_width=args.width,
        image_height=args.height,
        render=not args.no_charts,
    )


def run(args: argparse.Namespace) -> int:
    """Top-level CLI dispatcher; returns an ExitCode."""
    if args.command != "csv":
        return ExitCode.INVALID_ARGS
    if not args.file:
        print("no file specified", file=sys.stderr)
        return ExitCode.INVALID_ARGS

    try:
        config = build_config(args)
        config.validate()
    except ValueError as exc:
        print(f"invalid arguments: {exc}", file=sys.stderr)
        return ExitCode.INVALID_ARGS

    try:
        InsightRunner(config).run(args.file)
    except InputError:
        return ExitCode.INPUT_ERROR
    except (InsufficientData, DataInconsistency):
        return ExitCode.DECODE_ERROR
    return ExitCode.SUCCESS


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(
        prog="pulseinsight",
        description="Analyze RS-485/RS-422 bus voltage captures and decode the UART bytes on them",
    )
    p.add_argument("--baudrate", "--baud", dest="baudrate", type=int, default=defaults.BAUD_RATE, help="Baud rate (default %(default)s)")
    p.add_argument("--width", "-W", "--Wpx", dest="width", type=int, default=defaults.IMAGE_WIDTH, help="Chart width in points (default %(default)s)")
    p.add_argument("--height", "-H", "--Hpx", dest="height", type=int, default=defaults.IMAGE_HEIGHT, help="Chart height in points (default %(default)s)")
    p.add_argument("--window-size", dest="window_size", type=int, default=defaults.WINDOW_SIZE, help="Moving-average window in samples (default %(default)s)")
    p.add_argument("--no-charts", dest="no_charts", action="store_true", help="Decode only; do not write PNG charts")
    p.add_argument("--log-level", dest="log_level", type=str, default=None, help="DEBUG, INFO, WARNING or ERROR (default INFO)")
    p.add_argument("--json-log", dest="json_log", type=str, default=None, help="Append JSON-lines logs to this path")

    sub = p.add_subparsers(dest="command")
    csv_cmd = sub.add_parser("csv", help="Analyze a CSV capture file")
    csv_cmd.add_argument("file", nargs="?", default=None, help="CSV file: time(s), A line (V), B line (V)")

    args = p.parse_args(argv)
    if args.command is None:
        p.print_help(sys.stderr)
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(level=args.log_level, json_file=args.json_log)
    code = run(args)
    if code != ExitCode.SUCCESS:
        logger.error(ExitCode.message(code))
    return code


if __name__ == "__main__":
    sys.exit(main())
