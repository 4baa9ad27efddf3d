#!/usr/bin/env python3
"""
pulseinsight: entry point.

Thin shim around the package CLI for running from a source checkout.

Run:
    python pulseinsight-csv.py --baud 9600 csv capture.csv

Environment:
    PULSEINSIGHT_BAUD_RATE     Default baud rate (default 9600)
    PULSEINSIGHT_WINDOW_SIZE   Smoothing window in samples (default 8)
    PULSEINSIGHT_LOG_LEVEL     Console log level (default INFO)
"""
from __future__ import annotations

import sys


def main():
    from pulseinsight.cli import main as cli_main

    sys.exit(cli_main())


if __name__ == "__main__":
    main()
