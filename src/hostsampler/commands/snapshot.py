"""Snapshot and watch command handlers."""

from __future__ import annotations

import argparse
import signal
import sys
import time
from typing import Any

from ..core import collect_snapshot
from ..formatters import get_formatter
from ..utils import output_text

# Graceful shutdown flag
_shutdown_requested = False


def _signal_handler(signum: int, frame: Any) -> None:
    global _shutdown_requested
    _shutdown_requested = True
    sys.stderr.write("\n[hostsampler] Shutdown requested, exiting gracefully...\n")


def _collect(args: argparse.Namespace) -> dict[str, Any]:
    return collect_snapshot(
        include_processes=not args.no_processes,
        include_network=not args.no_network,
        include_disk=not args.no_disk,
        top_n=args.top,
    )


def cmd_snapshot(args: argparse.Namespace) -> int:
    """Take a single snapshot.

    CPU and network deltas need a baseline, so a throwaway sample is taken
    ``--warmup`` seconds before the reported one.
    """
    if args.warmup > 0:
        _collect(args)
        time.sleep(args.warmup)

    formatter = get_formatter(args.format)
    output_text(formatter.format(_collect(args)), args.output)
    return 0


def cmd_watch(args: argparse.Namespace) -> int:
    """Continuously watch host metrics."""
    global _shutdown_requested

    interval = float(args.interval)
    if interval <= 0:
        sys.stderr.write("Error: --interval must be > 0\n")
        return 2

    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)

    formatter = get_formatter(args.format)

    count = 0
    max_count = args.count if args.count > 0 else float("inf")

    while not _shutdown_requested and count < max_count:
        snapshot = _collect(args)

        if args.format == "table" and not args.output:
            sys.stdout.write("\033[2J\033[H")

        output_text(formatter.format(snapshot), args.output)

        count += 1

        if count < max_count and not _shutdown_requested:
            time.sleep(interval)

    return 0
