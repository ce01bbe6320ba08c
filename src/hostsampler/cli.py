"""CLI interface for the hostsampler telemetry sampler."""

from __future__ import annotations

import argparse
import sys

from .commands.health import cmd_health, cmd_version
from .commands.query import (
    cmd_cpu,
    cmd_disk,
    cmd_ls,
    cmd_memory,
    cmd_net,
    cmd_partitions,
    cmd_port,
    cmd_processes,
)
from .commands.snapshot import cmd_snapshot, cmd_watch
from .config import settings
from .inventory import ORDERS
from .logging import configure_logging


def _port_number(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {raw!r}") from None
    if not 0 < port <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {port}")
    return port


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    parser = argparse.ArgumentParser(
        prog="hostsampler",
        description="Cross-platform host telemetry sampler",
    )

    # Global options
    parser.add_argument(
        "--version",
        "-V",
        action="store_true",
        help="Show version and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    def add_output_args(p: argparse.ArgumentParser, default_format: str = "table") -> None:
        p.add_argument(
            "--format",
            "-f",
            choices=["json", "table"],
            default=default_format,
            help=f"Output format (default: {default_format})",
        )
        p.add_argument(
            "--output",
            "-o",
            type=str,
            default=None,
            help="Output file (default: stdout)",
        )

    # Common arguments for snapshot commands
    def add_snapshot_args(p: argparse.ArgumentParser) -> None:
        add_output_args(p, default_format="json")
        p.add_argument(
            "--no-processes",
            action="store_true",
            help="Exclude process information",
        )
        p.add_argument(
            "--no-network",
            action="store_true",
            help="Exclude network information",
        )
        p.add_argument(
            "--no-disk",
            action="store_true",
            help="Exclude disk information",
        )
        p.add_argument(
            "--top",
            type=int,
            default=settings.top_processes_default,
            help=f"Number of processes to list (default: {settings.top_processes_default})",
        )

    # snapshot command
    p_snapshot = subparsers.add_parser(
        "snapshot",
        help="Take a single host snapshot",
    )
    add_snapshot_args(p_snapshot)
    p_snapshot.add_argument(
        "--warmup",
        type=float,
        default=0.5,
        help="Seconds between the baseline and the reported sample (default: 0.5, 0 disables)",
    )
    p_snapshot.set_defaults(func=cmd_snapshot)

    # watch command
    p_watch = subparsers.add_parser(
        "watch",
        help="Continuously sample host metrics",
    )
    add_snapshot_args(p_watch)
    p_watch.add_argument(
        "--interval",
        "-i",
        type=float,
        default=settings.default_interval_seconds,
        help=f"Interval in seconds (default: {settings.default_interval_seconds})",
    )
    p_watch.add_argument(
        "--count",
        "-n",
        type=int,
        default=0,
        help="Number of snapshots to take (default: unlimited)",
    )
    p_watch.set_defaults(func=cmd_watch)

    # cpu command
    p_cpu = subparsers.add_parser("cpu", help="CPU utilization over an interval")
    add_output_args(p_cpu)
    p_cpu.add_argument(
        "--interval",
        "-i",
        type=float,
        default=0.5,
        help="Sampling interval in seconds (default: 0.5)",
    )
    p_cpu.set_defaults(func=cmd_cpu)

    # memory command
    p_memory = subparsers.add_parser("memory", help="Total and available physical memory")
    add_output_args(p_memory)
    p_memory.set_defaults(func=cmd_memory)

    # disk command
    p_disk = subparsers.add_parser("disk", help="Capacity of the filesystem holding PATH")
    p_disk.add_argument("path", help="Any path on the filesystem")
    add_output_args(p_disk)
    p_disk.set_defaults(func=cmd_disk)

    # partitions command
    p_partitions = subparsers.add_parser("partitions", help="Capacity of every mounted partition")
    add_output_args(p_partitions)
    p_partitions.set_defaults(func=cmd_partitions)

    # processes command
    p_processes = subparsers.add_parser("processes", help="List processes by working set")
    add_output_args(p_processes)
    p_processes.add_argument(
        "--count",
        "-n",
        type=int,
        default=settings.top_processes_default,
        help=f"Maximum number of processes (default: {settings.top_processes_default})",
    )
    p_processes.add_argument(
        "--order",
        choices=list(ORDERS),
        default=None,
        help=f"Ordering policy (default: {settings.process_order})",
    )
    p_processes.set_defaults(func=cmd_processes)

    # ls command
    p_ls = subparsers.add_parser("ls", help="List directory entries")
    p_ls.add_argument("path", help="Directory to list")
    add_output_args(p_ls)
    p_ls.add_argument(
        "--count",
        "-n",
        type=int,
        default=settings.list_directory_max_files,
        help=f"Maximum number of entries (default: {settings.list_directory_max_files})",
    )
    p_ls.set_defaults(func=cmd_ls)

    # port command
    p_port = subparsers.add_parser("port", help="Check whether a TCP port accepts connections")
    p_port.add_argument("host", help="Host name or IPv4 address")
    p_port.add_argument("port", type=_port_number, help="TCP port (1-65535)")
    add_output_args(p_port)
    p_port.add_argument(
        "--timeout",
        "-t",
        type=float,
        default=None,
        help=f"Connect timeout in seconds (default: {settings.port_probe_timeout_seconds})",
    )
    p_port.set_defaults(func=cmd_port)

    # net command
    p_net = subparsers.add_parser("net", help="Non-loopback traffic over an interval")
    add_output_args(p_net)
    p_net.add_argument(
        "--interval",
        "-i",
        type=float,
        default=1.0,
        help="Sampling interval in seconds (default: 1.0)",
    )
    p_net.set_defaults(func=cmd_net)

    # health command
    p_health = subparsers.add_parser(
        "health",
        help="Health check endpoint",
    )
    p_health.set_defaults(func=cmd_health)

    # version command
    p_version = subparsers.add_parser(
        "version",
        help="Show version",
    )
    p_version.set_defaults(func=cmd_version)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from . import __version__

        sys.stdout.write(f"hostsampler version {__version__}\n")
        raise SystemExit(0)

    if not args.command:
        parser.print_help()
        raise SystemExit(0)

    rc = int(args.func(args))
    raise SystemExit(rc)
