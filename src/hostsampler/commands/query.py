"""Single-query command handlers."""

from __future__ import annotations

import argparse
import sys
import time

from ..core import get_monitor
from ..formatters import get_formatter
from ..utils import output_text


def _emit(args: argparse.Namespace, title: str, result: dict) -> None:
    output_text(get_formatter(args.format).format_result(title, result), args.output)


def _interval(args: argparse.Namespace) -> float | None:
    interval = float(args.interval)
    if interval <= 0:
        sys.stderr.write("Error: --interval must be > 0\n")
        return None
    return interval


def cmd_cpu(args: argparse.Namespace) -> int:
    """Sample CPU utilization over ``--interval`` seconds."""
    interval = _interval(args)
    if interval is None:
        return 2
    monitor = get_monitor()
    monitor.get_cpu_usage()
    time.sleep(interval)
    _emit(args, "cpu", {"percent": round(monitor.get_cpu_usage(), 2), "interval": interval})
    return 0


def cmd_memory(args: argparse.Namespace) -> int:
    monitor = get_monitor()
    total = monitor.get_total_memory()
    available = monitor.get_available_memory()
    _emit(args, "memory", {"total": total, "available": available})
    return 0 if total > 0 else 1


def cmd_disk(args: argparse.Namespace) -> int:
    total, free, ok = get_monitor().get_disk_usage(args.path)
    _emit(args, "disk", {"path": args.path, "ok": ok, "total": total, "free": free})
    return 0 if ok else 1


def cmd_partitions(args: argparse.Namespace) -> int:
    partitions = get_monitor().engine.list_partitions()
    _emit(args, "partitions", {"partitions": [p.to_dict() for p in partitions]})
    return 0


def cmd_processes(args: argparse.Namespace) -> int:
    if args.count < 0:
        sys.stderr.write("Error: --count must be >= 0\n")
        return 2
    monitor = get_monitor()
    records = monitor.list_top_processes(args.count, order=args.order)
    _emit(
        args,
        "processes",
        {
            "total": monitor.get_process_count(),
            "order": args.order or monitor.process_order,
            "top": [r.to_dict() for r in records],
        },
    )
    return 0


def cmd_ls(args: argparse.Namespace) -> int:
    if args.count < 0:
        sys.stderr.write("Error: --count must be >= 0\n")
        return 2
    names, ok = get_monitor().list_directory(args.path, args.count)
    _emit(args, "directory", {"path": args.path, "ok": ok, "entries": names})
    return 0 if ok else 1


def cmd_port(args: argparse.Namespace) -> int:
    if args.timeout is not None and args.timeout <= 0:
        sys.stderr.write("Error: --timeout must be > 0\n")
        return 2
    result = get_monitor().probe.probe(args.host, args.port, args.timeout)
    _emit(args, "port", result.to_dict())
    return 0 if result.reachable else 1


def cmd_net(args: argparse.Namespace) -> int:
    """Sample non-loopback network traffic over ``--interval`` seconds."""
    interval = _interval(args)
    if interval is None:
        return 2
    monitor = get_monitor()
    monitor.get_network_stats()
    time.sleep(interval)
    received, sent, ok = monitor.get_network_stats()
    _emit(
        args,
        "network",
        {"ok": ok, "bytes_received": received, "bytes_sent": sent, "interval": interval},
    )
    return 0 if ok else 1
