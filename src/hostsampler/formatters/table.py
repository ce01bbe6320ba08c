"""Table formatter for human-readable output."""

from __future__ import annotations

from typing import Any

from ..utils import bytes_to_human
from .base import BaseFormatter

_BYTE_KEYS = frozenset(
    {
        "total",
        "available",
        "free",
        "working_set_bytes",
        "bytes_received",
        "bytes_sent",
        "bytes_recv_total",
        "bytes_sent_total",
        "bytes_recv_delta",
        "bytes_sent_delta",
    }
)


def _value(key: str, value: Any) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    if key in _BYTE_KEYS and isinstance(value, int):
        return bytes_to_human(value)
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


class TableFormatter(BaseFormatter):
    """Format snapshot as human-readable table."""

    def format(self, snapshot: dict[str, Any]) -> str:
        lines: list[str] = []

        ts = snapshot.get("timestamp", "")
        lines.append(f"{'=' * 60}")
        lines.append(f"  Host Snapshot - {ts}")
        lines.append(f"{'=' * 60}")

        if "system" in snapshot:
            sys_info = snapshot["system"]
            lines.append("")
            lines.append("SYSTEM")
            if "hostname" in sys_info:
                lines.append(f"  Hostname:  {sys_info['hostname']}")
            lines.append(f"  OS:        {sys_info.get('os', '')} {sys_info.get('release', '')}")
            lines.append(f"  Arch:      {sys_info.get('architecture', 'N/A')}")
            lines.append(f"  Source:    {sys_info.get('counter_source', 'N/A')}")

        if "cpu" in snapshot:
            cpu = snapshot["cpu"]
            lines.append("")
            lines.append("CPU")
            if "error" in cpu:
                lines.append(f"  Error:     {cpu['error']}")
            else:
                lines.append(f"  Usage:     {cpu.get('percent', 0):.1f}%")

        if "memory" in snapshot:
            mem = snapshot["memory"]
            lines.append("")
            lines.append("MEMORY")
            if "error" in mem:
                lines.append(f"  Error:     {mem['error']}")
            else:
                lines.append(
                    f"  Available: {bytes_to_human(mem.get('available', 0))} / {bytes_to_human(mem.get('total', 0))} ({mem.get('percent', 0):.1f}% used)"
                )

        if "disk" in snapshot:
            partitions = snapshot["disk"].get("partitions", [])
            if partitions:
                lines.append("")
                lines.append("DISK")
                for p in partitions[:5]:  # Limit to 5 partitions
                    lines.append(
                        f"  {p.get('mountpoint', 'N/A'):15} {bytes_to_human(p.get('free', 0)):>10} free / {bytes_to_human(p.get('total', 0)):>10} ({p.get('percent', 0):.1f}%)"
                    )

        if "network" in snapshot:
            net = snapshot["network"]
            lines.append("")
            lines.append("NETWORK")
            if "error" in net:
                lines.append(f"  Error:     {net['error']}")
            else:
                lines.append(
                    f"  Received:  {bytes_to_human(net.get('bytes_recv_total', 0))} (+{bytes_to_human(net.get('bytes_recv_delta', 0))})"
                )
                lines.append(
                    f"  Sent:      {bytes_to_human(net.get('bytes_sent_total', 0))} (+{bytes_to_human(net.get('bytes_sent_delta', 0))})"
                )

        if "processes" in snapshot:
            procs = snapshot["processes"]
            lines.append("")
            lines.append("PROCESSES")
            lines.append(f"  Total:     {procs.get('total', 0)}")
            top = procs.get("top", [])
            if top:
                lines.append(f"  Top ({procs.get('order', 'memory')}):")
                for p in top:
                    lines.append(
                        f"    {p.get('pid', 0):>7}  {p.get('name', 'N/A')[:24]:24} {bytes_to_human(p.get('working_set_bytes', 0)):>10}"
                    )

        lines.append("")
        lines.append(f"{'=' * 60}")

        return "\n".join(lines)

    def format_result(self, title: str, result: dict[str, Any]) -> str:
        lines = [title.upper()]
        for key, value in result.items():
            if isinstance(value, list):
                lines.append(f"  {key}:")
                for item in value:
                    if isinstance(item, dict):
                        lines.append("    " + "  ".join(_value(k, v) for k, v in item.items()))
                    else:
                        lines.append(f"    {item}")
            else:
                lines.append(f"  {key + ':':<18} {_value(key, value)}")
        return "\n".join(lines)
