"""
hostsampler

Cross-platform host telemetry sampler: CPU and network deltas, memory, disk,
process inventory, directory listing and TCP port reachability behind one
query API.
"""

from __future__ import annotations

from .core import (
    HostMonitor,
    check_port_status,
    collect_snapshot,
    get_available_memory,
    get_cpu_usage,
    get_disk_usage,
    get_monitor,
    get_network_stats,
    get_process_count,
    get_total_memory,
    list_directory,
    list_top_processes,
)

__all__ = [
    "HostMonitor",
    "__version__",
    "check_port_status",
    "collect_snapshot",
    "get_available_memory",
    "get_cpu_usage",
    "get_disk_usage",
    "get_monitor",
    "get_network_stats",
    "get_process_count",
    "get_total_memory",
    "list_directory",
    "list_top_processes",
]

__version__ = "0.1.0"
