"""Single-shot metrics assembled from one raw read."""

from __future__ import annotations

import logging
import os
import platform
import socket
from typing import Any

from .config import settings
from .errors import CounterUnavailable, DirectoryUnavailable
from .models import DiskStatus, InterfaceCounters, MemoryStatus, PartitionStatus
from .sampler import aggregate_interfaces
from .sources import CounterSource

log = logging.getLogger(__name__)


class MetricsQueryEngine:
    """Stateless queries over a counter source. Nothing is retained between calls."""

    def __init__(self, source: CounterSource) -> None:
        self._source = source

    def get_memory_status(self) -> MemoryStatus:
        return self._source.memory()

    def get_disk_status(self, path: str) -> DiskStatus:
        """Raises DiskUnavailable when ``path`` is not on a mounted filesystem."""
        return self._source.disk_usage(path)

    def get_process_count(self) -> int:
        # Best effort: processes may come and go while the table is read.
        return len(self._source.pids())

    def list_directory(self, path: str, max_files: int) -> list[str]:
        """Return up to ``max_files`` entry names of ``path`` in platform order."""
        if max_files < 0:
            raise ValueError("max_files must be >= 0")

        names: list[str] = []
        try:
            with os.scandir(path) as it:
                for entry in it:
                    if len(names) >= max_files:
                        break
                    names.append(entry.name)
        except OSError as e:
            raise DirectoryUnavailable(path, e.strerror or str(e)) from e
        return names

    def list_partitions(self) -> list[PartitionStatus]:
        return self._source.partitions()

    def get_network_totals(self) -> InterfaceCounters:
        """Cumulative non-loopback bytes since boot."""
        try:
            return aggregate_interfaces(self._source.interface_counters())
        except OSError as e:
            raise CounterUnavailable(f"network counters unavailable: {e}") from e

    def get_system_info(self) -> dict[str, Any]:
        info: dict[str, Any] = {
            "os": platform.system(),
            "release": platform.release(),
            "architecture": platform.machine(),
            "python_version": platform.python_version(),
            "counter_source": self._source.name,
        }
        if settings.include_hostname:
            info["hostname"] = socket.gethostname()
        return info
