"""Raw counter source interface."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import psutil

from ..errors import DiskUnavailable
from ..models import CpuTicks, DiskStatus, InterfaceCounters, MemoryStatus, PartitionStatus

log = logging.getLogger(__name__)


class CounterSource(ABC):
    """Abstract base class for platform-specific raw counter reads.

    Implementations only read; they keep no history. Delta math and
    aggregation happen in the sampler and query layers.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Source name reported in snapshots."""
        ...

    @abstractmethod
    def cpu_ticks(self) -> CpuTicks:
        """Return aggregate cumulative CPU counters. Raises OSError on failure."""
        ...

    @abstractmethod
    def interface_counters(self) -> dict[str, InterfaceCounters]:
        """Return cumulative byte counters keyed by interface name."""
        ...

    @abstractmethod
    def memory(self) -> MemoryStatus:
        ...

    @abstractmethod
    def pids(self) -> list[int]:
        """Return visible PIDs in platform enumeration order."""
        ...

    @abstractmethod
    def process_detail(self, pid: int) -> tuple[str, int]:
        """Return ``(name, working_set_bytes)``.

        Raises ProcessGone or ProcessAccessDenied.
        """
        ...

    # statvfs / GetDiskFreeSpaceEx are wrapped by psutil on every platform.

    def disk_usage(self, path: str) -> DiskStatus:
        try:
            usage = psutil.disk_usage(path)
        except OSError as e:
            raise DiskUnavailable(path, e.strerror or str(e)) from e
        return DiskStatus(path=path, total_bytes=usage.total, free_bytes=usage.free)

    def partitions(self) -> list[PartitionStatus]:
        result: list[PartitionStatus] = []
        for part in psutil.disk_partitions(all=False):
            try:
                usage = self.disk_usage(part.mountpoint)
            except DiskUnavailable:
                log.debug("skipping partition %s", part.mountpoint)
                continue
            result.append(
                PartitionStatus(
                    device=part.device,
                    mountpoint=part.mountpoint,
                    fstype=part.fstype,
                    usage=usage,
                )
            )
        return result
