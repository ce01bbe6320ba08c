"""Cross-platform counter source backed by psutil."""

from __future__ import annotations

import psutil

from ..errors import CounterUnavailable, ProcessAccessDenied, ProcessGone
from ..models import CpuTicks, InterfaceCounters, MemoryStatus
from .base import CounterSource


class PsutilSource(CounterSource):
    """Read raw counters through psutil (Linux, macOS, Windows, BSD)."""

    @property
    def name(self) -> str:
        return "psutil"

    def cpu_ticks(self) -> CpuTicks:
        try:
            times = psutil.cpu_times()
        except OSError as e:
            raise CounterUnavailable(f"cpu_times failed: {e}") from e
        return CpuTicks(
            user=times.user,
            # Windows has no nice time
            nice=getattr(times, "nice", 0.0),
            system=times.system,
            idle=times.idle,
        )

    def interface_counters(self) -> dict[str, InterfaceCounters]:
        try:
            per_nic = psutil.net_io_counters(pernic=True)
        except OSError as e:
            raise CounterUnavailable(f"net_io_counters failed: {e}") from e
        return {
            name: InterfaceCounters(rx_bytes=io.bytes_recv, tx_bytes=io.bytes_sent)
            for name, io in per_nic.items()
        }

    def memory(self) -> MemoryStatus:
        vm = psutil.virtual_memory()
        return MemoryStatus(total_bytes=vm.total, available_bytes=vm.available)

    def pids(self) -> list[int]:
        return psutil.pids()

    def process_detail(self, pid: int) -> tuple[str, int]:
        try:
            proc = psutil.Process(pid)
            with proc.oneshot():
                name = proc.name()
                rss = proc.memory_info().rss
        except (psutil.NoSuchProcess, psutil.ZombieProcess) as e:
            raise ProcessGone(pid) from e
        except psutil.AccessDenied as e:
            raise ProcessAccessDenied(pid) from e
        return name, rss
