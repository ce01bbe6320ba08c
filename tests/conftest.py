from __future__ import annotations

import socket
import threading

import pytest

from hostsampler.errors import CounterUnavailable
from hostsampler.models import CpuTicks, InterfaceCounters, MemoryStatus
from hostsampler.sources import CounterSource


class FakeSource(CounterSource):
    """In-memory counter source.

    ``cpu_readings`` / ``net_readings`` are consumed one per call. With
    ``auto_cpu`` set, every read advances user and idle by one tick.
    ``processes`` maps pid to ``(name, rss)`` or to the exception class to raise.
    """

    def __init__(self) -> None:
        self.cpu_readings: list[CpuTicks] = []
        self.net_readings: list[dict[str, InterfaceCounters]] = []
        self.mem = MemoryStatus(total_bytes=8 * 1024**3, available_bytes=3 * 1024**3)
        self.processes: dict[int, tuple[str, int] | type[Exception]] = {}
        self.fail_cpu = False
        self.fail_net = False
        self.auto_cpu = False
        self.detail_calls: list[int] = []
        self._ticks = 0
        self._tick_lock = threading.Lock()

    @property
    def name(self) -> str:
        return "fake"

    def cpu_ticks(self) -> CpuTicks:
        if self.fail_cpu:
            raise CounterUnavailable("cpu counters gone")
        if self.auto_cpu:
            with self._tick_lock:
                self._ticks += 1
                return CpuTicks(user=self._ticks, nice=0, system=0, idle=self._ticks)
        return self.cpu_readings.pop(0)

    def interface_counters(self) -> dict[str, InterfaceCounters]:
        if self.fail_net:
            raise CounterUnavailable("net counters gone")
        return self.net_readings.pop(0)

    def memory(self) -> MemoryStatus:
        return self.mem

    def pids(self) -> list[int]:
        return list(self.processes)

    def process_detail(self, pid: int) -> tuple[str, int]:
        self.detail_calls.append(pid)
        detail = self.processes[pid]
        if isinstance(detail, type):
            raise detail(pid)
        return detail


@pytest.fixture
def fake_source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def closed_port() -> int:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port
