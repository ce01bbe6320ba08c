"""Public query surface and snapshot assembly."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from .config import settings
from .errors import SamplerError
from .inventory import ORDER_MEMORY, ORDERS, ProcessInventory
from .models import ProcessRecord
from .probe import DEFAULT_TIMEOUT_SECONDS, PortProbe
from .queries import MetricsQueryEngine
from .sampler import DeltaSampler, get_default_sampler

log = logging.getLogger(__name__)


class HostMonitor:
    """Bundle of the sampling components bound to one counter source.

    Every method degrades to a zero / empty / ``False`` result instead of
    raising, except for negative counts which are caller bugs.
    """

    def __init__(
        self,
        sampler: DeltaSampler,
        *,
        probe_timeout: float | None = None,
        process_order: str | None = None,
    ) -> None:
        self.sampler = sampler
        self.source = sampler.source
        self.engine = MetricsQueryEngine(self.source)
        self.inventory = ProcessInventory(self.source)
        timeout = settings.port_probe_timeout_seconds if probe_timeout is None else probe_timeout
        if timeout <= 0:
            log.warning(
                "probe timeout %s is not positive, using %s", timeout, DEFAULT_TIMEOUT_SECONDS
            )
            timeout = DEFAULT_TIMEOUT_SECONDS
        self.probe = PortProbe(timeout)

        order = process_order or settings.process_order
        if order not in ORDERS:
            log.warning("unknown process order %r, using %s", order, ORDER_MEMORY)
            order = ORDER_MEMORY
        self.process_order = order

    def get_cpu_usage(self) -> float:
        return self.sampler.sample_cpu_utilization()

    def get_available_memory(self) -> int:
        try:
            return self.engine.get_memory_status().available_bytes
        except OSError as e:
            log.warning("memory status unavailable: %s", e)
            return 0

    def get_total_memory(self) -> int:
        try:
            return self.engine.get_memory_status().total_bytes
        except OSError as e:
            log.warning("memory status unavailable: %s", e)
            return 0

    def get_process_count(self) -> int:
        try:
            return self.engine.get_process_count()
        except OSError as e:
            log.warning("process table unavailable: %s", e)
            return 0

    def list_top_processes(self, max_count: int, *, order: str | None = None) -> list[ProcessRecord]:
        try:
            return self.inventory.list_top_processes(max_count, order=order or self.process_order)
        except OSError as e:
            log.warning("process table unavailable: %s", e)
            return []

    def get_disk_usage(self, path: str) -> tuple[int, int, bool]:
        try:
            status = self.engine.get_disk_status(path)
        except OSError as e:
            log.info("disk usage unavailable: %s", e, extra={"path": path})
            return 0, 0, False
        return status.total_bytes, status.free_bytes, True

    def list_directory(self, path: str, max_files: int) -> tuple[list[str], bool]:
        try:
            return self.engine.list_directory(path, max_files), True
        except OSError as e:
            log.info("directory unavailable: %s", e, extra={"path": path})
            return [], False

    def check_port_status(self, host: str, port: int, timeout: float | None = None) -> bool:
        return self.probe.check_port(host, port, timeout)

    def get_network_stats(self) -> tuple[int, int, bool]:
        try:
            delta = self.sampler.sample_network_rates()
        except OSError as e:
            log.warning("network stats unavailable: %s", e)
            return 0, 0, False
        return delta.bytes_received, delta.bytes_sent, True

    # ── snapshot ─────────────────────────────────────────

    def _cpu_section(self) -> dict[str, Any]:
        return {"percent": round(self.get_cpu_usage(), 2)}

    def _memory_section(self) -> dict[str, Any]:
        return self.engine.get_memory_status().to_dict()

    def _disk_section(self) -> dict[str, Any]:
        return {"partitions": [p.to_dict() for p in self.engine.list_partitions()]}

    def _network_section(self) -> dict[str, Any]:
        totals, delta = self.sampler.sample_network()
        return {
            "bytes_recv_total": totals.rx_bytes,
            "bytes_sent_total": totals.tx_bytes,
            "bytes_recv_delta": delta.bytes_received,
            "bytes_sent_delta": delta.bytes_sent,
        }

    def _processes_section(self, top_n: int) -> dict[str, Any]:
        return {
            "total": self.engine.get_process_count(),
            "order": self.process_order,
            "top": [p.to_dict() for p in self.list_top_processes(top_n)],
        }

    def collect_snapshot(
        self,
        *,
        include_processes: bool = True,
        include_network: bool = True,
        include_disk: bool = True,
        top_n: int | None = None,
    ) -> dict[str, Any]:
        """Collect every metric into one JSON-able dictionary.

        A section that fails is reported as ``{"error": ...}`` and does not
        stop the others.
        """
        sections: list[tuple[str, Callable[[], dict[str, Any]]]] = [
            ("system", self.engine.get_system_info),
            ("cpu", self._cpu_section),
            ("memory", self._memory_section),
        ]
        if include_disk:
            sections.append(("disk", self._disk_section))
        if include_network:
            sections.append(("network", self._network_section))
        if include_processes:
            n = settings.top_processes_default if top_n is None else top_n
            sections.append(("processes", lambda: self._processes_section(n)))

        snapshot: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(timespec="seconds"),
        }

        for name, collect in sections:
            try:
                snapshot[name] = collect()
            except (OSError, SamplerError) as e:
                log.warning("section %s failed: %s", name, e)
                snapshot[name] = {"error": str(e)}

        return snapshot


_monitor: HostMonitor | None = None
_monitor_lock = threading.Lock()


def get_monitor() -> HostMonitor:
    """Return the process-wide monitor bound to the default sampler."""
    global _monitor
    if _monitor is None:
        with _monitor_lock:
            if _monitor is None:
                _monitor = HostMonitor(get_default_sampler())
    return _monitor


def get_cpu_usage() -> float:
    return get_monitor().get_cpu_usage()


def get_available_memory() -> int:
    return get_monitor().get_available_memory()


def get_total_memory() -> int:
    return get_monitor().get_total_memory()


def get_process_count() -> int:
    return get_monitor().get_process_count()


def list_top_processes(max_count: int) -> list[ProcessRecord]:
    return get_monitor().list_top_processes(max_count)


def get_disk_usage(path: str) -> tuple[int, int, bool]:
    return get_monitor().get_disk_usage(path)


def list_directory(path: str, max_files: int) -> tuple[list[str], bool]:
    return get_monitor().list_directory(path, max_files)


def check_port_status(host: str, port: int, timeout: float | None = None) -> bool:
    return get_monitor().check_port_status(host, port, timeout)


def get_network_stats() -> tuple[int, int, bool]:
    return get_monitor().get_network_stats()


def collect_snapshot(
    *,
    include_processes: bool = True,
    include_network: bool = True,
    include_disk: bool = True,
    top_n: int | None = None,
) -> dict[str, Any]:
    return get_monitor().collect_snapshot(
        include_processes=include_processes,
        include_network=include_network,
        include_disk=include_disk,
        top_n=top_n,
    )
