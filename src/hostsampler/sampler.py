"""Stateful delta sampling for cumulative CPU and network counters."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping

from .config import settings
from .errors import CounterUnavailable
from .models import CpuTicks, InterfaceCounters, NetworkDelta
from .sources import CounterSource, get_source

log = logging.getLogger(__name__)

LOOPBACK_INTERFACE = "lo"


def aggregate_interfaces(counters: Mapping[str, InterfaceCounters]) -> InterfaceCounters:
    """Sum rx/tx over every interface except the one named exactly ``lo``."""
    rx = 0
    tx = 0
    for name, c in counters.items():
        if name == LOOPBACK_INTERFACE:
            continue
        rx += c.rx_bytes
        tx += c.tx_bytes
    return InterfaceCounters(rx_bytes=rx, tx_bytes=tx)


def _delta(current: float, previous: float) -> float:
    # Counter wrap or reset: treat as no progress
    return max(0, current - previous)


def cpu_percent_between(previous: CpuTicks, current: CpuTicks) -> float:
    """Busy percentage between two cumulative CPU readings, in [0, 100]."""
    busy = (
        _delta(current.user, previous.user)
        + _delta(current.nice, previous.nice)
        + _delta(current.system, previous.system)
    )
    total = busy + _delta(current.idle, previous.idle)
    if total <= 0:
        return 0.0
    return min(100.0, max(0.0, 100.0 * busy / total))


class DeltaSampler:
    """Holds the last cumulative CPU and network readings.

    The first sample of each stream only establishes a baseline and returns
    zero. Reading the source and swapping the baseline happen under a single
    lock, so concurrent callers serialize instead of tearing the stored
    values.
    """

    def __init__(self, source: CounterSource) -> None:
        self._source = source
        self._lock = threading.Lock()
        self._cpu_baseline: CpuTicks | None = None
        self._net_baseline: InterfaceCounters | None = None

    @property
    def source(self) -> CounterSource:
        return self._source

    def sample_cpu_utilization(self) -> float:
        """Return the busy percentage since the previous call (0.0 on the first)."""
        with self._lock:
            try:
                current = self._source.cpu_ticks()
            except OSError as e:
                log.warning("cpu counter read failed: %s", e, extra={"source": self._source.name})
                return 0.0

            previous = self._cpu_baseline
            self._cpu_baseline = current

        if previous is None:
            return 0.0
        return cpu_percent_between(previous, current)

    def sample_network(self) -> tuple[InterfaceCounters, NetworkDelta]:
        """Return the non-loopback totals and the delta computed from the same read.

        Raises CounterUnavailable when the interface counters cannot be read.
        """
        with self._lock:
            try:
                current = aggregate_interfaces(self._source.interface_counters())
            except OSError as e:
                raise CounterUnavailable(f"network counters unavailable: {e}") from e

            previous = self._net_baseline
            self._net_baseline = current

        if previous is None:
            return current, NetworkDelta(bytes_received=0, bytes_sent=0)
        return current, NetworkDelta(
            bytes_received=int(_delta(current.rx_bytes, previous.rx_bytes)),
            bytes_sent=int(_delta(current.tx_bytes, previous.tx_bytes)),
        )

    def sample_network_rates(self) -> NetworkDelta:
        """Return non-loopback bytes received/sent since the previous call."""
        return self.sample_network()[1]

    def reset(self) -> None:
        """Drop both baselines; the next sample of each stream returns zero."""
        with self._lock:
            self._cpu_baseline = None
            self._net_baseline = None


_default_sampler: DeltaSampler | None = None
_default_lock = threading.Lock()


def get_default_sampler() -> DeltaSampler:
    """Return the process-wide sampler, creating it on first use."""
    global _default_sampler
    if _default_sampler is None:
        with _default_lock:
            if _default_sampler is None:
                source = get_source(settings.counter_source, proc_root=settings.proc_root)
                log.debug("default sampler created", extra={"source": source.name})
                _default_sampler = DeltaSampler(source)
    return _default_sampler
