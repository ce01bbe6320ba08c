"""Data models for hostsampler."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from .utils import percent_of


@dataclass(frozen=True, slots=True)
class CpuTicks:
    """Cumulative CPU counters since boot (jiffies or seconds)."""

    user: float
    nice: float
    system: float
    idle: float


@dataclass(frozen=True, slots=True)
class InterfaceCounters:
    """Cumulative byte counters of one interface (or an aggregate)."""

    rx_bytes: int
    tx_bytes: int


@dataclass(frozen=True, slots=True)
class NetworkDelta:
    """Bytes moved between two consecutive network samples."""

    bytes_received: int
    bytes_sent: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class MemoryStatus:
    """Physical memory totals. ``available_bytes`` never exceeds ``total_bytes``."""

    total_bytes: int
    available_bytes: int

    def __post_init__(self) -> None:
        total = max(0, int(self.total_bytes))
        object.__setattr__(self, "total_bytes", total)
        object.__setattr__(self, "available_bytes", min(max(0, int(self.available_bytes)), total))

    @property
    def percent_used(self) -> float:
        return percent_of(self.total_bytes - self.available_bytes, self.total_bytes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total_bytes,
            "available": self.available_bytes,
            "percent": self.percent_used,
        }


@dataclass(frozen=True, slots=True)
class DiskStatus:
    """Capacity of the filesystem holding ``path``. ``free_bytes`` never exceeds ``total_bytes``."""

    path: str
    total_bytes: int
    free_bytes: int

    def __post_init__(self) -> None:
        total = max(0, int(self.total_bytes))
        object.__setattr__(self, "total_bytes", total)
        object.__setattr__(self, "free_bytes", min(max(0, int(self.free_bytes)), total))

    @property
    def percent_used(self) -> float:
        return percent_of(self.total_bytes - self.free_bytes, self.total_bytes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "total": self.total_bytes,
            "free": self.free_bytes,
            "percent": self.percent_used,
        }


@dataclass(frozen=True, slots=True)
class PartitionStatus:
    device: str
    mountpoint: str
    fstype: str
    usage: DiskStatus = field(repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "device": self.device,
            "mountpoint": self.mountpoint,
            "fstype": self.fstype,
            "total": self.usage.total_bytes,
            "free": self.usage.free_bytes,
            "percent": self.usage.percent_used,
        }


@dataclass(frozen=True, slots=True)
class ProcessRecord:
    """One enumerated process. Built fresh on every enumeration."""

    pid: int
    name: str
    working_set_bytes: int  # resident memory

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class PortProbeResult:
    host: str
    port: int
    reachable: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
