"""Linux /proc counter source."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..errors import CounterUnavailable, ProcessAccessDenied, ProcessGone
from ..models import CpuTicks, InterfaceCounters, MemoryStatus
from .base import CounterSource

log = logging.getLogger(__name__)


# ── parsers (pure, fed with file contents) ───────────────────────────


def parse_proc_stat(text: str) -> CpuTicks:
    """Parse the aggregate ``cpu`` line of /proc/stat."""
    for line in text.splitlines():
        parts = line.split()
        if not parts or parts[0] != "cpu":
            continue
        if len(parts) < 5:
            break
        try:
            user, nice, system, idle = (int(v) for v in parts[1:5])
        except ValueError:
            break
        return CpuTicks(user=user, nice=nice, system=system, idle=idle)
    raise CounterUnavailable("no aggregate cpu line in /proc/stat")


def parse_proc_net_dev(text: str) -> dict[str, InterfaceCounters]:
    """Parse /proc/net/dev into per-interface rx/tx byte counters."""
    result: dict[str, InterfaceCounters] = {}
    # Two header lines: "Inter-|   Receive ..." and " face |bytes ..."
    for line in text.splitlines()[2:]:
        if ":" not in line:
            continue
        name, rest = line.split(":", 1)
        fields = rest.split()
        if len(fields) < 9:
            continue
        try:
            rx, tx = int(fields[0]), int(fields[8])
        except ValueError:
            continue
        result[name.strip()] = InterfaceCounters(rx_bytes=rx, tx_bytes=tx)
    return result


def parse_meminfo(text: str) -> MemoryStatus:
    """Parse MemTotal / MemAvailable out of /proc/meminfo (kB)."""
    values: dict[str, int] = {}
    for line in text.splitlines():
        parts = line.split(":")
        if len(parts) != 2:
            continue
        val_parts = parts[1].strip().split()
        try:
            values[parts[0].strip()] = int(val_parts[0])
        except (ValueError, IndexError):
            continue

    if "MemTotal" not in values:
        raise CounterUnavailable("MemTotal missing from /proc/meminfo")

    # Kernels older than 3.14 have no MemAvailable
    available_kb = values.get("MemAvailable", values.get("MemFree", 0))
    return MemoryStatus(total_bytes=values["MemTotal"] * 1024, available_bytes=available_kb * 1024)


def parse_pid_status(text: str) -> tuple[str, int]:
    """Return ``(Name, VmRSS bytes)`` from /proc/<pid>/status."""
    name = ""
    rss = 0
    for line in text.splitlines():
        key, _, value = line.partition(":")
        if key == "Name":
            name = value.strip()
        elif key == "VmRSS":
            try:
                rss = int(value.split()[0]) * 1024
            except (ValueError, IndexError):
                rss = 0
    # Kernel threads have no VmRSS line
    return name, rss


class ProcfsSource(CounterSource):
    """Read raw counters straight from a procfs mount."""

    def __init__(self, root: str | os.PathLike[str] = "/proc") -> None:
        self.root = Path(root)

    @property
    def name(self) -> str:
        return "procfs"

    def _read(self, *parts: str) -> str:
        path = self.root.joinpath(*parts)
        try:
            return path.read_text()
        except OSError as e:
            raise CounterUnavailable(f"cannot read {path}: {e}") from e

    def cpu_ticks(self) -> CpuTicks:
        return parse_proc_stat(self._read("stat"))

    def interface_counters(self) -> dict[str, InterfaceCounters]:
        return parse_proc_net_dev(self._read("net", "dev"))

    def memory(self) -> MemoryStatus:
        return parse_meminfo(self._read("meminfo"))

    def pids(self) -> list[int]:
        try:
            entries = os.listdir(self.root)
        except OSError as e:
            raise CounterUnavailable(f"cannot list {self.root}: {e}") from e
        return [int(entry) for entry in entries if entry.isdigit()]

    def process_detail(self, pid: int) -> tuple[str, int]:
        path = self.root / str(pid) / "status"
        try:
            text = path.read_text()
        except (FileNotFoundError, ProcessLookupError) as e:
            raise ProcessGone(pid) from e
        except PermissionError as e:
            raise ProcessAccessDenied(pid) from e
        except OSError as e:
            # ESRCH and friends when the task is reaped mid-read
            log.debug("status read failed", extra={"pid": pid})
            raise ProcessGone(pid) from e
        return parse_pid_status(text)
