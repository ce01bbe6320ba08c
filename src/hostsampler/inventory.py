"""Process enumeration with a bounded result set."""

from __future__ import annotations

import logging

from .errors import ProcessAccessDenied, ProcessGone
from .models import ProcessRecord
from .sources import CounterSource

log = logging.getLogger(__name__)

UNKNOWN_PROCESS_NAME = "Unknown"

ORDER_MEMORY = "memory"
ORDER_ENUMERATION = "enumeration"
ORDERS = (ORDER_MEMORY, ORDER_ENUMERATION)


class ProcessInventory:
    """List live processes with their working set.

    Processes that exit mid-enumeration are skipped. Processes whose details
    are unreadable are reported as ``Unknown`` with zero memory.
    """

    def __init__(self, source: CounterSource) -> None:
        self._source = source

    def _record(self, pid: int) -> ProcessRecord | None:
        try:
            name, rss = self._source.process_detail(pid)
        except ProcessGone:
            return None
        except ProcessAccessDenied:
            log.debug("process details denied", extra={"pid": pid})
            return ProcessRecord(pid=pid, name=UNKNOWN_PROCESS_NAME, working_set_bytes=0)
        return ProcessRecord(pid=pid, name=name or UNKNOWN_PROCESS_NAME, working_set_bytes=rss)

    def list_top_processes(self, max_count: int, *, order: str = ORDER_MEMORY) -> list[ProcessRecord]:
        """Return at most ``max_count`` processes.

        ``order="memory"`` ranks every visible process by working set
        (largest first, PID breaks ties) before truncating.
        ``order="enumeration"`` keeps platform enumeration order and stops
        once ``max_count`` records are collected.
        """
        if max_count < 0:
            raise ValueError("max_count must be >= 0")
        if order not in ORDERS:
            raise ValueError(f"Unknown order: {order}. Available: {', '.join(ORDERS)}")
        if max_count == 0:
            return []

        records: list[ProcessRecord] = []
        for pid in self._source.pids():
            record = self._record(pid)
            if record is None:
                continue
            records.append(record)
            if order == ORDER_ENUMERATION and len(records) >= max_count:
                return records

        if order == ORDER_MEMORY:
            records.sort(key=lambda r: (-r.working_set_bytes, r.pid))
        return records[:max_count]
