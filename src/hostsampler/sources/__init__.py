"""Platform counter sources."""

from __future__ import annotations

import os
import sys

from .base import CounterSource
from .procfs import ProcfsSource
from .psutil_source import PsutilSource

__all__ = [
    "CounterSource",
    "ProcfsSource",
    "PsutilSource",
    "get_source",
]


def get_source(kind: str = "auto", *, proc_root: str = "/proc") -> CounterSource:
    """Get counter source by name.

    ``auto`` picks procfs on Linux when ``<proc_root>/stat`` is readable and
    psutil everywhere else.
    """
    if kind == "auto":
        if sys.platform.startswith("linux") and os.access(os.path.join(proc_root, "stat"), os.R_OK):
            return ProcfsSource(proc_root)
        return PsutilSource()

    if kind == "procfs":
        return ProcfsSource(proc_root)
    if kind == "psutil":
        return PsutilSource()

    raise ValueError(f"Unknown counter source: {kind}. Available: auto, procfs, psutil")
