from __future__ import annotations

import os
from dataclasses import dataclass, field


def _get_str(name: str, default: str) -> str:
    return os.getenv(name, default)


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_positive_float(name: str, default: float) -> float:
    value = _get_float(name, default)
    return value if value > 0 else default


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw not in {"0", "false", "False"}


@dataclass(frozen=True, slots=True)
class Settings:
    service_name: str = field(default_factory=lambda: _get_str("SERVICE_NAME", "hostsampler"))
    default_interval_seconds: int = field(
        default_factory=lambda: _get_int("DEFAULT_INTERVAL_SECONDS", 5)
    )
    include_hostname: bool = field(default_factory=lambda: _get_bool("INCLUDE_HOSTNAME", True))

    # Raw counter source: "auto", "procfs" or "psutil"
    counter_source: str = field(default_factory=lambda: _get_str("COUNTER_SOURCE", "auto"))
    proc_root: str = field(default_factory=lambda: _get_str("PROC_ROOT", "/proc"))

    # Query defaults
    port_probe_timeout_seconds: float = field(
        default_factory=lambda: _get_positive_float("PORT_PROBE_TIMEOUT_SECONDS", 3.0)
    )
    top_processes_default: int = field(
        default_factory=lambda: _get_int("TOP_PROCESSES_DEFAULT", 10)
    )
    process_order: str = field(default_factory=lambda: _get_str("PROCESS_ORDER", "memory"))
    list_directory_max_files: int = field(
        default_factory=lambda: _get_int("LIST_DIRECTORY_MAX_FILES", 100)
    )


settings = Settings()
