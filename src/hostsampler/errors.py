from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppError(Exception):
    """A controlled, user-facing error.

    Use this for validation failures, unsupported routes, etc.
    """

    status_code: int
    code: str
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code} ({self.status_code}): {self.message}"


class SamplerError(Exception):
    """Base class for errors raised by the sampling components."""


class CounterUnavailable(SamplerError, OSError):
    """A raw counter could not be read from the platform."""


class DiskUnavailable(SamplerError, OSError):
    """The path does not resolve to a mounted filesystem."""

    def __init__(self, path: str, reason: str = "") -> None:
        super().__init__(f"disk usage unavailable for {path!r}: {reason}".rstrip(": "))
        self.path = path


class DirectoryUnavailable(SamplerError, OSError):
    """The directory cannot be opened."""

    def __init__(self, path: str, reason: str = "") -> None:
        super().__init__(f"cannot list {path!r}: {reason}".rstrip(": "))
        self.path = path


class ProcessGone(SamplerError):
    """The process exited between enumeration and lookup."""

    def __init__(self, pid: int) -> None:
        super().__init__(f"process {pid} no longer exists")
        self.pid = pid


class ProcessAccessDenied(SamplerError):
    """Process details exist but cannot be read by this user."""

    def __init__(self, pid: int) -> None:
        super().__init__(f"access denied for process {pid}")
        self.pid = pid
