"""Shared utility functions."""

from __future__ import annotations

import sys


def bytes_to_human(n: int | float) -> str:
    """Convert bytes to human-readable string (e.g. 1.00 MB)."""
    value = float(n)
    for unit in ("B", "KB", "MB", "GB", "TB"):
        if abs(value) < 1024.0:
            return f"{value:.2f} {unit}"
        value /= 1024.0
    return f"{value:.2f} PB"


def percent_of(part: int | float, total: int | float) -> float:
    """``part`` as a percentage of ``total``, rounded to 2 places; 0.0 when total is 0."""
    if total <= 0:
        return 0.0
    return round(part / total * 100, 2)


def output_text(data: str, output_file: str | None = None) -> None:
    """Append *data* to *output_file*, or write it to stdout."""
    if output_file:
        with open(output_file, "a") as f:
            f.write(data + "\n")
        return
    sys.stdout.write(data + "\n")
    sys.stdout.flush()
