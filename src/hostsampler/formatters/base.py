"""Base formatter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def format(self, snapshot: dict[str, Any]) -> str:
        """Format a snapshot to string."""
        ...

    @abstractmethod
    def format_result(self, title: str, result: dict[str, Any]) -> str:
        """Format the result of a single query."""
        ...
