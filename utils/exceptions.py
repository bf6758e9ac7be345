from __future__ import annotations

"""Shared exception types for cross-module use."""

from typing import Iterable


class CatalogConfigError(RuntimeError):
    """Raised when the action catalog cannot back every competition phase."""

    def __init__(self, failures: Iterable[str] | None = None):
        self.failures = list(failures or [])
        message = (
            "Action catalog is misconfigured; every phase needs at least one"
            " action without prerequisites."
        )
        if self.failures:
            message += " " + " ".join(self.failures)
        super().__init__(message)


class ProgramConfigError(ValueError):
    """Raised when a manual program edit cannot be applied."""


class EventEntryError(RuntimeError):
    """Raised when the user competitor may not enter an event."""

    def __init__(self, event_name: str, reason: str):
        self.event_name = event_name
        self.reason = reason
        super().__init__(f"Cannot enter {event_name}: {reason}")


__all__ = ["CatalogConfigError", "ProgramConfigError", "EventEntryError"]
