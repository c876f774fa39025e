"""Custom exception hierarchy for chartzoom."""

from __future__ import annotations


class ChartZoomError(Exception):
    """Base exception for all chartzoom errors."""


class ZoomConfigError(ChartZoomError):
    """Invalid or missing configuration."""


class ZoomListenerError(ChartZoomError):
    """A zoom listener raised while an event was being dispatched.

    Only raised when the bus is configured with ``raise_listener_errors``;
    the original exception is available as ``__cause__``.
    """

    def __init__(self, message: str, *, event_type: str = "") -> None:
        self.event_type = event_type
        super().__init__(message)


class ReplayError(ChartZoomError):
    """A recorded operation could not be parsed or replayed."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        self.line = line
        super().__init__(message)
