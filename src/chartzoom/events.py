"""Zoom change notifications and the publish/subscribe seam.

The coordinator only needs two capabilities from its host: subscribe a
handler to a tag, and dispatch a tagged event.  :class:`Listeners` is the
in-process implementation used when the host does not inject its own bus.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal, Protocol

from chartzoom.exceptions import ZoomListenerError
from chartzoom.models import ChartZoom

_logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]
Unsubscribe = Callable[[], None]


class EventType(enum.StrEnum):
    ZOOM_CHANGE = "zoom-change"


class ZoomChangeEvent(ChartZoom):
    """The chart-level zoom after an update that changed at least one axis."""

    type: Literal["zoom-change"] = "zoom-change"

    @classmethod
    def from_zoom(cls, zoom: ChartZoom | None) -> ZoomChangeEvent:
        if zoom is None:
            return cls()
        return cls(horizontal=zoom.horizontal, vertical=zoom.vertical)

    def as_payload(self) -> dict[str, Any]:
        """Plain dict form; directions without a zoom are left out."""
        return {"type": self.type, **self.as_dict()}


class EventBus(Protocol):
    """Host-supplied publish/subscribe facility."""

    def subscribe(self, event_type: str, handler: Handler) -> Unsubscribe: ...

    def dispatch(self, event_type: str, event: Any) -> None: ...


@dataclass(eq=False, slots=True)
class _Subscription:
    handler: Handler


class Listeners:
    """Synchronous in-process event bus.

    Handlers run in subscription order, inline with :meth:`dispatch`.
    A handler that raises is logged and skipped unless ``raise_errors``
    is set, in which case delivery stops with :class:`ZoomListenerError`.
    """

    def __init__(self, *, raise_errors: bool = False) -> None:
        self._raise_errors = raise_errors
        self._subscriptions: dict[str, list[_Subscription]] = {}

    def subscribe(self, event_type: str, handler: Handler) -> Unsubscribe:
        """Register *handler* and return a callable that removes it again."""
        subscription = _Subscription(handler)
        self._subscriptions.setdefault(event_type, []).append(subscription)

        def _unsubscribe() -> None:
            subscriptions = self._subscriptions.get(event_type, [])
            if subscription in subscriptions:
                subscriptions.remove(subscription)

        return _unsubscribe

    def listener_count(self, event_type: str) -> int:
        return len(self._subscriptions.get(event_type, []))

    def dispatch(self, event_type: str, event: Any) -> None:
        # Snapshot: handlers may unsubscribe themselves while being notified.
        for subscription in list(self._subscriptions.get(event_type, [])):
            try:
                subscription.handler(event)
            except Exception as exc:
                if self._raise_errors:
                    raise ZoomListenerError(
                        f"Listener for {event_type!r} failed: {exc}",
                        event_type=event_type,
                    ) from exc
                _logger.debug("Listener for %s failed", event_type, exc_info=True)
