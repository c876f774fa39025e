"""Chart-level zoom coordination.

One :class:`ZoomCoordinator` exists per chart.  It routes requests to the
per-axis arbitrators, aggregates their resolved zooms into a chart-level
view, and publishes a single change event per update call.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from chartzoom.arbitration import AxisArbitrator
from chartzoom.config import ZoomConfig
from chartzoom.events import EventBus, EventType, Handler, Listeners, Unsubscribe, ZoomChangeEvent
from chartzoom.models import (
    AxisDirection,
    AxisLike,
    ChartZoom,
    ZoomUpdate,
    ZoomUpdateInput,
    ZoomWindow,
    ZoomWindowInput,
)

_logger = logging.getLogger(__name__)


class ZoomCoordinator:
    """Arbitrates competing zoom requests for every axis of one chart.

    Usage::

        zoom = ZoomCoordinator()
        zoom.register_axes([AxisRef(id="x1", direction="horizontal")])
        zoom.add_listener(lambda event: print(event.as_payload()))
        zoom.update_axis_zoom("drag", "x1", {"min": 0, "max": 100})

    Addressing an axis id that was never registered is a silent no-op and
    queries about it return ``None``; the chart and its interaction
    features are allowed to race on registration.
    """

    def __init__(self, *, bus: EventBus | None = None, config: ZoomConfig | None = None) -> None:
        self._config = config or ZoomConfig()
        if bus is None:
            bus = Listeners(raise_errors=self._config.raise_listener_errors)
        elif self._config.raise_listener_errors:
            _logger.debug(
                "raise_listener_errors ignored: injected bus %s keeps its own error policy",
                type(bus).__name__,
            )
        self._bus: EventBus = bus
        # Insertion order of this dict is the registration order used for aggregation.
        self._axes: dict[str, AxisArbitrator] = {}

    # ------------------------------------------------------------------
    # Axis registry
    # ------------------------------------------------------------------

    @property
    def axis_ids(self) -> tuple[str, ...]:
        return tuple(self._axes)

    def has_axis(self, axis_id: str) -> bool:
        return axis_id in self._axes

    def register_axes(self, axes: Iterable[AxisLike]) -> None:
        """Create an arbitrator for every axis id not seen before.

        Re-registering a known id keeps its existing arbitrator and
        direction.  Axes missing from *axes* are not removed.  Directions are
        parsed before anything is registered, so an invalid one raises
        ``ValueError`` and leaves the registry untouched.
        """
        pending: dict[str, AxisDirection] = {}
        for axis in axes:
            if axis.id in self._axes or axis.id in pending:
                continue
            pending[axis.id] = AxisDirection(axis.direction)

        for axis_id, direction in pending.items():
            self._axes[axis_id] = AxisArbitrator(direction)
            _logger.debug("Registered axis id=%s direction=%s", axis_id, direction)

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def update_zoom(self, requester_id: str, update: ZoomUpdateInput | None = None) -> None:
        """Set or clear *requester_id*'s assertion on every known axis.

        Each axis receives the request for its own direction.  A direction
        left out of *update*, given as ``None``, or an absent *update*
        retracts the requester from the axes of that direction.
        """
        payload = ZoomUpdate.coerce(update)
        for axis_id, arbitrator in self._axes.items():
            request = payload.request_for(arbitrator.direction)
            if not request.is_set:
                _logger.debug(
                    "Retracting requester=%s from axis=%s (%s)",
                    requester_id,
                    axis_id,
                    request.kind,
                )
            arbitrator.update_zoom(requester_id, request.window)

        self._apply_states()

    def update_axis_zoom(
        self,
        requester_id: str,
        axis_id: str,
        request: ZoomWindowInput | None = None,
    ) -> None:
        """Set (or with ``request=None`` clear) *requester_id*'s zoom on one axis."""
        arbitrator = self._axes.get(axis_id)
        if arbitrator is None:
            level = logging.WARNING if self._config.warn_on_unknown_axis else logging.DEBUG
            _logger.log(level, "Ignoring zoom from requester=%s for unknown axis=%s", requester_id, axis_id)
        else:
            arbitrator.update_zoom(requester_id, request)

        self._apply_states()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_zoom(self) -> ChartZoom | None:
        """Chart-level zoom, or ``None`` when no axis is zoomed.

        Only one window per direction is reported: when several axes share
        a direction, the last registered one holding a zoom wins.
        """
        horizontal: ZoomWindow | None = None
        vertical: ZoomWindow | None = None

        # TODO: report every axis once multi-axis charts need their own aggregate shape.
        for arbitrator in self._axes.values():
            zoom = arbitrator.get_zoom()
            if zoom is None:
                continue
            if arbitrator.direction == AxisDirection.HORIZONTAL:
                horizontal = zoom
            else:
                vertical = zoom

        if horizontal is None and vertical is None:
            return None
        return ChartZoom(horizontal=horizontal, vertical=vertical)

    def get_axis_zoom(self, axis_id: str) -> ZoomWindow | None:
        arbitrator = self._axes.get(axis_id)
        if arbitrator is None:
            return None
        return arbitrator.get_zoom()

    def get_requesters(self, axis_id: str) -> tuple[str, ...]:
        """Requesters currently asserting a zoom on *axis_id*, oldest first."""
        arbitrator = self._axes.get(axis_id)
        if arbitrator is None:
            return ()
        return arbitrator.requesters

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, handler: Handler) -> Unsubscribe:
        """Subscribe *handler* to zoom-change events; returns the unsubscribe callable."""
        return self._bus.subscribe(EventType.ZOOM_CHANGE, handler)

    def _apply_states(self) -> None:
        # Every arbitrator must re-derive its state, so no short-circuiting any().
        changed = [arbitrator.apply_states() for arbitrator in self._axes.values()]
        if not any(changed):
            return

        event = ZoomChangeEvent.from_zoom(self.get_zoom())
        _logger.debug("Dispatching %s %s", EventType.ZOOM_CHANGE, event.as_payload())
        self._bus.dispatch(EventType.ZOOM_CHANGE, event)
