from __future__ import annotations

import logging
from typing import Any

import pytest

from chartzoom.events import EventType, Listeners, ZoomChangeEvent
from chartzoom.exceptions import ZoomListenerError
from chartzoom.models import ChartZoom, ZoomWindow


def test_dispatch_is_synchronous_and_in_subscription_order() -> None:
    bus = Listeners()
    calls: list[tuple[str, Any]] = []
    bus.subscribe("zoom-change", lambda event: calls.append(("first", event)))
    bus.subscribe("zoom-change", lambda event: calls.append(("second", event)))
    bus.subscribe("other", lambda event: calls.append(("other", event)))

    bus.dispatch("zoom-change", 1)

    assert calls == [("first", 1), ("second", 1)]


def test_unsubscribe_removes_only_that_subscription() -> None:
    bus = Listeners()
    calls: list[int] = []
    first = bus.subscribe("zoom-change", calls.append)
    bus.subscribe("zoom-change", calls.append)

    first()
    first()
    bus.dispatch("zoom-change", 7)

    assert calls == [7]
    assert bus.listener_count("zoom-change") == 1


def test_handler_may_unsubscribe_during_dispatch() -> None:
    bus = Listeners()
    calls: list[str] = []

    def _once(event: Any) -> None:
        calls.append("once")
        unsubscribe()

    unsubscribe = bus.subscribe("zoom-change", _once)
    bus.subscribe("zoom-change", lambda event: calls.append("always"))

    bus.dispatch("zoom-change", None)
    bus.dispatch("zoom-change", None)

    assert calls == ["once", "always", "always"]


def test_failing_handler_is_logged_and_skipped(caplog: pytest.LogCaptureFixture) -> None:
    bus = Listeners()
    calls: list[int] = []

    def _boom(event: Any) -> None:
        raise RuntimeError("boom")

    bus.subscribe("zoom-change", _boom)
    bus.subscribe("zoom-change", calls.append)

    with caplog.at_level(logging.DEBUG, logger="chartzoom.events"):
        bus.dispatch("zoom-change", 3)

    assert calls == [3]
    assert any(record.exc_info for record in caplog.records)


def test_failing_handler_raises_when_configured() -> None:
    bus = Listeners(raise_errors=True)
    calls: list[int] = []

    def _boom(event: Any) -> None:
        raise RuntimeError("boom")

    bus.subscribe("zoom-change", _boom)
    bus.subscribe("zoom-change", calls.append)

    with pytest.raises(ZoomListenerError) as excinfo:
        bus.dispatch("zoom-change", 3)

    assert excinfo.value.event_type == "zoom-change"
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert calls == []


def test_zoom_change_event_shape() -> None:
    event = ZoomChangeEvent.from_zoom(ChartZoom(horizontal=ZoomWindow(min=0, max=1)))

    assert event.type == EventType.ZOOM_CHANGE
    assert event.as_payload() == {"type": "zoom-change", "horizontal": {"min": 0.0, "max": 1.0}}
    assert ZoomChangeEvent.from_zoom(None).as_payload() == {"type": "zoom-change"}
