from __future__ import annotations

from chartzoom.arbitration import AxisArbitrator, RequestStack
from chartzoom.models import AxisDirection, ZoomWindow


def _w(lo: float, hi: float) -> ZoomWindow:
    return ZoomWindow(min=lo, max=hi)


def test_request_stack_push_moves_existing_requester_to_most_recent() -> None:
    stack = RequestStack()
    stack.push("a", _w(0, 1))
    stack.push("b", _w(2, 3))
    stack.push("a", _w(4, 5))

    assert stack.requesters() == ("b", "a")
    assert stack.top() == ("a", _w(4, 5))
    assert len(stack) == 2


def test_request_stack_discard_leaves_no_tombstone() -> None:
    stack = RequestStack()
    stack.push("a", _w(0, 1))
    stack.push("b", _w(2, 3))

    assert stack.discard("b") == _w(2, 3)
    assert stack.discard("b") is None
    assert "b" not in stack
    assert list(stack) == [("a", _w(0, 1))]
    assert stack.top() == ("a", _w(0, 1))


def test_request_stack_empty_top_is_none() -> None:
    stack = RequestStack()
    assert stack.top() is None
    assert stack.requesters() == ()


def test_fallback_to_earlier_requester_after_retract() -> None:
    axis = AxisArbitrator(AxisDirection.HORIZONTAL)

    axis.update_zoom("r1", _w(0, 10))
    axis.update_zoom("r2", _w(2, 8))
    assert axis.apply_states() is True
    assert axis.get_zoom() == _w(2, 8)
    assert axis.active_requester == "r2"

    axis.update_zoom("r2", None)
    assert axis.apply_states() is True
    assert axis.get_zoom() == _w(0, 10)
    assert axis.active_requester == "r1"


def test_reasserting_requester_is_promoted() -> None:
    axis = AxisArbitrator(AxisDirection.HORIZONTAL)

    axis.update_zoom("r1", _w(0, 10))
    axis.update_zoom("r2", _w(2, 8))
    axis.update_zoom("r1", _w(3, 4))
    axis.apply_states()

    assert axis.get_zoom() == _w(3, 4)
    assert axis.requesters == ("r2", "r1")


def test_apply_states_compares_values_not_identity() -> None:
    axis = AxisArbitrator(AxisDirection.VERTICAL)

    axis.update_zoom("r1", {"min": 1, "max": 2})
    assert axis.apply_states() is True

    # A different requester asserting an equal window is not a change.
    axis.update_zoom("r2", {"min": 1.0, "max": 2.0})
    assert axis.apply_states() is False
    assert axis.active_requester == "r2"


def test_apply_states_detects_single_field_change() -> None:
    axis = AxisArbitrator(AxisDirection.VERTICAL)
    axis.update_zoom("r1", _w(1, 2))
    axis.apply_states()

    axis.update_zoom("r1", _w(1, 3))
    assert axis.apply_states() is True

    axis.update_zoom("r1", _w(0, 3))
    assert axis.apply_states() is True


def test_retracting_last_requester_resolves_to_no_zoom() -> None:
    axis = AxisArbitrator(AxisDirection.HORIZONTAL)
    axis.update_zoom("r1", _w(0, 1))
    axis.apply_states()

    axis.update_zoom("r1")
    assert axis.apply_states() is True
    assert axis.get_zoom() is None
    assert axis.active_requester is None

    # Retracting an absent requester on an unzoomed axis changes nothing.
    axis.update_zoom("ghost")
    assert axis.apply_states() is False
    assert axis.get_zoom() is None


def test_get_zoom_reads_cached_state_until_apply() -> None:
    axis = AxisArbitrator(AxisDirection.HORIZONTAL)
    axis.update_zoom("r1", _w(0, 1))

    assert axis.get_zoom() is None
    axis.apply_states()
    assert axis.get_zoom() == _w(0, 1)


def test_inverted_window_is_accepted_as_is() -> None:
    axis = AxisArbitrator(AxisDirection.HORIZONTAL)
    axis.update_zoom("r1", (10, 0))
    axis.apply_states()

    assert axis.get_zoom() == _w(10, 0)
