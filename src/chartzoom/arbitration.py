"""Per-axis arbitration of competing zoom requests.

Policy: the most recently asserted request wins.  When that requester
retracts, the next most recent one still holding an assertion takes over,
so a long-lived requester (a synchronized-zoom link) regains control after
a transient one (a drag gesture) lets go.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from chartzoom.models import AxisDirection, ZoomWindow, ZoomWindowInput, same_zoom

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Assertion:
    requester_id: str
    window: ZoomWindow


class RequestStack:
    """Ordered ``requester -> window`` entries, oldest first.

    Pushing an id that is already present moves it to the most-recent end;
    discarding removes the entry outright.  Ordering is kept in an explicit
    list, never inferred from mapping iteration order.
    """

    def __init__(self) -> None:
        self._entries: list[_Assertion] = []

    def _index(self, requester_id: str) -> int | None:
        for index, entry in enumerate(self._entries):
            if entry.requester_id == requester_id:
                return index
        return None

    def push(self, requester_id: str, window: ZoomWindow) -> None:
        self.discard(requester_id)
        self._entries.append(_Assertion(requester_id, window))

    def discard(self, requester_id: str) -> ZoomWindow | None:
        """Remove *requester_id* and return the window it held, if any."""
        index = self._index(requester_id)
        if index is None:
            return None
        return self._entries.pop(index).window

    def top(self) -> tuple[str, ZoomWindow] | None:
        if not self._entries:
            return None
        entry = self._entries[-1]
        return entry.requester_id, entry.window

    def requesters(self) -> tuple[str, ...]:
        return tuple(entry.requester_id for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, requester_id: object) -> bool:
        return any(entry.requester_id == requester_id for entry in self._entries)

    def __iter__(self) -> Iterator[tuple[str, ZoomWindow]]:
        return iter([(entry.requester_id, entry.window) for entry in self._entries])


class AxisArbitrator:
    """Competing-request bookkeeping for exactly one axis.

    ``update_zoom`` only records or retracts; nothing is resolved until
    ``apply_states`` runs, and ``get_zoom`` reads the cached result.
    """

    def __init__(self, direction: AxisDirection) -> None:
        self.direction = direction
        self._requests = RequestStack()
        self._current: ZoomWindow | None = None
        self._current_requester: str | None = None

    @property
    def requesters(self) -> tuple[str, ...]:
        """Requesters holding an assertion, oldest first."""
        return self._requests.requesters()

    @property
    def active_requester(self) -> str | None:
        """Requester owning the resolved zoom as of the last ``apply_states``."""
        return self._current_requester

    def update_zoom(self, requester_id: str, request: ZoomWindowInput | None = None) -> None:
        """Retract *requester_id*'s assertion, then re-assert *request* if given."""
        self._requests.discard(requester_id)
        if request is not None:
            # Mappings and pairs are parsed into a new frozen window.
            self._requests.push(requester_id, ZoomWindow.coerce(request))

    def apply_states(self) -> bool:
        """Re-derive the resolved zoom; return whether it changed."""
        previous = self._current
        top = self._requests.top()
        if top is None:
            self._current_requester, self._current = None, None
        else:
            self._current_requester, self._current = top

        changed = not same_zoom(previous, self._current)
        if changed:
            _logger.debug(
                "Resolved %s zoom changed %s -> %s (requester=%s)",
                self.direction,
                previous,
                self._current,
                self._current_requester,
            )
        return changed

    def get_zoom(self) -> ZoomWindow | None:
        return self._current
