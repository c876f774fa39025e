"""Replay recorded coordinator calls.

A recording is JSON lines, one call per line::

    {"op": "register_axes", "axes": [{"id": "x1", "direction": "horizontal"}]}
    {"op": "update_zoom", "requester": "sync", "zoom": {"horizontal": {"min": 0, "max": 5}}}
    {"op": "update_axis_zoom", "requester": "drag", "axis": "x1", "zoom": null}

Blank lines and lines starting with ``#`` are skipped.  Replaying returns
the change events in the order the coordinator emitted them, which makes
zoom bugs reported from a live chart reproducible offline.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from chartzoom.coordinator import ZoomCoordinator
from chartzoom.events import ZoomChangeEvent
from chartzoom.exceptions import ReplayError
from chartzoom.models import AxisRef, ZoomUpdate, ZoomWindow

_logger = logging.getLogger(__name__)


class _Operation(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class RegisterAxesOp(_Operation):
    op: Literal["register_axes"]
    axes: list[AxisRef]


class UpdateZoomOp(_Operation):
    op: Literal["update_zoom"]
    requester: str
    zoom: ZoomUpdate | None = None


class UpdateAxisZoomOp(_Operation):
    op: Literal["update_axis_zoom"]
    requester: str
    axis: str
    zoom: ZoomWindow | None = None


Operation = Annotated[RegisterAxesOp | UpdateZoomOp | UpdateAxisZoomOp, Field(discriminator="op")]

_OPERATION_ADAPTER: TypeAdapter[Operation] = TypeAdapter(Operation)


def parse_operations(lines: Iterable[str]) -> list[Operation]:
    """Parse recorded calls, raising :class:`ReplayError` with the 1-based line number."""
    operations: list[Operation] = []
    for number, line in enumerate(lines, start=1):
        text = line.strip()
        if not text or text.startswith("#"):
            continue
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ReplayError(f"line {number}: invalid JSON: {exc.msg}", line=number) from exc
        try:
            operations.append(_OPERATION_ADAPTER.validate_python(raw))
        except ValidationError as exc:
            raise ReplayError(f"line {number}: invalid operation: {exc}", line=number) from exc
    return operations


def load_operations(path: Path) -> list[Operation]:
    with path.open(encoding="utf-8") as handle:
        return parse_operations(handle)


def replay(
    operations: Iterable[Operation],
    coordinator: ZoomCoordinator | None = None,
) -> list[ZoomChangeEvent]:
    """Apply *operations* to *coordinator* (a fresh one by default).

    Returns
    -------
    list[ZoomChangeEvent]
        Events emitted while replaying, in emission order.
    """
    target = coordinator if coordinator is not None else ZoomCoordinator()
    events: list[ZoomChangeEvent] = []
    unsubscribe = target.add_listener(events.append)
    try:
        for operation in operations:
            _logger.debug("Replaying %s", operation.op)
            if isinstance(operation, RegisterAxesOp):
                target.register_axes(operation.axes)
            elif isinstance(operation, UpdateZoomOp):
                target.update_zoom(operation.requester, operation.zoom)
            else:
                target.update_axis_zoom(operation.requester, operation.axis, operation.zoom)
    finally:
        unsubscribe()
    return events
