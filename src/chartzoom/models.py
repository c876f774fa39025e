"""Value types shared by the coordinator, the arbitrators and the event layer.

Every value type is a frozen pydantic model: a zoom window is never edited
in place, a new one replaces it.  None of these models checks that
``min <= max``; callers own the geometry of what they request.
"""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Mapping, Sequence
from typing import Any, Protocol, TypeAlias

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

_DIRECTION_ALIASES: dict[str, str] = {
    "x": "horizontal",
    "y": "vertical",
    "horizontal": "horizontal",
    "vertical": "vertical",
}


class AxisDirection(enum.StrEnum):
    """Direction an axis scales along.

    ``"x"`` and ``"y"`` (any case) are accepted as input spellings.
    """

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @classmethod
    def _missing_(cls, value: object) -> AxisDirection | None:
        if isinstance(value, str):
            alias = _DIRECTION_ALIASES.get(value.strip().lower())
            if alias is not None:
                return cls(alias)
        return None


class ZoomWindow(BaseModel):
    """A closed numeric range ``[min, max]`` shown on one axis."""

    # Extra keys from callers (e.g. a "source" tag) are dropped, not rejected.
    model_config = ConfigDict(frozen=True, extra="ignore")

    min: float
    max: float

    @model_validator(mode="before")
    @classmethod
    def _accept_pairs(cls, values: Any) -> Any:
        """Allow ``(min, max)`` pairs alongside ``{"min": .., "max": ..}``."""
        if isinstance(values, Sequence) and not isinstance(values, (str, bytes, bytearray)):
            if len(values) != 2:
                raise ValueError(f"zoom window pair must have exactly 2 items, got {len(values)}")
            return {"min": values[0], "max": values[1]}
        return values

    @classmethod
    def coerce(cls, value: ZoomWindowInput) -> ZoomWindow:
        """Return *value* as a :class:`ZoomWindow`, parsing mappings and pairs."""
        if isinstance(value, ZoomWindow):
            return value
        return cls.model_validate(value)

    def same_range(self, other: ZoomWindow | None) -> bool:
        """Exact field-by-field comparison of ``min`` and ``max``."""
        if other is None:
            return False
        return self.min == other.min and self.max == other.max


ZoomWindowInput: TypeAlias = ZoomWindow | Mapping[str, float] | Sequence[float]


def same_zoom(left: ZoomWindow | None, right: ZoomWindow | None) -> bool:
    """Compare two resolved zooms, treating ``None`` as "no zoom"."""
    if left is None or right is None:
        return left is None and right is None
    return left.same_range(right)


class AxisLike(Protocol):
    """Anything the chart's axis registry hands over at registration time."""

    @property
    def id(self) -> str: ...

    @property
    def direction(self) -> AxisDirection | str: ...


class AxisRef(BaseModel):
    """Lightweight axis descriptor: a stable id and a direction."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., description="Stable axis id")
    direction: AxisDirection

    @field_validator("id")
    @classmethod
    def _normalize_id(cls, value: str) -> str:
        axis_id = value.strip()
        if not axis_id:
            raise ValueError("axis id must be non-empty")
        return axis_id


class ChartZoom(BaseModel):
    """Chart-level zoom view, at most one window per direction."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    horizontal: ZoomWindow | None = None
    vertical: ZoomWindow | None = None

    def get(self, direction: AxisDirection) -> ZoomWindow | None:
        return self.horizontal if direction == AxisDirection.HORIZONTAL else self.vertical

    def as_dict(self) -> dict[str, dict[str, float]]:
        """Plain dict holding only the directions that are zoomed."""
        return self.model_dump(include={"horizontal", "vertical"}, exclude_none=True)


class RequestKind(enum.StrEnum):
    UNSET = "unset"
    CLEAR = "clear"
    SET = "set"


@dataclasses.dataclass(frozen=True, slots=True)
class AxisRequest:
    """What one requester asks of one direction in a whole-chart update.

    ``UNSET`` means the direction key was omitted, ``CLEAR`` means it was
    given explicitly as "no request", ``SET`` carries the window.
    """

    kind: RequestKind
    window: ZoomWindow | None = None

    @classmethod
    def unset(cls) -> AxisRequest:
        return cls(RequestKind.UNSET)

    @classmethod
    def clear(cls) -> AxisRequest:
        return cls(RequestKind.CLEAR)

    @classmethod
    def set(cls, window: ZoomWindowInput) -> AxisRequest:
        return cls(RequestKind.SET, ZoomWindow.coerce(window))

    @property
    def is_set(self) -> bool:
        return self.kind == RequestKind.SET


class ZoomUpdate(BaseModel):
    """Whole-chart zoom request from a single requester.

    Keys left out of the payload are ``UNSET``; keys given as ``None`` are an
    explicit ``CLEAR``.  Pydantic's ``model_fields_set`` keeps the two apart.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    horizontal: ZoomWindow | None = Field(
        default=None,
        validation_alias=AliasChoices("horizontal", "x"),
    )
    vertical: ZoomWindow | None = Field(
        default=None,
        validation_alias=AliasChoices("vertical", "y"),
    )

    @classmethod
    def coerce(cls, value: ZoomUpdateInput | None) -> ZoomUpdate:
        """Build an update from a mapping, a chart-level zoom or ``None``.

        A :class:`ChartZoom` (and therefore a change event) carries both
        directions, so a missing direction in it is an explicit clear.
        """
        if value is None:
            return cls()
        if isinstance(value, ZoomUpdate):
            return value
        if isinstance(value, ChartZoom):
            return cls(**{direction.value: value.get(direction) for direction in AxisDirection})
        return cls.model_validate(dict(value))

    def request_for(self, direction: AxisDirection) -> AxisRequest:
        name = direction.value
        if name not in self.model_fields_set:
            return AxisRequest.unset()
        window: ZoomWindow | None = getattr(self, name)
        if window is None:
            return AxisRequest.clear()
        return AxisRequest.set(window)


ZoomUpdateInput: TypeAlias = ZoomUpdate | ChartZoom | Mapping[str, Any]
