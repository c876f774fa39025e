"""chartzoom - Arbitration of competing zoom requests for chart axes."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("chartzoom")
except PackageNotFoundError:
    __version__ = "0+local"
from chartzoom.arbitration import AxisArbitrator, RequestStack
from chartzoom.config import ZoomConfig
from chartzoom.coordinator import ZoomCoordinator
from chartzoom.events import EventBus, EventType, Listeners, ZoomChangeEvent
from chartzoom.exceptions import ChartZoomError, ReplayError, ZoomConfigError, ZoomListenerError
from chartzoom.models import (
    AxisDirection,
    AxisLike,
    AxisRef,
    AxisRequest,
    ChartZoom,
    RequestKind,
    ZoomUpdate,
    ZoomWindow,
)

__all__ = [
    "__version__",
    "AxisArbitrator",
    "AxisDirection",
    "AxisLike",
    "AxisRef",
    "AxisRequest",
    "ChartZoom",
    "ChartZoomError",
    "EventBus",
    "EventType",
    "Listeners",
    "ReplayError",
    "RequestKind",
    "RequestStack",
    "ZoomChangeEvent",
    "ZoomConfig",
    "ZoomConfigError",
    "ZoomCoordinator",
    "ZoomListenerError",
    "ZoomUpdate",
    "ZoomWindow",
]
