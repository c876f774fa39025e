"""Coordinator configuration for chartzoom."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from chartzoom.exceptions import ZoomConfigError

_TRUE_VALUES = frozenset({"1", "true", "yes", "y", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "n", "off"})


def _env_bool(name: str, value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ZoomConfigError(f"{name} must be a boolean flag, got {value!r}")


@dataclasses.dataclass(frozen=True)
class ZoomConfig:
    """Coordinator configuration.

    Parameters
    ----------
    warn_on_unknown_axis : bool
        Log updates addressed to an axis id that was never registered at
        ``WARNING`` instead of ``DEBUG``.  The update itself is still a
        silent no-op; registration races between the chart and its
        interaction features are expected.
    raise_listener_errors : bool
        Propagate exceptions raised by zoom listeners as
        :class:`~chartzoom.exceptions.ZoomListenerError`.  By default a
        failing listener is logged and the remaining listeners still
        receive the event.  Only applies to the default bus; a bus injected into
        :class:`~chartzoom.coordinator.ZoomCoordinator` keeps its own error
        policy.
    """

    warn_on_unknown_axis: bool = False
    raise_listener_errors: bool = False

    @classmethod
    def from_env(cls, **overrides: Any) -> ZoomConfig:
        """Create configuration from environment variables.

        Reads ``CHARTZOOM_WARN_ON_UNKNOWN_AXIS`` and
        ``CHARTZOOM_RAISE_LISTENER_ERRORS``.  Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        ZoomConfig
            Populated configuration.

        Raises
        ------
        ZoomConfigError
            If a flag variable holds an unrecognised value.
        """
        env = os.environ

        _ENV_FLAG_MAP = {
            "CHARTZOOM_WARN_ON_UNKNOWN_AXIS": "warn_on_unknown_axis",
            "CHARTZOOM_RAISE_LISTENER_ERRORS": "raise_listener_errors",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_FLAG_MAP.items():
            if field_name in overrides:
                continue
            default = getattr(cls, field_name)
            config_kwargs[field_name] = _env_bool(env_key, env.get(env_key), default)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
