"""Application services (event bus, runtime settings)."""

from __future__ import annotations

from .event_bus import EventBus, InputEvent
from .settings_service import RollingInputSettings, get_settings

__all__ = ["EventBus", "InputEvent", "RollingInputSettings", "get_settings"]
