"""Runtime settings for rolling inputs.

Centralizes the tunables of the rolling numeric input so tests and a future
settings UI can change them without touching widget code. A module-level
singleton (``RollingInputSettings.instance``) is used by widgets that are not
given explicit settings; tests may replace it with a test double.

Environment bootstrap (read by ``from_env``):
 - ``STATGUI_DRAG_SENSITIVITY_PX``: pixels of vertical drag per step.
 - ``STATGUI_PAGE_STEP_MULTIPLIER``: steps moved by PageUp / PageDown.
 - ``STATGUI_ANIMATION_DURATION_MS``: roll-in duration before reduced motion.
 - ``STATGUI_RESTORE_FOCUS``: "0"/"false" disables focus restoration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import ClassVar, Mapping, Optional

__all__ = ["RollingInputSettings", "get_settings"]

_FALSEY = {"0", "false", "no", "off"}


@dataclass
class RollingInputSettings:
    """Tunables shared by all rolling inputs.

    Attributes:
        drag_sensitivity_px: Vertical pixels of drag that make up one step.
        page_step_multiplier: Steps applied by PageUp / PageDown.
        animation_duration_ms: Nominal roll-in duration handed to renderers.
        restore_focus: When False, the focus guard still resolves local
            changes but never moves focus back to the widget.
    """

    instance: ClassVar["RollingInputSettings"]

    drag_sensitivity_px: int = 20
    page_step_multiplier: int = 5
    animation_duration_ms: int = 300
    restore_focus: bool = True

    def __post_init__(self) -> None:
        if self.drag_sensitivity_px <= 0:
            raise ValueError("drag_sensitivity_px must be > 0")
        if self.page_step_multiplier < 1:
            raise ValueError("page_step_multiplier must be >= 1")
        if self.animation_duration_ms < 0:
            raise ValueError("animation_duration_ms must be >= 0")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RollingInputSettings":
        env = os.environ if environ is None else environ
        defaults = cls()

        def _int(name: str, fallback: int) -> int:
            raw = env.get(name, "").strip()
            if not raw:
                return fallback
            try:
                return int(raw)
            except ValueError as exc:
                raise ValueError(f"{name} must be an integer, got {raw!r}") from exc

        restore_raw = env.get("STATGUI_RESTORE_FOCUS", "").strip().lower()
        return cls(
            drag_sensitivity_px=_int("STATGUI_DRAG_SENSITIVITY_PX", defaults.drag_sensitivity_px),
            page_step_multiplier=_int("STATGUI_PAGE_STEP_MULTIPLIER", defaults.page_step_multiplier),
            animation_duration_ms=_int(
                "STATGUI_ANIMATION_DURATION_MS", defaults.animation_duration_ms
            ),
            restore_focus=restore_raw not in _FALSEY if restore_raw else defaults.restore_focus,
        )


# Initialize default singleton
RollingInputSettings.instance = RollingInputSettings()


def get_settings() -> RollingInputSettings:
    return RollingInputSettings.instance
