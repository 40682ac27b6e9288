"""Reduced motion preference for roll-in animations.

Rolling inputs consult this when they build an animation cue: direction and
epoch are still computed, only the cue duration drops to zero.

Bootstrap: ``STATGUI_PREFER_REDUCED_MOTION=1`` (or true/yes/on) enables
reduced motion at import time.
"""

from __future__ import annotations

import contextlib
import os
from typing import Iterator

__all__ = ["set_reduced_motion", "is_reduced_motion", "temporarily_reduced_motion"]

_reduced_motion_enabled: bool = (
    os.getenv("STATGUI_PREFER_REDUCED_MOTION", "").strip().lower() in {"1", "true", "yes", "on"}
)


def set_reduced_motion(enabled: bool) -> None:
    global _reduced_motion_enabled
    _reduced_motion_enabled = bool(enabled)


def is_reduced_motion() -> bool:
    return _reduced_motion_enabled


@contextlib.contextmanager
def temporarily_reduced_motion(force: bool = True) -> Iterator[None]:
    """Force reduced motion on (or off with ``force=False``) inside the block."""
    prev = _reduced_motion_enabled
    try:
        set_reduced_motion(force)
        yield
    finally:
        set_reduced_motion(prev)
