"""Design helpers (motion preferences)."""

from __future__ import annotations

from . import reduced_motion

__all__ = ["reduced_motion"]
