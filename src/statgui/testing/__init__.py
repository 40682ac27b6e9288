"""Testing utilities for headless verification of rolling inputs.

Nothing here imports PyQt; the helpers stand in for the event loop and the
focus system so controller tests stay deterministic.
"""

from __future__ import annotations

from .frames import FakeFocusTarget, ManualFrameScheduler

__all__ = ["FakeFocusTarget", "ManualFrameScheduler"]
