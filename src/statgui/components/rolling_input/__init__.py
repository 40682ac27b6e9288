"""Rolling numeric input: a controlled, step-quantized stepper.

The pure state machines (quantizer, gestures, drag session, display sync,
local change tracking, focus guard, controller) carry no Qt dependency;
``RollingInput`` is the PyQt6 widget built on top of them.
"""

from __future__ import annotations

from .accessibility import RangeSemantics, format_value
from .controller import AnimationCue, RollingInputController
from .display_sync import AnimationDirection, DisplaySyncEngine, Reconciliation
from .drag_session import DragEndReason, DragSession, DragState
from .focus_guard import FocusGuard
from .gestures import StepKey
from .local_change import LocalChangeTracker, PendingChange
from .quantize import Bounds, BoundsError, quantize
from .widget import QtFrameScheduler, RollingInput

__all__ = [
    "AnimationCue",
    "AnimationDirection",
    "Bounds",
    "BoundsError",
    "DisplaySyncEngine",
    "DragEndReason",
    "DragSession",
    "DragState",
    "FocusGuard",
    "LocalChangeTracker",
    "PendingChange",
    "QtFrameScheduler",
    "RangeSemantics",
    "Reconciliation",
    "RollingInput",
    "RollingInputController",
    "StepKey",
    "format_value",
    "quantize",
]
