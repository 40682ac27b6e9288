"""Gesture input adapter.

Normalizes drag, keyboard and wheel input into raw target values that are then
fed through the quantizer. Kept free of Qt types: the widget maps its native
events onto :class:`StepKey` and DOM-style wheel deltas before calling in.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .quantize import Bounds, Number

__all__ = [
    "StepKey",
    "GestureDecision",
    "key_target",
    "wheel_target",
    "drag_steps",
    "drag_target",
    "decide",
]


class StepKey(str, Enum):
    ARROW_UP = "ArrowUp"
    ARROW_DOWN = "ArrowDown"
    PAGE_UP = "PageUp"
    PAGE_DOWN = "PageDown"

    def steps(self, page_multiplier: int = 5) -> int:
        if self is StepKey.ARROW_UP:
            return 1
        if self is StepKey.ARROW_DOWN:
            return -1
        if self is StepKey.PAGE_UP:
            return page_multiplier
        return -page_multiplier


def key_target(
    key: Optional[StepKey], displayed: Number, step: Number, *, page_multiplier: int = 5
) -> Optional[Number]:
    """Return the raw target for a key press, or ``None`` for unhandled keys."""
    if key is None:
        return None
    return displayed + key.steps(page_multiplier) * step


def wheel_target(delta_y: float, displayed: Number, step: Number) -> Number:
    # Negative delta is scroll up (away from the user)
    if delta_y < 0:
        return displayed + step
    if delta_y > 0:
        return displayed - step
    return displayed


def drag_steps(origin_y: float, current_y: float, sensitivity: float) -> int:
    """Whole steps travelled since the drag origin; upward movement is positive.

    Truncates toward zero so sub-threshold jitter in either direction stays at 0.
    """
    if sensitivity <= 0:
        raise ValueError("drag sensitivity must be > 0")
    return int((origin_y - current_y) / sensitivity)


def drag_target(
    origin_y: float, current_y: float, origin_value: Number, step: Number, sensitivity: float
) -> Number:
    return origin_value + drag_steps(origin_y, current_y, sensitivity) * step


@dataclass(frozen=True)
class GestureDecision:
    """Outcome of one gesture after quantization.

    ``emit`` is False when the candidate equals the displayed value; such a
    gesture is absorbed and must not touch local-change bookkeeping.
    """

    raw: Number
    candidate: Number
    emit: bool


def decide(raw: Number, bounds: Bounds, displayed: Number) -> GestureDecision:
    candidate = bounds.quantize(raw)
    return GestureDecision(raw=raw, candidate=candidate, emit=candidate != displayed)
