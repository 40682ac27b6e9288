"""Drag session state machine (``IDLE`` <-> ``DRAGGING``).

Global move/release listeners are a scoped resource: ``attach_listeners`` is
invoked once on entering ``DRAGGING`` and returns the callable that detaches
them. ``end`` is the single exit hook, whatever the reason (pointer up,
cancel, touch end, blur or disposal).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .gestures import drag_target
from .quantize import Number

__all__ = ["DragState", "DragEndReason", "DragOrigin", "DragSession"]

ListenerAttach = Callable[[], Callable[[], None]]


class DragState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DragEndReason(str, Enum):
    POINTER_UP = "pointer_up"
    POINTER_CANCEL = "pointer_cancel"
    TOUCH_END = "touch_end"
    TOUCH_CANCEL = "touch_cancel"
    BLUR = "blur"
    DISPOSED = "disposed"


@dataclass(frozen=True)
class DragOrigin:
    pointer_y: float
    value: Number


class DragSession:
    def __init__(self, attach_listeners: Optional[ListenerAttach] = None) -> None:
        self._attach = attach_listeners
        self._release: Optional[Callable[[], None]] = None
        self._state = DragState.IDLE
        self._origin: Optional[DragOrigin] = None
        self._last_pointer_y: Optional[float] = None

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def active(self) -> bool:
        return self._state is DragState.DRAGGING

    @property
    def origin(self) -> Optional[DragOrigin]:
        return self._origin

    def begin(self, pointer_y: float, value: Number) -> None:
        """Record the origin; attaches listeners only on the IDLE -> DRAGGING edge."""
        self._origin = DragOrigin(pointer_y=pointer_y, value=value)
        self._last_pointer_y = None
        if self._state is DragState.DRAGGING:
            return
        self._state = DragState.DRAGGING
        if self._attach is not None:
            self._release = self._attach()

    def target(self, pointer_y: float, step: Number, sensitivity: float) -> Optional[Number]:
        """Raw target for a move event measured from the origin.

        Returns ``None`` when idle or when the pointer has not moved since the
        previous event (one physical event observed twice).
        """
        if self._state is not DragState.DRAGGING or self._origin is None:
            return None
        if pointer_y == self._last_pointer_y:
            return None
        self._last_pointer_y = pointer_y
        return drag_target(self._origin.pointer_y, pointer_y, self._origin.value, step, sensitivity)

    def end(self, reason: DragEndReason) -> bool:
        """Leave DRAGGING; returns False if the session was already idle."""
        if self._state is DragState.IDLE:
            return False
        self._state = DragState.IDLE
        self._origin = None
        self._last_pointer_y = None
        release, self._release = self._release, None
        if release is not None:
            release()
        return True
