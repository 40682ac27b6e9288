"""Rolling input controller (framework agnostic).

Composes the quantizer, gesture adapter, drag session, display sync engine,
local change tracker and focus guard into the controlled-input protocol:

 gesture -> raw target -> quantized candidate -> (differs from display?)
     yes: arm local change, request change outward
     no:  absorb silently
 container confirms -> reconcile display/epoch -> local? -> deferred focus check

The Qt widget forwards native events here; tests drive it directly with a
manual frame scheduler and a fake focus target.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from statgui.design.reduced_motion import is_reduced_motion
from statgui.services.event_bus import EventBus, InputEvent
from statgui.services.settings_service import RollingInputSettings, get_settings

from .accessibility import RangeSemantics
from .display_sync import AnimationDirection, DisplaySyncEngine, Reconciliation
from .drag_session import DragEndReason, DragSession, ListenerAttach
from .focus_guard import FocusGuard, FocusTarget, FrameScheduler
from .gestures import GestureDecision, StepKey, decide, key_target, wheel_target
from .local_change import LocalChangeTracker, PendingChange
from .quantize import Bounds, Number

__all__ = ["AnimationCue", "RollingInputController"]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnimationCue:
    """When and how a renderer should play the roll-in entrance."""

    epoch: int
    direction: AnimationDirection
    duration_ms: int

    @classmethod
    def for_reconciliation(cls, result: Reconciliation, nominal_ms: int) -> "AnimationCue":
        # Reduced motion keeps epoch and direction; only the entrance is skipped.
        return cls(
            epoch=result.epoch,
            direction=result.direction,
            duration_ms=0 if is_reduced_motion() else max(0, nominal_ms),
        )


class RollingInputController:
    def __init__(
        self,
        value: Number,
        *,
        on_change: Callable[[Number], None],
        focus_target: FocusTarget,
        scheduler: FrameScheduler,
        bounds: Optional[Bounds] = None,
        settings: Optional[RollingInputSettings] = None,
        event_bus: Optional[EventBus] = None,
        attach_drag_listeners: Optional[ListenerAttach] = None,
        on_cue: Optional[Callable[[AnimationCue], None]] = None,
    ) -> None:
        self._on_change = on_change
        self._bounds = bounds or Bounds()
        self._settings = settings or get_settings()
        self._bus = event_bus
        self._on_cue = on_cue
        self._tracker = LocalChangeTracker()
        self._sync = DisplaySyncEngine(value)
        self._drag = DragSession(attach_drag_listeners)
        self._guard = FocusGuard(
            focus_target,
            self._tracker,
            scheduler,
            restore_enabled=self._settings.restore_focus,
            on_restored=self._focus_restored,
        )
        self._cue: Optional[AnimationCue] = None

    # State -------------------------------------------------------------
    @property
    def displayed(self) -> Number:
        return self._sync.displayed

    @property
    def epoch(self) -> int:
        return self._sync.epoch

    @property
    def direction(self) -> AnimationDirection:
        return self._sync.direction

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    @property
    def pending(self) -> Optional[PendingChange]:
        return self._tracker.snapshot()

    @property
    def dragging(self) -> bool:
        return self._drag.active

    @property
    def focus_check_pending(self) -> bool:
        return self._guard.check_pending

    @property
    def animation_cue(self) -> Optional[AnimationCue]:
        return self._cue

    def semantics(self, label: Optional[str] = None) -> RangeSemantics:
        return RangeSemantics.build(self.displayed, self._bounds, label)

    def set_bounds(self, bounds: Bounds) -> None:
        # Displayed value is left as-is; the next gesture re-quantizes.
        self._bounds = bounds

    # Confirmation path -------------------------------------------------
    def confirm(self, value: Number) -> Reconciliation:
        """Reconcile a value confirmed by the container."""
        # Locality must be captured before any deferred step can run.
        locality = self._tracker.snapshot()
        result = self._sync.reconcile(value, locality)
        if result.changed:
            self._cue = AnimationCue.for_reconciliation(
                result, self._settings.animation_duration_ms
            )
            log.debug(
                "reconciled %s -> %s (%s, epoch=%d, local=%s)",
                result.previous,
                result.displayed,
                result.direction.value,
                result.epoch,
                result.is_local,
            )
            if self._on_cue is not None:
                self._on_cue(self._cue)
        self._publish(
            InputEvent.VALUE_RECONCILED,
            {
                "value": result.displayed,
                "changed": result.changed,
                "epoch": result.epoch,
                "local": result.is_local,
            },
        )
        if locality is not None:
            self._guard.request_check(locality)
        return result

    # Gestures ----------------------------------------------------------
    def handle_key(self, key: Optional[StepKey]) -> bool:
        """Apply a stepping key; returns False for keys this input ignores."""
        target = key_target(
            key,
            self.displayed,
            self._bounds.step,
            page_multiplier=self._settings.page_step_multiplier,
        )
        if target is None:
            return False
        self._propose(target, source="key")
        return True

    def handle_wheel(self, delta_y: float) -> GestureDecision:
        return self._propose(wheel_target(delta_y, self.displayed, self._bounds.step), source="wheel")

    def begin_drag(self, pointer_y: float) -> None:
        was_active = self._drag.active
        self._drag.begin(pointer_y, self.displayed)
        if not was_active:
            self._publish(InputEvent.DRAG_STARTED, {"pointer_y": pointer_y, "value": self.displayed})

    def drag_to(self, pointer_y: float) -> Optional[GestureDecision]:
        target = self._drag.target(
            pointer_y, self._bounds.step, self._settings.drag_sensitivity_px
        )
        if target is None:
            return None
        return self._propose(target, source="drag")

    def end_drag(self, reason: DragEndReason = DragEndReason.POINTER_UP) -> bool:
        ended = self._drag.end(reason)
        if ended:
            self._publish(InputEvent.DRAG_ENDED, {"reason": reason.value})
        return ended

    def blur(self) -> None:
        """Focus left the widget: end any drag and drop local-change tracking."""
        self.end_drag(DragEndReason.BLUR)
        self._guard.on_blur()

    def dispose(self) -> None:
        self.end_drag(DragEndReason.DISPOSED)
        self._guard.dispose()

    # Internal ----------------------------------------------------------
    def _propose(self, raw: Number, *, source: str) -> GestureDecision:
        decision = decide(raw, self._bounds, self.displayed)
        if not decision.emit:
            log.debug("%s gesture absorbed at %s", source, decision.candidate)
            self._publish(
                InputEvent.GESTURE_ABSORBED, {"source": source, "value": decision.candidate}
            )
            return decision
        pending = self._tracker.arm(decision.candidate)
        log.debug("%s gesture requests %s (token=%d)", source, decision.candidate, pending.token)
        self._publish(
            InputEvent.CHANGE_REQUESTED,
            {"source": source, "value": decision.candidate, "token": pending.token},
        )
        self._on_change(decision.candidate)
        return decision

    def _focus_restored(self, locality: PendingChange) -> None:
        self._publish(InputEvent.FOCUS_RESTORED, {"token": locality.token})

    def _publish(self, name: InputEvent, payload: Any) -> None:
        if self._bus is not None:
            self._bus.publish(name, payload)
