"""Controller scenarios: gestures, confirmations, focus bookkeeping."""

from __future__ import annotations

import pytest

from statgui.components.rolling_input.controller import RollingInputController
from statgui.components.rolling_input.display_sync import AnimationDirection
from statgui.components.rolling_input.drag_session import DragEndReason
from statgui.components.rolling_input.gestures import StepKey
from statgui.components.rolling_input.quantize import Bounds
from statgui.design import reduced_motion
from statgui.services.event_bus import EventBus, InputEvent
from statgui.services.settings_service import RollingInputSettings
from statgui.testing import FakeFocusTarget, ManualFrameScheduler


class Container:
    """Owns the value; confirms requests synchronously unless told otherwise."""

    def __init__(self, auto_confirm=True):
        self.requests = []
        self.auto_confirm = auto_confirm
        self.controller = None

    def on_change(self, value):
        self.requests.append(value)
        if self.auto_confirm:
            self.controller.confirm(value)


def _make(value=50, bounds=Bounds(1, 90, 1), *, auto_confirm=True, focused=True, **kw):
    container = Container(auto_confirm)
    focus = FakeFocusTarget(focused=focused)
    frames = ManualFrameScheduler()
    ctl = RollingInputController(
        value,
        on_change=container.on_change,
        focus_target=focus,
        scheduler=frames,
        bounds=bounds,
        **kw,
    )
    container.controller = ctl
    return ctl, container, focus, frames


def test_keyboard_and_wheel_scenario():
    ctl, container, _, frames = _make()
    assert ctl.handle_key(StepKey.ARROW_UP)
    assert container.requests == [51]
    assert ctl.handle_key(StepKey.PAGE_DOWN)
    assert container.requests == [51, 46]
    ctl.confirm(51)  # container moves back to 51 on its own
    ctl.handle_wheel(-10)
    assert container.requests == [51, 46, 52]
    frames.run_pending()
    assert ctl.pending is None


def test_unhandled_key_is_ignored():
    ctl, container, _, _ = _make()
    assert ctl.handle_key(None) is False
    assert container.requests == []


def test_clamped_candidate_equal_to_display_is_absorbed():
    ctl, container, _, frames = _make(5, Bounds(0, 5, 1))
    assert ctl.handle_key(StepKey.ARROW_UP)
    assert container.requests == []
    assert ctl.pending is None
    assert frames.pending_count == 0


def test_absorbed_gesture_leaves_armed_flag_untouched():
    ctl, container, _, _ = _make(5, Bounds(0, 5, 1), auto_confirm=False)
    ctl.handle_key(StepKey.ARROW_DOWN)  # request 4, not yet confirmed
    armed = ctl.pending
    ctl.handle_key(StepKey.ARROW_UP)  # candidate 5 == display 5 -> absorbed
    assert ctl.pending == armed
    assert container.requests == [4]


def test_drag_scenario_three_steps_up():
    ctl, container, _, _ = _make(10, Bounds(-float("inf"), 90, 1))
    ctl.begin_drag(100)
    ctl.drag_to(40)
    assert container.requests == [13]
    ctl.end_drag(DragEndReason.POINTER_UP)
    assert not ctl.dragging


def test_drag_uses_origin_not_previous_event():
    ctl, container, _, _ = _make(10)
    ctl.begin_drag(200)
    ctl.drag_to(180)
    ctl.drag_to(160)
    ctl.drag_to(170)
    assert container.requests == [11, 12, 11]


def test_drag_of_two_sensitivities_emits_twelve():
    settings = RollingInputSettings(drag_sensitivity_px=25)
    ctl, container, _, _ = _make(10, settings=settings)
    ctl.begin_drag(300)
    ctl.drag_to(250)
    assert container.requests == [12]


def test_local_confirmation_restores_focus_once():
    ctl, container, focus, frames = _make(focused=False)
    ctl.handle_key(StepKey.ARROW_UP)
    assert ctl.pending is not None  # cleared only by the deferred check
    frames.run_pending()
    assert focus.restore_calls == 1
    assert ctl.pending is None


def test_external_change_does_not_touch_focus():
    ctl, _, focus, frames = _make(focused=False)
    r = ctl.confirm(90)
    assert not r.is_local
    assert frames.pending_count == 0
    assert focus.restore_calls == 0
    assert ctl.direction is AnimationDirection.FROM_BELOW


def test_equal_confirmation_still_resolves_local_change():
    ctl, container, _, frames = _make(auto_confirm=False)
    ctl.handle_key(StepKey.ARROW_UP)
    r = ctl.confirm(50)  # container rejected the request
    assert not r.changed and r.is_local
    assert ctl.epoch == 0
    frames.run_pending()
    assert ctl.pending is None


def test_blur_resets_tracking_and_drag():
    ctl, _, focus, frames = _make(auto_confirm=False, focused=False)
    ctl.begin_drag(100)
    ctl.drag_to(80)
    assert ctl.pending is not None
    ctl.blur()
    assert ctl.pending is None and not ctl.dragging
    ctl.confirm(51)  # late confirmation after blur is not local
    assert frames.pending_count == 0
    assert focus.restore_calls == 0


def test_flag_hygiene_after_many_gestures():
    ctl, _, _, frames = _make()
    for key in (StepKey.ARROW_UP, StepKey.PAGE_UP, StepKey.ARROW_DOWN, StepKey.PAGE_DOWN):
        ctl.handle_key(key)
    ctl.handle_wheel(-1)
    ctl.handle_wheel(1)
    frames.run_pending()
    assert ctl.pending is None
    assert not ctl.focus_check_pending


def test_animation_cue_and_reduced_motion():
    cues = []
    ctl, _, _, _ = _make(on_cue=cues.append)
    ctl.handle_key(StepKey.ARROW_UP)
    assert cues[-1].epoch == 1
    assert cues[-1].direction is AnimationDirection.FROM_BELOW
    assert cues[-1].duration_ms == 300
    with reduced_motion.temporarily_reduced_motion():
        ctl.handle_key(StepKey.ARROW_DOWN)
    assert cues[-1].direction is AnimationDirection.FROM_ABOVE
    assert cues[-1].duration_ms == 0
    assert ctl.animation_cue == cues[-1]


def test_events_published_to_bus():
    bus = EventBus()
    seen = []
    for name in InputEvent:
        bus.subscribe(name, lambda evt: seen.append(evt.name))
    ctl, _, _, frames = _make(event_bus=bus, focused=False)
    ctl.begin_drag(100)
    ctl.drag_to(80)
    ctl.end_drag()
    frames.run_pending()
    ctl.handle_key(StepKey.PAGE_UP)
    ctl.confirm(90)
    ctl.handle_key(StepKey.ARROW_UP)
    assert seen[:4] == ["drag_started", "change_requested", "value_reconciled", "drag_ended"]
    assert "focus_restored" in seen
    assert seen[-1] == "gesture_absorbed"


def test_set_bounds_requantizes_next_gesture():
    ctl, container, _, _ = _make(50)
    ctl.set_bounds(Bounds(0, 100, 10))
    ctl.handle_key(StepKey.ARROW_UP)
    assert container.requests == [60]


def test_misaligned_external_value_self_corrects():
    ctl, container, _, _ = _make(10, Bounds(0, 100, 5))
    ctl.confirm(12)  # displayed as given
    assert ctl.displayed == 12
    ctl.handle_key(StepKey.ARROW_UP)
    assert container.requests == [15]


def test_infinite_external_value_absorbs_further_steps():
    ctl, container, _, _ = _make(10, Bounds(0, float("inf"), 1))
    ctl.confirm(float("inf"))
    assert ctl.handle_key(StepKey.ARROW_UP)
    assert container.requests == []
    ctl.handle_key(StepKey.ARROW_DOWN)
    assert container.requests == []


def test_semantics_omit_infinite_bounds():
    ctl, _, _, _ = _make(3, Bounds())
    sem = ctl.semantics()
    assert sem.value_min is None and sem.value_max is None
    assert sem.accessible_name == "Numeric input"
    sem = _make(3, Bounds(1, 5))[0].semantics("Refinement")
    assert (sem.value_min, sem.value_max, sem.accessible_name) == (1, 5, "Refinement")
    assert sem.describe() == "3, minimum 1, maximum 5"


@pytest.mark.parametrize("start,expected", [(1, []), (2, [1])])
def test_lower_bound_absorbs(start, expected):
    ctl, container, _, _ = _make(start)
    ctl.handle_key(StepKey.ARROW_DOWN)
    assert container.requests == expected
