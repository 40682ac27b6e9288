from statgui.components.rolling_input.focus_guard import FocusGuard
from statgui.components.rolling_input.local_change import LocalChangeTracker
from statgui.testing import FakeFocusTarget, ManualFrameScheduler


def _guard(focused=True):
    target = FakeFocusTarget(focused=focused)
    tracker = LocalChangeTracker()
    frames = ManualFrameScheduler()
    return FocusGuard(target, tracker, frames), target, tracker, frames


def test_check_is_deferred_and_clears_flag_only_when_run():
    guard, target, tracker, frames = _guard(focused=False)
    pending = tracker.arm(51)
    guard.request_check(pending)
    assert tracker.armed  # not cleared eagerly
    assert target.restore_calls == 0
    assert frames.run_pending() == 1
    assert target.restore_calls == 1
    assert not tracker.armed


def test_no_restore_when_already_focused():
    guard, target, tracker, frames = _guard(focused=True)
    guard.request_check(tracker.arm(51))
    frames.run_pending()
    assert target.restore_calls == 0
    assert not tracker.armed


def test_new_check_cancels_previous():
    guard, target, tracker, frames = _guard(focused=False)
    guard.request_check(tracker.arm(51))
    guard.request_check(tracker.arm(52))
    assert frames.pending_count == 1
    assert frames.run_pending() == 1
    assert target.restore_calls == 1
    assert not tracker.armed


def test_stale_check_does_not_clear_newer_gesture():
    guard, target, tracker, frames = _guard()
    guard.request_check(tracker.arm(51))
    newer = tracker.arm(52)  # gesture before the check ran, not yet confirmed
    frames.run_pending()
    assert tracker.snapshot() == newer


def test_blur_clears_and_cancels():
    guard, target, tracker, frames = _guard(focused=False)
    guard.request_check(tracker.arm(51))
    guard.on_blur()
    assert not tracker.armed
    assert not guard.check_pending
    assert frames.run_pending() == 0
    assert target.restore_calls == 0


def test_restore_disabled_still_resolves():
    target = FakeFocusTarget(focused=False)
    tracker = LocalChangeTracker()
    frames = ManualFrameScheduler()
    guard = FocusGuard(target, tracker, frames, restore_enabled=False)
    guard.request_check(tracker.arm(3))
    frames.run_pending()
    assert target.restore_calls == 0
    assert not tracker.armed


def test_dispose_cancels_pending_check():
    guard, target, tracker, frames = _guard(focused=False)
    guard.request_check(tracker.arm(51))
    guard.dispose()
    assert frames.run_pending() == 0
