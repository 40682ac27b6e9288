"""Focus guard: keep keyboard focus on the widget across its own echoes.

After a local gesture round-trips back as a confirmed value, a deferred check
runs on the next frame (after the re-render has committed). If the widget is
not the active focus target at that point, focus is restored without a scroll
jump. The pending local change is resolved only inside that deferred check.

Only the latest check matters: scheduling a new one cancels the previous.
Blur is authoritative: it clears local-change tracking and cancels any
scheduled check immediately.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from .local_change import LocalChangeTracker, PendingChange

__all__ = ["FocusTarget", "FrameHandle", "FrameScheduler", "FocusGuard"]

log = logging.getLogger(__name__)


class FocusTarget(Protocol):
    def has_focus(self) -> bool: ...  # pragma: no cover - structural

    def restore_focus(self) -> None: ...  # pragma: no cover - structural


class FrameHandle(Protocol):
    def cancel(self) -> None: ...  # pragma: no cover - structural


class FrameScheduler(Protocol):
    def call_next_frame(self, callback: Callable[[], None]) -> FrameHandle: ...  # pragma: no cover


class FocusGuard:
    def __init__(
        self,
        target: FocusTarget,
        tracker: LocalChangeTracker,
        scheduler: FrameScheduler,
        *,
        restore_enabled: bool = True,
        on_restored: Optional[Callable[[PendingChange], None]] = None,
    ) -> None:
        self._target = target
        self._tracker = tracker
        self._scheduler = scheduler
        self._restore_enabled = restore_enabled
        self._on_restored = on_restored
        self._handle: Optional[FrameHandle] = None
        self._scheduled_for: Optional[PendingChange] = None

    @property
    def check_pending(self) -> bool:
        return self._handle is not None

    @property
    def scheduled_for(self) -> Optional[PendingChange]:
        return self._scheduled_for

    def request_check(self, locality: PendingChange) -> None:
        """Schedule the deferred focus check for a local change's confirmation."""
        self.cancel()
        self._scheduled_for = locality
        self._handle = self._scheduler.call_next_frame(lambda: self._run(locality))

    def _run(self, locality: PendingChange) -> None:
        self._handle = None
        self._scheduled_for = None
        if self._restore_enabled and not self._target.has_focus():
            log.debug("restoring focus after local change token=%s", locality.token)
            self._target.restore_focus()
            if self._on_restored is not None:
                self._on_restored(locality)
        self._tracker.resolve(locality.token)

    def on_blur(self) -> None:
        self.cancel()
        self._tracker.reset()

    def cancel(self) -> None:
        handle, self._handle = self._handle, None
        self._scheduled_for = None
        if handle is not None:
            handle.cancel()

    def dispose(self) -> None:
        self.cancel()
