"""RollingInput widget (PyQt6 shell around ``RollingInputController``).

A controlled numeric stepper: the container owns the value. Gestures emit
``changeRequested`` with a quantized candidate; the display only changes once
the container calls ``set_value`` with the confirmed value.

Input mapping:
 - Left-button press (focuses the widget) or touch begin starts a drag. While
   dragging, an application-level event filter routes move/release and touch
   update/end/cancel so the drag keeps tracking outside the widget.
 - Up/Down: +/- one step; PageUp/PageDown: +/- page multiplier steps. Other
   keys fall through to the default handling.
 - Wheel: up adds one step, down subtracts one; the event is always consumed.
 - Focus out ends any drag and cancels pending focus restoration.

Signals:
    changeRequested(object): candidate value requested by a local gesture.
    animationCued(object): ``AnimationCue`` for every visible value change.

QSS hooks: objectName ``rollingInput``; dynamic properties ``rollDirection``
and ``accessibleRole``.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional

from PyQt6.QtCore import QEvent, QObject, QSize, Qt, QTimer, pyqtSignal
from PyQt6.QtGui import QPainter
from PyQt6.QtWidgets import QApplication, QWidget

from statgui.services.event_bus import EventBus
from statgui.services.settings_service import RollingInputSettings

from .accessibility import format_value
from .controller import AnimationCue, RollingInputController
from .drag_session import DragEndReason
from .gestures import StepKey
from .quantize import Bounds, Number

__all__ = ["RollingInput", "QtFrameScheduler"]

log = logging.getLogger(__name__)

_KEY_MAP = {
    Qt.Key.Key_Up.value: StepKey.ARROW_UP,
    Qt.Key.Key_Down.value: StepKey.ARROW_DOWN,
    Qt.Key.Key_PageUp.value: StepKey.PAGE_UP,
    Qt.Key.Key_PageDown.value: StepKey.PAGE_DOWN,
}


class _TimerHandle:
    def __init__(self, timer: QTimer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()
        self._timer.deleteLater()


class QtFrameScheduler:
    """Runs callbacks once the event loop has flushed pending work.

    Timers are parented to ``owner`` so they die with the widget.
    """

    def __init__(self, owner: QObject) -> None:
        self._owner = owner

    def call_next_frame(self, callback: Callable[[], None]) -> _TimerHandle:
        timer = QTimer(self._owner)
        timer.setSingleShot(True)
        timer.setInterval(0)
        timer.timeout.connect(callback)  # type: ignore[attr-defined]
        timer.timeout.connect(timer.deleteLater)  # type: ignore[attr-defined]
        timer.start()
        return _TimerHandle(timer)


class _DragEventFilter(QObject):
    """Application-wide listener installed only while a drag is active."""

    def __init__(self, owner: "RollingInput") -> None:
        super().__init__(owner)
        self._owner = owner

    def eventFilter(self, obj, event):  # type: ignore[override]
        et = event.type()
        if et == QEvent.Type.MouseMove:
            self._owner._drag_move(event.globalPosition().y())
        elif et == QEvent.Type.MouseButtonRelease:
            self._owner._drag_end(DragEndReason.POINTER_UP)
        elif et == QEvent.Type.TouchUpdate:
            points = event.points()
            if points:
                self._owner._drag_move(points[0].globalPosition().y())
        elif et == QEvent.Type.TouchEnd:
            self._owner._drag_end(DragEndReason.TOUCH_END)
        elif et == QEvent.Type.TouchCancel:
            self._owner._drag_end(DragEndReason.TOUCH_CANCEL)
        return False


class RollingInput(QWidget):
    changeRequested = pyqtSignal(object)
    animationCued = pyqtSignal(object)

    def __init__(
        self,
        value: Number = 0,
        *,
        minimum: Number = -math.inf,
        maximum: Number = math.inf,
        step: Number = 1,
        label: Optional[str] = None,
        on_change: Optional[Callable[[Number], None]] = None,
        settings: Optional[RollingInputSettings] = None,
        event_bus: Optional[EventBus] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self.setObjectName("rollingInput")
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        self._label = label
        self._drag_filter = _DragEventFilter(self)
        self._controller = RollingInputController(
            value,
            on_change=self.changeRequested.emit,
            focus_target=self,
            scheduler=QtFrameScheduler(self),
            bounds=Bounds(minimum, maximum, step),
            settings=settings,
            event_bus=event_bus,
            attach_drag_listeners=self._attach_drag_listeners,
            on_cue=self._on_cue,
        )
        if on_change is not None:
            self.changeRequested.connect(on_change)  # type: ignore[attr-defined]
        self.setProperty("rollDirection", self._controller.direction.value)
        self._sync_accessibility()

    # Container API -----------------------------------------------------
    def value(self) -> Number:
        return self._controller.displayed

    def set_value(self, value: Number) -> None:
        """Confirm a value owned by the container."""
        result = self._controller.confirm(value)
        if result.changed:
            self._sync_accessibility()
            self.update()

    def set_bounds(self, minimum: Number, maximum: Number, step: Number = 1) -> None:
        self._controller.set_bounds(Bounds(minimum, maximum, step))
        self._sync_accessibility()

    def bounds(self) -> Bounds:
        return self._controller.bounds

    def label(self) -> Optional[str]:
        return self._label

    def controller(self) -> RollingInputController:
        return self._controller

    def animation_epoch(self) -> int:
        return self._controller.epoch

    def is_dragging(self) -> bool:
        return self._controller.dragging

    def dispose(self) -> None:
        self._controller.dispose()

    # FocusTarget -------------------------------------------------------
    def has_focus(self) -> bool:
        return self.hasFocus()

    def restore_focus(self) -> None:
        # Programmatic focus never scrolls the enclosing viewport.
        self.setFocus(Qt.FocusReason.OtherFocusReason)

    # Qt events ---------------------------------------------------------
    def mousePressEvent(self, event):  # type: ignore[override]
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        if not self.hasFocus():
            self.setFocus(Qt.FocusReason.MouseFocusReason)
        self._controller.begin_drag(event.globalPosition().y())
        event.accept()

    def event(self, event):  # type: ignore[override]
        if event.type() == QEvent.Type.TouchBegin:
            points = event.points()
            if points:
                self._controller.begin_drag(points[0].globalPosition().y())
            event.accept()
            return True
        return super().event(event)

    def keyPressEvent(self, event):  # type: ignore[override]
        code = event.key()
        key = _KEY_MAP.get(getattr(code, "value", code))
        if self._controller.handle_key(key):
            event.accept()
            return
        super().keyPressEvent(event)

    def wheelEvent(self, event):  # type: ignore[override]
        # Qt reports scroll-up as positive; the controller expects DOM sign.
        dy = event.angleDelta().y() or event.pixelDelta().y()
        self._controller.handle_wheel(-dy)
        event.accept()

    def focusOutEvent(self, event):  # type: ignore[override]
        self._controller.blur()
        super().focusOutEvent(event)

    def closeEvent(self, event):  # type: ignore[override]
        self.dispose()
        super().closeEvent(event)

    def sizeHint(self) -> QSize:  # type: ignore[override]
        return QSize(64, 44)

    def paintEvent(self, event):  # type: ignore[override]
        p = QPainter(self)
        p.setPen(self.palette().windowText().color())
        font = p.font()
        font.setPointSizeF(max(font.pointSizeF(), 1.0) * 1.4)
        p.setFont(font)
        p.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, format_value(self.value()))
        p.end()

    # Internal ----------------------------------------------------------
    def _attach_drag_listeners(self) -> Callable[[], None]:
        app = QApplication.instance()
        if app is None:
            return lambda: None
        app.installEventFilter(self._drag_filter)
        log.debug("drag listeners attached")

        def release() -> None:
            app.removeEventFilter(self._drag_filter)
            log.debug("drag listeners detached")

        return release

    def _drag_move(self, global_y: float) -> None:
        self._controller.drag_to(global_y)

    def _drag_end(self, reason: DragEndReason) -> None:
        self._controller.end_drag(reason)

    def _on_cue(self, cue: AnimationCue) -> None:
        self.setProperty("rollDirection", cue.direction.value)
        self.animationCued.emit(cue)

    def _sync_accessibility(self) -> None:
        semantics = self._controller.semantics(self._label)
        # Qt announces description changes to assistive technology.
        self.setProperty("accessibleRole", semantics.role)
        self.setAccessibleName(semantics.accessible_name)
        self.setAccessibleDescription(semantics.describe())
