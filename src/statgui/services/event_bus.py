"""Input EventBus.

Synchronous publish/subscribe channel for rolling-input interaction events
(change requests, absorbed gestures, reconciliations, focus restoration and
drag lifecycle). Widgets publish only when they were handed a bus, so the
widgets stay usable without any observability wiring.

Properties:
 - No Qt dependency; dispatch happens on the caller's thread.
 - Only ``InputEvent`` names (or their string values) are accepted.
 - Handler error isolation: a failing handler is recorded in ``errors`` and
   the remaining handlers still run.
 - One-shot (``once``) subscriptions and cancellable subscription handles.
 - Optional fixed-size tracing ring buffer of recent events.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Deque, Dict, List, Protocol

__all__ = [
    "InputEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
    "TraceEntry",
]


class InputEvent(str, Enum):
    CHANGE_REQUESTED = "change_requested"
    GESTURE_ABSORBED = "gesture_absorbed"
    VALUE_RECONCILED = "value_reconciled"
    FOCUS_RESTORED = "focus_restored"
    DRAG_STARTED = "drag_started"
    DRAG_ENDED = "drag_ended"


@dataclass
class Event:
    name: str
    payload: Any
    timestamp: float


class EventHandler(Protocol):
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


@dataclass(frozen=True)
class TraceEntry:
    name: str
    timestamp: float
    summary: str


def _key(name: str | InputEvent) -> str:
    # Unknown names raise ValueError: only input events travel on this bus.
    return InputEvent(name).value


class EventBus:
    """Synchronous dispatcher; handlers run outside the lock (copy-first)."""

    DEFAULT_TRACE_CAPACITY = 50

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, Exception]] = []
        self._tracing_enabled = False
        self._traces: Deque[TraceEntry] = deque(maxlen=self.DEFAULT_TRACE_CAPACITY)

    # Subscription management -----------------------------------------
    def subscribe(
        self, name: str | InputEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event, [])
            self._subs[sub.event] = [s for s in bucket if s is not sub]
            if not self._subs[sub.event]:
                self._subs.pop(sub.event, None)
        sub.active = False

    # Publishing --------------------------------------------------------
    def publish(self, name: str | InputEvent, payload: Any = None) -> Event:
        key = _key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
            if self._tracing_enabled:
                text = "-" if payload is None else str(payload)
                summary = text if len(text) <= 40 else text[:37] + "..."
                self._traces.append(TraceEntry(name=key, timestamp=evt.timestamp, summary=summary))
        spent: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                self._errors.append((evt, exc))
            if sub.once:
                sub.active = False
                spent.append(sub)
        for sub in spent:
            self.unsubscribe(sub)
        return evt

    # Introspection -----------------------------------------------------
    def subscriber_count(self, name: str | InputEvent) -> int:
        with self._lock:
            return len(self._subs.get(_key(name), ()))

    @property
    def errors(self) -> list[tuple[Event, Exception]]:
        with self._lock:
            return list(self._errors)

    # Tracing -----------------------------------------------------------
    def enable_tracing(self, enabled: bool = True, *, capacity: int | None = None) -> None:
        with self._lock:
            self._tracing_enabled = enabled
            if capacity is not None and capacity != self._traces.maxlen:
                self._traces = deque(self._traces, maxlen=capacity)

    def recent_traces(self) -> list[TraceEntry]:
        with self._lock:
            return list(self._traces)

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()
            self._traces.clear()
