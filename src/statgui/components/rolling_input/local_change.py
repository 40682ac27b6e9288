"""Local change tracker (echo suppression by token correlation).

Every gesture that sends a change request outward arms the tracker with a
fresh token. The deferred focus check resolves exactly the token it was
scheduled for, so a stale check from an older gesture can never clear the
record of a newer one. ``arm``, ``resolve`` and ``reset`` are the only
mutation points.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import count
from typing import Iterator, Optional

from .quantize import Number

__all__ = ["PendingChange", "LocalChangeTracker"]


@dataclass(frozen=True)
class PendingChange:
    token: int
    candidate: Number


class LocalChangeTracker:
    def __init__(self) -> None:
        self._tokens: Iterator[int] = count(1)
        self._pending: Optional[PendingChange] = None

    @property
    def armed(self) -> bool:
        return self._pending is not None

    def snapshot(self) -> Optional[PendingChange]:
        return self._pending

    def arm(self, candidate: Number) -> PendingChange:
        # At most one gesture outcome is in flight; a newer one supersedes it.
        self._pending = PendingChange(token=next(self._tokens), candidate=candidate)
        return self._pending

    def resolve(self, token: int) -> bool:
        if self._pending is None or self._pending.token != token:
            return False
        self._pending = None
        return True

    def reset(self) -> None:
        self._pending = None
