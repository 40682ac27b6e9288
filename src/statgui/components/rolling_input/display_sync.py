"""Display sync engine.

Holds the displayed value as the single mirror of the last confirmed value and
decides the roll-in direction and animation epoch for each visible change.
The epoch is the identity key a renderer uses to restart the entrance
animation, even when the numeral text repeats.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .local_change import PendingChange
from .quantize import Number

__all__ = ["AnimationDirection", "Reconciliation", "DisplaySyncEngine"]


class AnimationDirection(str, Enum):
    FROM_ABOVE = "from-above"
    FROM_BELOW = "from-below"
    NONE = "none"


@dataclass(frozen=True)
class Reconciliation:
    """Result of reconciling one confirmed value.

    Attributes
    ----------
    previous: Displayed value before the call.
    displayed: Displayed value after the call (always the confirmed value).
    changed: Whether the displayed value actually changed.
    direction: Roll-in direction of this change (``NONE`` when unchanged).
    epoch: Animation epoch after the call.
    locality: Pending local change captured when reconciliation began, if any.
    """

    previous: Number
    displayed: Number
    changed: bool
    direction: AnimationDirection
    epoch: int
    locality: Optional[PendingChange]

    @property
    def is_local(self) -> bool:
        return self.locality is not None


class DisplaySyncEngine:
    def __init__(self, initial: Number) -> None:
        # Seeding on mount: no animation.
        self._displayed: Number = initial
        self._epoch = 0
        self._direction = AnimationDirection.NONE

    @property
    def displayed(self) -> Number:
        return self._displayed

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def direction(self) -> AnimationDirection:
        return self._direction

    def reconcile(
        self, confirmed: Number, locality: Optional[PendingChange] = None
    ) -> Reconciliation:
        previous = self._displayed
        if confirmed == previous:
            return Reconciliation(
                previous=previous,
                displayed=previous,
                changed=False,
                direction=AnimationDirection.NONE,
                epoch=self._epoch,
                locality=locality,
            )
        self._direction = (
            AnimationDirection.FROM_BELOW if confirmed > previous else AnimationDirection.FROM_ABOVE
        )
        self._displayed = confirmed
        self._epoch += 1
        return Reconciliation(
            previous=previous,
            displayed=confirmed,
            changed=True,
            direction=self._direction,
            epoch=self._epoch,
            locality=locality,
        )
