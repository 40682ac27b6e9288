"""Clamp & quantize numeric proposals onto a bounded step grid.

The grid is anchored at ``minimum`` when it is finite, otherwise at zero.
Snapping rounds half up (toward +infinity): ``floor(ratio + 0.5)``. The same
rule is applied everywhere so ties never depend on the sign of the input.

A ``step`` of zero or a non-finite step disables snapping; the proposal is
only clamped, and so is an infinite proposal on an unbounded side. Integer
inputs stay integers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

__all__ = ["Number", "Bounds", "BoundsError", "quantize", "clamp"]

Number = Union[int, float]


class BoundsError(ValueError):
    """Raised when bounds cannot describe a non-empty range."""


def clamp(value: Number, minimum: Number, maximum: Number) -> Number:
    return max(minimum, min(maximum, value))


def _round_half_up(ratio: float) -> int:
    return math.floor(ratio + 0.5)


def _snaps(step: Number) -> bool:
    return math.isfinite(step) and step != 0


def quantize(
    proposal: Number,
    minimum: Number = -math.inf,
    maximum: Number = math.inf,
    step: Number = 1,
) -> Number:
    """Map a raw proposal to a bounded, step-aligned value.

    When snapping overshoots a bound the result moves one step back onto the
    grid if that point lies inside the range, otherwise it is clamped to the
    bound.
    """
    bounded = clamp(proposal, minimum, maximum)
    if not _snaps(step) or not math.isfinite(bounded):
        return bounded
    anchor = minimum if math.isfinite(minimum) else 0
    snapped = anchor + _round_half_up((bounded - anchor) / step) * step
    if snapped > maximum and snapped - abs(step) >= minimum:
        snapped -= abs(step)
    elif snapped < minimum and snapped + abs(step) <= maximum:
        snapped += abs(step)
    return clamp(snapped, minimum, maximum)


@dataclass(frozen=True)
class Bounds:
    """Immutable ``{minimum, maximum, step}`` triple for one render."""

    minimum: Number = -math.inf
    maximum: Number = math.inf
    step: Number = 1

    def __post_init__(self) -> None:
        if math.isnan(self.minimum) or math.isnan(self.maximum):
            raise BoundsError("bounds must not be NaN")
        if self.minimum > self.maximum:
            raise BoundsError(
                f"minimum {self.minimum!r} is greater than maximum {self.maximum!r}"
            )

    @property
    def quantizes(self) -> bool:
        return _snaps(self.step)

    def is_bounded_below(self) -> bool:
        return math.isfinite(self.minimum)

    def is_bounded_above(self) -> bool:
        return math.isfinite(self.maximum)

    def quantize(self, proposal: Number) -> Number:
        return quantize(proposal, self.minimum, self.maximum, self.step)
