"""Range-widget semantics exposed to assistive technology.

Mirrors the attributes a bounded numeric range control announces: role,
current value, and min/max (omitted when unbounded). The widget turns this
into Qt accessible name/description; Qt announces each description change,
so value updates are read out without a separate live region.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .quantize import Bounds, Number

__all__ = ["DEFAULT_ACCESSIBLE_NAME", "RANGE_ROLE", "RangeSemantics", "format_value"]

DEFAULT_ACCESSIBLE_NAME = "Numeric input"
RANGE_ROLE = "spinbutton"


def format_value(value: Number) -> str:
    """Display text for a value with no decimals.

    Halves round away from zero (50.5 -> "51", -2.5 -> "-3"). Non-finite
    values are shown as Python formats them.
    """
    if not math.isfinite(value):
        return f"{value:.0f}"
    rounded = math.floor(abs(value) + 0.5)
    return str(-rounded if value < 0 and rounded else rounded)


@dataclass(frozen=True)
class RangeSemantics:
    value_now: Number
    value_min: Optional[Number]
    value_max: Optional[Number]
    label: Optional[str] = None
    role: str = RANGE_ROLE

    @classmethod
    def build(cls, value: Number, bounds: Bounds, label: Optional[str] = None) -> "RangeSemantics":
        return cls(
            value_now=value,
            value_min=bounds.minimum if bounds.is_bounded_below() else None,
            value_max=bounds.maximum if bounds.is_bounded_above() else None,
            label=label,
        )

    @property
    def accessible_name(self) -> str:
        return self.label or DEFAULT_ACCESSIBLE_NAME

    def describe(self) -> str:
        parts = [format_value(self.value_now)]
        if self.value_min is not None:
            parts.append(f"minimum {format_value(self.value_min)}")
        if self.value_max is not None:
            parts.append(f"maximum {format_value(self.value_max)}")
        return ", ".join(parts)
