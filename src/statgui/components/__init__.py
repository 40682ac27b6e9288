"""GUI components package.

Reusable widgets for the stats configuration UI. ``RollingInput`` is the
controlled numeric stepper used for level / refinement selection.
"""

from __future__ import annotations

from .rolling_input import RollingInput

__all__ = ["RollingInput"]
