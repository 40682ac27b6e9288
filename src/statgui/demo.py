"""Stats panel demo container.

Hosts the two rolling inputs of the weapon configurator (level 1..90 and
refinement 1..5), each with a "Max" button. The panel is the source of truth:
it clamps incoming change requests and confirms them back through
``RollingInput.set_value``. The Max buttons exercise externally driven
(non-local) changes.
"""

from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtWidgets import QHBoxLayout, QPushButton, QVBoxLayout, QWidget

from statgui.components.rolling_input import RollingInput
from statgui.services.event_bus import EventBus

__all__ = ["StatsPanel", "LEVEL_RANGE", "REFINEMENT_RANGE"]

log = logging.getLogger(__name__)

LEVEL_RANGE = (1, 90)
REFINEMENT_RANGE = (1, 5)


class StatsPanel(QWidget):
    def __init__(self, parent: Optional[QWidget] = None, *, event_bus: Optional[EventBus] = None):
        super().__init__(parent)
        self.setObjectName("statsPanel")
        self._level = LEVEL_RANGE[0]
        self._refinement = REFINEMENT_RANGE[0]

        self.level_input = RollingInput(
            self._level,
            minimum=LEVEL_RANGE[0],
            maximum=LEVEL_RANGE[1],
            label="Level",
            on_change=self.set_level,
            event_bus=event_bus,
        )
        self.refinement_input = RollingInput(
            self._refinement,
            minimum=REFINEMENT_RANGE[0],
            maximum=REFINEMENT_RANGE[1],
            label="Refinement",
            on_change=self.set_refinement,
            event_bus=event_bus,
        )
        self.max_level_button = QPushButton("Max")
        self.max_level_button.setObjectName("maxLevelButton")
        self.max_level_button.clicked.connect(lambda: self.set_level(LEVEL_RANGE[1]))  # type: ignore
        self.max_refinement_button = QPushButton("Max")
        self.max_refinement_button.setObjectName("maxRefinementButton")
        self.max_refinement_button.clicked.connect(  # type: ignore
            lambda: self.set_refinement(REFINEMENT_RANGE[1])
        )

        layout = QHBoxLayout(self)
        for rolling, button in (
            (self.level_input, self.max_level_button),
            (self.refinement_input, self.max_refinement_button),
        ):
            column = QVBoxLayout()
            column.addWidget(rolling)
            column.addWidget(button)
            layout.addLayout(column)

    # Source of truth ---------------------------------------------------
    def level(self) -> int:
        return self._level

    def refinement(self) -> int:
        return self._refinement

    def set_level(self, value) -> None:
        self._level = int(max(LEVEL_RANGE[0], min(LEVEL_RANGE[1], value)))
        log.debug("level -> %d", self._level)
        self.level_input.set_value(self._level)

    def set_refinement(self, value) -> None:
        self._refinement = int(max(REFINEMENT_RANGE[0], min(REFINEMENT_RANGE[1], value)))
        log.debug("refinement -> %d", self._refinement)
        self.refinement_input.set_value(self._refinement)
