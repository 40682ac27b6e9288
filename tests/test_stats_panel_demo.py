from PyQt6.QtCore import Qt
from PyQt6.QtTest import QTest

from statgui.demo import LEVEL_RANGE, REFINEMENT_RANGE, StatsPanel
from statgui.services.event_bus import EventBus, InputEvent


def test_panel_starts_at_minimums(qapp, qtbot):
    panel = StatsPanel()
    qtbot.addWidget(panel)
    assert panel.level() == LEVEL_RANGE[0]
    assert panel.level_input.value() == LEVEL_RANGE[0]
    assert panel.refinement_input.label() == "Refinement"


def test_keyboard_round_trip_through_panel(qapp, qtbot):
    panel = StatsPanel()
    qtbot.addWidget(panel)
    panel.show()
    QTest.keyClick(panel.level_input, Qt.Key.Key_PageUp)
    assert panel.level() == 6
    assert panel.level_input.value() == 6


def test_max_buttons_are_external_changes(qapp, qtbot):
    bus = EventBus()
    reconciled = []
    bus.subscribe(InputEvent.VALUE_RECONCILED, lambda evt: reconciled.append(evt.payload))
    panel = StatsPanel(event_bus=bus)
    qtbot.addWidget(panel)
    panel.max_level_button.click()
    panel.max_refinement_button.click()
    assert panel.level_input.value() == LEVEL_RANGE[1]
    assert panel.refinement_input.value() == REFINEMENT_RANGE[1]
    assert [p["local"] for p in reconciled] == [False, False]
    QTest.keyClick(panel.refinement_input, Qt.Key.Key_Up)
    assert panel.refinement() == REFINEMENT_RANGE[1]
