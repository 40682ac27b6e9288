# Shared fixtures. Qt runs on the offscreen platform; a minimal 'qtbot' fallback
# is provided when pytest-qt is not installed (its fixture wins otherwise).

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from statgui.design import reduced_motion
from statgui.services.settings_service import RollingInputSettings

try:  # If pytest-qt present, do nothing (its fixture will be used)
    import pytestqt  # type: ignore  # noqa: F401
except ImportError:  # pragma: no cover

    @pytest.fixture
    def qtbot(qapp):  # type: ignore
        widgets = []

        class Bot:
            def addWidget(self, w):  # mimic pytest-qt API subset
                widgets.append(w)

        yield Bot()
        for w in widgets:
            w.close()


@pytest.fixture(scope="session")
def qapp():
    from PyQt6.QtWidgets import QApplication

    return QApplication.instance() or QApplication(sys.argv)


@pytest.fixture(autouse=True)
def _isolated_motion_and_settings():
    prev_settings = RollingInputSettings.instance
    prev_motion = reduced_motion.is_reduced_motion()
    RollingInputSettings.instance = RollingInputSettings()
    reduced_motion.set_reduced_motion(False)
    yield
    RollingInputSettings.instance = prev_settings
    reduced_motion.set_reduced_motion(prev_motion)
