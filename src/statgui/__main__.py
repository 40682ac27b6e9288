"""Launch the stats panel demo: ``python -m statgui``."""

from __future__ import annotations

import logging
import os
import sys


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=os.environ.get("STATGUI_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    from PyQt6.QtWidgets import QApplication

    from statgui.demo import StatsPanel

    app = QApplication.instance() or QApplication(argv if argv is not None else sys.argv)
    panel = StatsPanel()
    panel.setWindowTitle("Weapon stats")
    panel.show()
    return app.exec()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
