"""Run a timer on a Qt event loop: python -m timemanagement [seconds]."""

import logging
import sys

from PyQt6.QtCore import QCoreApplication

from .logger import configure_logging
from .settings import load_settings
from .timer import FrameDriver, Timer

logger = logging.getLogger("timemanagement")

DEMO_DURATION = 3.0


def main() -> None:
    configure_logging(debug="--debug" in sys.argv)
    args = [a for a in sys.argv[1:] if not a.startswith("--")]

    app = QCoreApplication(sys.argv)
    app.setApplicationName("timemanagement")

    settings = load_settings()
    if args:
        settings.duration = float(args[0])
    elif settings.duration <= 0:
        settings.duration = DEMO_DURATION

    timer = Timer.from_settings(settings)
    driver = FrameDriver(timer, settings.frame_interval_ms)

    timer.started.connect(lambda: logger.info("started (%.1fs)", timer.duration))
    timer.progress_changed.connect(
        lambda p: logger.debug("progress %.0f%%", p * 100)
    )
    timer.ended.connect(lambda: logger.info("ended"))
    if not settings.loop:
        timer.ended.connect(app.quit)

    timer.start()
    driver.start()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
