"""Qt host binding: ticks one :class:`Timer` once per frame."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QElapsedTimer, QObject, QTimer

from .engine import Timer

logger = logging.getLogger(__name__)

DEFAULT_FRAME_INTERVAL_MS = 16  # ~60 fps


class FrameDriver(QObject):
    """Calls ``timer.tick(seconds)`` from a Qt event loop.

    The elapsed time passed to each tick is measured with a monotonic
    ``QElapsedTimer`` since the previous frame, so dropped frames are
    absorbed rather than lost.
    """

    def __init__(
        self,
        timer: Timer,
        interval_ms: int = DEFAULT_FRAME_INTERVAL_MS,
        parent: QObject | None = None,
        *,
        stop_when_ended: bool = True,
    ) -> None:
        super().__init__(parent)
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")

        self._timer = timer
        self._stop_when_ended = stop_when_ended
        self._clock = QElapsedTimer()

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(interval_ms)
        self._qt_timer.timeout.connect(self._on_frame)

    @property
    def timer(self) -> Timer:
        return self._timer

    @property
    def interval_ms(self) -> int:
        return self._qt_timer.interval()

    @property
    def is_active(self) -> bool:
        return self._qt_timer.isActive()

    def start(self) -> None:
        if self._qt_timer.isActive():
            return
        self._clock.start()
        self._qt_timer.start()
        logger.debug("Frame driver started (%d ms)", self.interval_ms)

    def stop(self) -> None:
        if not self._qt_timer.isActive():
            return
        self._qt_timer.stop()
        logger.debug("Frame driver stopped")

    def _on_frame(self) -> None:
        delta = self._clock.restart() / 1000.0
        self._timer.tick(delta)
        if self._stop_when_ended and self._timer.is_ended():
            self.stop()
