"""Timer package."""

from .engine import (
    Timer,
    TimerState,
    CHANNELS,
    DEFAULT_EPSILON,
    MAX_REENTRY_DEPTH,
)
from .driver import FrameDriver, DEFAULT_FRAME_INTERVAL_MS

__all__ = [
    "Timer",
    "TimerState",
    "CHANNELS",
    "DEFAULT_EPSILON",
    "MAX_REENTRY_DEPTH",
    "FrameDriver",
    "DEFAULT_FRAME_INTERVAL_MS",
]
