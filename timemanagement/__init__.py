"""Frame-driven timer state machine with Qt signals."""

from .timer import Timer, TimerState, FrameDriver
from .settings import TimerSettings, load_settings, save_settings

__version__ = "0.1.0"

__all__ = [
    "Timer",
    "TimerState",
    "FrameDriver",
    "TimerSettings",
    "load_settings",
    "save_settings",
]
