"""Timer state machine.

States
------
IDLE      Not running, waiting for ``start()``.
PLAYING   Advancing ``current_time`` on every ``tick()``.
PAUSED    Frozen; ``tick()`` is ignored until ``resume()``.
ENDED     Reached ``duration``.  Terminal unless ``loop`` is set.

Transitions
-----------
IDLE | ENDED → PLAYING       (start)
PLAYING → PAUSED            (pause)
PAUSED → PLAYING            (resume)
{not IDLE} → IDLE           (stop)
PLAYING → ENDED             (tick reaches duration)
ENDED → PLAYING             (same tick, only when ``loop`` is set)

Commands that represent a transition return ``True`` on success and
``False`` when the guard fails.  A failed command has no side effects and
emits nothing.

Re-entrancy
-----------
Slots run synchronously inside ``emit``, so a slot may call back into the
timer.  The nested command completes (notifications included) before the
outer command continues, and the outer command never acts on stale state:
a loop restart only happens if the timer is still ENDED once the ``ended``
slots return.  Nesting deeper than ``MAX_REENTRY_DEPTH`` is treated as a
cycle and the offending command is rejected.

A duration of zero is instantly complete: progress reads as 1.0 and the
first tick ends the run.
"""

from __future__ import annotations

import functools
import logging
from enum import Enum
from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, pyqtSignal

if TYPE_CHECKING:
    from ..settings import TimerSettings

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class TimerState(Enum):
    IDLE = 0
    PLAYING = 1
    PAUSED = 2
    ENDED = 3


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_EPSILON = 1e-6
MAX_REENTRY_DEPTH = 16

CHANNELS = (
    "started",
    "stopped",
    "paused",
    "resumed",
    "ended",
    "state_changed",
    "current_time_changed",
    "duration_changed",
    "progress_changed",
)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _guarded(rejected=False):
    """Track command nesting and reject calls that look like a cycle."""

    def decorator(method):
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            if self._depth >= MAX_REENTRY_DEPTH:
                logger.warning(
                    "Rejected %s(): re-entry depth %d exceeded",
                    method.__name__, MAX_REENTRY_DEPTH,
                )
                return rejected
            self._depth += 1
            try:
                return method(self, *args, **kwargs)
            finally:
                self._depth -= 1

        return wrapper

    return decorator


# ── timer ─────────────────────────────────────────────────────────────────


class Timer(QObject):
    """Counts ``current_time`` up toward ``duration`` on external ticks.

    Signals
    -------
    started, stopped, paused, resumed, ended
        Lifecycle notifications, emitted right after ``state_changed``.
    state_changed(new_state: TimerState)
        Emitted on every state transition.
    current_time_changed(new_time: float)
    duration_changed(new_duration: float)
    progress_changed(new_progress: float)
        Value notifications.
    """

    started = pyqtSignal()
    stopped = pyqtSignal()
    paused = pyqtSignal()
    resumed = pyqtSignal()
    ended = pyqtSignal()

    state_changed = pyqtSignal(object)

    current_time_changed = pyqtSignal(float)
    duration_changed = pyqtSignal(float)
    progress_changed = pyqtSignal(float)

    def __init__(
        self,
        duration: float = 0.0,
        loop: bool = False,
        parent: QObject | None = None,
        *,
        epsilon: float = DEFAULT_EPSILON,
    ) -> None:
        super().__init__(parent)

        # ── configuration ─────────────────────────────────────────────
        self._duration: float = max(0.0, float(duration))
        self._loop: bool = loop
        self._epsilon: float = epsilon

        # ── run state ─────────────────────────────────────────────────
        self._current_time: float = 0.0
        self._state: TimerState = TimerState.IDLE
        self._depth: int = 0

        # ── subscriptions: (channel, callback) → connected wrappers ──
        self._wrappers: dict[tuple[str, object], list] = {}

    @classmethod
    def from_settings(
        cls, settings: TimerSettings, parent: QObject | None = None
    ) -> Timer:
        return cls(
            settings.duration,
            settings.loop,
            parent,
            epsilon=settings.epsilon,
        )

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def duration(self) -> float:
        return self._duration

    @duration.setter
    def duration(self, value: float) -> None:
        self.set_duration(value)

    @property
    def current_time(self) -> float:
        """Elapsed seconds within the current run."""
        return self._current_time

    @current_time.setter
    def current_time(self, value: float) -> None:
        self.set_current_time(value)

    @property
    def progress(self) -> float:
        """0.0 → 1.0; 0 while IDLE, 1 once ENDED."""
        return self.get_progress()

    @progress.setter
    def progress(self, value: float) -> None:
        self.set_progress(value)

    @property
    def loop(self) -> bool:
        return self._loop

    @loop.setter
    def loop(self, value: bool) -> None:
        self._loop = value

    @property
    def epsilon(self) -> float:
        return self._epsilon

    def get_current_state(self) -> TimerState:
        return self._state

    def is_idle(self) -> bool:
        return self._state == TimerState.IDLE

    def is_playing(self) -> bool:
        return self._state == TimerState.PLAYING

    def is_paused(self) -> bool:
        return self._state == TimerState.PAUSED

    def is_ended(self) -> bool:
        return self._state == TimerState.ENDED

    def get_duration(self) -> float:
        return self._duration

    def get_current_time(self) -> float:
        return self._current_time

    def get_progress(self) -> float:
        if self._state in (TimerState.PLAYING, TimerState.PAUSED):
            # current_time can exceed a shrunken duration until the next tick
            return min(1.0, self._ratio())
        if self._state == TimerState.ENDED:
            return 1.0
        return 0.0

    # ══════════════════════════════════════════════════════════════════
    #  SUBSCRIPTIONS
    # ══════════════════════════════════════════════════════════════════

    def subscribe(self, channel: str, callback) -> None:
        """Connect *callback* to the notification named *channel*.

        *callback* receives the channel's payload, if any.  An exception
        raised by it is logged and does not reach the timer or the other
        subscribers.  Connecting to a signal directly with ``.connect``
        bypasses this: PyQt aborts the process on an unhandled slot error.
        """
        signal = self._signal(channel)

        def deliver(*args):
            try:
                callback(*args)
            except Exception:
                logger.exception("Error delivering %s to %r", channel, callback)

        signal.connect(deliver)
        self._wrappers.setdefault((channel, callback), []).append(deliver)

    def unsubscribe(self, channel: str, callback) -> bool:
        """Disconnect *callback*; ``False`` if it was not subscribed."""
        signal = self._signal(channel)
        wrappers = self._wrappers.get((channel, callback))
        if not wrappers:
            return False
        signal.disconnect(wrappers.pop())
        if not wrappers:
            del self._wrappers[(channel, callback)]
        return True

    def _signal(self, channel: str):
        if channel not in CHANNELS:
            raise ValueError(f"Unknown timer channel: {channel!r}")
        return getattr(self, channel)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    @_guarded()
    def start(self, current_time: float | None = None) -> bool:
        """Begin a run from IDLE or ENDED, optionally at *current_time*."""
        return self._start(current_time)

    def _start(self, current_time: float | None = None) -> bool:
        if self._state not in (TimerState.IDLE, TimerState.ENDED):
            return False

        if current_time is None:
            self._current_time = 0.0
        else:
            self._current_time = _clamp(current_time, 0.0, self._duration)
        self._set_state(TimerState.PLAYING)
        self.started.emit()
        return True

    @_guarded()
    def force_start(self, current_time: float | None = None) -> bool:
        """Restart from any state: ``stop()`` then ``start()``."""
        self.stop()
        return self.start(current_time)

    @_guarded()
    def pause(self) -> bool:
        if self._state != TimerState.PLAYING:
            return False
        self._set_state(TimerState.PAUSED)
        self.paused.emit()
        return True

    @_guarded()
    def resume(self) -> bool:
        if self._state != TimerState.PAUSED:
            return False
        self._set_state(TimerState.PLAYING)
        self.resumed.emit()
        return True

    @_guarded()
    def stop(self) -> bool:
        """Return to IDLE and rewind.  Also serves as cancel."""
        if self._state == TimerState.IDLE:
            return False
        self._current_time = 0.0
        self._set_state(TimerState.IDLE)
        self.stopped.emit()
        return True

    @_guarded(rejected=None)
    def tick(self, delta_time: float) -> None:
        """Advance by *delta_time* seconds.  Ignored unless PLAYING."""
        if self._state != TimerState.PLAYING:
            return

        self._current_time = min(
            self._duration, self._current_time + max(0.0, delta_time)
        )
        self.current_time_changed.emit(self._current_time)

        progress = self._ratio()
        self.progress_changed.emit(progress)

        # A slot may have paused, stopped or rewound us.
        if self._state == TimerState.PLAYING and self._ratio() >= 1.0:
            self._complete()

    # ══════════════════════════════════════════════════════════════════
    #  SETTERS
    # ══════════════════════════════════════════════════════════════════

    @_guarded()
    def set_progress(self, progress: float) -> bool:
        """Jump to a fraction of the duration.  Does not change state.

        Never rejected: *progress* is clamped to [0, 1] and both
        notifications fire even when ``current_time`` is unchanged.
        """
        progress = _clamp(progress, 0.0, 1.0)
        self._current_time = self._duration * progress
        self.current_time_changed.emit(self._current_time)
        self.progress_changed.emit(progress)
        return True

    @_guarded()
    def set_duration(self, duration: float) -> bool:
        """Change the duration.

        Negative values are ignored.  ``current_time`` is not re-clamped,
        so it may exceed a shrunken duration until the next tick.
        """
        if duration < 0:
            logger.debug("Ignored negative duration %r", duration)
            return False
        if abs(self._duration - duration) <= self._epsilon:
            return False
        self._duration = float(duration)
        self.duration_changed.emit(self._duration)
        return True

    @_guarded()
    def set_current_time(self, current_time: float) -> bool:
        if current_time < 0:
            logger.debug("Ignored negative current time %r", current_time)
            return False
        new_time = _clamp(current_time, 0.0, self._duration)
        if abs(new_time - self._current_time) <= self._epsilon:
            return False
        self._current_time = new_time
        self.current_time_changed.emit(new_time)
        self.progress_changed.emit(self.get_progress())
        return True

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _ratio(self) -> float:
        if self._duration <= 0:
            return 1.0
        return self._current_time / self._duration

    def _complete(self) -> None:
        self._set_state(TimerState.ENDED)
        self.ended.emit()

        # Part of the same tick, so exempt from the re-entry limit.
        if self._loop and self._state == TimerState.ENDED:
            self._start()

    def _set_state(self, new_state: TimerState) -> None:
        logger.debug("Timer %s → %s", self._state.name, new_state.name)
        self._state = new_state
        self.state_changed.emit(new_state)

    def __repr__(self) -> str:
        return (
            f"Timer(state={self._state.name}, current_time={self._current_time}, "
            f"duration={self._duration}, loop={self._loop})"
        )
