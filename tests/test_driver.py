"""Tests for the Qt frame driver."""

import pytest

from timemanagement.timer.driver import FrameDriver, DEFAULT_FRAME_INTERVAL_MS
from timemanagement.timer.engine import Timer


class FakeClock:
    """Stands in for QElapsedTimer: returns scripted millisecond deltas."""

    def __init__(self, *deltas_ms):
        self._deltas = list(deltas_ms)

    def start(self):
        pass

    def restart(self):
        return self._deltas.pop(0)


@pytest.fixture
def driver(timer):
    return FrameDriver(timer)


class TestFrameDriver:

    def test_defaults(self, driver, timer):
        assert driver.timer is timer
        assert driver.interval_ms == DEFAULT_FRAME_INTERVAL_MS
        assert driver.is_active is False

    def test_rejects_non_positive_interval(self, timer):
        with pytest.raises(ValueError):
            FrameDriver(timer, 0)

    def test_start_stop(self, driver):
        driver.start()
        assert driver.is_active
        driver.stop()
        assert not driver.is_active

    def test_frame_ticks_elapsed_seconds(self, driver, timer):
        driver._clock = FakeClock(250, 500)
        timer.start()
        driver._on_frame()
        assert timer.current_time == pytest.approx(0.25)
        driver._on_frame()
        assert timer.current_time == pytest.approx(0.75)

    def test_frame_is_harmless_when_timer_idle(self, driver, timer):
        driver._clock = FakeClock(1000)
        driver._on_frame()
        assert timer.is_idle()
        assert timer.current_time == 0.0

    def test_stops_when_timer_ends(self, driver, timer):
        driver._clock = FakeClock(10_000)
        timer.start()
        driver.start()
        driver._on_frame()
        assert timer.is_ended()
        assert not driver.is_active

    def test_keeps_running_when_asked(self, timer):
        driver = FrameDriver(timer, stop_when_ended=False)
        driver._clock = FakeClock(10_000)
        timer.start()
        driver.start()
        driver._on_frame()
        assert timer.is_ended()
        assert driver.is_active
        driver.stop()

    def test_keeps_running_for_looping_timer(self, looping_timer):
        driver = FrameDriver(looping_timer)
        driver._clock = FakeClock(5_000)
        looping_timer.start()
        driver.start()
        driver._on_frame()
        assert looping_timer.is_playing()
        assert driver.is_active
        driver.stop()
