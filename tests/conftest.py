"""Shared pytest fixtures for timemanagement tests."""

import sys
import pytest

from PyQt6.QtCore import QCoreApplication

from timemanagement.timer.engine import Timer


@pytest.fixture(scope="session")
def qapp():
    """A single QCoreApplication instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture
def timer(qapp):
    """Fresh 10-second timer, no looping."""
    return Timer(10.0)


@pytest.fixture
def looping_timer(qapp):
    """Fresh 5-second looping timer."""
    return Timer(5.0, loop=True)
