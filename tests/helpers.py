"""Shared test helpers for timemanagement."""

from timemanagement.timer.engine import CHANNELS, Timer


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class EventLog:
    """Records every notification of a timer as ``(channel, payload)``."""

    def __init__(self, timer: Timer):
        self.events: list = []
        for channel in CHANNELS:
            timer.subscribe(channel, self._recorder(channel))

    def _recorder(self, channel):
        def record(*args):
            self.events.append((channel, args[0] if args else None))
        return record

    def channels(self) -> list:
        return [name for name, _ in self.events]

    def count(self, channel: str) -> int:
        return self.channels().count(channel)

    def clear(self):
        self.events.clear()

    def __len__(self):
        return len(self.events)
