"""Timer settings with JSON persistence.

Settings are stored at:
    ~/.config/timemanagement/timer.json

Usage::

    settings = load_settings()
    settings.duration = 30.0
    save_settings(settings)
    timer = Timer.from_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path

from .timer.engine import DEFAULT_EPSILON
from .timer.driver import DEFAULT_FRAME_INTERVAL_MS

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "timemanagement"
SETTINGS_PATH = CONFIG_DIR / "timer.json"


@dataclass
class TimerSettings:
    """Construction parameters for a :class:`~timemanagement.timer.Timer`."""

    # ── timer ─────────────────────────────────────────────────────────
    duration: float = 0.0                  # seconds
    loop: bool = False
    epsilon: float = DEFAULT_EPSILON       # change-detection tolerance

    # ── host binding ──────────────────────────────────────────────────
    frame_interval_ms: int = DEFAULT_FRAME_INTERVAL_MS


def _non_negative_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value >= 0


def _positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


# field name → (accepts value, coerce)
_VALIDATORS = {
    "duration": (_non_negative_number, float),
    "loop": (lambda v: isinstance(v, bool), bool),
    "epsilon": (_non_negative_number, float),
    "frame_interval_ms": (_positive_int, int),
}


def load_settings(path: Path | None = None) -> TimerSettings:
    """Load settings from disk, falling back to defaults.

    Unknown keys are ignored; a field with a bad value keeps its default.
    """
    path = path or SETTINGS_PATH
    try:
        if path.exists():
            data = json.loads(path.read_text(encoding="utf-8"))
            valid = {}
            for key, (accepts, coerce) in _VALIDATORS.items():
                if key not in data:
                    continue
                if accepts(data[key]):
                    valid[key] = coerce(data[key])
                else:
                    logger.warning(
                        "Ignoring invalid %s=%r in %s", key, data[key], path
                    )
            return TimerSettings(**valid)
    except (OSError, ValueError, TypeError) as exc:
        logger.warning("Could not read %s, using defaults: %s", path, exc)
    return TimerSettings()


def save_settings(settings: TimerSettings, path: Path | None = None) -> None:
    """Write settings to disk as JSON."""
    path = path or SETTINGS_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
