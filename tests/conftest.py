"""Pytest configuration.

For tests we add the repo root to sys.path so `import homepulse` works
without an editable install, and switch off the background ticker before the
app module reads its settings.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, Iterable, List, Optional

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

os.environ.setdefault("ENABLE_TICKER", "false")
os.environ.setdefault("TICK_ON_STARTUP", "false")
os.environ.setdefault("LOG_FORMAT", "console")


class ScriptedEntropy:
    """Replays fractions in [0, 1]; uniform(a, b) returns a + f * (b - a)."""

    def __init__(self, fractions: Iterable[float]):
        self._fractions = list(fractions)
        self.calls: List[tuple] = []

    def uniform(self, a: float, b: float) -> float:
        f = self._fractions.pop(0)
        self.calls.append((a, b))
        return a + f * (b - a)


class FakeTimer:
    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.callback()


class FakeTimerFactory:
    def __init__(self) -> None:
        self.timers: List[FakeTimer] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        t = FakeTimer(delay, callback)
        self.timers.append(t)
        return t

    @property
    def last(self) -> Optional[FakeTimer]:
        return self.timers[-1] if self.timers else None


class StepClock:
    def __init__(self, start: int = 1_000, step: int = 1_000):
        self.now = start - step
        self.step = step

    def __call__(self) -> int:
        self.now += self.step
        return self.now


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "data.json"


@pytest.fixture
def timers() -> FakeTimerFactory:
    return FakeTimerFactory()
