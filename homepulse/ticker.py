from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class Ticker:
    """Call `tick` every `interval_seconds` on a daemon thread.

    A failed tick (e.g. the data file is unwritable) is logged and the next
    interval tries again; the loop never dies on a tick error.
    """

    def __init__(self, tick: Callable[[], Any], *, interval_seconds: float):
        self._tick = tick
        self.interval_seconds = interval_seconds
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> bool:
        try:
            self._tick()
            return True
        except Exception:
            logger.exception("Scheduled tick failed; retrying in %.0fs", self.interval_seconds)
            return False

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="homepulse-ticker", daemon=True)
        self._thread.start()
        logger.info("Ticker started (every %.0fs)", self.interval_seconds)

    def stop(self, timeout: float = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    def _loop(self) -> None:
        while not self._stop.wait(self.interval_seconds):
            self.run_once()
