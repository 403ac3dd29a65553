"""Background stopwatch counting whole seconds of play."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from ..base import AbstractClock

logger = logging.getLogger(__name__)


class Stopwatch(AbstractClock):
    """Count elapsed seconds on a daemon thread.

    Each ``start()`` spawns a fresh ticker with its own stop event, so a ticker
    retired by ``stop()`` or a restart can never touch the new count. The
    counter is only written under ``_lock``, and ``stop()`` flips the event
    under the same lock: once it returns, no further increment can land.
    ``stop()`` never joins the thread; the ticker exits on its next wake-up.
    """

    def __init__(self, interval: float = 1.0) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self._elapsed = 0
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._stop_event.set()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return not self._stop_event.is_set()

    @property
    def elapsed_seconds(self) -> int:
        return self._elapsed

    def start(self) -> None:
        stop_event = threading.Event()
        with self._lock:
            self._stop_event.set()
            self._stop_event = stop_event
            self._elapsed = 0
        self._thread = threading.Thread(
            target=self._tick, args=(stop_event,), name="stopwatch", daemon=True
        )
        self._thread.start()
        logger.debug("Stopwatch started")

    def stop(self) -> None:
        with self._lock:
            if self._stop_event.is_set():
                return
            self._stop_event.set()
        self._thread = None
        logger.debug("Stopwatch stopped at %d s", self._elapsed)

    def _tick(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.interval):
            with self._lock:
                if stop_event.is_set():
                    return
                self._elapsed += 1


__all__ = ["Stopwatch"]
