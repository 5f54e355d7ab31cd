# stats_dashboard/scheduler.py
"""
Recurring background task with an explicit stop handle.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class RepeatingTimer:
    """
    Run `func` every `interval` seconds on a daemon thread until stopped.

    Ticks do not overlap: the next wait starts after the previous call returns.
    Exceptions raised by `func` are logged and the loop keeps running.
    """

    def __init__(self, interval: float, func: Callable[[], object], name: str = "repeating-timer") -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.func = func
        self.name = name
        self.ticks = 0
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop.is_set()

    def start(self) -> "RepeatingTimer":
        if self._thread is not None:
            raise RuntimeError(f"{self.name} already started")
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        return self

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.ticks += 1
            try:
                self.func()
            except Exception:
                logger.exception(f"{self.name} tick failed")

    def stop(self, timeout: Optional[float] = None) -> None:
        """Signal the loop to exit; optionally wait for the thread to finish."""
        self._stop.set()
        thread = self._thread
        if timeout is not None and thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
