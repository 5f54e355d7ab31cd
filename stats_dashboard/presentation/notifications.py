# stats_dashboard/presentation/notifications.py
"""
Transient toast notifications.

A notification is visible for `duration` seconds, then spends `exit_seconds`
in a leaving state (slide-out) before it is dropped.
"""

from __future__ import annotations

import itertools
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

LEVEL_COLORS = {
    "success": "#10b981",
    "error": "#ef4444",
    "info": "#2563eb",
}


@dataclass(frozen=True)
class Notification:
    id: int
    message: str
    level: str
    created_at: float

    @property
    def css_class(self) -> str:
        return f"notification notification-{self.level}"

    @property
    def color(self) -> str:
        return LEVEL_COLORS[self.level]


class Notifier:
    """Thread-safe queue of auto-dismissing notifications."""

    def __init__(
        self,
        duration: float = 3.0,
        exit_seconds: float = 0.3,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.duration = duration
        self.exit_seconds = exit_seconds
        self._clock = clock
        self._ids = itertools.count(1)
        self._items: List[Notification] = []
        self._lock = threading.Lock()

    def push(self, message: str, level: str = "info") -> Notification:
        """Add a notification. Unknown levels are shown as info."""
        lvl = level if level in LEVEL_COLORS else "info"
        with self._lock:
            n = Notification(id=next(self._ids), message=message, level=lvl, created_at=self._clock())
            self._items.append(n)
            return n

    def active(self, now: Optional[float] = None) -> List[Dict[str, Any]]:
        """Prune expired notifications and return the live ones, oldest first."""
        t = self._clock() if now is None else now
        lifetime = self.duration + self.exit_seconds
        with self._lock:
            self._items = [n for n in self._items if t - n.created_at < lifetime]
            return [
                {
                    "id": n.id,
                    "message": n.message,
                    "level": n.level,
                    "cssClass": n.css_class,
                    "color": n.color,
                    "leaving": t - n.created_at >= self.duration,
                }
                for n in self._items
            ]

    def messages(self) -> List[str]:
        """All messages still held (including leaving ones), oldest first."""
        with self._lock:
            return [n.message for n in self._items]

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
