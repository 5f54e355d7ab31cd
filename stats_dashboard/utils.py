# stats_dashboard/utils.py
"""
Small pure helpers shared by the data source, the view and the handler.
"""

from __future__ import annotations

import copy
import functools
import math
import random
import string
import threading
import time
from datetime import date, datetime
from typing import Any, Callable, Iterable, Sequence, TypeVar

from dateutil import parser as date_parser

T = TypeVar("T")

_BASE36 = string.digits + string.ascii_lowercase


def safe_int(v, default=0) -> int:
    """Convert a value to int safely; return default on failures."""
    try:
        return int(v)
    except Exception:
        return default


def get_nested(obj: Any, path: list[str], default=None):
    """Safely access nested dict keys by path; return default if missing."""
    cur = obj
    for k in path:
        if not isinstance(cur, dict):
            return default
        cur = cur.get(k)
    return cur if cur is not None else default


def get_field(item: Any, name: str, default=None):
    """Read a field from a dict by key or from an object by attribute."""
    if isinstance(item, dict):
        return item.get(name, default)
    return getattr(item, name, default)


def calculate_win_percentage(wins: int, losses: int) -> str:
    """Return wins / (wins + losses) as a 3-decimal string; "0.000" with no games played."""
    total = wins + losses
    if total == 0:
        return "0.000"
    return f"{wins / total:.3f}"


def calculate_average(numbers: Iterable[float]) -> float:
    """Mean rounded to 1 decimal; 0 for an empty sequence."""
    values = list(numbers or [])
    if not values:
        return 0
    return round(sum(values) / len(values), 1)


def format_number(num: int) -> str:
    """Format an integer with thousands separators (1234567 -> "1,234,567")."""
    return f"{num:,}"


def sort_by_property(items: Iterable[T], prop: str, ascending: bool = True) -> list[T]:
    """
    Return a new list ordered by `prop`.

    Uses a plain greater/less comparator, so items with equal keys have no
    guaranteed relative order.
    """

    def compare(a, b) -> int:
        a_val = get_field(a, prop)
        b_val = get_field(b, prop)
        if ascending:
            return 1 if a_val > b_val else -1
        return 1 if a_val < b_val else -1

    return sorted(items, key=functools.cmp_to_key(compare))


def filter_by_search(items: Sequence[T], search_term: str, fields: Sequence[str]) -> Sequence[T]:
    """
    Keep items where any named field contains the search term (case-insensitive).

    An empty or blank term returns `items` unchanged.
    """
    term = (search_term or "").lower().strip()
    if not term:
        return items
    return [
        item for item in items
        if any(term in str(get_field(item, f)).lower() for f in fields)
    ]


def debounce(func: Callable[..., Any], wait: float = 0.3) -> Callable[..., None]:
    """
    Wrap `func` so a burst of calls within `wait` seconds runs it once, with the
    arguments of the last call.

    The pending call runs on a timer thread. The wrapper exposes `cancel()` to drop
    a pending call and `flush()` to run it immediately. A timer that fires after it
    has been superseded or cancelled does nothing.
    """
    lock = threading.Lock()
    pending: dict[str, Any] = {"timer": None, "token": None, "args": (), "kwargs": {}}

    def take() -> tuple:
        # Caller holds the lock.
        pending["timer"] = None
        pending["token"] = None
        return pending["args"], pending["kwargs"]

    def fire(token: object) -> None:
        with lock:
            if pending["token"] is not token:
                return
            args, kwargs = take()
        func(*args, **kwargs)

    @functools.wraps(func)
    def debounced(*args, **kwargs) -> None:
        with lock:
            if pending["timer"] is not None:
                pending["timer"].cancel()
            pending["args"], pending["kwargs"] = args, kwargs
            token = object()
            timer = threading.Timer(wait, fire, args=(token,))
            timer.daemon = True
            pending["timer"], pending["token"] = timer, token
            timer.start()

    def cancel() -> None:
        with lock:
            if pending["timer"] is not None:
                pending["timer"].cancel()
            pending["timer"] = None
            pending["token"] = None

    def flush() -> None:
        with lock:
            timer = pending["timer"]
            if timer is None:
                return
            timer.cancel()
            args, kwargs = take()
        func(*args, **kwargs)

    debounced.cancel = cancel  # type: ignore[attr-defined]
    debounced.flush = flush  # type: ignore[attr-defined]
    return debounced


def get_random_int(lo: float, hi: float, rng: random.Random | None = None) -> int:
    """Random integer in [ceil(lo), floor(hi)], both ends inclusive."""
    r = rng or random
    return r.randint(math.ceil(lo), math.floor(hi))


def get_random_element(items: Sequence[T], rng: random.Random | None = None) -> T:
    """Uniform pick from a non-empty sequence."""
    if not items:
        raise ValueError("Cannot pick from an empty sequence")
    r = rng or random
    return items[r.randrange(len(items))]


def _to_datetime(value: date | datetime | str) -> date:
    if isinstance(value, (date, datetime)):
        return value
    return date_parser.isoparse(str(value))


def format_date(value: date | datetime | str) -> str:
    """Short human-readable date, e.g. "Jan 5, 2025"."""
    d = _to_datetime(value)
    return f"{d.strftime('%b')} {d.day}, {d.year}"


def is_valid_number(value: Any) -> bool:
    """True for finite int/float values (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def truncate_string(s: str, max_length: int = 50) -> str:
    if len(s) <= max_length:
        return s
    return s[: max_length - 3] + "..."


def deep_clone(obj: T) -> T:
    return copy.deepcopy(obj)


def generate_id() -> str:
    """Unique-ish id: "<epoch millis>-<9 random base36 chars>"."""
    suffix = "".join(random.choice(_BASE36) for _ in range(9))
    return f"{int(time.time() * 1000)}-{suffix}"
