import random
import re
import time
from datetime import datetime

import pytest

from stats_dashboard.utils import (
    calculate_average,
    calculate_win_percentage,
    debounce,
    deep_clone,
    filter_by_search,
    format_date,
    format_number,
    generate_id,
    get_nested,
    get_random_element,
    get_random_int,
    is_valid_number,
    safe_int,
    sort_by_property,
    truncate_string,
)


class TestWinPercentage:
    def test_zero_games(self):
        assert calculate_win_percentage(0, 0) == "0.000"

    @pytest.mark.parametrize("wins,losses,expected", [
        (1, 0, "1.000"),
        (0, 4, "0.000"),
        (2, 1, "0.667"),
        (30, 10, "0.750"),
        (7, 13, "0.350"),
    ])
    def test_ratio_to_three_decimals(self, wins, losses, expected):
        assert calculate_win_percentage(wins, losses) == expected

    def test_independent_of_call_order(self):
        first = calculate_win_percentage(17, 9)
        calculate_win_percentage(0, 0)
        assert calculate_win_percentage(17, 9) == first


class TestAverage:
    def test_empty(self):
        assert calculate_average([]) == 0

    def test_rounds_to_one_decimal(self):
        assert calculate_average([1, 2, 3, 4]) == 2.5
        assert calculate_average([100, 101, 101]) == 100.7


class TestSortByProperty:
    def test_ascending_then_descending_reverses(self):
        rows = [{"k": v} for v in (5, 1, 9, 3, 7)]
        asc = sort_by_property(rows, "k", ascending=True)
        desc = sort_by_property(rows, "k", ascending=False)
        assert [r["k"] for r in asc] == [1, 3, 5, 7, 9]
        assert desc == list(reversed(asc))

    def test_returns_new_list(self):
        rows = [{"k": 2}, {"k": 1}]
        out = sort_by_property(rows, "k")
        assert out is not rows
        assert rows == [{"k": 2}, {"k": 1}]

    def test_reads_object_attributes(self):
        class Row:
            def __init__(self, k):
                self.k = k

        out = sort_by_property([Row(3), Row(1), Row(2)], "k", ascending=False)
        assert [r.k for r in out] == [3, 2, 1]


class TestFilterBySearch:
    rows = [
        {"name": "Lakers", "city": "Los Angeles"},
        {"name": "Celtics", "city": "Boston"},
        {"name": "Clippers", "city": "Los Angeles"},
    ]

    def test_empty_term_returns_original(self):
        assert filter_by_search(self.rows, "", ["name"]) is self.rows
        assert filter_by_search(self.rows, "   ", ["name"]) is self.rows

    def test_case_insensitive_trimmed(self):
        out = filter_by_search(self.rows, "  LAKERS ", ["name"])
        assert out == [self.rows[0]]

    def test_any_field(self):
        out = filter_by_search(self.rows, "los", ["name", "city"])
        assert [r["name"] for r in out] == ["Lakers", "Clippers"]

    def test_no_match(self):
        assert filter_by_search(self.rows, "zzz", ["name", "city"]) == []


class TestDebounce:
    def test_burst_runs_once_with_last_args(self):
        calls = []
        fn = debounce(lambda x: calls.append(x), wait=0.1)
        for i in range(5):
            fn(i)
        time.sleep(0.4)
        assert calls == [4]

    def test_cancel_drops_pending(self):
        calls = []
        fn = debounce(lambda x: calls.append(x), wait=0.1)
        fn(1)
        fn.cancel()
        time.sleep(0.3)
        assert calls == []

    def test_flush_runs_now(self):
        calls = []
        fn = debounce(lambda x: calls.append(x), wait=10)
        fn("a")
        fn("b")
        fn.flush()
        assert calls == ["b"]

    def test_superseded_timer_firing_late_is_ignored(self, monkeypatch):
        timers = []

        class LateTimer:
            """Starts nothing, and cancel() arrives too late to stop it."""

            def __init__(self, interval, function, args=None, kwargs=None):
                self.function = function
                self.args = args or ()
                self.kwargs = kwargs or {}
                self.daemon = False
                timers.append(self)

            def start(self):
                pass

            def cancel(self):
                pass

            def expire(self):
                self.function(*self.args, **self.kwargs)

        monkeypatch.setattr("stats_dashboard.utils.threading.Timer", LateTimer)

        calls = []
        fn = debounce(lambda x: calls.append(x), wait=0.1)
        fn(1)
        fn(2)
        first, second = timers

        first.expire()
        assert calls == []
        second.expire()
        assert calls == [2]

        fn(3)
        fn.cancel()
        timers[-1].expire()
        assert calls == [2]


class TestRandom:
    def test_int_inclusive_bounds(self):
        rng = random.Random(1)
        seen = {get_random_int(1, 3, rng) for _ in range(300)}
        assert seen == {1, 2, 3}

    def test_element(self):
        rng = random.Random(2)
        items = ["a", "b", "c"]
        assert {get_random_element(items, rng) for _ in range(200)} == set(items)

    def test_element_empty(self):
        with pytest.raises(ValueError):
            get_random_element([])


class TestFormatting:
    def test_format_date_datetime(self):
        assert format_date(datetime(2025, 1, 5, 23, 0)) == "Jan 5, 2025"

    def test_format_date_iso_string(self):
        assert format_date("2024-11-30T12:00:00Z") == "Nov 30, 2024"

    def test_format_number(self):
        assert format_number(1234567) == "1,234,567"
        assert format_number(12) == "12"

    def test_truncate(self):
        assert truncate_string("short") == "short"
        out = truncate_string("x" * 60)
        assert len(out) == 50
        assert out.endswith("...")

    def test_is_valid_number(self):
        assert is_valid_number(3)
        assert is_valid_number(2.5)
        assert not is_valid_number(float("nan"))
        assert not is_valid_number(float("inf"))
        assert not is_valid_number("3")
        assert not is_valid_number(True)

    def test_generate_id_shape(self):
        assert re.match(r"^\d+-[0-9a-z]{9}$", generate_id())

    def test_deep_clone(self):
        src = {"a": [1, {"b": 2}]}
        out = deep_clone(src)
        assert out == src
        out["a"][1]["b"] = 3
        assert src["a"][1]["b"] == 2

    def test_safe_int_and_nested(self):
        assert safe_int("7") == 7
        assert safe_int(None, 4) == 4
        assert get_nested({"a": {"b": 1}}, ["a", "b"]) == 1
        assert get_nested({"a": 1}, ["a", "b"], "x") == "x"
