from stats_dashboard.presentation.charts import ChartSlot, performance_figure, scoring_figure
from stats_dashboard.presentation.notifications import Notifier
from stats_dashboard.presentation.view import DashboardView

from factories import make_game, make_standing


def standings_fixture():
    return [
        make_standing(1, "A", 10, 30, points=90),
        make_standing(2, "B", 30, 10, points=80),
        make_standing(3, "C", 20, 20, points=120),
        make_standing(4, "D", 25, 15, points=100),
        make_standing(5, "E", 5, 35, points=110),
        make_standing(6, "F", 35, 5, points=85),
        make_standing(7, "G", 15, 25, points=95),
        make_standing(8, "H", 22, 18, points=105),
    ]


class TestIndicators:
    def test_loading_hides_error(self):
        view = DashboardView()
        view.show_error("boom")
        view.show_loading()
        assert view.loading and view.dimmed
        assert not view.error_visible

    def test_error_hides_loading(self):
        view = DashboardView()
        view.show_loading()
        view.show_error("Failed to load data: boom")
        assert not view.loading
        assert not view.dimmed
        assert view.error_visible
        assert view.error_text == "Failed to load data: boom"

    def test_hide_error(self):
        view = DashboardView()
        view.show_error("x")
        view.hide_error()
        assert not view.error_visible


class TestRenders:
    def test_standings_sorted_by_win_pct(self):
        view = DashboardView()
        view.render_standings(standings_fixture())
        rows = view.standings_rows
        assert [r["name"] for r in rows] == ["F", "B", "D", "H", "C", "G", "A", "E"]
        assert [r["rank"] for r in rows] == list(range(1, 9))
        assert rows[0]["win_pct"] == "0.875"
        assert set(rows[0]) == {"rank", "name", "wins", "losses", "win_pct", "streak"}

    def test_game_cards(self):
        view = DashboardView()
        view.render_games([make_game(1, "Heat", "Nets", 101, 99), make_game(2, "Suns", "Bucks", 90, 90)])
        first, tie = view.game_cards
        assert first["date_str"] == "Jan 5, 2025"
        assert first["status_label"] == "FINAL"
        assert first["home"]["winner"] and not first["away"]["winner"]
        assert not tie["home"]["winner"] and not tie["away"]["winner"]

    def test_update_ui_is_idempotent(self, dataset):
        view = DashboardView()
        view.update_ui(dataset)
        first = view.to_dict(include_charts=True)
        view.update_ui(dataset)
        second = view.to_dict(include_charts=True)
        first.pop("notifications")
        second.pop("notifications")
        assert first == second
        assert view.stats["top_scorer"] == "Stephen Curry"

    def test_update_ui_partial(self, dataset):
        view = DashboardView()
        view.update_ui({"games": dataset.games})
        assert len(view.game_cards) == 3
        assert view.standings_rows == []
        assert view.performance_chart.figure is None


class TestCharts:
    def test_performance_top_six_by_win_pct(self):
        fig = performance_figure(standings_fixture())
        wins, losses = fig.data
        assert list(wins.x) == ["F", "B", "D", "H", "C", "G"]
        assert list(wins.y) == [35, 30, 25, 22, 20, 15]
        assert list(losses.y) == [5, 10, 15, 18, 20, 25]
        assert fig.layout.barmode == "group"

    def test_scoring_top_six_by_points(self):
        fig = scoring_figure(standings_fixture())
        (line,) = fig.data
        assert list(line.x) == ["C", "E", "H", "D", "G", "A"]
        assert list(line.y) == [120, 110, 105, 100, 95, 90]
        assert line.fill == "tozeroy"

    def test_slot_releases_previous_figure(self):
        slot = ChartSlot("performance-chart")
        first = slot.replace(performance_figure(standings_fixture()))
        second = slot.replace(performance_figure(standings_fixture()))
        assert slot.figure is second
        assert len(first.data) == 0
        assert slot.generation == 2
        assert slot.released == 1

    def test_view_recreates_charts(self, dataset):
        view = DashboardView()
        view.update_ui(dataset)
        view.update_ui(dataset)
        assert view.performance_chart.generation == 2
        assert view.scoring_chart.released == 1
        charts = view.to_dict()["charts"]
        assert charts["performance"]["data"][0]["name"] == "Wins"


class TestNotifications:
    def test_lifecycle(self):
        now = [100.0]
        notifier = Notifier(duration=3.0, exit_seconds=0.3, clock=lambda: now[0])
        notifier.push("Data refreshed successfully!", "success")

        (live,) = notifier.active()
        assert live["cssClass"] == "notification notification-success"
        assert live["color"] == "#10b981"
        assert not live["leaving"]

        now[0] = 103.1
        (leaving,) = notifier.active()
        assert leaving["leaving"]

        now[0] = 103.4
        assert notifier.active() == []

    def test_levels(self):
        notifier = Notifier()
        assert notifier.push("x", "error").color == "#ef4444"
        assert notifier.push("y", "info").color == "#2563eb"
        assert notifier.push("z", "weird").level == "info"
