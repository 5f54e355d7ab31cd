# stats_dashboard/presentation/view.py
"""
Server-side view state for the dashboard page.

The Jinja template and /api/state both project this state; rendering the same
data twice yields the same state.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional, Sequence

from ..models import DashboardStats, GameResult, TeamStanding
from ..utils import calculate_win_percentage, format_date, get_field, sort_by_property
from .charts import ChartSlot, performance_figure, scoring_figure
from .notifications import Notifier

EMPTY_SLOT = "-"


class DashboardView:
    """Loading/error indicators, summary slots, standings rows, game cards, charts and toasts."""

    def __init__(self, notifier: Optional[Notifier] = None) -> None:
        self.notifier = notifier or Notifier()
        self.performance_chart = ChartSlot("performance-chart")
        self.scoring_chart = ChartSlot("scoring-chart")

        self.loading = False
        self.dimmed = False
        self.error_visible = False
        self.error_text = ""

        self.stats: Dict[str, Any] = {
            "total_teams": EMPTY_SLOT,
            "games_today": EMPTY_SLOT,
            "top_scorer": EMPTY_SLOT,
            "avg_score": EMPTY_SLOT,
        }
        self.standings_rows: List[Dict[str, Any]] = []
        self.game_cards: List[Dict[str, Any]] = []

        self._lock = threading.RLock()

    # -------------------------
    # Loading / error indicators
    # -------------------------

    def show_loading(self) -> None:
        with self._lock:
            self.loading = True
            self.error_visible = False
            self.dimmed = True

    def hide_loading(self) -> None:
        with self._lock:
            self.loading = False
            self.dimmed = False

    def show_error(self, message: str) -> None:
        with self._lock:
            self.error_text = message
            self.error_visible = True
            self.loading = False
            self.dimmed = False

    def hide_error(self) -> None:
        with self._lock:
            self.error_visible = False

    # -------------------------
    # Renders
    # -------------------------

    def update_dashboard_stats(self, stats: DashboardStats) -> None:
        with self._lock:
            self.stats = {
                "total_teams": stats.total_teams,
                "games_today": stats.games_today,
                "top_scorer": stats.top_scorer,
                "avg_score": stats.avg_score,
            }

    def render_standings(self, standings: Sequence[TeamStanding]) -> None:
        """Rebuild the standings table, best win percentage first."""
        ordered = sort_by_property(standings, "win_pct", ascending=False)
        rows = [
            {
                "rank": rank,
                "name": team.name,
                "wins": team.wins,
                "losses": team.losses,
                "win_pct": calculate_win_percentage(team.wins, team.losses),
                "streak": team.streak,
            }
            for rank, team in enumerate(ordered, start=1)
        ]
        with self._lock:
            self.standings_rows = rows

    def render_games(self, games: Sequence[GameResult]) -> None:
        """Rebuild one card per game with the higher-scoring side marked as winner."""
        cards = []
        for game in games:
            cards.append(
                {
                    "id": game.id,
                    "date_str": format_date(game.date),
                    "status_label": game.status.upper(),
                    "home": {
                        "name": game.home_team,
                        "score": game.home_score,
                        "winner": game.home_score > game.away_score,
                    },
                    "away": {
                        "name": game.away_team,
                        "score": game.away_score,
                        "winner": game.away_score > game.home_score,
                    },
                }
            )
        with self._lock:
            self.game_cards = cards

    def create_performance_chart(self, standings: Sequence[TeamStanding]) -> None:
        self.performance_chart.replace(performance_figure(standings))

    def create_scoring_chart(self, standings: Sequence[TeamStanding]) -> None:
        self.scoring_chart.replace(scoring_figure(standings))

    def update_ui(self, data: Any) -> None:
        """
        Render whichever of stats / standings / games `data` carries.

        `data` may be a Dataset, a dict, or any object exposing those fields.
        """
        stats = get_field(data, "stats")
        standings = get_field(data, "standings")
        games = get_field(data, "games")

        with self._lock:
            if stats is not None:
                self.update_dashboard_stats(stats)
            if standings is not None:
                self.render_standings(standings)
                self.create_performance_chart(standings)
                self.create_scoring_chart(standings)
            if games is not None:
                self.render_games(games)

    # -------------------------
    # Notifications
    # -------------------------

    def show_notification(self, message: str, level: str = "info") -> None:
        self.notifier.push(message, level)

    # -------------------------
    # Projection
    # -------------------------

    def to_dict(self, include_charts: bool = True) -> Dict[str, Any]:
        with self._lock:
            out: Dict[str, Any] = {
                "loading": self.loading,
                "dimmed": self.dimmed,
                "error": {"visible": self.error_visible, "text": self.error_text},
                "stats": dict(self.stats),
                "standings": [dict(r) for r in self.standings_rows],
                "games": [dict(c) for c in self.game_cards],
                "notifications": self.notifier.active(),
            }
            if include_charts:
                out["charts"] = {
                    "performance": self.performance_chart.to_dict(),
                    "scoring": self.scoring_chart.to_dict(),
                }
            return out
