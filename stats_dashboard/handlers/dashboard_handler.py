# stats_dashboard/handlers/dashboard_handler.py
"""
Handler/controller that owns the dashboard state.

Wires user actions (league change, search, refresh, retry) and the auto-refresh
timer to data-source calls and view updates, keeping Flask routes thin.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..config import League
from ..models import Dataset
from ..presentation.view import DashboardView
from ..scheduler import RepeatingTimer
from ..services.data_source import DataSource
from ..utils import debounce, filter_by_search

logger = logging.getLogger(__name__)


@dataclass
class DashboardState:
    """Mutable application state. Only DashboardHandler writes to it."""
    current_league: League = League.NBA
    all_data: Optional[Dataset] = None
    is_loading: bool = False
    auto_refresh: Optional[RepeatingTimer] = None


@dataclass
class DashboardHandler:
    """Orchestrates the data source and the view for one dashboard."""

    data_source: DataSource
    view: DashboardView
    default_league: League = League.NBA
    auto_refresh_seconds: float = 60.0
    search_debounce_seconds: float = 0.3

    state: DashboardState = field(init=False)

    def __post_init__(self) -> None:
        self.state = DashboardState(current_league=self.default_league)
        # Held for the whole of a load; a second load_data() while held is a no-op.
        self._load_lock = threading.Lock()
        self._state_lock = threading.RLock()
        # Server-side debounce for callers that post every keystroke; the page debounces on its own.
        self.search_debounced = debounce(self.handle_search, self.search_debounce_seconds)

    # -------------------------
    # Loading
    # -------------------------

    def load_data(self) -> bool:
        """
        Fetch the full dataset for the current league and render it.

        Returns True on success, False on failure or when another load is in flight.
        """
        if not self._load_lock.acquire(blocking=False):
            logger.debug("Load already in progress; skipping")
            return False

        try:
            self.state.is_loading = True
            self.view.show_loading()
            self.view.hide_error()

            league = self.state.current_league
            try:
                data = self.data_source.fetch_all_data(league)
                with self._state_lock:
                    self.state.all_data = data
                self.view.update_ui(data)
            except Exception as exc:
                self.view.hide_loading()
                self.view.show_error(f"Failed to load data: {exc}")
                logger.error(f"Error loading data for {league.label}: {exc}")
                return False

            self.view.hide_loading()

            logger.info(
                f"Loaded {league.label}: {len(data.standings)} teams, {len(data.games)} games "
                f"(sources: {data.sources})"
            )
            return True
        finally:
            self.state.is_loading = False
            self._load_lock.release()

    # -------------------------
    # User actions
    # -------------------------

    def handle_league_change(self, value: League | str) -> bool:
        """
        Switch league and reload. Reselecting the current league does nothing.

        Raises:
            ValueError for an unknown league code.
        """
        league = value if isinstance(value, League) else League.parse(value)

        with self._state_lock:
            if league == self.state.current_league:
                return False
            self.state.current_league = league

        self.view.show_notification(f"Switching to {league.label}...", "info")
        self.load_data()
        return True

    def handle_sport_change(self, value: str) -> None:
        self.view.show_notification(f"Sport changed to {value}", "info")

    def handle_search(self, query: str) -> Dict[str, Any]:
        """
        Filter the cached standings (by name) and games (by either team) and re-render.

        An empty query restores the full dataset. Stats are never filtered.
        """
        q = (query or "").strip()
        with self._state_lock:
            data = self.state.all_data

        if data is None:
            return {"standings": [], "games": []}

        if not q:
            self.view.update_ui(data)
            return {"standings": list(data.standings), "games": list(data.games)}

        try:
            standings = filter_by_search(data.standings, q, ["name"])
            games = filter_by_search(data.games, q, ["home_team", "away_team"])

            self.view.update_ui({"stats": data.stats, "standings": standings, "games": games})

            if not standings and not games:
                self.view.show_notification("No results found", "error")
        except Exception as exc:
            logger.error(f"Search error: {exc}")
            self.view.show_notification("Search failed", "error")
            return {"standings": [], "games": []}

        return {"standings": list(standings), "games": list(games)}

    def handle_refresh(self) -> bool:
        """Reload now; announce success only if the load actually succeeded."""
        self.view.show_notification("Refreshing data...", "info")
        ok = self.load_data()
        if ok:
            self.view.show_notification("Data refreshed successfully!", "success")
        return ok

    def handle_retry(self) -> bool:
        self.view.hide_error()
        return self.load_data()

    # -------------------------
    # Lifecycle
    # -------------------------

    def _auto_refresh_tick(self) -> None:
        logger.info("Auto-refreshing data...")
        self.load_data()

    def setup_auto_refresh(self, interval_seconds: Optional[float] = None) -> RepeatingTimer:
        """Start the recurring refresh, stopping any previous timer first."""
        interval = interval_seconds if interval_seconds is not None else self.auto_refresh_seconds
        with self._state_lock:
            if self.state.auto_refresh is not None:
                self.state.auto_refresh.stop()
            timer = RepeatingTimer(interval, self._auto_refresh_tick, name="auto-refresh")
            self.state.auto_refresh = timer
        return timer.start()

    def init(self, auto_refresh: bool = True) -> None:
        """Initial load, then start auto-refresh."""
        logger.info("Initializing sports stats dashboard...")
        self.load_data()
        if auto_refresh:
            self.setup_auto_refresh()
        logger.info("Dashboard initialized")

    def shutdown(self) -> None:
        """Stop the auto-refresh timer, drop any pending debounced search and close the data source."""
        with self._state_lock:
            if self.state.auto_refresh is not None:
                self.state.auto_refresh.stop()
                self.state.auto_refresh = None
        self.search_debounced.cancel()
        self.data_source.close()
