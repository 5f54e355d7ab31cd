# stats_dashboard/services/games_service.py
"""
Recent games logic.

Responsibilities:
  - fetch games payload from the feed when an API key is configured
  - normalize games into the GameResult model
  - fall back to mock games on any feed failure
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from dateutil import parser as date_parser, tz

from ..config import League, roster_for
from ..models import FetchResult, GameResult
from ..sports_client import SportsFeedClient, SportsFeedError
from ..utils import get_nested, safe_int
from .mock_data import DataSourceError, MockDataGenerator

logger = logging.getLogger(__name__)

_FINAL_STATES = ("COMPLETED", "COMPLETED_PENDING_REVIEW", "FINAL")


@dataclass
class GamesService:
    """Service responsible for building the recent games list."""

    mock: MockDataGenerator
    client: Optional[SportsFeedClient] = None
    game_count: int = 6

    def _team_name(self, t: Any) -> str:
        """Return a display name for a team node from common payload shapes."""
        if isinstance(t, str):
            return t
        if not isinstance(t, dict):
            return "TBD"
        return t.get("name") or t.get("abbreviation") or "TBD"

    def _parse_date(self, game: Dict[str, Any]) -> Optional[datetime]:
        """Parse the game start time from likely fields, as an aware UTC datetime."""
        for path in (["schedule", "startTime"], ["startTime"], ["date"]):
            val = get_nested(game, path)
            if not val:
                continue
            try:
                dt = date_parser.isoparse(str(val))
                if dt.tzinfo is None:
                    dt = dt.replace(tzinfo=timezone.utc)
                return dt.astimezone(tz.tzutc())
            except (ValueError, OverflowError):
                pass
        return None

    def _status(self, game: Dict[str, Any]) -> str:
        """Map the feed's played status onto "final" / "scheduled"."""
        raw = get_nested(game, ["schedule", "playedStatus"]) or game.get("status") or ""
        return "final" if str(raw).strip().upper() in _FINAL_STATES else "scheduled"

    def _normalize(self, payload: Dict[str, Any]) -> List[GameResult]:
        """
        Convert a feed games payload into GameResult rows, most recent first.

        Raises:
            SportsFeedError if the payload has no usable games.
        """
        games = payload.get("games")
        if not isinstance(games, list) or not games:
            raise SportsFeedError("Games payload has no games")

        out: List[GameResult] = []
        for index, g in enumerate(games):
            if not isinstance(g, dict):
                continue
            when = self._parse_date(g)
            if when is None:
                continue
            out.append(
                GameResult(
                    id=safe_int(get_nested(g, ["schedule", "id"]), index + 1),
                    home_team=self._team_name(get_nested(g, ["schedule", "homeTeam"])),
                    away_team=self._team_name(get_nested(g, ["schedule", "awayTeam"])),
                    home_score=safe_int(get_nested(g, ["score", "homeScoreTotal"]), 0),
                    away_score=safe_int(get_nested(g, ["score", "awayScoreTotal"]), 0),
                    date=when,
                    status=self._status(g),
                )
            )

        if not out:
            raise SportsFeedError("Games payload has no usable rows")

        out.sort(key=lambda x: x.date, reverse=True)
        return out[: self.game_count]

    def _from_feed(self, league: League) -> Optional[List[GameResult]]:
        """Return feed games, or None if the feed is unavailable/failed."""
        if self.client is None or league.mock_only:
            return None
        try:
            return self._normalize(self.client.games(league.value))
        except SportsFeedError as exc:
            logger.warning(f"Games feed failed for {league.label}, using mock data: {exc}")
            return None

    def fetch(self, league: League) -> FetchResult[Sequence[GameResult]]:
        """Return recent games for a league, falling back to mock data when the feed fails."""
        try:
            games = self._from_feed(league)
            source = "external"
            if games is None:
                self.mock.delay()
                self.mock.maybe_fail("games")
                games = self.mock.games(roster_for(league), self.game_count)
                source = "mock"

            return FetchResult(
                success=True,
                data=games,
                league=league.label,
                timestamp=datetime.now(tz=tz.tzutc()),
                source=source,
            )
        except DataSourceError as exc:
            logger.error(f"Error fetching games: {exc}")
            raise
