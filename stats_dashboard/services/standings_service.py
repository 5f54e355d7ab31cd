# stats_dashboard/services/standings_service.py
"""
Standings logic.

Responsibilities:
  - fetch standings payload from the feed when an API key is configured
  - normalize rows into the TeamStanding model
  - fall back to mock standings on any feed failure
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from dateutil import tz

from ..config import League, roster_for
from ..models import FetchResult, TeamStanding
from ..sports_client import SportsFeedClient, SportsFeedError
from ..utils import calculate_win_percentage, get_nested, safe_int
from .mock_data import DataSourceError, MockDataGenerator

logger = logging.getLogger(__name__)


@dataclass
class StandingsService:
    """Service responsible for returning standings for a league."""

    mock: MockDataGenerator
    client: Optional[SportsFeedClient] = None

    def _team_name(self, row: Dict[str, Any]) -> str:
        """Extract a team name from common payload fields."""
        return (
            get_nested(row, ["team", "name"])
            or get_nested(row, ["team", "abbreviation"])
            or row.get("name")
            or "TBD"
        )

    @staticmethod
    def _streak(row: Dict[str, Any]) -> str:
        """Build a compact streak string such as 'W3' from type + length when available."""
        streak = get_nested(row, ["stats", "standings", "streak"]) or row.get("streak")
        if isinstance(streak, str):
            return streak
        if isinstance(streak, dict):
            code = str(streak.get("type") or "")[:1].upper()
            count = streak.get("length")
            if code and count is not None:
                return f"{code}{count}"
        return ""

    def _normalize(self, payload: Dict[str, Any]) -> List[TeamStanding]:
        """
        Convert a feed standings payload into TeamStanding rows.

        Raises:
            SportsFeedError if the payload has no usable team rows.
        """
        rows = payload.get("teams")
        if not isinstance(rows, list) or not rows:
            raise SportsFeedError("Standings payload has no teams")

        out: List[TeamStanding] = []
        for index, r in enumerate(rows):
            if not isinstance(r, dict):
                continue
            wins = safe_int(get_nested(r, ["stats", "standings", "wins"]), 0)
            losses = safe_int(get_nested(r, ["stats", "standings", "losses"]), 0)
            out.append(
                TeamStanding(
                    id=safe_int(get_nested(r, ["team", "id"]), index + 1),
                    name=self._team_name(r),
                    wins=wins,
                    losses=losses,
                    win_pct=float(calculate_win_percentage(wins, losses)),
                    streak=self._streak(r),
                    points=safe_int(
                        get_nested(r, ["stats", "standings", "points"])
                        or get_nested(r, ["stats", "offense", "pts"]),
                        0,
                    ),
                    games_played=wins + losses,
                )
            )

        if not out:
            raise SportsFeedError("Standings payload has no usable rows")
        return out

    def _from_feed(self, league: League) -> Optional[List[TeamStanding]]:
        """Return feed standings, or None if the feed is unavailable/failed."""
        if self.client is None or league.mock_only:
            return None
        try:
            return self._normalize(self.client.standings(league.value))
        except SportsFeedError as exc:
            logger.warning(f"Standings feed failed for {league.label}, using mock data: {exc}")
            return None

    def fetch(self, league: League) -> FetchResult[Sequence[TeamStanding]]:
        """
        Return standings for a league.

        Feed failures fall back to mock data silently; simulated transient errors on the
        mock path are logged and re-raised.
        """
        try:
            standings = self._from_feed(league)
            source = "external"
            if standings is None:
                self.mock.delay()
                self.mock.maybe_fail("standings")
                standings = self.mock.teams(roster_for(league))
                source = "mock"

            return FetchResult(
                success=True,
                data=standings,
                league=league.label,
                timestamp=datetime.now(tz=tz.tzutc()),
                source=source,
            )
        except DataSourceError as exc:
            logger.error(f"Error fetching standings: {exc}")
            raise
