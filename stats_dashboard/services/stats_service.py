# stats_dashboard/services/stats_service.py
"""
Summary stats and lookup search. Both are always mock-generated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List

from dateutil import tz

from ..config import League, roster_for
from ..models import DashboardStats, FetchResult, SearchMatch
from .mock_data import MockDataGenerator

logger = logging.getLogger(__name__)


@dataclass
class StatsService:
    """Service responsible for the dashboard summary snapshot."""

    mock: MockDataGenerator

    def fetch(self, league: League) -> FetchResult[DashboardStats]:
        self.mock.delay(200, 500)
        stats = self.mock.stats(roster_for(league))
        logger.debug(f"Generated dashboard stats for {league.label}")
        return FetchResult(
            success=True,
            data=stats,
            league=league.label,
            timestamp=datetime.now(tz=tz.tzutc()),
            source="mock",
        )


@dataclass
class SearchService:
    """Synthetic team/player lookup."""

    mock: MockDataGenerator

    def search(self, query: str, league: League) -> FetchResult[List[SearchMatch]]:
        """
        Return a team match and a player match for the query.

        An empty or blank query returns no matches and an explanatory message.
        """
        now = datetime.now(tz=tz.tzutc())
        self.mock.delay(100, 300)

        q = (query or "").strip()
        if not q:
            return FetchResult(
                success=True,
                data=[],
                league=league.label,
                timestamp=now,
                message="Empty search query",
            )

        results = [
            SearchMatch(type="team", name=q, league=league.value),
            SearchMatch(type="player", name=f"{q} Player", league=league.value, team="Team Name"),
        ]
        return FetchResult(success=True, data=results, league=league.label, timestamp=now)
