# stats_dashboard/services/data_source.py
"""
Data source facade.

Wires the per-dataset services to one config and runs the three dashboard
fetches concurrently.
"""

from __future__ import annotations

import logging
import random
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence

from dateutil import tz

from ..config import AppConfig, League
from ..models import DashboardStats, Dataset, FetchResult, GameResult, SearchMatch, TeamStanding
from ..sports_client import SportsFeedClient
from .games_service import GamesService
from .mock_data import MockDataGenerator
from .standings_service import StandingsService
from .stats_service import SearchService, StatsService

logger = logging.getLogger(__name__)


def _as_league(league: League | str) -> League:
    return league if isinstance(league, League) else League.parse(league)


@dataclass
class DataSource:
    """Produces dashboard datasets for a league from the feed or from mock data."""

    standings_service: StandingsService
    games_service: GamesService
    stats_service: StatsService
    search_service: SearchService
    _pool: ThreadPoolExecutor = field(default_factory=lambda: ThreadPoolExecutor(max_workers=3), repr=False)

    @classmethod
    def from_config(cls, cfg: AppConfig, rng: Optional[random.Random] = None) -> "DataSource":
        """
        Build the services for a config.

        The feed client is only created when a real (non-placeholder) API key is set.
        """
        mock = MockDataGenerator(
            simulate_delay=cfg.mock_delay,
            error_rate=cfg.mock_error_rate,
            rng=rng or random.Random(),
        )
        client = None
        if cfg.has_api_key:
            client = SportsFeedClient(
                cfg.api_base,
                cfg.api_key,
                cfg.season,
                timeout=cfg.request_timeout_seconds,
                response_format=cfg.response_format,
            )
        else:
            logger.info("No stats feed API key configured; serving mock data")

        return cls(
            standings_service=StandingsService(mock=mock, client=client),
            games_service=GamesService(mock=mock, client=client, game_count=cfg.mock_game_count),
            stats_service=StatsService(mock=mock),
            search_service=SearchService(mock=mock),
        )

    def fetch_standings(self, league: League | str = League.NBA) -> FetchResult[Sequence[TeamStanding]]:
        return self.standings_service.fetch(_as_league(league))

    def fetch_recent_games(self, league: League | str = League.NBA) -> FetchResult[Sequence[GameResult]]:
        return self.games_service.fetch(_as_league(league))

    def fetch_dashboard_stats(self, league: League | str = League.NBA) -> FetchResult[DashboardStats]:
        return self.stats_service.fetch(_as_league(league))

    def search_data(self, query: str, league: League | str = League.NBA) -> FetchResult[List[SearchMatch]]:
        return self.search_service.search(query, _as_league(league))

    def fetch_all_data(self, league: League | str = League.NBA) -> Dataset:
        """
        Fetch standings, games and stats concurrently and wait for all three.

        Any single failure fails the whole call; no partial dataset is returned.
        """
        lg = _as_league(league)
        futures = [
            self._pool.submit(self.fetch_standings, lg),
            self._pool.submit(self.fetch_recent_games, lg),
            self._pool.submit(self.fetch_dashboard_stats, lg),
        ]
        try:
            standings, games, stats = (f.result() for f in futures)
        except Exception as exc:
            logger.error(f"Error fetching all data for {lg.label}: {exc}")
            raise

        return Dataset(
            standings=standings.data,
            games=games.data,
            stats=stats.data,
            league=lg.label,
            timestamp=datetime.now(tz=tz.tzutc()),
            sources={"standings": standings.source, "games": games.source, "stats": stats.source},
        )

    def close(self) -> None:
        self._pool.shutdown(wait=False)
