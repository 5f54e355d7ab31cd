"""
Services package exports.
"""
from .data_source import DataSource
from .games_service import GamesService
from .mock_data import DataSourceError, MockDataGenerator
from .standings_service import StandingsService
from .stats_service import SearchService, StatsService

__all__ = [
    "DataSource",
    "DataSourceError",
    "GamesService",
    "MockDataGenerator",
    "SearchService",
    "StandingsService",
    "StatsService",
]
