import random
from datetime import datetime

import pytest
from dateutil import tz

from stats_dashboard.config import AppConfig, League
from stats_dashboard.handlers.dashboard_handler import DashboardHandler
from stats_dashboard.models import Dataset, DashboardStats
from stats_dashboard.presentation.view import DashboardView
from stats_dashboard.services.data_source import DataSource

from factories import FakeDataSource, make_game, make_standing


@pytest.fixture
def cfg():
    return AppConfig(api_key=None, mock_delay=False, mock_error_rate=0.0, default_league="nba")


@pytest.fixture
def keyed_cfg():
    return AppConfig(api_key="abc123", mock_delay=False, mock_error_rate=0.0, default_league="nba")


@pytest.fixture
def data_source(cfg):
    ds = DataSource.from_config(cfg, rng=random.Random(7))
    yield ds
    ds.close()


@pytest.fixture
def dataset():
    standings = [
        make_standing(1, "Lakers", 30, 10, points=110),
        make_standing(2, "Celtics", 25, 15, points=115),
        make_standing(3, "Warriors", 20, 20, points=95),
        make_standing(4, "Nets", 10, 30, points=85),
    ]
    games = [
        make_game(1, "Lakers", "Celtics", 110, 102),
        make_game(2, "Warriors", "Lakers", 99, 101),
        make_game(3, "Nets", "Warriors", 90, 120),
    ]
    stats = DashboardStats(total_teams=12, games_today=5, top_scorer="Stephen Curry", avg_score=110.0)
    return Dataset(
        standings=standings,
        games=games,
        stats=stats,
        league="NBA",
        timestamp=datetime(2025, 1, 6, tzinfo=tz.tzutc()),
        sources={"standings": "mock", "games": "mock", "stats": "mock"},
    )


@pytest.fixture
def fake_source(dataset):
    return FakeDataSource(dataset=dataset)


@pytest.fixture
def handler(fake_source):
    h = DashboardHandler(data_source=fake_source, view=DashboardView(), default_league=League.NBA)
    yield h
    h.shutdown()
