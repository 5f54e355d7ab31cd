# stats_dashboard/models.py
"""
Domain models for the dashboard.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, Optional, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class TeamStanding:
    """A single team's season record."""
    id: int
    name: str
    wins: int
    losses: int
    win_pct: float  # wins / games_played, 3 decimals; 0.0 with no games
    streak: str     # e.g. "W3" / "L2"
    points: int
    games_played: int


@dataclass(frozen=True)
class GameResult:
    """A completed (or scheduled) game between two teams."""
    id: int
    home_team: str
    away_team: str
    home_score: int
    away_score: int
    date: datetime
    status: str = "final"  # "final" | "scheduled"

    @property
    def winner(self) -> Optional[str]:
        """Team with the higher score; None on a tie."""
        if self.home_score > self.away_score:
            return self.home_team
        if self.away_score > self.home_score:
            return self.away_team
        return None


@dataclass(frozen=True)
class DashboardStats:
    """Aggregate snapshot shown in the summary cards."""
    total_teams: int
    games_today: int
    top_scorer: str
    avg_score: float


@dataclass(frozen=True)
class SearchMatch:
    """A synthetic search hit."""
    type: str  # "team" | "player"
    name: str
    league: str
    team: Optional[str] = None


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Labeled result of one data-source call."""
    success: bool
    data: T
    league: str
    timestamp: datetime
    source: str = "mock"  # "external" | "mock"
    message: str = ""


@dataclass(frozen=True)
class Dataset:
    """Everything one dashboard load produces. Replaced wholesale on each load."""
    standings: Sequence[TeamStanding]
    games: Sequence[GameResult]
    stats: DashboardStats
    league: str
    timestamp: datetime
    sources: dict[str, str] = field(default_factory=dict)
