# stats_dashboard/services/mock_data.py
"""
Mock data generation.

Responsibilities:
  - simulate network latency and occasional transient failures
  - synthesize standings for a roster
  - synthesize recent games with unique pairings
  - synthesize summary stats
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Sequence

from dateutil import tz

from ..config import TOP_SCORERS
from ..models import DashboardStats, GameResult, TeamStanding
from ..utils import get_random_element, get_random_int

logger = logging.getLogger(__name__)


class DataSourceError(Exception):
    """A data-source call failed and the failure is surfaced to the caller."""


def pair_key(a: str, b: str) -> str:
    """Canonical key for an unordered pairing of two teams."""
    return "-".join(sorted((a, b)))


@dataclass
class MockDataGenerator:
    """Randomized, fixed-shape placeholder data."""

    simulate_delay: bool = True
    error_rate: float = 0.05
    rng: random.Random = field(default_factory=random.Random)

    def delay(self, min_ms: int = 300, max_ms: int = 800) -> None:
        """Sleep for a random latency in [min_ms, max_ms] when delays are enabled."""
        if not self.simulate_delay:
            return
        ms = get_random_int(min_ms, max_ms, self.rng)
        logger.debug(f"Simulating {ms}ms network delay")
        time.sleep(ms / 1000.0)

    def maybe_fail(self, what: str) -> None:
        """Raise a transient network error with probability error_rate."""
        if self.error_rate > 0 and self.rng.random() < self.error_rate:
            raise DataSourceError(f"Network error: Unable to fetch {what}")

    def teams(self, roster: Sequence[str]) -> List[TeamStanding]:
        """One standing per roster name with bounded wins/losses/streak/points."""
        out: List[TeamStanding] = []
        for index, name in enumerate(roster):
            wins = get_random_int(5, 45, self.rng)
            losses = get_random_int(5, 45, self.rng)
            total = wins + losses
            streak = get_random_int(1, 8, self.rng)
            streak_type = "W" if self.rng.random() > 0.5 else "L"
            out.append(
                TeamStanding(
                    id=index + 1,
                    name=name,
                    wins=wins,
                    losses=losses,
                    win_pct=round(wins / total, 3),
                    streak=f"{streak_type}{streak}",
                    points=get_random_int(80, 120, self.rng),
                    games_played=total,
                )
            )
        return out

    def games(self, roster: Sequence[str], count: int = 6) -> List[GameResult]:
        """
        `count` final games from the last week, no unordered pairing repeated.

        Raises ValueError if the roster cannot supply `count` distinct pairings.
        """
        teams = list(roster)
        max_pairs = len(teams) * (len(teams) - 1) // 2
        if count > max_pairs:
            raise ValueError(f"Cannot build {count} unique pairings from {len(teams)} teams")

        now = datetime.now(tz=tz.tzutc())
        used: set[str] = set()
        out: List[GameResult] = []

        for i in range(count):
            while True:
                home = get_random_element(teams, self.rng)
                away = get_random_element([t for t in teams if t != home], self.rng)
                key = pair_key(home, away)
                if key not in used:
                    break
            used.add(key)

            out.append(
                GameResult(
                    id=i + 1,
                    home_team=home,
                    away_team=away,
                    home_score=get_random_int(80, 130, self.rng),
                    away_score=get_random_int(80, 130, self.rng),
                    date=now - timedelta(days=get_random_int(0, 7, self.rng)),
                    status="final",
                )
            )

        return out

    def stats(self, roster: Sequence[str]) -> DashboardStats:
        return DashboardStats(
            total_teams=len(roster),
            games_today=get_random_int(3, 8, self.rng),
            top_scorer=get_random_element(TOP_SCORERS, self.rng),
            avg_score=float(get_random_int(105, 115, self.rng)),
        )
