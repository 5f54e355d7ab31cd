from datetime import datetime

from dateutil import tz

from stats_dashboard.models import GameResult, TeamStanding


def make_standing(i, name, wins, losses, points=100, streak="W1"):
    total = wins + losses
    return TeamStanding(
        id=i,
        name=name,
        wins=wins,
        losses=losses,
        win_pct=round(wins / total, 3) if total else 0.0,
        streak=streak,
        points=points,
        games_played=total,
    )


def make_game(i, home, away, hs, as_, status="final"):
    return GameResult(
        id=i,
        home_team=home,
        away_team=away,
        home_score=hs,
        away_score=as_,
        date=datetime(2025, 1, 5, 19, 30, tzinfo=tz.tzutc()),
        status=status,
    )


class FakeDataSource:
    """Returns a fixed dataset, or raises, and counts calls."""

    def __init__(self, dataset=None, error=None):
        self.dataset = dataset
        self.error = error
        self.calls = []
        self.closed = False

    def fetch_all_data(self, league):
        self.calls.append(league)
        if self.error is not None:
            raise self.error
        return self.dataset

    def close(self):
        self.closed = True
