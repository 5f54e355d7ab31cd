# stats_dashboard/config.py
"""
Configuration for the sports stats dashboard.

This module centralizes all tunable settings (stats feed credentials and base URL,
season, request settings, refresh cadence, mock-data behaviour) and the fixed
league rosters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import os
from typing import Dict, Optional, Tuple


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, returning default on missing/invalid values."""
    try:
        return int(os.getenv(name, str(default)))
    except Exception:
        return default


def _env_float(name: str, default: float) -> float:
    """Read a float environment variable, returning default on missing/invalid values."""
    try:
        return float(os.getenv(name, str(default)))
    except Exception:
        return default


def _env_bool(name: str, default: bool) -> bool:
    """
    Read a boolean-ish environment variable.

    Treats these as false: 0, false, no, off
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off")


class League(str, Enum):
    """Selectable leagues. The value is the feed's league path segment."""

    NBA = "nba"
    NFL = "nfl"
    MLB = "mlb"
    NHL = "nhl"
    EPL = "epl"

    @classmethod
    def parse(cls, raw: str) -> "League":
        """Parse a league code case-insensitively; raise ValueError for unknown codes."""
        code = (raw or "").strip().lower()
        try:
            return cls(code)
        except ValueError:
            raise ValueError(f"Unknown league: {raw!r}") from None

    @property
    def label(self) -> str:
        return self.value.upper()

    @property
    def mock_only(self) -> bool:
        """EPL has no feed endpoint; it is always served from mock data."""
        return self is League.EPL


ROSTERS: Dict[League, Tuple[str, ...]] = {
    League.NBA: (
        "Lakers", "Celtics", "Warriors", "Nets", "Bucks", "Heat",
        "Suns", "Nuggets", "Mavericks", "Clippers", "76ers", "Raptors",
    ),
    League.NFL: (
        "Chiefs", "Bills", "49ers", "Eagles", "Cowboys", "Bengals",
        "Patriots", "Packers", "Ravens", "Steelers", "Rams", "Seahawks",
    ),
    League.MLB: (
        "Yankees", "Dodgers", "Red Sox", "Astros", "Braves", "Cubs",
        "Cardinals", "Giants", "Mets", "Phillies", "Rays", "Blue Jays",
    ),
    League.NHL: (
        "Wild", "Stars", "Avalanche", "Jets", "Oilers", "Golden Knights",
        "Rangers", "Bruins", "Maple Leafs", "Panthers", "Hurricanes", "Lightning",
    ),
    League.EPL: (
        "Man City", "Arsenal", "Liverpool", "Chelsea", "Man United", "Tottenham",
        "Newcastle", "Brighton", "Aston Villa", "West Ham", "Leicester", "Everton",
    ),
}

TOP_SCORERS: Tuple[str, ...] = (
    "LeBron James",
    "Stephen Curry",
    "Kevin Durant",
    "Giannis Antetokounmpo",
)

# Password literal the stats feed expects alongside the API key in Basic auth.
FEED_PASSWORD = "MYSPORTSFEED"


def roster_for(league: League) -> Tuple[str, ...]:
    """Return the fixed team roster for a league."""
    return ROSTERS[league]


def is_placeholder_key(key: Optional[str]) -> bool:
    """Return True if the API key is unset or still the template placeholder."""
    k = (key or "").strip()
    if not k:
        return True
    return k.upper().startswith("YOUR_") and k.upper().endswith("_HERE")


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable app configuration.

    Notes:
      - api_key: when unset or a placeholder, every dataset is mock-generated.
      - request_retries: declared for parity with the feed settings; no retry loop uses it.
      - mock_delay / mock_error_rate: simulated latency and transient failures on mock paths.
    """

    # Stats feed
    api_key: Optional[str] = os.getenv("SPORTS_API_KEY") or None
    api_base: str = os.getenv("SPORTS_API_BASE", "https://api.mysportsfeeds.com/v2.1/pull")
    season: str = os.getenv("SPORTS_SEASON", "2024-2025-regular")

    # Request settings
    request_timeout_seconds: int = _env_int("REQUEST_TIMEOUT_SECONDS", 10)
    request_retries: int = _env_int("REQUEST_RETRIES", 3)
    response_format: str = os.getenv("RESPONSE_FORMAT", "json")

    # Dashboard behaviour
    default_league: str = os.getenv("DEFAULT_LEAGUE", "nba")
    auto_refresh_seconds: float = _env_float("AUTO_REFRESH_SECONDS", 60.0)
    search_debounce_ms: int = _env_int("SEARCH_DEBOUNCE_MS", 300)
    notification_seconds: float = _env_float("NOTIFICATION_SECONDS", 3.0)

    # Mock data
    mock_delay: bool = _env_bool("MOCK_DELAY", True)
    mock_error_rate: float = _env_float("MOCK_ERROR_RATE", 0.05)
    mock_game_count: int = _env_int("MOCK_GAME_COUNT", 6)

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    leagues: Tuple[League, ...] = field(default_factory=lambda: tuple(League))

    def __post_init__(self):
        """Normalize the default league and clamp the mock error rate."""
        # dataclass frozen => use object.__setattr__
        try:
            league = League.parse(self.default_league)
        except ValueError:
            league = League.NBA
        object.__setattr__(self, "default_league", league.value)
        object.__setattr__(self, "mock_error_rate", min(max(self.mock_error_rate, 0.0), 1.0))

    @property
    def has_api_key(self) -> bool:
        return not is_placeholder_key(self.api_key)
