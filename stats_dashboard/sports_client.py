# stats_dashboard/sports_client.py
"""
Thin HTTP client wrapper for the stats feed.
"""

from __future__ import annotations

import requests
from requests.auth import HTTPBasicAuth
from typing import Any, Dict

from .config import FEED_PASSWORD


class SportsFeedError(Exception):
    """Raised for any failed feed request: transport error, non-2xx status or bad JSON."""


class SportsFeedClient:
    """A minimal client for retrieving JSON from the stats feed base."""

    def __init__(self, base_url: str, api_key: str, season: str, timeout: int = 10, response_format: str = "json") -> None:
        """Store the base URL and build auth + request headers."""
        self.base_url = base_url.rstrip("/")
        self.season = season
        self.timeout = timeout
        self.response_format = response_format
        self._auth = HTTPBasicAuth(api_key, FEED_PASSWORD)
        self._headers = {
            "Accept": "application/json",
            "User-Agent": "stats-dashboard/1.0",
        }

    def url_for(self, league: str, endpoint: str) -> str:
        """Build {base}/{league}/{season}/{endpoint}.{format}."""
        return f"{self.base_url}/{league}/{self.season}/{endpoint}.{self.response_format}"

    def get_json(self, league: str, endpoint: str) -> Dict[str, Any]:
        """
        Execute a GET request for a league endpoint and return parsed JSON.

        Raises:
            SportsFeedError on transport failures, non-2xx responses or a body that is not a JSON object.
        """
        url = self.url_for(league, endpoint)
        try:
            r = requests.get(url, timeout=self.timeout, headers=self._headers, auth=self._auth)
            r.raise_for_status()
            payload = r.json()
        except requests.RequestException as exc:
            raise SportsFeedError(f"Request to {url} failed: {exc}") from exc
        except ValueError as exc:
            raise SportsFeedError(f"Malformed JSON from {url}: {exc}") from exc

        if not isinstance(payload, dict):
            raise SportsFeedError(f"Unexpected payload type from {url}: {type(payload).__name__}")
        return payload

    def standings(self, league: str) -> Dict[str, Any]:
        """Fetch the season standings payload for a league."""
        return self.get_json(league, "standings")

    def games(self, league: str) -> Dict[str, Any]:
        """Fetch the season games payload for a league."""
        return self.get_json(league, "games")
