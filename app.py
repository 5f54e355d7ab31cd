# app.py
"""
Flask entrypoint for the sports stats dashboard.

Routes:
  HTML:
    - /                      dashboard page

  JSON:
    - GET  /api/state        current view state (stats, standings, games, charts, toasts)
    - POST /api/league       league=nba|nfl|mlb|nhl|epl
    - POST /api/sport        sport=...
    - GET  /api/search       q=... (filters the loaded standings/games)
    - POST /api/refresh
    - POST /api/retry
    - GET  /api/lookup       q=...&league=... (team/player lookup)

Notes:
  - One DashboardHandler per process owns the state and the auto-refresh timer.
  - Form fields and JSON bodies are both accepted for POST parameters.
  - Run a single worker (gunicorn -w 1 'app:create_app()'); each worker would own its own state and timer.
"""

from __future__ import annotations

import atexit
import logging
import os
from typing import Any, Dict, Optional

from flask import Flask, jsonify, render_template, request

from stats_dashboard.config import AppConfig, League
from stats_dashboard.handlers.dashboard_handler import DashboardHandler
from stats_dashboard.models import Dataset
from stats_dashboard.presentation.notifications import Notifier
from stats_dashboard.presentation.view import DashboardView
from stats_dashboard.services.data_source import DataSource

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or "INFO").upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def create_app(
    cfg: Optional[AppConfig] = None,
    data_source: Optional[DataSource] = None,
    start: bool = True,
) -> Flask:
    """
    App factory.

    Builds the data source, view and handler once per process. With start=True the
    first load runs immediately and auto-refresh begins; the timer is stopped at exit.
    """
    cfg = cfg or AppConfig()
    configure_logging(cfg.log_level)

    source = data_source or DataSource.from_config(cfg)
    view = DashboardView(notifier=Notifier(duration=cfg.notification_seconds))
    handler = DashboardHandler(
        data_source=source,
        view=view,
        default_league=League.parse(cfg.default_league),
        auto_refresh_seconds=cfg.auto_refresh_seconds,
        search_debounce_seconds=cfg.search_debounce_ms / 1000.0,
    )

    app = Flask(__name__)
    app.config["DASHBOARD_HANDLER"] = handler

    if start:
        handler.init()
        atexit.register(handler.shutdown)

    # -------------------------
    # Shared parsing helpers
    # -------------------------

    def param(name: str, default: str = "") -> str:
        """Read a parameter from JSON body, form data or query string."""
        body = request.get_json(silent=True)
        if isinstance(body, dict) and body.get(name) is not None:
            return str(body.get(name)).strip()
        raw = request.form.get(name) or request.args.get(name)
        return (raw or default).strip()

    def state_payload() -> Dict[str, Any]:
        """View state plus handler-level fields."""
        out = view.to_dict()
        out["league"] = handler.state.current_league.value
        out["leagues"] = [lg.value for lg in cfg.leagues]
        data: Optional[Dataset] = handler.state.all_data
        out["lastUpdated"] = data.timestamp.isoformat() if data else None
        out["sources"] = dict(data.sources) if data else {}
        return out

    def bad_request(message: str):
        return jsonify({"ok": False, "error": message}), 400

    # -------------------------
    # HTML
    # -------------------------

    @app.get("/")
    def dashboard():
        """Full dashboard page."""
        return render_template(
            "dashboard.html",
            state=state_payload(),
            refresh_ms=int(cfg.auto_refresh_seconds * 1000),
            debounce_ms=cfg.search_debounce_ms,
        )

    # -------------------------
    # JSON
    # -------------------------

    @app.get("/api/state")
    def api_state():
        return jsonify(state_payload())

    @app.post("/api/league")
    def api_league():
        """Switch league; reselecting the current league is a no-op."""
        try:
            changed = handler.handle_league_change(param("league"))
        except ValueError as exc:
            return bad_request(str(exc))
        return jsonify({"ok": True, "changed": changed, **state_payload()})

    @app.post("/api/sport")
    def api_sport():
        handler.handle_sport_change(param("sport"))
        return jsonify({"ok": True, **state_payload()})

    @app.get("/api/search")
    def api_search():
        """Filter the loaded standings and games by the query (empty restores all)."""
        result = handler.handle_search(param("q"))
        return jsonify({
            "ok": True,
            "query": param("q"),
            "matches": {"standings": len(result["standings"]), "games": len(result["games"])},
            **state_payload(),
        })

    @app.post("/api/refresh")
    def api_refresh():
        ok = handler.handle_refresh()
        return jsonify({"ok": ok, **state_payload()})

    @app.post("/api/retry")
    def api_retry():
        ok = handler.handle_retry()
        return jsonify({"ok": ok, **state_payload()})

    @app.get("/api/lookup")
    def api_lookup():
        """Team/player lookup for a query."""
        league_raw = param("league", handler.state.current_league.value)
        try:
            league = League.parse(league_raw)
        except ValueError as exc:
            return bad_request(str(exc))

        res = source.search_data(param("q"), league)
        out: Dict[str, Any] = {
            "success": res.success,
            "league": res.league,
            "data": [
                {k: v for k, v in vars(m).items() if v is not None}
                for m in res.data
            ],
        }
        if res.message:
            out["message"] = res.message
        else:
            out["query"] = param("q")
        return jsonify(out)

    # -------------------------
    # Health
    # -------------------------

    @app.get("/health")
    def health():
        """Simple health endpoint for Docker/monitoring checks."""
        return {"ok": True}

    return app


if __name__ == "__main__":
    # Dev server (not for production).
    app = create_app()
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "8000")), debug=False)
