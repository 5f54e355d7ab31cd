# stats_dashboard/presentation/charts.py
"""
Chart figures for the dashboard.

Each chart lives in a ChartSlot, which owns at most one figure at a time and
releases the previous one before a new one is installed.
"""

from __future__ import annotations

import json
import threading
from typing import Any, Dict, Optional, Sequence

import plotly.graph_objects as go

from ..models import TeamStanding
from ..utils import sort_by_property

TOP_N = 6

WINS_COLOR = "rgba(37, 99, 235, 0.7)"
WINS_BORDER = "rgba(37, 99, 235, 1)"
LOSSES_COLOR = "rgba(239, 68, 68, 0.7)"
LOSSES_BORDER = "rgba(239, 68, 68, 1)"
POINTS_FILL = "rgba(124, 58, 237, 0.2)"
POINTS_LINE = "rgba(124, 58, 237, 1)"


class ChartSlot:
    """Exclusive owner of one chart figure."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.generation = 0
        self.released = 0
        self._figure: Optional[go.Figure] = None
        self._lock = threading.Lock()

    @property
    def figure(self) -> Optional[go.Figure]:
        return self._figure

    def replace(self, figure: go.Figure) -> go.Figure:
        """Release the current figure (if any), then install `figure`."""
        with self._lock:
            if self._figure is not None:
                self._release_locked()
            self._figure = figure
            self.generation += 1
            return figure

    def release(self) -> None:
        with self._lock:
            if self._figure is not None:
                self._release_locked()

    def _release_locked(self) -> None:
        self._figure.data = ()
        self._figure = None
        self.released += 1

    def to_dict(self) -> Optional[Dict[str, Any]]:
        """Plotly JSON ({"data": [...], "layout": {...}}) or None when empty."""
        with self._lock:
            if self._figure is None:
                return None
            return json.loads(self._figure.to_json())


def _layout(fig: go.Figure, showlegend: bool) -> go.Figure:
    fig.update_layout(
        template="plotly_white",
        showlegend=showlegend,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, x=0),
        margin=dict(l=40, r=20, t=30, b=40),
        height=320,
    )
    fig.update_yaxes(rangemode="tozero")
    return fig


def performance_figure(standings: Sequence[TeamStanding]) -> go.Figure:
    """Grouped bar chart of wins and losses for the top teams by win percentage."""
    top = sort_by_property(standings, "win_pct", ascending=False)[:TOP_N]
    names = [t.name for t in top]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        name="Wins", x=names, y=[t.wins for t in top],
        marker=dict(color=WINS_COLOR, line=dict(color=WINS_BORDER, width=2)),
    ))
    fig.add_trace(go.Bar(
        name="Losses", x=names, y=[t.losses for t in top],
        marker=dict(color=LOSSES_COLOR, line=dict(color=LOSSES_BORDER, width=2)),
    ))
    fig.update_layout(barmode="group")
    return _layout(fig, showlegend=True)


def scoring_figure(standings: Sequence[TeamStanding]) -> go.Figure:
    """Filled line chart of total points for the top teams by points."""
    top = sort_by_property(standings, "points", ascending=False)[:TOP_N]

    fig = go.Figure(go.Scatter(
        name="Total Points",
        x=[t.name for t in top],
        y=[t.points for t in top],
        mode="lines+markers",
        fill="tozeroy",
        fillcolor=POINTS_FILL,
        line=dict(color=POINTS_LINE, width=3, shape="spline", smoothing=0.8),
        marker=dict(size=10),
    ))
    return _layout(fig, showlegend=False)
