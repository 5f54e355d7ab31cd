"""
Presentation package exports.
"""
from .charts import ChartSlot, performance_figure, scoring_figure
from .notifications import Notification, Notifier
from .view import DashboardView

__all__ = [
    "ChartSlot",
    "DashboardView",
    "Notification",
    "Notifier",
    "performance_figure",
    "scoring_figure",
]
