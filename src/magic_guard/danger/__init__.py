"""Danger detection for filesystem operations."""

from .analyzer import DangerAnalyzer, DangerItem, DangerLevel
from .report import DangerReport, DangerReportAggregator

__all__ = [
    "DangerAnalyzer",
    "DangerItem",
    "DangerLevel",
    "DangerReport",
    "DangerReportAggregator",
]
