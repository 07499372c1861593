"""Combined danger report for operations touching several paths."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from magic_guard.danger.analyzer import DangerAnalyzer, DangerItem, DangerLevel

logger = logging.getLogger(__name__)

# Weight re-derived from each item's level when aggregating
LEVEL_WEIGHTS = {
    DangerLevel.CRITICAL: 8,
    DangerLevel.HIGH: 5,
    DangerLevel.MEDIUM: 3,
    DangerLevel.LOW: 1,
    DangerLevel.NONE: 0,
}

WARN_TOTAL_SCORE = 10
BLOCK_TOTAL_SCORE = 16


@dataclass
class DangerReport:
    """Danger analysis summary for a multi-path operation."""

    items: list[DangerItem] = field(default_factory=list)
    overall_level: DangerLevel = DangerLevel.NONE
    total_score: int = 0
    block_recommended: bool = False  # halt unless the user forces it
    warning_required: bool = False
    ignored_count: int = 0

    @property
    def item_count(self) -> int:
        return len(self.items)

    def summary(self) -> str:
        """Short human-readable reason for the recommendation."""
        if not self.items:
            return "No paths analyzed"

        worst = max(self.items, key=lambda i: i.level)
        flagged = [name for name, value in worst.signals().items() if value]
        detail = f" ({', '.join(flagged)})" if flagged else ""

        if self.block_recommended:
            verdict = "Blocking recommended"
        elif self.warning_required:
            verdict = "Warning required"
        else:
            verdict = "No significant danger"

        text = (
            f"{verdict}: overall {self.overall_level.name}, "
            f"worst path {worst.target_path}{detail}"
        )
        if self.ignored_count:
            text += f"; {self.ignored_count} path(s) not analyzed"
        return text

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall_level": self.overall_level.name,
            "total_score": self.total_score,
            "block_recommended": self.block_recommended,
            "warning_required": self.warning_required,
            "item_count": self.item_count,
            "ignored_count": self.ignored_count,
            "summary": self.summary(),
            "items": [item.to_dict() for item in self.items],
        }


class DangerReportAggregator:
    """Runs danger analysis over several paths and recommends warn/block."""

    def __init__(
        self,
        analyzer: DangerAnalyzer | None = None,
        max_items: int = 8,
    ) -> None:
        self.analyzer = analyzer or DangerAnalyzer()
        self.max_items = max_items

    def report(self, paths: Sequence[str | None]) -> DangerReport:
        """Analyze up to max_items paths and aggregate the result.

        The total score sums a weight per item level rather than the
        per-signal scores of the items.

        Args:
            paths: Paths targeted by the operation; extras are ignored

        Returns:
            Aggregated danger report
        """
        report = DangerReport()

        for path in paths[:self.max_items]:
            item = self.analyzer.analyze(path)
            report.items.append(item)
            report.overall_level = max(report.overall_level, item.level)
            report.total_score += LEVEL_WEIGHTS[item.level]

        report.ignored_count = max(0, len(paths) - self.max_items)
        report.warning_required = (
            report.overall_level >= DangerLevel.MEDIUM
            or report.total_score >= WARN_TOTAL_SCORE
        )
        report.block_recommended = (
            report.overall_level >= DangerLevel.CRITICAL
            or report.total_score >= BLOCK_TOTAL_SCORE
        )

        if report.ignored_count:
            logger.warning(f"Danger report ignored {report.ignored_count} path(s) beyond {self.max_items}")
        logger.debug(report.summary())
        return report
