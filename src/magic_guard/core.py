"""Core Magic Guard functionality."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from magic_guard.config import MagicConfig
from magic_guard.danger.analyzer import DangerAnalyzer, DangerItem
from magic_guard.danger.report import DangerReport, DangerReportAggregator
from magic_guard.recovery.commands import CommandSuggester, ReasonTrace
from magic_guard.recovery.paths import PathAIReport, PathSuggester, SuggestionSet
from magic_guard.recovery.tokens import RecoveryResult, TokenRecoverer
from magic_guard.similarity import scorer as _scorer
from magic_guard.similarity.scorer import SimilarityScorer

logger = logging.getLogger(__name__)


class MagicGuard:
    """Wires every suggestion and danger component to one configuration."""

    def __init__(self, config: MagicConfig | None = None) -> None:
        self.config = config or MagicConfig()
        cfg = self.config

        self.scorer = SimilarityScorer(exact_token_overlap=cfg.exact_token_overlap)
        self.commands = CommandSuggester(self.scorer, threshold=cfg.command_threshold)
        self.paths = PathSuggester(
            self.scorer,
            min_score=cfg.path_min_score,
            scan_limit=cfg.path_scan_limit,
            max_suggestions=cfg.path_max_suggestions,
            max_path_length=cfg.path_max_length,
            max_sets=cfg.report_max_sets,
        )
        self.tokens = TokenRecoverer(
            self.scorer,
            auto_apply_threshold=cfg.auto_apply_threshold,
            capacity=cfg.token_capacity,
        )
        self.analyzer = DangerAnalyzer(
            large_size_bytes=cfg.large_size_bytes,
            recent_window_seconds=cfg.recent_window_seconds,
            size_walk_max_depth=cfg.size_walk_max_depth,
        )
        self.reporter = DangerReportAggregator(self.analyzer, max_items=cfg.report_max_items)

        logger.debug(f"MagicGuard initialized: {cfg.to_dict()}")

    def similarity(self, a: str | None, b: str | None) -> float:
        return self.scorer.similarity(a, b)

    def edit_distance(self, a: str | None, b: str | None) -> int | None:
        return self.scorer.distance(a, b)

    def token_overlap(self, a: str | None, b: str | None) -> int:
        return self.scorer.jaccard(a, b)

    def suggest_command(
        self,
        command: str | None,
        candidates: Sequence[str | None],
        trace: ReasonTrace | None = None,
    ) -> str | None:
        return self.commands.suggest(command, candidates, trace)

    def suggest_paths(self, bad_path: str | None, base_dir: str | None) -> SuggestionSet:
        return self.paths.suggest(bad_path, base_dir)

    def suggest_command_line(self, tokens: Sequence[str], base_dir: str = ".") -> PathAIReport:
        return self.paths.suggest_for_command_line(tokens, base_dir)

    def recover_token(self, token: str | None, candidates: Sequence[str | None]) -> RecoveryResult:
        return self.tokens.recover(token, candidates)

    def analyze_danger(self, path: str | None) -> DangerItem:
        return self.analyzer.analyze(path)

    def report_danger(self, paths: Sequence[str | None]) -> DangerReport:
        return self.reporter.report(paths)


_default: MagicGuard | None = None


def _guard() -> MagicGuard:
    global _default
    if _default is None:
        _default = MagicGuard()
    return _default


def similarity(a: str | None, b: str | None) -> float:
    """Normalized similarity (0.0-1.0) between two strings."""
    return _scorer.similarity(a, b)


def edit_distance(a: str | None, b: str | None) -> int | None:
    """Case-insensitive restricted Damerau-Levenshtein distance, or None."""
    return _scorer.edit_distance(a, b)


def token_overlap(a: str | None, b: str | None) -> int:
    """Token Jaccard index (0-100) between two strings."""
    return _scorer.token_overlap(a, b)


def suggest_command(
    command: str | None,
    candidates: Sequence[str | None],
    trace: ReasonTrace | None = None,
) -> str | None:
    """Closest command from candidates, or None below the acceptance threshold."""
    return _guard().suggest_command(command, candidates, trace)


def suggest_paths(bad_path: str | None, base_dir: str | None) -> SuggestionSet:
    """Ranked entries of base_dir resembling bad_path."""
    return _guard().suggest_paths(bad_path, base_dir)


def recover_token(token: str | None, candidates: Sequence[str | None]) -> RecoveryResult:
    """Best and second-best replacement for a token."""
    return _guard().recover_token(token, candidates)


def analyze_danger(path: str | None) -> DangerItem:
    """Danger analysis of a single path."""
    return _guard().analyze_danger(path)


def report_danger(paths: Sequence[str | None]) -> DangerReport:
    """Aggregated danger analysis of up to eight paths."""
    return _guard().report_danger(paths)
