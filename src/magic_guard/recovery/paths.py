"""Path auto-correction - suggest existing paths for a mistyped one."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass, field

from magic_guard.similarity.scorer import SimilarityScorer

logger = logging.getLogger(__name__)


@dataclass
class Suggestion:
    """A scored path suggestion."""

    candidate_path: str
    similarity_score: float  # 0.0 to 1.0
    exists: bool


@dataclass
class SuggestionSet:
    """Ranked, capacity-bounded suggestions for one incorrect path."""

    suggestions: list[Suggestion] = field(default_factory=list)
    scanned: int = 0
    scan_truncated: bool = False
    dropped: int = 0

    @property
    def count(self) -> int:
        return len(self.suggestions)

    @property
    def truncated(self) -> bool:
        return self.dropped > 0

    @property
    def best(self) -> Suggestion | None:
        return self.suggestions[0] if self.suggestions else None

    def __iter__(self):
        return iter(self.suggestions)

    def __len__(self) -> int:
        return len(self.suggestions)


@dataclass
class PathAIReport:
    """Suggestion sets for every problematic token of a command line."""

    sets: list[tuple[str, SuggestionSet]] = field(default_factory=list)
    truncated: bool = False

    @property
    def set_count(self) -> int:
        return len(self.sets)


class PathSuggester:
    """Scans a directory for entries resembling a mistyped path."""

    def __init__(
        self,
        scorer: SimilarityScorer | None = None,
        min_score: float = 0.18,
        scan_limit: int = 32,
        max_suggestions: int = 16,
        max_path_length: int = 511,
        max_sets: int = 8,
    ) -> None:
        """Initialize path suggester.

        Args:
            scorer: Similarity metrics to use
            min_score: Entries scoring below this are discarded
            scan_limit: Directory entries examined before the scan stops
            max_suggestions: Capacity of a suggestion set
            max_path_length: Candidates with longer full paths are skipped
            max_sets: Capacity of a command-line report
        """
        self.scorer = scorer or SimilarityScorer()
        self.min_score = min_score
        self.scan_limit = scan_limit
        self.max_suggestions = max_suggestions
        self.max_path_length = max_path_length
        self.max_sets = max_sets

    def suggest(self, bad_path: str | None, base_dir: str | None) -> SuggestionSet:
        """Suggest entries of base_dir that resemble bad_path.

        Only the first scan_limit entries in enumeration order are considered.
        Equal scores keep their enumeration order.

        Args:
            bad_path: The incorrect or misspelled name
            base_dir: Directory to search

        Returns:
            Suggestion set sorted by score, highest first
        """
        result = SuggestionSet()
        if bad_path is None or base_dir is None:
            return result

        candidates: list[Suggestion] = []
        try:
            with os.scandir(base_dir) as entries:
                for entry in entries:
                    if result.scanned >= self.scan_limit:
                        result.scan_truncated = True
                        break
                    result.scanned += 1

                    score = self.scorer.affix_score(bad_path, entry.name)
                    if score < self.min_score:
                        continue

                    full_path = os.path.join(base_dir, entry.name)
                    if len(full_path) > self.max_path_length:
                        logger.debug(f"Skipping overlong candidate: {full_path[:64]}...")
                        continue

                    candidates.append(Suggestion(
                        candidate_path=full_path,
                        similarity_score=score,
                        exists=os.path.exists(full_path),
                    ))
        except OSError as e:
            logger.debug(f"Cannot scan {base_dir}: {e}")
            return SuggestionSet()

        ranked = sorted(candidates, key=lambda s: s.similarity_score, reverse=True)
        result.suggestions = ranked[:self.max_suggestions]
        result.dropped = len(ranked) - len(result.suggestions)

        logger.debug(
            f"Path suggestions for {bad_path!r} in {base_dir}: "
            f"{result.count} kept, {result.dropped} dropped, {result.scanned} scanned"
        )
        return result

    def suggest_for_command_line(
        self,
        tokens: Sequence[str],
        base_dir: str = ".",
    ) -> PathAIReport:
        """Build suggestion sets for every path-like token that does not exist.

        Flags (tokens starting with '-') are skipped. Each missing token is
        matched by its basename against its own parent directory, or against
        base_dir when it has none.

        Args:
            tokens: Command-line arguments
            base_dir: Directory relative paths are resolved against

        Returns:
            Report with at most max_sets suggestion sets
        """
        report = PathAIReport()

        for token in tokens:
            if not token or token.startswith("-"):
                continue

            target = token if os.path.isabs(token) else os.path.join(base_dir, token)
            if os.path.lexists(target):
                continue

            if report.set_count >= self.max_sets:
                report.truncated = True
                break

            parent, name = os.path.split(target.rstrip(os.sep) or target)
            suggestions = self.suggest(name, parent or base_dir)
            report.sets.append((token, suggestions))

        return report
