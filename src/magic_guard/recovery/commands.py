"""Command name suggestion - pick the closest known command for a typo."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from magic_guard.similarity.scorer import SimilarityScorer, clamp, fold_case

logger = logging.getLogger(__name__)

PREFIX_BONUS = 0.15
SUFFIX_BONUS = 0.10
CASE_INSENSITIVE_BONUS = 0.05
EXACT_BONUS = 0.20


@dataclass
class ReasonTrace:
    """Scoring details for the winning candidate of a command suggestion."""

    input: str | None = None
    suggested: str | None = None
    edit_distance: int = 0
    confidence_score: float = 0.0
    jaccard_index: int = 0  # 0-100
    prefix_match: bool = False
    suffix_match: bool = False
    case_insensitive: bool = False
    reason: str = ""


def describe_score(score: float, prefix: bool, case_insensitive: bool) -> str:
    """Pick the human-readable reason for a command match."""
    if score >= 0.95:
        return "Exact or strong semantic match"
    if score >= 0.85:
        return "Strong semantic and token match"
    if score >= 0.70:
        return "Close semantic match"
    if prefix:
        return "Prefix match"
    if case_insensitive:
        return "Case-insensitive match"
    return "Low confidence match"


class CommandSuggester:
    """Ranks candidate commands against a mistyped command name."""

    def __init__(
        self,
        scorer: SimilarityScorer | None = None,
        threshold: float = 0.70,
    ) -> None:
        """Initialize command suggester.

        Args:
            scorer: Similarity metrics to use
            threshold: Minimum score (0.0-1.0) for a suggestion to be returned
        """
        self.scorer = scorer or SimilarityScorer()
        self.threshold = threshold

    def score(self, command: str, candidate: str) -> ReasonTrace:
        """Score one candidate, returning the full trace for it."""
        distance = self.scorer.distance(command, candidate)
        jaccard = self.scorer.jaccard(command, candidate)
        prefix = candidate.startswith(command)
        suffix = len(command) <= len(candidate) and fold_case(candidate).endswith(fold_case(command))
        case_insensitive = fold_case(command) == fold_case(candidate)
        exact = command == candidate

        score = self.scorer.similarity(command, candidate)
        if prefix:
            score += PREFIX_BONUS
        if suffix:
            score += SUFFIX_BONUS
        if case_insensitive:
            score += CASE_INSENSITIVE_BONUS
        if exact:
            score += EXACT_BONUS
        # Overlap is already part of similarity(); it is added a second time here.
        score += jaccard / 200.0

        return ReasonTrace(
            input=command,
            suggested=candidate,
            edit_distance=distance,
            confidence_score=clamp(score),
            jaccard_index=jaccard,
            prefix_match=prefix,
            suffix_match=suffix,
            case_insensitive=case_insensitive,
        )

    def suggest(
        self,
        command: str | None,
        candidates: Sequence[str | None],
        trace: ReasonTrace | None = None,
    ) -> str | None:
        """Suggest the closest matching command.

        The trace, when given, is filled for the best candidate even if its
        score is below the threshold and None is returned.

        Args:
            command: The mistyped command
            candidates: Known command names; None entries are skipped
            trace: Optional trace to fill with the winner's scoring details

        Returns:
            The best candidate if its score reaches the threshold, else None
        """
        if command is None or not candidates:
            return None

        best: ReasonTrace | None = None
        best_score = 0.0
        best_distance: float = math.inf
        best_prefix = False

        for candidate in candidates:
            if candidate is None:
                continue

            current = self.score(command, candidate)
            exact = command == candidate
            score = current.confidence_score
            distance = current.edit_distance

            if (
                exact
                or score > best_score
                or (score == best_score and distance < best_distance)
                or (score == best_score and distance == best_distance and current.prefix_match > best_prefix)
            ):
                best = current
                best_score = score
                best_distance = distance
                best_prefix = current.prefix_match

        if best is None:
            return None

        best.reason = describe_score(best.confidence_score, best.prefix_match, best.case_insensitive)
        logger.debug(
            f"Best command for {command!r}: {best.suggested!r} "
            f"(score={best.confidence_score:.3f}, distance={best.edit_distance})"
        )

        if trace is not None:
            trace.input = best.input
            trace.suggested = best.suggested
            trace.edit_distance = best.edit_distance
            trace.confidence_score = best.confidence_score
            trace.jaccard_index = best.jaccard_index
            trace.prefix_match = best.prefix_match
            trace.suffix_match = best.suffix_match
            trace.case_insensitive = best.case_insensitive
            trace.reason = best.reason

        return best.suggested if best.confidence_score >= self.threshold else None
