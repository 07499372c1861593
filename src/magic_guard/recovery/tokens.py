"""Token auto-recovery - replace a misspelled argument with a known one."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from magic_guard.similarity.scorer import SimilarityScorer

logger = logging.getLogger(__name__)


@dataclass
class RecoveryResult:
    """Best and second-best replacement for a single token."""

    original_token: str = ""
    recovered_token: str = ""
    confidence: float = 0.0
    applied: bool = False  # True = safe to auto-apply, False = manual review
    first_best_token: str = ""
    first_best_confidence: float = 0.0
    second_best_token: str = ""
    second_best_confidence: float = 0.0


class TokenRecoverer:
    """Picks replacements for a token from a list of candidates."""

    def __init__(
        self,
        scorer: SimilarityScorer | None = None,
        auto_apply_threshold: float = 0.80,
        capacity: int = 255,
    ) -> None:
        """Initialize token recoverer.

        Args:
            scorer: Similarity metrics to use
            auto_apply_threshold: Best score must exceed this to auto-apply
            capacity: Maximum stored length of any token text
        """
        self.scorer = scorer or SimilarityScorer()
        self.auto_apply_threshold = auto_apply_threshold
        self.capacity = capacity

    def _bounded(self, text: str) -> str:
        return text[:self.capacity]

    def recover(
        self,
        token: str | None,
        candidates: Sequence[str | None],
    ) -> RecoveryResult:
        """Recover a token from a list of candidates.

        The first of several equally top-scoring candidates becomes the best;
        a candidate scoring zero is never chosen.

        Args:
            token: The input token
            candidates: Candidate replacements; None entries are skipped

        Returns:
            Recovery result with best and second-best matches
        """
        token = token or ""
        best_score = 0.0
        best: str | None = None
        second_score = 0.0
        second: str | None = None

        for candidate in candidates:
            if candidate is None:
                continue

            score = self.scorer.affix_score(token, candidate)
            if score > best_score:
                second_score, second = best_score, best
                best_score, best = score, candidate
            elif score > second_score:
                second_score, second = score, candidate

        result = RecoveryResult(original_token=self._bounded(token))
        if best is None:
            return result

        result.first_best_token = self._bounded(best)
        result.first_best_confidence = best_score
        result.recovered_token = result.first_best_token
        result.confidence = best_score
        result.applied = best_score > self.auto_apply_threshold

        if second is not None:
            result.second_best_token = self._bounded(second)
            result.second_best_confidence = second_score

        logger.debug(
            f"Recovered {token!r} -> {best!r} (confidence={best_score:.3f}, "
            f"applied={result.applied})"
        )
        return result
