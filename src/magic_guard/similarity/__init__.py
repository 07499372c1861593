"""String similarity metrics."""

from .scorer import SimilarityScorer, edit_distance, similarity, token_overlap

__all__ = ["SimilarityScorer", "edit_distance", "similarity", "token_overlap"]
