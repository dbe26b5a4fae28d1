"""
Cosine-similarity matching of a query vector against a scenario snapshot.
Linear scan over the candidates; the scenario corpus is small.
"""

from typing import Optional, Sequence
import numpy as np

from .types import EmbeddingVector, MatchResult, ScenarioRecord

DEFAULT_THRESHOLD = 0.6


def cosine_similarity(a: EmbeddingVector, b: EmbeddingVector) -> float:
    """Cosine similarity of two vectors; 0.0 for zero-norm or mismatched vectors."""
    vector_a = np.asarray(a, dtype=float)
    vector_b = np.asarray(b, dtype=float)
    if vector_a.shape != vector_b.shape or vector_a.size == 0:
        return 0.0

    norm_a = np.linalg.norm(vector_a)
    norm_b = np.linalg.norm(vector_b)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    score = float(np.dot(vector_a, vector_b) / (norm_a * norm_b))
    # Clamp floating point drift
    return max(-1.0, min(1.0, score))


class SimilarityIndex:
    """Finds the scenario closest to a query vector above an acceptance threshold."""

    def __init__(self, threshold: float = DEFAULT_THRESHOLD):
        self.threshold = threshold

    def best_match(self, query: EmbeddingVector, candidates: Sequence[ScenarioRecord]) -> MatchResult:
        """
        Return the best scoring candidate, or an empty match.

        Ties keep the first candidate in input order. A candidate is accepted
        only when its score is strictly greater than the threshold.
        """
        best: Optional[ScenarioRecord] = None
        best_score = -1.0

        for candidate in candidates:
            score = cosine_similarity(query, candidate.vector)
            if best is None or score > best_score:
                best = candidate
                best_score = score

        if best is None:
            return MatchResult(score=0.0)

        if best_score <= self.threshold:
            return MatchResult(score=best_score)

        return MatchResult(
            scenario_id=best.id,
            label=best.label,
            score=best_score,
            record=best
        )
