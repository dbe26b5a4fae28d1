"""
Tests for cosine similarity and best-match selection.
"""

import math

import numpy as np
import pytest

from signconnect.vector.index import SimilarityIndex, cosine_similarity
from signconnect.vector.types import ScenarioRecord


def unit_with_score(score, dims=3):
    """Unit vector whose cosine with the x axis is exactly score."""
    vector = np.zeros(dims)
    vector[0] = score
    vector[1] = math.sqrt(1 - score * score)
    return vector.tolist()


def record(record_id, vector, label=None):
    return ScenarioRecord(id=record_id, label=label or record_id, vector=vector)


QUERY = [1.0, 0.0, 0.0]


class TestCosineSimilarity:

    def test_identical_vectors(self):
        assert cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)

    def test_opposite_vectors(self):
        assert cosine_similarity([1.0, 0.0], [-1.0, 0.0]) == pytest.approx(-1.0)

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_normalizes_explicitly(self):
        assert cosine_similarity([10.0, 0.0], [0.5, 0.5]) == pytest.approx(math.sqrt(0.5))

    @pytest.mark.parametrize("a,b", [
        ([0.0, 0.0], [1.0, 0.0]),
        ([1.0, 0.0], [0.0, 0.0]),
        ([0.0, 0.0], [0.0, 0.0]),
    ])
    def test_zero_norm_is_zero(self, a, b):
        assert cosine_similarity(a, b) == 0.0

    def test_mismatched_dimensions_is_zero(self):
        assert cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0]) == 0.0

    def test_symmetric(self):
        rng = np.random.default_rng(7)
        for _ in range(50):
            a = rng.standard_normal(16)
            b = rng.standard_normal(16)
            assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))


class TestSimilarityIndex:

    def test_empty_candidates_no_match(self):
        result = SimilarityIndex().best_match(QUERY, [])

        assert not result.matched
        assert result.scenario_id is None
        assert result.label is None

    def test_higher_score_wins(self):
        candidates = [record("a", unit_with_score(0.9)), record("b", unit_with_score(0.95))]

        result = SimilarityIndex().best_match(QUERY, candidates)

        assert result.scenario_id == "b"
        assert result.score == pytest.approx(0.95)
        assert result.record is candidates[1]

    def test_tie_keeps_first(self):
        candidates = [
            record("first", unit_with_score(0.8)),
            record("second", unit_with_score(0.8)),
        ]

        result = SimilarityIndex().best_match(QUERY, candidates)

        assert result.scenario_id == "first"

    def test_score_at_threshold_is_rejected(self):
        candidates = [record("a", [3.0, 4.0, 0.0])]

        result = SimilarityIndex(threshold=0.6).best_match(QUERY, candidates)

        assert not result.matched
        assert result.score == pytest.approx(0.6)

    @pytest.mark.parametrize("score", [-0.5, 0.0, 0.4, 0.59])
    def test_never_returns_score_at_or_below_threshold(self, score):
        result = SimilarityIndex().best_match(QUERY, [record("a", unit_with_score(score))])
        assert result.scenario_id is None

    def test_just_above_threshold_matches(self):
        result = SimilarityIndex().best_match(QUERY, [record("a", unit_with_score(0.61), "Greeting")])

        assert result.matched
        assert result.label == "Greeting"

    def test_custom_threshold(self):
        candidates = [record("a", unit_with_score(0.5))]

        assert SimilarityIndex(threshold=0.4).best_match(QUERY, candidates).matched
        assert not SimilarityIndex(threshold=0.55).best_match(QUERY, candidates).matched

    def test_zero_query_never_matches(self):
        result = SimilarityIndex().best_match([0.0, 0.0, 0.0], [record("a", QUERY)])
        assert not result.matched

    def test_best_candidate_can_be_last(self):
        candidates = [record(str(i), unit_with_score(s)) for i, s in enumerate([0.1, 0.3, 0.7, 0.65, 0.99])]

        result = SimilarityIndex().best_match(QUERY, candidates)

        assert result.scenario_id == "4"
