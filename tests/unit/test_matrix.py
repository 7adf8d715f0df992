"""Tests for DistanceMatrix."""

from __future__ import annotations

import pytest

from lexdist.distance.errors import LanguageNotFoundError
from lexdist.distance.matrix import DistanceMatrix


class TestDistanceMatrix:
    def test_get_distance(self, three_language_matrix):
        assert three_language_matrix.get_distance("A", "C") == 0.8
        assert three_language_matrix.get_distance("C", "A") == 0.8
        assert three_language_matrix.get_distance("B", "B") == 0.0

    def test_get_all_distances(self, three_language_matrix):
        assert three_language_matrix.get_all_distances("B") == {"A": 0.2, "C": 0.9}

    def test_unknown_code(self, three_language_matrix):
        with pytest.raises(LanguageNotFoundError) as exc_info:
            three_language_matrix.get_distance("A", "Z")
        assert exc_info.value.code == "Z"
        assert "Z" in str(exc_info.value)

    def test_unknown_code_is_key_error(self, three_language_matrix):
        with pytest.raises(KeyError):
            three_language_matrix.get_all_distances("Z")

    def test_zeros(self):
        m = DistanceMatrix.zeros(["X", "Y"], algorithm="LCS")
        assert m.values == [[0.0, 0.0], [0.0, 0.0]]
        assert m.size == 2
        assert m.algorithm == "LCS"
        assert m.is_symmetric()

    def test_rejects_non_square(self):
        with pytest.raises(ValueError, match="square"):
            DistanceMatrix(("A", "B"), [[0.0, 1.0]])

    def test_is_symmetric(self):
        m = DistanceMatrix(("A", "B"), [[0.0, 0.3], [0.31, 0.0]])
        assert not m.is_symmetric()
        assert m.is_symmetric(tolerance=0.05)

    def test_complete(self, three_language_matrix):
        assert three_language_matrix.complete
        three_language_matrix.failed_pairs.append(("A", "B"))
        assert not three_language_matrix.complete

    def test_dict_roundtrip(self, three_language_matrix):
        three_language_matrix.failed_pairs.append(("B", "C"))
        restored = DistanceMatrix.from_dict(three_language_matrix.to_dict())
        assert restored.language_codes == ("A", "B", "C")
        assert restored.values == three_language_matrix.values
        assert restored.failed_pairs == [("B", "C")]
        assert restored.get_distance("A", "B") == 0.2
