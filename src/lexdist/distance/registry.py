"""Lookup of distance algorithms by configured type."""

from __future__ import annotations

from lexdist.config.schema import AlgorithmType
from lexdist.distance.base import DistanceAlgorithm
from lexdist.distance.edit import DamerauLevenshteinDistance, LevenshteinDistance
from lexdist.distance.jaro_winkler import JaroWinklerDistance
from lexdist.distance.lcs import LongestCommonSubsequence

_ALGORITHMS: dict[AlgorithmType, type[DistanceAlgorithm]] = {
    AlgorithmType.LEVENSHTEIN: LevenshteinDistance,
    AlgorithmType.DAMERAU_LEVENSHTEIN: DamerauLevenshteinDistance,
    AlgorithmType.JARO_WINKLER: JaroWinklerDistance,
    AlgorithmType.LCS: LongestCommonSubsequence,
}


def create_algorithm(algorithm: AlgorithmType | str) -> DistanceAlgorithm:
    """Instantiate the algorithm for *algorithm* (enum member or its value)."""
    try:
        key = AlgorithmType(algorithm)
    except ValueError:
        raise ValueError(f"Unknown distance algorithm: {algorithm}") from None
    return _ALGORITHMS[key]()


def available_algorithms() -> list[AlgorithmType]:
    return list(_ALGORITHMS)
