"""Longest-common-subsequence distance (insertions and deletions only)."""

from __future__ import annotations

from lexdist.distance.base import DistanceAlgorithm, word_text
from lexdist.vocab.models import Word


def lcs_length(s1: str, s2: str) -> int:
    """Length of the longest common subsequence, O(min(len)) memory."""
    if len(s1) > len(s2):
        s1, s2 = s2, s1
    m = len(s1)
    prev = [0] * (m + 1)
    curr = [0] * (m + 1)
    for cj in s2:
        curr[0] = 0
        for i in range(1, m + 1):
            if s1[i - 1] == cj:
                curr[i] = prev[i - 1] + 1
            else:
                curr[i] = max(prev[i], curr[i - 1])
        prev, curr = curr, prev
    return prev[m]


def lcs_distance(s1: str, s2: str) -> int:
    if s1 == s2:
        return 0
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)
    return len(s1) + len(s2) - 2 * lcs_length(s1, s2)


class LongestCommonSubsequence(DistanceAlgorithm):
    name = "Longest Common Subsequence"
    description = (
        "Number of characters outside the longest subsequence shared by "
        "both words, in order but not necessarily contiguous."
    )

    def distance(self, a: Word | None, b: Word | None) -> float:
        return float(lcs_distance(word_text(a).lower(), word_text(b).lower()))

    def normalized_distance(self, a: Word | None, b: Word | None) -> float:
        """``d / (len_a + len_b)``, 0 when both words are empty."""
        total = len(word_text(a)) + len(word_text(b))
        if total == 0:
            return 0.0
        return min(1.0, self.distance(a, b) / total)
