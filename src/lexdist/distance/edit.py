"""Levenshtein and Damerau-Levenshtein edit distances."""

from __future__ import annotations

from lexdist.distance.base import DistanceAlgorithm, word_text
from lexdist.vocab.models import Word


def levenshtein(s: str, t: str) -> int:
    """Classic edit distance with two rolling rows.

    The shorter string drives the outer loop so rows have length
    ``len(longer) + 1``.
    """
    if s == t:
        return 0
    if not s:
        return len(t)
    if not t:
        return len(s)
    if len(s) > len(t):
        s, t = t, s

    n = len(t)
    prev = list(range(n + 1))
    curr = [0] * (n + 1)
    for i, sc in enumerate(s, start=1):
        curr[0] = i
        for j in range(1, n + 1):
            cost = 0 if sc == t[j - 1] else 1
            curr[j] = min(
                prev[j] + 1,         # deletion
                curr[j - 1] + 1,     # insertion
                prev[j - 1] + cost,  # substitution
            )
        prev, curr = curr, prev
    return prev[n]


def damerau_levenshtein(s: str, t: str) -> int:
    """Edit distance counting an adjacent transposition as one edit.

    Optimal string alignment variant; keeps three rolling rows because a
    transposition reads the row two steps back.
    """
    n, m = len(s), len(t)
    if n == 0:
        return m
    if m == 0:
        return n

    before = [0] * (m + 1)
    prev = list(range(m + 1))
    curr = [0] * (m + 1)
    for i in range(1, n + 1):
        curr[0] = i
        for j in range(1, m + 1):
            cost = 0 if s[i - 1] == t[j - 1] else 1
            best = min(prev[j] + 1, curr[j - 1] + 1, prev[j - 1] + cost)
            if i > 1 and j > 1 and s[i - 1] == t[j - 2] and s[i - 2] == t[j - 1]:
                best = min(best, before[j - 2] + 1)
            curr[j] = best
        before, prev, curr = prev, curr, before
    return prev[m]


class LevenshteinDistance(DistanceAlgorithm):
    name = "Levenshtein"
    description = (
        "Minimum number of single-character insertions, deletions and "
        "substitutions needed to turn one word into the other."
    )

    def distance(self, a: Word | None, b: Word | None) -> float:
        return float(levenshtein(word_text(a).lower(), word_text(b).lower()))

    def normalized_distance(self, a: Word | None, b: Word | None) -> float:
        """``2d / (len_a + len_b)``, 0 when both words are empty.

        Capped at 1.0: with very unequal lengths ("a" against "bcdef") the
        ratio would otherwise exceed the normalized range.
        """
        total = len(word_text(a)) + len(word_text(b))
        if total == 0:
            return 0.0
        return min(1.0, 2.0 * self.distance(a, b) / total)


class DamerauLevenshteinDistance(DistanceAlgorithm):
    name = "Damerau-Levenshtein"
    description = (
        "Levenshtein distance that also counts a transposition of two "
        "adjacent characters as a single edit."
    )

    def distance(self, a: Word | None, b: Word | None) -> float:
        return float(damerau_levenshtein(word_text(a).lower(), word_text(b).lower()))

    def normalized_distance(self, a: Word | None, b: Word | None) -> float:
        """``d / max(len_a, len_b)``, 0 when both words are empty."""
        max_len = max(len(word_text(a)), len(word_text(b)))
        if max_len == 0:
            return 0.0
        return self.distance(a, b) / max_len
