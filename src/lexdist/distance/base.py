"""Common interface of the word distance algorithms."""

from __future__ import annotations

from abc import ABC, abstractmethod

from lexdist.vocab.models import Word


def word_text(word: Word | None) -> str:
    """Original form of *word*, or ``""`` when it is missing."""
    if word is None or word.original is None:
        return ""
    return word.original


class DistanceAlgorithm(ABC):
    """Stateless pairwise distance between two words.

    ``distance`` is in algorithm units (edit operations for the edit
    distances), ``normalized_distance`` is always in [0, 1]. Both compare
    words case-insensitively and treat a missing word as the empty string.
    """

    name: str = ""
    description: str = ""

    @abstractmethod
    def distance(self, a: Word | None, b: Word | None) -> float:
        ...

    @abstractmethod
    def normalized_distance(self, a: Word | None, b: Word | None) -> float:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
