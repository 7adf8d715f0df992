"""Finished language distance matrix."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from lexdist.distance.errors import LanguageNotFoundError


@dataclass
class DistanceMatrix:
    """Symmetric, zero-diagonal matrix of distances between languages.

    ``language_codes[i]`` labels row and column ``i`` of ``values``. The
    matrix owns its data and keeps no reference to the vocabularies it was
    computed from.
    """

    language_codes: tuple[str, ...]
    values: list[list[float]]
    algorithm: str = ""
    normalized: bool = True
    settings: dict[str, Any] = field(default_factory=dict)
    failed_pairs: list[tuple[str, str]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.language_codes = tuple(self.language_codes)
        n = len(self.language_codes)
        if len(self.values) != n or any(len(row) != n for row in self.values):
            raise ValueError(f"Distance values must be a {n}x{n} square array")
        self._index = {code: i for i, code in enumerate(self.language_codes)}

    @classmethod
    def zeros(cls, language_codes: Sequence[str], **kwargs: Any) -> DistanceMatrix:
        n = len(language_codes)
        return cls(tuple(language_codes), [[0.0] * n for _ in range(n)], **kwargs)

    @property
    def size(self) -> int:
        return len(self.language_codes)

    @property
    def complete(self) -> bool:
        """False when some pairs failed and hold the default 0.0."""
        return not self.failed_pairs

    def index_of(self, code: str) -> int:
        try:
            return self._index[code]
        except KeyError:
            raise LanguageNotFoundError(code) from None

    def get_distance(self, code_a: str, code_b: str) -> float:
        return self.values[self.index_of(code_a)][self.index_of(code_b)]

    def get_all_distances(self, code: str) -> dict[str, float]:
        """Distances from *code* to every other language, in matrix order."""
        i = self.index_of(code)
        return {
            other: self.values[i][j]
            for j, other in enumerate(self.language_codes)
            if j != i
        }

    def is_symmetric(self, tolerance: float = 0.0) -> bool:
        n = self.size
        for i in range(n):
            if abs(self.values[i][i]) > tolerance:
                return False
            for j in range(i + 1, n):
                if abs(self.values[i][j] - self.values[j][i]) > tolerance:
                    return False
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "language_codes": list(self.language_codes),
            "values": [list(row) for row in self.values],
            "algorithm": self.algorithm,
            "normalized": self.normalized,
            "settings": self.settings,
            "failed_pairs": [list(p) for p in self.failed_pairs],
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> DistanceMatrix:
        return cls(
            language_codes=tuple(d["language_codes"]),
            values=[[float(v) for v in row] for row in d["values"]],
            algorithm=d.get("algorithm", ""),
            normalized=d.get("normalized", True),
            settings=d.get("settings", {}),
            failed_pairs=[tuple(p) for p in d.get("failed_pairs", [])],
        )
