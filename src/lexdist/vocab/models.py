"""Data models for per-language vocabularies."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from lexdist.normalise.unicode_cleanup import normalize_token


@dataclass(frozen=True)
class Word:
    """A headword and its optional gloss. Identity is the original form only."""

    original: str
    gloss: str | None = field(default=None, compare=False)

    def __str__(self) -> str:
        if self.gloss:
            return f"{self.original} ({self.gloss})"
        return self.original

    def to_dict(self) -> dict[str, Any]:
        return {"original": self.original, "gloss": self.gloss}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Word:
        return cls(original=d["original"], gloss=d.get("gloss"))


class Vocabulary:
    """Word store for one language.

    Keeps two indexes:
    - the primary index keyed by the exact original form, so ``"café"`` and
      ``"cafe"`` stay distinct entries;
    - a secondary index keyed by :func:`normalize_token`, whose buckets keep
      insertion order. The first word of a bucket is its representative.

    Built once by a loader, then only read by the distance engine.
    """

    def __init__(self, code: str, name: str | None = None) -> None:
        self.code = code
        self.name = name if name is not None else code
        self._words: dict[str, Word] = {}
        self._by_normalized: dict[str, list[Word]] = defaultdict(list)

    def add_word(self, word: Word | None) -> None:
        """Index *word*; words without an original form are ignored."""
        if word is None or not word.original:
            return
        self._words[word.original] = word
        self._by_normalized[normalize_token(word.original)].append(word)

    def add_words(self, words: Iterable[Word]) -> None:
        for word in words:
            self.add_word(word)

    def get_word(self, original: str | None) -> Word | None:
        if original is None:
            return None
        return self._words.get(original)

    def contains_key(self, original: str | None) -> bool:
        if original is None:
            return False
        return original in self._words

    def word_keys(self) -> list[str]:
        """Original forms in insertion order (a fresh list the caller may shuffle)."""
        return list(self._words)

    def get_representative_word_by_normalized_form(self, normalized_form: str | None) -> Word | None:
        """Return the first word indexed under *normalized_form*, if any."""
        if not normalized_form:
            return None
        bucket = self._by_normalized.get(normalized_form)
        if bucket:
            return bucket[0]
        return None

    def get_words_by_normalized_form(self, normalized_form: str | None) -> tuple[Word, ...]:
        if not normalized_form:
            return ()
        return tuple(self._by_normalized.get(normalized_form, ()))

    def contains_normalized_form(self, original: str | None) -> bool:
        """True if any word normalizes to the same form as *original*."""
        if original is None:
            return False
        return normalize_token(original) in self._by_normalized

    def index_by_gloss(self) -> dict[str, list[Word]]:
        """Group words by trimmed, lower-cased gloss. Words without a gloss are skipped."""
        index: dict[str, list[Word]] = defaultdict(list)
        for word in self._words.values():
            if not word.gloss:
                continue
            key = word.gloss.strip().lower()
            if not key:
                continue
            index[key].append(word)
        return dict(index)

    @property
    def size(self) -> int:
        return len(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, original: object) -> bool:
        return original in self._words

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vocabulary):
            return NotImplemented
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)

    def __repr__(self) -> str:
        return f"Vocabulary(code={self.code!r}, name={self.name!r}, size={len(self)})"

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"
