"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from lexdist.distance.matrix import DistanceMatrix
from lexdist.vocab.models import Vocabulary, Word

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def config_path() -> Path:
    return FIXTURES_DIR / "config_test.yaml"


@pytest.fixture
def make_vocab() -> Callable[..., Vocabulary]:
    """Build a Vocabulary from ``{original: gloss}``."""

    def _make(code: str, entries: dict[str, str | None], name: str | None = None) -> Vocabulary:
        vocab = Vocabulary(code, name or code)
        for original, gloss in entries.items():
            vocab.add_word(Word(original, gloss))
        return vocab

    return _make


@pytest.fixture
def three_language_matrix() -> DistanceMatrix:
    return DistanceMatrix(
        ("A", "B", "C"),
        [
            [0.0, 0.2, 0.8],
            [0.2, 0.0, 0.9],
            [0.8, 0.9, 0.0],
        ],
    )
