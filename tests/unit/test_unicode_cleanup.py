"""Tests for token normalisation utilities."""

from __future__ import annotations

import pytest

from lexdist.normalise.unicode_cleanup import (
    clean_headword,
    is_similar_after_normalization,
    normalize_token,
)


class TestNormalizeToken:
    def test_lowercases(self):
        assert normalize_token("CASA") == "casa"

    def test_strips_accents(self):
        assert normalize_token("Café") == "cafe"
        assert normalize_token("coração") == "coracao"
        assert normalize_token("äiti") == "aiti"

    def test_decomposed_input(self):
        assert normalize_token("é") == "e"

    def test_strips_modifier_letters_and_symbols(self):
        # modifier letter apostrophe (Lm) and spacing acute accent (Sk)
        assert normalize_token("aʼb") == "ab"
        assert normalize_token("a´b") == "ab"

    def test_keeps_non_latin_base_letters(self):
        assert normalize_token("вода") == "вода"

    def test_empty_and_none(self):
        assert normalize_token("") == ""
        assert normalize_token(None) == ""

    @pytest.mark.parametrize(
        "text", ["Café", "straße", "İstanbul", "ǅemal", "ﬁne", "Ångström", "x́̂", "नमस्ते", ""]
    )
    def test_idempotent(self, text):
        once = normalize_token(text)
        assert normalize_token(once) == once


class TestIsSimilar:
    def test_accent_insensitive(self):
        assert is_similar_after_normalization("árbol", "arbol")

    def test_different_words(self):
        assert not is_similar_after_normalization("casa", "cosa")

    def test_none_handling(self):
        assert is_similar_after_normalization(None, None)
        assert not is_similar_after_normalization("casa", None)


class TestCleanHeadword:
    def test_collapses_gemination(self):
        assert clean_headword("col·legi") == "collegi"
        assert clean_headword("col.legi") == "collegi"

    def test_preserves_accents(self):
        assert clean_headword("Árbol") == "árbol"

    def test_composes(self):
        assert clean_headword("é") == "é"
