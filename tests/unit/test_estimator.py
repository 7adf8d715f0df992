"""Tests for LanguageDistanceEstimator and sample planning."""

from __future__ import annotations

import threading

import pytest

from lexdist.config.schema import BuildSettings
from lexdist.distance.base import DistanceAlgorithm
from lexdist.distance.edit import LevenshteinDistance
from lexdist.distance.errors import BuildCancelledError
from lexdist.distance.estimator import (
    LanguageDistanceEstimator,
    glosses_match,
    plan_samples,
    sampling_seed,
    stable_name_hash,
)
from lexdist.ingest.dictionary_loader import load_dictionary
from lexdist.vocab.models import Vocabulary, Word


def _settings(**overrides) -> BuildSettings:
    base = dict(use_parallelization=False, use_sampling=False)
    base.update(overrides)
    return BuildSettings(**base)


class _ConstantDistance(DistanceAlgorithm):
    name = "Constant"
    description = "Same distance for every pair"

    def distance(self, a, b):
        return 3.0

    def normalized_distance(self, a, b):
        return 0.95


class TestPairDistance:
    def test_levenshtein_normalized(self):
        est = LanguageDistanceEstimator(LevenshteinDistance(), _settings(use_semantic_bonus=False))
        d = est.pair_distance(Word("gat", "cat"), Word("gato", "cat"))
        assert d == pytest.approx(2 / 7)

    def test_semantic_bonus(self):
        est = LanguageDistanceEstimator(LevenshteinDistance(), _settings())
        d = est.pair_distance(Word("gat", "cat"), Word("gato", "CAT"))
        assert d == pytest.approx(2 / 7 * 0.8)

    def test_no_bonus_without_both_glosses(self):
        est = LanguageDistanceEstimator(LevenshteinDistance(), _settings())
        d = est.pair_distance(Word("gat", "cat"), Word("gato", None))
        assert d == pytest.approx(2 / 7)

    def test_raw_units_when_not_normalized(self):
        est = LanguageDistanceEstimator(
            LevenshteinDistance(), _settings(normalized=False, use_semantic_bonus=False)
        )
        assert est.pair_distance(Word("gat"), Word("gato")) == 1


class TestGlossesMatch:
    def test_case_insensitive(self):
        assert glosses_match(Word("a", "House"), Word("b", "HOUSE"))

    def test_sharp_s_does_not_match_ss(self):
        assert not glosses_match(Word("a", "Straße"), Word("b", "STRASSE"))

    def test_missing(self):
        assert not glosses_match(Word("a", ""), Word("b", ""))
        assert not glosses_match(Word("a", None), Word("b", "x"))


class TestWordDistance:
    def test_normalized_form_shortcut(self, make_vocab):
        lang_b = make_vocab("B", {"cafe": "coffee", "zzzzz": "noise"})
        est = LanguageDistanceEstimator(LevenshteinDistance(), _settings())
        words_b = [lang_b.get_word("zzzzz")]
        # "café" matches "cafe" through the normalized index even though the
        # sample holds only "zzzzz"
        assert est.word_distance(Word("café"), lang_b, words_b) == pytest.approx(2 / 8)

    def test_shortcut_disabled_scans_sample(self, make_vocab):
        lang_b = make_vocab("B", {"casa": None, "cosa": None})
        est = LanguageDistanceEstimator(
            LevenshteinDistance(), _settings(use_normalized_form_matching=False)
        )
        words_b = [lang_b.get_word("cosa")]
        assert est.word_distance(Word("casa"), lang_b, words_b) == pytest.approx(2 / 8)

    def test_empty_sample_is_maximal(self, make_vocab):
        lang_b = make_vocab("B", {})
        est = LanguageDistanceEstimator(LevenshteinDistance(), _settings())
        assert est.word_distance(Word("casa"), lang_b, []) == 1.0


class TestEstimate:
    def test_identical_single_word(self, make_vocab):
        a = make_vocab("A", {"casa": "house"})
        b = make_vocab("B", {"casa": "house"})
        est = LanguageDistanceEstimator(LevenshteinDistance(), _settings())
        assert est.estimate(a, b) == 0.0

    def test_empty_vocabulary(self, make_vocab):
        a = make_vocab("A", {})
        b = make_vocab("B", {"casa": "house"})
        est = LanguageDistanceEstimator(LevenshteinDistance(), _settings())
        assert est.estimate(a, b) == 1.0
        assert est.estimate(b, a) == 1.0

    def test_short_words_ignored(self, make_vocab):
        a = make_vocab("A", {"el": "the", "la": "the"})
        b = make_vocab("B", {"el": "the"})
        est = LanguageDistanceEstimator(LevenshteinDistance(), _settings())
        assert est.estimate(a, b) == 1.0

    def test_small_vocabularies_under_sampling(self, make_vocab):
        a = make_vocab("A", {"casa": "house"})
        b = make_vocab("B", {"casa": "house"})
        est = LanguageDistanceEstimator(LevenshteinDistance(), _settings(use_sampling=True))
        # chunks of fewer than five words are never retained
        assert est.estimate(a, b) == 1.0

    def test_unrelated_cutoff(self, make_vocab):
        a = make_vocab("A", {"uno": None, "dos": None})
        b = make_vocab("B", {"tres": None})
        est = LanguageDistanceEstimator(_ConstantDistance(), _settings())
        assert est.estimate(a, b) == 1.0

    def test_no_cutoff_in_raw_units(self, make_vocab):
        a = make_vocab("A", {"uno": None, "dos": None})
        b = make_vocab("B", {"tres": None})
        est = LanguageDistanceEstimator(_ConstantDistance(), _settings(normalized=False))
        assert est.estimate(a, b) == 3.0

    def test_in_unit_range(self, fixtures_dir):
        es = load_dictionary(fixtures_dir / "spanish.txt", "ES", "Spanish")
        fi = load_dictionary(fixtures_dir / "finnish.txt", "FI", "Finnish")
        est = LanguageDistanceEstimator(LevenshteinDistance(), _settings(use_sampling=True))
        assert 0.0 <= est.estimate(es, fi) <= 1.0

    def test_related_closer_than_unrelated(self, fixtures_dir):
        es = load_dictionary(fixtures_dir / "spanish.txt", "ES", "Spanish")
        pt = load_dictionary(fixtures_dir / "portuguese.txt", "PT", "Portuguese")
        fi = load_dictionary(fixtures_dir / "finnish.txt", "FI", "Finnish")
        est = LanguageDistanceEstimator(LevenshteinDistance(), _settings())
        assert est.estimate(es, pt) < est.estimate(es, fi)

    def test_parallel_matches_sequential(self, fixtures_dir):
        es = load_dictionary(fixtures_dir / "spanish.txt", "ES", "Spanish")
        it = load_dictionary(fixtures_dir / "italian.txt", "IT", "Italian")
        sequential = LanguageDistanceEstimator(
            LevenshteinDistance(), _settings(use_sampling=True)
        ).estimate(es, it)
        with LanguageDistanceEstimator(
            LevenshteinDistance(),
            _settings(use_sampling=True, use_parallelization=True),
            max_workers=4,
        ) as est:
            parallel = est.estimate(es, it)
        assert parallel == sequential

    def test_sampling_is_reproducible(self, fixtures_dir):
        es = load_dictionary(fixtures_dir / "spanish.txt", "ES", "Spanish")
        it = load_dictionary(fixtures_dir / "italian.txt", "IT", "Italian")
        settings = _settings(use_sampling=True, num_samples=2, max_sample_size=20)
        first = LanguageDistanceEstimator(LevenshteinDistance(), settings).estimate(es, it)
        second = LanguageDistanceEstimator(LevenshteinDistance(), settings).estimate(es, it)
        assert first == second

    def test_cancelled(self, fixtures_dir):
        es = load_dictionary(fixtures_dir / "spanish.txt", "ES", "Spanish")
        it = load_dictionary(fixtures_dir / "italian.txt", "IT", "Italian")
        event = threading.Event()
        event.set()
        est = LanguageDistanceEstimator(LevenshteinDistance(), _settings(use_sampling=True))
        with pytest.raises(BuildCancelledError):
            est.estimate(es, it, event)


class TestSamplingSeed:
    def test_stable_hash(self):
        assert stable_name_hash("Spanish") == stable_name_hash("Spanish")
        assert stable_name_hash("Spanish") != stable_name_hash("Italian")

    def test_seed_is_order_independent(self):
        a, b = Vocabulary("ES", "Spanish"), Vocabulary("IT", "Italian")
        assert sampling_seed(a, b) == sampling_seed(b, a)


class TestPlanSamples:
    def test_even_split(self):
        plan = plan_samples(30, 30, 3, 200)
        assert plan.chunk_size_a == 10
        assert plan.ranges == (
            ((0, 10), (0, 10)),
            ((10, 20), (10, 20)),
            ((20, 30), (20, 30)),
        )

    def test_capped_by_max_sample_size(self):
        plan = plan_samples(1000, 1000, 2, 100)
        assert plan.chunk_size_a == 50
        assert plan.ranges == (((0, 50), (0, 50)), ((50, 100), (50, 100)))

    def test_different_sizes_per_side(self):
        plan = plan_samples(60, 15, 3, 200)
        assert (plan.chunk_size_a, plan.chunk_size_b) == (20, 5)
        assert len(plan.ranges) == 3
        assert plan.ranges[-1] == ((40, 60), (10, 15))

    def test_small_chunks_dropped(self):
        assert plan_samples(12, 100, 3, 200).ranges == ()

    def test_empty_side(self):
        assert plan_samples(0, 100, 3, 200).ranges == ()
