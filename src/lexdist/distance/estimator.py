"""Language-level distance from word-level distances.

The distance between two vocabularies is the average, over the words of A,
of each word's distance to its nearest neighbour in B. To keep the cost
bounded on large dictionaries the vocabularies are shuffled with a seed
derived from the two language names and cut into a few fixed-size chunks;
the chunk distances are then averaged.
"""

from __future__ import annotations

import logging
import random
import threading
import zlib
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass

from lexdist.config.schema import BuildSettings
from lexdist.distance.base import DistanceAlgorithm
from lexdist.distance.errors import BuildCancelledError
from lexdist.normalise.unicode_cleanup import normalize_token
from lexdist.utils.parallel import chunk_evenly, default_parallelism, ordered_map
from lexdist.vocab.models import Vocabulary, Word

logger = logging.getLogger(__name__)

MIN_SAMPLE_CHUNK = 10
MIN_CHUNK_WORDS = 5
MIN_WORD_LENGTH = 3
UNRELATED_CUTOFF = 0.9
SEMANTIC_BONUS = 0.8
MAX_DISTANCE = 1.0


def stable_name_hash(name: str) -> int:
    """CRC-32 of the UTF-8 name; identical across processes and runs."""
    return zlib.crc32(name.encode("utf-8"))


def sampling_seed(lang_a: Vocabulary, lang_b: Vocabulary) -> int:
    return stable_name_hash(lang_a.name) + stable_name_hash(lang_b.name)


@dataclass(frozen=True)
class SamplePlan:
    """Chunk size per side and the chunk ranges derived from it."""

    chunk_size_a: int
    chunk_size_b: int
    ranges: tuple[tuple[tuple[int, int], tuple[int, int]], ...]


def _chunk_size(total: int, max_sample_size: int, num_samples: int) -> int:
    size = min(total, max_sample_size) // num_samples
    size = max(size, MIN_SAMPLE_CHUNK)
    return min(size, total // num_samples)


def plan_samples(total_a: int, total_b: int, num_samples: int, max_sample_size: int) -> SamplePlan:
    """Compute the ``[start, end)`` slice of each side for every retained sample.

    Generation stops at the first sample whose start lies past either
    vocabulary; chunks with fewer than 5 words on either side are dropped,
    so fewer than *num_samples* ranges may come back.
    """
    size_a = _chunk_size(total_a, max_sample_size, num_samples)
    size_b = _chunk_size(total_b, max_sample_size, num_samples)

    ranges = []
    for sample in range(num_samples):
        start_a = sample * size_a
        start_b = sample * size_b
        if start_a >= total_a or start_b >= total_b:
            break
        end_a = min(start_a + size_a, total_a)
        end_b = min(start_b + size_b, total_b)
        if end_a - start_a < MIN_CHUNK_WORDS or end_b - start_b < MIN_CHUNK_WORDS:
            continue
        ranges.append(((start_a, end_a), (start_b, end_b)))
    return SamplePlan(size_a, size_b, tuple(ranges))


class LanguageDistanceEstimator:
    """Reduce two vocabularies to a single distance.

    Honours four independent toggles from :class:`BuildSettings`:
    parallelization, sampling, normalized-form matching and semantic bonus.
    With ``normalized`` off, word pairs are compared in raw algorithm units.

    When parallel, sample chunks run on one pool and per-word nearest
    neighbour searches on another, so a waiting chunk never holds a worker
    the word searches need. Use as a context manager, or call
    :meth:`close`, to release the pools.
    """

    def __init__(
        self,
        algorithm: DistanceAlgorithm,
        settings: BuildSettings | None = None,
        max_workers: int | None = None,
    ) -> None:
        self.algorithm = algorithm
        self.settings = settings or BuildSettings()
        self._workers = max_workers or self.settings.max_workers or default_parallelism()
        self._sample_pool: ThreadPoolExecutor | None = None
        self._word_pool: ThreadPoolExecutor | None = None
        self._pool_lock = threading.Lock()

    # -- lifecycle ---------------------------------------------------------

    def _pools(self) -> tuple[Executor | None, Executor | None]:
        if not self.settings.use_parallelization:
            return None, None
        with self._pool_lock:
            if self._sample_pool is None:
                self._sample_pool = ThreadPoolExecutor(
                    max_workers=self._workers, thread_name_prefix="lexdist-sample"
                )
                self._word_pool = ThreadPoolExecutor(
                    max_workers=self._workers, thread_name_prefix="lexdist-word"
                )
        return self._sample_pool, self._word_pool

    def close(self) -> None:
        with self._pool_lock:
            for pool in (self._sample_pool, self._word_pool):
                if pool is not None:
                    pool.shutdown(wait=True, cancel_futures=True)
            self._sample_pool = None
            self._word_pool = None

    def __enter__(self) -> LanguageDistanceEstimator:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -- language level ----------------------------------------------------

    def estimate(
        self,
        lang_a: Vocabulary,
        lang_b: Vocabulary,
        cancel_event: threading.Event | None = None,
    ) -> float:
        """Distance between *lang_a* and *lang_b*; 1.0 when nothing is comparable."""
        keys_a = lang_a.word_keys()
        keys_b = lang_b.word_keys()

        if not self.settings.use_sampling:
            chunks = [(keys_a, keys_b)]
        else:
            rng = random.Random(sampling_seed(lang_a, lang_b))
            rng.shuffle(keys_a)
            rng.shuffle(keys_b)
            plan = plan_samples(
                len(keys_a), len(keys_b), self.settings.num_samples, self.settings.max_sample_size
            )
            chunks = [
                (keys_a[sa:ea], keys_b[sb:eb]) for (sa, ea), (sb, eb) in plan.ranges
            ]
            logger.debug(
                "%s/%s: %d of %d samples retained (chunk sizes %d/%d)",
                lang_a.code,
                lang_b.code,
                len(chunks),
                self.settings.num_samples,
                plan.chunk_size_a,
                plan.chunk_size_b,
            )

        sample_pool, _ = self._pools()

        def run(chunk: tuple[list[str], list[str]]) -> float:
            if cancel_event is not None and cancel_event.is_set():
                raise BuildCancelledError()
            return self.sample_distance(lang_a, lang_b, chunk[0], chunk[1])

        distances = ordered_map(run, chunks, sample_pool)
        if not distances:
            return MAX_DISTANCE
        return sum(distances) / len(distances)

    # -- chunk level -------------------------------------------------------

    def sample_distance(
        self,
        lang_a: Vocabulary,
        lang_b: Vocabulary,
        sample_a: list[str],
        sample_b: list[str],
    ) -> float:
        """Average nearest-neighbour distance of the words in *sample_a*."""
        words_b = _comparable_words(lang_b, sample_b)
        words_a = _comparable_words(lang_a, sample_a)

        _, word_pool = self._pools()
        if word_pool is not None and len(words_a) > 1:
            batches = chunk_evenly(words_a, self._workers)
            per_batch = ordered_map(
                lambda batch: [self.word_distance(w, lang_b, words_b) for w in batch],
                batches,
                word_pool,
            )
            per_word = [d for batch in per_batch for d in batch]
        else:
            per_word = [self.word_distance(w, lang_b, words_b) for w in words_a]

        if not per_word:
            return MAX_DISTANCE
        avg = sum(per_word) / len(per_word)
        if self.settings.normalized and avg > UNRELATED_CUTOFF:
            return MAX_DISTANCE
        return avg

    # -- word level --------------------------------------------------------

    def word_distance(self, word_a: Word, lang_b: Vocabulary, words_b: list[Word]) -> float:
        """Distance from *word_a* to its closest counterpart in *lang_b*.

        A word of *lang_b* sharing *word_a*'s normalized form short-circuits
        the scan of *words_b*.
        """
        if self.settings.use_normalized_form_matching:
            match = lang_b.get_representative_word_by_normalized_form(
                normalize_token(word_a.original)
            )
            if match is not None:
                return self._base_distance(word_a, match)

        return min(
            (self.pair_distance(word_a, word_b) for word_b in words_b),
            default=MAX_DISTANCE,
        )

    def pair_distance(self, word_a: Word, word_b: Word) -> float:
        """Base distance, reduced by 20% when both glosses agree."""
        distance = self._base_distance(word_a, word_b)
        if self.settings.use_semantic_bonus and glosses_match(word_a, word_b):
            return max(0.0, distance * SEMANTIC_BONUS)
        return distance

    def _base_distance(self, word_a: Word, word_b: Word) -> float:
        if self.settings.normalized:
            return self.algorithm.normalized_distance(word_a, word_b)
        return self.algorithm.distance(word_a, word_b)


def glosses_match(word_a: Word, word_b: Word) -> bool:
    if not word_a.gloss or not word_b.gloss:
        return False
    return word_a.gloss.lower() == word_b.gloss.lower()


def _comparable_words(language: Vocabulary, keys: list[str]) -> list[Word]:
    """Words of *keys* long enough to compare; shorter ones are mostly noise."""
    words = []
    for key in keys:
        word = language.get_word(key)
        if word is not None and len(word.original.lower()) >= MIN_WORD_LENGTH:
            words.append(word)
    return words
