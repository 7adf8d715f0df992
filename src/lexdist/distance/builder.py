"""Pairwise distance matrix construction.

Every unordered language pair is estimated independently. In parallel mode
the row range is split into disjoint blocks, each block owning the
upper-triangle cells of its rows (and their mirrors), so the matrix needs no
locking; only the completed-pair counter is shared.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Mapping
from concurrent.futures import CancelledError, Executor, Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass
from typing import Any, Union

from pydantic import ValidationError

from lexdist.config.schema import AlgorithmType, BuildSettings
from lexdist.distance.base import DistanceAlgorithm
from lexdist.distance.errors import BuildCancelledError, BuildError
from lexdist.distance.estimator import LanguageDistanceEstimator
from lexdist.distance.matrix import DistanceMatrix
from lexdist.distance.registry import create_algorithm
from lexdist.utils.parallel import default_parallelism, row_threshold, split_range
from lexdist.vocab.models import Vocabulary

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, str, str], None]


@dataclass(frozen=True)
class BuildSuccess:
    matrix: DistanceMatrix


@dataclass(frozen=True)
class BuildCancelled:
    pass


@dataclass(frozen=True)
class BuildFailed:
    reason: str
    error: BaseException | None = None


BuildOutcome = Union[BuildSuccess, BuildCancelled, BuildFailed]


class _Progress:
    """Completed-pair counter; reports under its lock so percentages never go backwards."""

    def __init__(self, total: int, callback: ProgressCallback | None) -> None:
        self.total = total
        self.completed = 0
        self._callback = callback
        self._lock = threading.Lock()

    def advance(self, code_a: str, code_b: str) -> None:
        with self._lock:
            self.completed += 1
            if self._callback is None:
                return
            percent = self.completed * 100 // self.total if self.total else 100
            try:
                self._callback(percent, code_a, code_b)
            except Exception:
                logger.warning("Progress callback failed for %s/%s", code_a, code_b, exc_info=True)


class DistanceMatrixBuilder:
    """Builds a :class:`DistanceMatrix` over a map of language code to vocabulary.

    Language order follows the mapping's iteration order.
    """

    def __init__(
        self,
        languages: Mapping[str, Vocabulary],
        algorithm: DistanceAlgorithm | AlgorithmType | str,
        settings: BuildSettings | Mapping[str, Any] | None = None,
        progress: ProgressCallback | None = None,
    ) -> None:
        self.languages = languages
        self.algorithm = algorithm
        self.settings = settings
        self.progress = progress

    # -- setup ---------------------------------------------------------------

    def _validated(self) -> tuple[list[str], DistanceAlgorithm, BuildSettings]:
        try:
            if self.settings is None:
                settings = BuildSettings()
            elif isinstance(self.settings, BuildSettings):
                settings = self.settings
            elif isinstance(self.settings, Mapping):
                settings = BuildSettings.model_validate(dict(self.settings))
            else:
                raise TypeError(
                    f"expected BuildSettings or a mapping, got {type(self.settings).__name__}"
                )
        except (ValidationError, TypeError, ValueError) as exc:
            raise BuildError(f"Invalid build settings: {exc}") from exc

        if isinstance(self.algorithm, DistanceAlgorithm):
            algorithm = self.algorithm
        else:
            try:
                algorithm = create_algorithm(self.algorithm)
            except (TypeError, ValueError) as exc:
                raise BuildError(str(exc)) from exc

        if not isinstance(self.languages, Mapping):
            raise BuildError(
                f"Languages must map codes to vocabularies, got {type(self.languages).__name__}"
            )
        codes = list(self.languages)
        for code in codes:
            if not isinstance(self.languages[code], Vocabulary):
                raise BuildError(f"Language {code!r} has no vocabulary")
        return codes, algorithm, settings

    # -- synchronous build ---------------------------------------------------

    def build(self, cancel_event: threading.Event | None = None) -> DistanceMatrix:
        """Compute the full matrix in the calling thread (workers fan out below it).

        Raises :class:`BuildError` on setup failure and
        :class:`BuildCancelledError` if *cancel_event* is set before the end.
        """
        codes, algorithm, settings = self._validated()
        cancel_event = cancel_event or threading.Event()

        matrix = DistanceMatrix.zeros(
            codes,
            algorithm=algorithm.name,
            normalized=settings.normalized,
            settings=settings.model_dump(),
        )
        size = len(codes)
        progress = _Progress(size * (size - 1) // 2, self.progress)
        failures: list[tuple[str, str]] = []
        failures_lock = threading.Lock()

        logger.info(
            "Building %dx%d distance matrix with %s (%s)",
            size,
            size,
            algorithm.name,
            "parallel" if settings.use_parallelization else "sequential",
        )
        started = time.perf_counter()

        with LanguageDistanceEstimator(algorithm, settings) as estimator:

            def compute_rows(start: int, end: int) -> None:
                for i in range(start, end):
                    for j in range(i + 1, size):
                        if cancel_event.is_set():
                            raise BuildCancelledError()
                        code_a, code_b = codes[i], codes[j]
                        try:
                            distance = estimator.estimate(
                                self.languages[code_a], self.languages[code_b], cancel_event
                            )
                        except BuildCancelledError:
                            raise
                        except Exception:
                            logger.exception(
                                "Error calculating distance between %s and %s", code_a, code_b
                            )
                            with failures_lock:
                                failures.append((code_a, code_b))
                        else:
                            matrix.values[i][j] = distance
                            matrix.values[j][i] = distance
                        progress.advance(code_a, code_b)

            try:
                if settings.use_parallelization and size > 1:
                    self._run_parallel(compute_rows, size, settings, cancel_event)
                else:
                    compute_rows(0, size)
            except (BuildCancelledError, BuildError):
                raise
            except Exception as exc:
                raise BuildError(f"Distance matrix build failed: {exc}") from exc

        if cancel_event.is_set():
            raise BuildCancelledError()

        # Row blocks finish in any order; report failures in matrix order
        order = {code: i for i, code in enumerate(codes)}
        matrix.failed_pairs = sorted(failures, key=lambda p: (order[p[0]], order[p[1]]))
        logger.info(
            "Distance matrix ready: %d pairs in %.2fs (%d failed)",
            progress.completed,
            time.perf_counter() - started,
            len(failures),
        )
        return matrix

    def _run_parallel(
        self,
        compute_rows: Callable[[int, int], None],
        size: int,
        settings: BuildSettings,
        cancel_event: threading.Event,
    ) -> None:
        parallelism = settings.max_workers or default_parallelism()
        blocks = split_range(0, size, row_threshold(size, parallelism))
        logger.debug("Split %d rows into %d blocks over %d workers", size, len(blocks), parallelism)

        pool = ThreadPoolExecutor(max_workers=parallelism, thread_name_prefix="lexdist-rows")
        try:
            futures = [pool.submit(compute_rows, start, end) for start, end in blocks]
            for future in futures:
                try:
                    future.result()
                except BuildCancelledError:
                    cancel_event.set()
                    raise
        finally:
            pool.shutdown(wait=True, cancel_futures=True)

    # -- asynchronous build --------------------------------------------------

    def submit(self, executor: Executor | None = None) -> BuildHandle:
        """Start :meth:`build` in the background and return a cancellable handle."""
        cancel_event = threading.Event()
        if executor is not None:
            return BuildHandle(executor.submit(self.build, cancel_event), cancel_event)
        own = ThreadPoolExecutor(max_workers=1, thread_name_prefix="lexdist-build")
        try:
            future = own.submit(self.build, cancel_event)
        finally:
            own.shutdown(wait=False)
        return BuildHandle(future, cancel_event)


class BuildHandle:
    """Cancellable handle on a background matrix build."""

    def __init__(self, future: Future, cancel_event: threading.Event) -> None:
        self._future = future
        self._cancel_event = cancel_event

    def cancel(self) -> None:
        """Request cancellation; running workers stop before their next pair."""
        self._cancel_event.set()
        self._future.cancel()

    def cancelled(self) -> bool:
        """True when cancellation was requested and the build did not finish first."""
        if self._future.cancelled():
            return True
        if not self._cancel_event.is_set():
            return False
        if not self._future.done():
            return True
        return isinstance(self._future.exception(), BuildCancelledError)

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: float | None = None) -> DistanceMatrix:
        """Wait for the matrix; raises BuildCancelledError or BuildError."""
        try:
            return self._future.result(timeout)
        except CancelledError:
            raise BuildCancelledError() from None

    def outcome(self, timeout: float | None = None) -> BuildOutcome:
        try:
            return BuildSuccess(self.result(timeout))
        except BuildCancelledError:
            return BuildCancelled()
        except BuildError as exc:
            return BuildFailed(str(exc), exc)
        except FuturesTimeoutError:
            raise
        except Exception as exc:
            logger.error("Distance matrix build crashed: %s", exc)
            return BuildFailed(f"Unexpected build error: {exc}", exc)
