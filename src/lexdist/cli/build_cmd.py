"""CLI handlers for the build-matrix, build-tree and build-graph subcommands."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from lexdist.cluster.graph import build_threshold_graph
from lexdist.cluster.upgma import build_tree_data
from lexdist.config.loader import load_config
from lexdist.config.schema import AlgorithmType, PipelineConfig
from lexdist.distance.builder import (
    BuildCancelled,
    BuildFailed,
    BuildSuccess,
    DistanceMatrixBuilder,
)
from lexdist.distance.matrix import DistanceMatrix
from lexdist.export.matrix_exporter import (
    write_graph_json,
    write_matrix_csv,
    write_matrix_json,
    write_tree_json,
)
from lexdist.ingest.dictionary_loader import load_dictionaries, summarize
from lexdist.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


class _ProgressLogger:
    """Logs build progress every *step* percent."""

    def __init__(self, step: int = 10) -> None:
        self.step = step
        self._next = step

    def __call__(self, percent: int, lang_a: str, lang_b: str) -> None:
        if percent >= self._next:
            logger.info("Progress %3d%% (last pair %s/%s)", percent, lang_a, lang_b)
            self._next = (percent // self.step + 1) * self.step


def _prepare(config_path: str, algorithm_override: str | None) -> PipelineConfig:
    cfg = load_config(config_path)
    setup_logging(cfg.log_level)
    if algorithm_override:
        try:
            cfg.algorithm = AlgorithmType(algorithm_override)
        except ValueError:
            raise typer.BadParameter(f"unknown algorithm {algorithm_override!r}") from None
    return cfg


def compute_matrix(cfg: PipelineConfig) -> DistanceMatrix:
    """Load the configured dictionaries and build their distance matrix."""
    if len(cfg.sources) < 2:
        logger.error("At least two dictionary sources are required, got %d", len(cfg.sources))
        raise typer.Exit(code=2)

    languages = load_dictionaries(cfg.sources)
    summary = summarize(languages)
    logger.info(
        "Loaded %d languages (%d words): %s",
        len(summary.languages),
        summary.words_total,
        ", ".join(summary.languages),
    )

    builder = DistanceMatrixBuilder(
        languages, cfg.algorithm, cfg.build, progress=_ProgressLogger()
    )
    handle = builder.submit()
    try:
        outcome = handle.outcome()
    except KeyboardInterrupt:
        handle.cancel()
        outcome = handle.outcome()

    if isinstance(outcome, BuildCancelled):
        logger.error("Distance matrix build cancelled")
        raise typer.Exit(code=130)
    if isinstance(outcome, BuildFailed):
        logger.error("Distance matrix build failed: %s", outcome.reason)
        raise typer.Exit(code=1)
    assert isinstance(outcome, BuildSuccess)

    matrix = outcome.matrix
    if not matrix.complete:
        logger.warning(
            "%d pairs failed and were left at 0.0: %s",
            len(matrix.failed_pairs),
            ", ".join(f"{a}/{b}" for a, b in matrix.failed_pairs),
        )
    return matrix


def run_build_matrix(config_path: str, algorithm: str | None, output: str | None) -> None:
    cfg = _prepare(config_path, algorithm)
    matrix = compute_matrix(cfg)

    csv_path = Path(output) if output else cfg.output_dir / "distance_matrix.csv"
    write_matrix_csv(matrix, csv_path)
    write_matrix_json(matrix, csv_path.with_suffix(".json"))


def run_build_tree(config_path: str, algorithm: str | None, output: str | None) -> None:
    cfg = _prepare(config_path, algorithm)
    matrix = compute_matrix(cfg)
    tree = build_tree_data(matrix)

    out_path = Path(output) if output else cfg.output_dir / "cluster_tree.json"
    write_tree_json(tree, out_path)
    typer.echo(tree.root.to_newick())


def run_build_graph(
    config_path: str,
    algorithm: str | None,
    threshold: float | None,
    output: str | None,
) -> None:
    cfg = _prepare(config_path, algorithm)
    cutoff = cfg.graph.threshold if threshold is None else threshold
    if not 0.0 <= cutoff <= 1.0:
        raise typer.BadParameter(f"threshold must be between 0 and 1, got {cutoff}")
    matrix = compute_matrix(cfg)
    graph = build_threshold_graph(matrix, cutoff)

    out_path = Path(output) if output else cfg.output_dir / "threshold_graph.json"
    write_graph_json(graph, out_path)
