"""Write matrices, trees and graphs for external tools."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Any

import orjson

from lexdist.cluster.models import GraphData, TreeData
from lexdist.distance.matrix import DistanceMatrix

logger = logging.getLogger(__name__)


def matrix_to_csv(matrix: DistanceMatrix) -> str:
    """``Language,<code1>,...`` header, then one row per language at 6 decimals."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(["Language", *matrix.language_codes])
    for code, row in zip(matrix.language_codes, matrix.values):
        writer.writerow([code, *(f"{value:.6f}" for value in row)])
    return buf.getvalue()


def write_matrix_csv(matrix: DistanceMatrix, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(matrix_to_csv(matrix), encoding="utf-8")
    logger.info("Distance matrix CSV written to %s", path)
    return path


def _write_json(payload: dict[str, Any], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
    return path


def write_matrix_json(matrix: DistanceMatrix, path: Path) -> Path:
    _write_json(matrix.to_dict(), path)
    logger.info("Distance matrix JSON written to %s", path)
    return path


def write_tree_json(tree: TreeData, path: Path) -> Path:
    _write_json(tree.to_dict(), path)
    logger.info("Cluster tree written to %s", path)
    return path


def write_graph_json(graph: GraphData, path: Path) -> Path:
    _write_json(graph.to_dict(), path)
    logger.info("Threshold graph (%d edges) written to %s", len(graph.edges), path)
    return path
