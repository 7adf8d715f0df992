"""Threshold graph over a distance matrix."""

from __future__ import annotations

import logging

from lexdist.cluster.models import GraphData, GraphEdge, GraphNode
from lexdist.distance.matrix import DistanceMatrix

logger = logging.getLogger(__name__)


def build_threshold_graph(matrix: DistanceMatrix, threshold: float) -> GraphData:
    """One node per language, one edge per pair whose distance is <= *threshold*."""
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(f"Threshold must be between 0 and 1, got {threshold}")

    codes = matrix.language_codes
    nodes = [GraphNode(id=i, label=code, language_code=code) for i, code in enumerate(codes)]
    edges = []
    for i in range(len(codes)):
        for j in range(i + 1, len(codes)):
            distance = matrix.values[i][j]
            if distance <= threshold:
                edges.append(GraphEdge(source=i, target=j, weight=distance))

    logger.info("Graph at threshold %.2f: %d nodes, %d edges", threshold, len(nodes), len(edges))
    return GraphData(nodes=nodes, edges=edges, threshold=threshold)
