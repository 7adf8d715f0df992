"""UPGMA hierarchical clustering of a distance matrix."""

from __future__ import annotations

import logging

from lexdist.cluster.models import ClusterNode, TreeData
from lexdist.distance.matrix import DistanceMatrix

logger = logging.getLogger(__name__)

PLACEHOLDER_CODE = "Unknown"


def build_upgma_tree(matrix: DistanceMatrix) -> ClusterNode:
    """Agglomerate languages into a binary tree and return its root.

    Iteratively merges the closest pair of active clusters. Ties go to the
    first pair met in a row-major scan of active slots ``(i, j), i < j``.
    A merged cluster sits at half the merge distance and its distance to
    every other active cluster is the mean of the two merged distances.
    """
    codes = list(matrix.language_codes)
    n = len(codes)
    if n == 0:
        return ClusterNode(PLACEHOLDER_CODE, 0.0)
    if n == 1:
        return ClusterNode(codes[0], 0.0)

    nodes = [ClusterNode(code, 0.0) for code in codes]
    # Working distances grow by one row/column per merge
    dist = [list(row) for row in matrix.values]
    active = [True] * n
    active_count = n

    while active_count > 1:
        min_i = min_j = -1
        min_dist = float("inf")
        for i in range(len(nodes)):
            if not active[i]:
                continue
            row = dist[i]
            for j in range(i + 1, len(nodes)):
                if active[j] and row[j] < min_dist:
                    min_dist = row[j]
                    min_i, min_j = i, j

        if min_i == -1:
            logger.warning("No valid pair left to merge with %d active clusters", active_count)
            break

        logger.debug(
            "Merging %s and %s at distance %.3f",
            nodes[min_i].language_code or "internal",
            nodes[min_j].language_code or "internal",
            min_dist,
        )
        merged = ClusterNode(None, min_dist / 2.0, nodes[min_i], nodes[min_j])
        nodes.append(merged)
        new_index = len(nodes) - 1

        for row in dist:
            row.append(0.0)
        new_row = [0.0] * len(nodes)
        for k in range(new_index):
            if not active[k] or k == min_i or k == min_j:
                continue
            d = (dist[min_i][k] + dist[min_j][k]) / 2.0
            new_row[k] = d
            dist[k][new_index] = d
        dist.append(new_row)

        active[min_i] = False
        active[min_j] = False
        active.append(True)
        active_count -= 1

    for i, node in enumerate(nodes):
        if active[i]:
            return node
    return nodes[-1]


def build_tree_data(matrix: DistanceMatrix) -> TreeData:
    return TreeData(root=build_upgma_tree(matrix), language_codes=list(matrix.language_codes))
