"""Data models for cluster trees and threshold graphs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ClusterNode:
    """Binary tree node of a UPGMA tree.

    Leaves carry a language code and height 0. Internal nodes have no code,
    exactly two children, and a height of half the merge distance.
    """

    language_code: str | None = None
    height: float = 0.0
    left: ClusterNode | None = None
    right: ClusterNode | None = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def leaves(self) -> list[ClusterNode]:
        """Leaf nodes, left to right."""
        out: list[ClusterNode] = []
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                out.append(node)
                continue
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
        return out

    def internal_nodes(self) -> list[ClusterNode]:
        out: list[ClusterNode] = []
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                continue
            out.append(node)
            stack.extend(c for c in (node.right, node.left) if c is not None)
        return out

    def leaf_codes(self) -> list[str]:
        return [leaf.language_code or "" for leaf in self.leaves()]

    def to_newick(self) -> str:
        """Newick string with branch lengths taken from height differences."""

        def render(node: ClusterNode, parent_height: float) -> str:
            length = max(0.0, parent_height - node.height)
            if node.is_leaf:
                return f"{node.language_code}:{length:.6f}"
            children = ",".join(
                render(child, node.height) for child in (node.left, node.right) if child is not None
            )
            return f"({children}):{length:.6f}"

        if self.is_leaf:
            return f"{self.language_code};"
        children = ",".join(
            render(child, self.height) for child in (self.left, self.right) if child is not None
        )
        return f"({children});"

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"height": self.height}
        if self.is_leaf:
            d["language_code"] = self.language_code
        else:
            d["left"] = self.left.to_dict() if self.left else None
            d["right"] = self.right.to_dict() if self.right else None
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ClusterNode:
        left = d.get("left")
        right = d.get("right")
        return cls(
            language_code=d.get("language_code"),
            height=d.get("height", 0.0),
            left=cls.from_dict(left) if left else None,
            right=cls.from_dict(right) if right else None,
        )


@dataclass
class TreeData:
    """A UPGMA tree together with the language order of its source matrix."""

    root: ClusterNode
    language_codes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "language_codes": list(self.language_codes),
            "root": self.root.to_dict(),
            "newick": self.root.to_newick(),
        }


@dataclass(frozen=True)
class GraphNode:
    id: int
    label: str
    language_code: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": self.label, "language_code": self.language_code}


@dataclass(frozen=True)
class GraphEdge:
    source: int
    target: int
    weight: float

    def to_dict(self) -> dict[str, Any]:
        return {"source": self.source, "target": self.target, "weight": self.weight}


@dataclass
class GraphData:
    """Languages as nodes, joined when their distance is within ``threshold``."""

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)
    threshold: float = 0.0

    def neighbours(self, node_id: int) -> list[int]:
        out = []
        for edge in self.edges:
            if edge.source == node_id:
                out.append(edge.target)
            elif edge.target == node_id:
                out.append(edge.source)
        return sorted(out)

    def to_dict(self) -> dict[str, Any]:
        return {
            "threshold": self.threshold,
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }
