"""Tests for matrix, tree and graph export."""

from __future__ import annotations

import orjson

from lexdist.cluster.graph import build_threshold_graph
from lexdist.cluster.upgma import build_tree_data
from lexdist.export.matrix_exporter import (
    matrix_to_csv,
    write_graph_json,
    write_matrix_csv,
    write_matrix_json,
    write_tree_json,
)


class TestCsv:
    def test_layout(self, three_language_matrix):
        lines = matrix_to_csv(three_language_matrix).splitlines()
        assert lines[0] == "Language,A,B,C"
        assert lines[1] == "A,0.000000,0.200000,0.800000"
        assert lines[3] == "C,0.800000,0.900000,0.000000"
        assert len(lines) == 4

    def test_write_creates_parents(self, three_language_matrix, tmp_path):
        path = write_matrix_csv(three_language_matrix, tmp_path / "out" / "m.csv")
        assert path.read_text(encoding="utf-8").startswith("Language,A,B,C\n")


class TestJson:
    def test_matrix(self, three_language_matrix, tmp_path):
        path = write_matrix_json(three_language_matrix, tmp_path / "m.json")
        data = orjson.loads(path.read_bytes())
        assert data["language_codes"] == ["A", "B", "C"]
        assert data["values"][1][2] == 0.9

    def test_tree(self, three_language_matrix, tmp_path):
        path = write_tree_json(build_tree_data(three_language_matrix), tmp_path / "t.json")
        data = orjson.loads(path.read_bytes())
        assert data["newick"] == "(C:0.425000,(A:0.100000,B:0.100000):0.325000);"
        assert data["root"]["height"] > 0.4

    def test_graph(self, three_language_matrix, tmp_path):
        graph = build_threshold_graph(three_language_matrix, 0.5)
        path = write_graph_json(graph, tmp_path / "g.json")
        data = orjson.loads(path.read_bytes())
        assert len(data["nodes"]) == 3
        assert data["edges"] == [{"source": 0, "target": 1, "weight": 0.2}]
