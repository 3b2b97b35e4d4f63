"""
Tests for PPI network export.
"""

import json

import pandas as pd
import pytest

from pathlink_network.data_loaders import GeneMapping, Interactome
from pathlink_network.ppi_network import (
    HubMeasure,
    NetworkConfig,
    NetworkOrder,
    SeedSelectionConfig,
    build_ppi_network,
    load_json,
    to_csv,
    to_json,
)


@pytest.fixture
def network():
    de_table = pd.DataFrame(
        {
            "log2FoldChange": [2.0, -3.0, 1.0],
            "padj": [0.01, 0.001, 0.02],
            "stat": [4.0, -6.0, float("nan")],
        },
        index=["ENSG01", "ENSG02", "ENSG03"],
    )
    interactome = Interactome.from_pairs(
        [("ENSG01", "ENSG02"), ("ENSG02", "ENSG03"), ("ENSG03", "ENSG04")]
    )
    return build_ppi_network(
        de_table,
        interactome,
        SeedSelectionConfig(schema="deseq2"),
        NetworkConfig(order="first", hub_measure="hubscore"),
        mapping=GeneMapping({"ENSG01": "IL6"}),
    )


class TestCSVExport:
    def test_writes_node_and_edge_files(self, network, tmp_path):
        nodes_path, edges_path = to_csv(network, tmp_path / "out", prefix="ppi_")

        assert nodes_path.name == "ppi_nodes.csv"
        nodes = pd.read_csv(nodes_path)
        edges = pd.read_csv(edges_path)

        assert len(nodes) == 4
        assert {"name", "degree", "betweenness", "seed", "hub_score_hub"} <= set(nodes.columns)
        assert len(edges) == 3
        assert list(edges.columns) == ["from", "to"]


class TestJSONExport:
    def test_metadata_stored(self, network, tmp_path):
        path = to_json(network, tmp_path / "network.json")
        with open(path) as f:
            data = json.load(f)

        assert data["graph"]["order"] == "first"
        assert data["graph"]["hub_measure"] == "hubscore"
        assert data["graph"]["seeds"] == ["ENSG01", "ENSG02", "ENSG03"]

    def test_missing_values_become_null(self, network, tmp_path):
        path = to_json(network, tmp_path / "network.json")
        with open(path) as f:
            text = f.read()
        assert "NaN" not in text
        assert loaded_stat(path, "ENSG03") is None

    def test_load_restores_network(self, network, tmp_path):
        path = to_json(network, tmp_path / "network.json")
        loaded = load_json(path)

        assert loaded.order is NetworkOrder.FIRST
        assert loaded.hub_measure is HubMeasure.HUBSCORE
        assert loaded.seeds == network.seeds
        assert {tuple(sorted(e)) for e in loaded.graph.edges} == {
            tuple(sorted(e)) for e in network.graph.edges
        }
        assert loaded.graph.nodes["ENSG01"]["hgnc_symbol"] == "IL6"
        assert loaded.graph.nodes["ENSG02"]["degree"] == 2
        assert loaded.graph.nodes["ENSG04"]["seed"] is False

    def test_de_id_column_kept(self, tmp_path):
        de_table = pd.DataFrame(
            {"log2FoldChange": [2.0, -3.0], "padj": [0.01, 0.001], "id": ["g1", "g2"]},
            index=["ENSG01", "ENSG02"],
        )
        network = build_ppi_network(
            de_table,
            Interactome.from_pairs([("ENSG01", "ENSG02")]),
            SeedSelectionConfig(schema="deseq2"),
            NetworkConfig(order="zero"),
        )
        path = to_json(network, tmp_path / "network.json")

        with open(path) as f:
            ids = {n["id"] for n in json.load(f)["nodes"]}
        assert ids == {"ENSG01", "ENSG02"}
        assert load_json(path).graph.nodes["ENSG02"]["id_de"] == "g2"

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / "missing.json")


def loaded_stat(path, node):
    with open(path) as f:
        data = json.load(f)
    return next(n["stat"] for n in data["nodes"] if n["id"] == node)
