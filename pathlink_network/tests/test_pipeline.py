"""
Tests for the YAML-driven pipeline and the command-line interface.
"""

import json

import pandas as pd
import pytest
import yaml
from click.testing import CliRunner

from pathlink_network import ConfigurationError, NetworkPipeline, PipelineConfig
from pathlink_network.cli import main
from pathlink_network.data_loaders import Interactome
from pathlink_network.ppi_network import NetworkOrder


@pytest.fixture
def data_dir(tmp_path):
    """Small DE table, interactome, mapping and GMT file on disk."""
    (tmp_path / "de.csv").write_text(
        "gene,baseMean,log2FoldChange,padj\n"
        "ENSG01,500,2.0,0.001\n"
        "ENSG02,300,-2.0,0.001\n"
        "ENSG03,200,1.5,0.01\n"
        "ENSG04,100,0.1,0.9\n"
    )
    (tmp_path / "ppi.csv").write_text(
        "ensemblGeneA,ensemblGeneB\n"
        "ENSG01,ENSG02\n"
        "ENSG02,ENSG03\n"
        "ENSG03,ENSG10\n"
        "ENSG01,ENSG11\n"
        "ENSG04,ENSG05\n"
    )
    (tmp_path / "mapping.csv").write_text(
        "ensemblGeneId,hgncSymbol\nENSG01,IL6\nENSG02,TNF\n"
    )
    (tmp_path / "pathways.gmt").write_text(
        "P1\tPathway One\ta\tb\tc\n"
        "P2\tPathway Two\tb\tc\td\n"
        "P3\tPathway Three\tx\ty\n"
    )
    return tmp_path


def write_config(data_dir, **overrides):
    raw = {
        "data": {
            "de_table": str(data_dir / "de.csv"),
            "interactome": str(data_dir / "ppi.csv"),
            "gene_mapping": str(data_dir / "mapping.csv"),
            "pathways_gmt": str(data_dir / "pathways.gmt"),
        },
        "seeds": {"schema": "deseq2", "p_cutoff": 0.05, "fc_cutoff": 1.5},
        "network": {"order": "first", "hub_measure": "degree"},
        "foundation": {"max_distance": 0.8},
        "output_dir": str(data_dir / "out"),
    }
    raw.update(overrides)
    path = data_dir / "config.yaml"
    path.write_text(yaml.safe_dump(raw))
    return path


class TestPipelineConfig:
    def test_from_yaml(self, data_dir):
        config = PipelineConfig.from_yaml(str(write_config(data_dir)))
        assert config.runs_ppi and config.runs_foundation
        assert config.network.order == "first"
        assert config.foundation.max_distance == 0.8

    def test_validate_converts_enums(self, data_dir):
        config = PipelineConfig.from_yaml(str(write_config(data_dir)))
        config.validate()
        assert config.network.order is NetworkOrder.FIRST

    def test_unknown_section_option(self):
        with pytest.raises(ConfigurationError):
            PipelineConfig.from_dict({"network": {"order": "zero", "depth": 2}})

    def test_unknown_top_level_option(self):
        with pytest.raises(ConfigurationError):
            PipelineConfig.from_dict({"threads": 4})

    def test_nothing_to_do(self):
        with pytest.raises(ConfigurationError):
            PipelineConfig.from_dict({}).validate()

    def test_interactome_required(self, data_dir):
        config = PipelineConfig.from_dict({"data": {"de_table": str(data_dir / "de.csv")}})
        with pytest.raises(ConfigurationError):
            config.validate()
        config.validate(interactome_given=True)

    def test_foundation_section_required(self, data_dir):
        config = PipelineConfig.from_dict({"data": {"pathways_gmt": str(data_dir / "pathways.gmt")}})
        with pytest.raises(ConfigurationError):
            config.validate()

    def test_missing_config_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            PipelineConfig.from_yaml(str(tmp_path / "missing.yaml"))


@pytest.mark.integration
class TestNetworkPipeline:
    def test_run_writes_outputs(self, data_dir):
        config = PipelineConfig.from_yaml(str(write_config(data_dir)))
        result = NetworkPipeline(config).run()

        out = data_dir / "out"
        assert {p.name for p in out.iterdir()} == {
            "ppi_nodes.csv",
            "ppi_edges.csv",
            "ppi_network.json",
            "pathway_foundation.csv",
        }
        assert len(result.output_files) == 4

        nodes = pd.read_csv(out / "ppi_nodes.csv").set_index("name")
        assert set(nodes.index) == {"ENSG01", "ENSG02", "ENSG03", "ENSG10", "ENSG11"}
        assert nodes.loc["ENSG01", "hgnc_symbol"] == "IL6"
        assert nodes.loc["ENSG02", "hub_score_deg"] == 2

        foundation = pd.read_csv(out / "pathway_foundation.csv")
        assert list(foundation["pathway1"]) == ["P1"]
        assert list(foundation["pathway_name2"]) == ["Pathway Two"]

        with open(out / "ppi_network.json") as f:
            assert json.load(f)["graph"]["order"] == "first"

    def test_shared_interactome(self, data_dir):
        config = PipelineConfig.from_dict(
            {
                "data": {"de_table": str(data_dir / "de.csv")},
                "network": {"order": "zero"},
                "output_dir": str(data_dir / "out"),
            }
        )
        interactome = Interactome.from_pairs([("ENSG01", "ENSG02"), ("ENSG02", "ENSG03")])
        result = NetworkPipeline(config, interactome=interactome).run()

        assert result.network.n_nodes == 3
        assert result.foundation is None
        assert "PPI NETWORK:" in result.summary


@pytest.mark.integration
class TestCLI:
    def test_run(self, data_dir):
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["--quiet", "run", "--config", str(write_config(data_dir)), "-o", str(data_dir / "cli")],
        )
        assert result.exit_code == 0, result.output
        assert "Pipeline completed successfully!" in result.output
        assert (data_dir / "cli" / "ppi_nodes.csv").exists()

    def test_run_invalid_config(self, data_dir):
        runner = CliRunner()
        path = write_config(data_dir, network={"order": "second"})
        result = runner.invoke(main, ["--quiet", "run", "--config", str(path)])
        assert result.exit_code == 1

    def test_ppi(self, data_dir):
        runner = CliRunner()
        result = runner.invoke(
            main,
            [
                "--quiet", "ppi",
                "--de-table", str(data_dir / "de.csv"),
                "--interactome", str(data_dir / "ppi.csv"),
                "--order", "zero",
                "--output", str(data_dir / "ppi_out"),
            ],
        )
        assert result.exit_code == 0, result.output
        assert "Nodes: 3 (3 seeds)" in result.output
        assert (data_dir / "ppi_out" / "ppi_edges.csv").exists()

    def test_foundation(self, data_dir):
        runner = CliRunner()
        output = data_dir / "foundation.csv"
        result = runner.invoke(
            main,
            [
                "--quiet", "foundation",
                "--gmt", str(data_dir / "pathways.gmt"),
                "--prop-to-keep", "0.5",
                "--output", str(output),
            ],
        )
        assert result.exit_code == 0, result.output
        assert len(pd.read_csv(output)) == 1

    def test_foundation_rejects_both_cutoffs(self, data_dir):
        runner = CliRunner()
        result = runner.invoke(
            main,
            [
                "--quiet", "foundation",
                "--gmt", str(data_dir / "pathways.gmt"),
                "--max-distance", "0.5",
                "--prop-to-keep", "0.5",
            ],
        )
        assert result.exit_code == 1
