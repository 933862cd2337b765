"""Integration tests for CLI commands using CliRunner.

Tests:
- info with a valid config
- build writes graph, tables, charts and provenance
- build --force / --skip-viz / --mode
- build on malformed sources fails with a generic message
- summary output and sort options
- inspect gene / edge, including unknown ids
"""

import json

import pytest
import yaml
from click.testing import CliRunner

from eqtl_network.cli.main import cli


RELATIONS = """gene1,gene2,connection_type,weight,evidence_strength,details,color
CACNA1C,CHD8,Statistical Similarity,3.2,Moderate,"Shared tissues: 12, r=0.61",#F39C12
CHD8,CACNA1C,Coloc Evidence,4.5,Strong,"PP.H4 = 0.83, cortex",#2ECC71
CNTNAP2,FOXP2,Coloc Evidence,5.0,Strong,cerebellum,#2ECC71
"""

STATISTICS = """Gene,Total_eQTLs,Significant_p05,Highly_Sig_p001,Mean_Effect_Size,Tissues,Min_p_value_CORRECTED,Max_neg_log10_pval
CACNA1C,184,184,142,-0.0843,21,2.31e-24,23.64
CHD8,36,36,20,0.1127,9,0.0000004,6.40
CNTNAP2,92,92,61,-0.1512,14,1.05e-11,10.98
FOXP2,12,12,4,0.2034,3,0.00021,3.68
"""


@pytest.fixture
def test_config(tmp_path):
    """Create minimal config YAML and source files for testing."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "relations.csv").write_text(RELATIONS)
    (data_dir / "stats.csv").write_text(STATISTICS)

    config_path = tmp_path / "test_config.yaml"
    config_path.write_text(f"""
data_dir: {data_dir}
cache_dir: {tmp_path}/cache
output_dir: {tmp_path}/output

sources:
  relations: relations.csv
  statistics: stats.csv

edge_mode: merge_directed

catalog:
  CHD8:
    color: "#9B59B6"
    description: Chromatin remodeler
""")
    return config_path


def test_info(test_config):
    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(test_config), 'info'])

    assert result.exit_code == 0
    assert "eqtl-network v" in result.output
    assert "relations.csv" in result.output
    assert "(computed)" in result.output
    assert "merge_directed" in result.output


def test_build_writes_outputs(test_config, tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(test_config), 'build'])

    assert result.exit_code == 0, result.output
    assert "Build complete!" in result.output
    assert "Nodes: 4  Edges: 3 (2 directed, mode=merge_directed)" in result.output

    output_dir = tmp_path / "output"
    for name in ["network.json", "relations.tsv", "nodes.tsv", "edges.tsv", "genes.tsv",
                 "network.provenance.yaml"]:
        assert (output_dir / name).exists(), name
    assert (output_dir / "plots" / "eqtl_counts.png").exists()
    assert (output_dir / "plots" / "gene_profiles.png").exists()

    with open(output_dir / "network.provenance.yaml") as f:
        sidecar = yaml.safe_load(f)
    steps = [step["step"] for step in sidecar["run"]["steps"]]
    assert steps == ["load_sources", "build_graph", "generate_charts", "write_output"]
    assert sidecar["run"]["sources"]["relations"] == str(tmp_path / "data" / "relations.csv")

    document = json.loads((output_dir / "network.json").read_text())
    chd8 = next(node for node in document["nodes"] if node["id"] == "CHD8")
    assert chd8["color"]["background"] == "#9B59B6"


def test_build_skip_viz(test_config, tmp_path):
    output_dir = tmp_path / "custom"
    runner = CliRunner()
    result = runner.invoke(cli, [
        '--config', str(test_config),
        'build', '--output-dir', str(output_dir), '--skip-viz',
    ])

    assert result.exit_code == 0, result.output
    assert "Skipping charts" in result.output
    assert (output_dir / "network.json").exists()
    assert not (output_dir / "plots").exists()


def test_build_requires_force_to_overwrite(test_config, tmp_path):
    runner = CliRunner()
    args = ['--config', str(test_config), 'build', '--skip-viz']

    first = runner.invoke(cli, args)
    assert first.exit_code == 0

    second = runner.invoke(cli, args)
    assert second.exit_code == 0
    assert "Use --force to overwrite" in second.output

    third = runner.invoke(cli, args + ['--force'])
    assert third.exit_code == 0
    assert "Build complete!" in third.output


def test_build_per_relation_mode(test_config):
    runner = CliRunner()
    result = runner.invoke(cli, [
        '--config', str(test_config), 'build', '--mode', 'per_relation', '--skip-viz',
    ])

    assert result.exit_code == 0, result.output
    assert "(0 directed, mode=per_relation)" in result.output


def test_build_malformed_source_fails(test_config, tmp_path):
    (tmp_path / "data" / "stats.csv").write_text(STATISTICS + "BROKEN,1,2\n")

    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(test_config), 'build'])

    assert result.exit_code == 1
    assert "Unable to load network data" in result.output
    assert not (tmp_path / "output" / "network.json").exists()


def test_summary(test_config):
    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(test_config), 'summary'])

    assert result.exit_code == 0, result.output
    assert "Total genes:       4" in result.output
    assert "Total eQTLs:       324" in result.output
    assert "Coloc Evidence: 2" in result.output
    assert "min_p=2.31e-24" in result.output
    assert "min_p=2.10e-4" in result.output

    genes_section = result.output.split("Genes:")[-1]
    assert genes_section.index("CACNA1C") < genes_section.index("FOXP2")


def test_summary_ascending(test_config):
    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(test_config), 'summary', '--ascending'])

    assert result.exit_code == 0
    genes_section = result.output.split("Genes:")[-1]
    assert genes_section.index("FOXP2") < genes_section.index("CACNA1C")


def test_summary_rejects_unknown_sort(test_config):
    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(test_config), 'summary', '--sort-by', 'Nope'])

    assert result.exit_code != 0


def test_inspect_gene(test_config):
    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(test_config), 'inspect', 'gene', 'CHD8'])

    assert result.exit_code == 0, result.output
    assert "Chromatin remodeler" in result.output
    assert "Total eQTLs:     36" in result.output
    assert "Min p-value:     4.00e-7" in result.output


def test_inspect_unknown_gene(test_config):
    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(test_config), 'inspect', 'gene', 'NOPE'])

    assert result.exit_code == 1
    assert "Gene not in network" in result.output


def test_inspect_edge(test_config):
    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(test_config), 'inspect', 'edge', '1'])

    assert result.exit_code == 0, result.output
    assert "CACNA1C -> CHD8" in result.output
    assert "Coloc Evidence" in result.output
    assert "Direction: coloc" in result.output


def test_inspect_edge_undirected_mode(test_config):
    runner = CliRunner()
    result = runner.invoke(cli, [
        '--config', str(test_config), 'inspect', '--mode', 'per_relation', 'edge', '1',
    ])

    assert result.exit_code == 0
    assert "CHD8 <-> CACNA1C" in result.output
    assert "Direction:" not in result.output


def test_inspect_unknown_edge(test_config):
    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(test_config), 'inspect', 'edge', '42'])

    assert result.exit_code == 1
    assert "No edge with id 42" in result.output


def test_inspect_undecodable_source_fails_cleanly(test_config, tmp_path):
    (tmp_path / "data" / "relations.csv").write_bytes(b"gene1,gene2\n\xff\xfe\n")

    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(test_config), 'inspect', 'gene', 'CHD8'])

    assert result.exit_code == 1
    assert "Unable to load network data" in result.output
    assert not isinstance(result.exception, UnicodeDecodeError)
