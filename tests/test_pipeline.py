"""Integration tests for the end-to-end network load and session behaviour."""

import pytest

from eqtl_network.config import load_config
from eqtl_network.parsing import FieldConversionError, RecordParseError
from eqtl_network.pipeline import NetworkSession, build_network
from eqtl_network.relations import EdgeMode
from eqtl_network.sources import SourceLoader, SourceTexts


RELATIONS = """gene1,gene2,connection_type,weight,evidence_strength,details,color
CACNA1C,CHD8,Statistical Similarity,3.2,Moderate,"Shared tissues: 12, r=0.61",#F39C12
CHD8,CACNA1C,Coloc Evidence,4.5,Strong,"PP.H4 = 0.83, cortex",#2ECC71
CNTNAP2,FOXP2,Coloc Evidence,5.0,Strong,cerebellum,#2ECC71
FOXP2,NOSTATS,Statistical Similarity,0.5,Weak,sparse,#F39C12
"""

STATISTICS = """Gene,Total_eQTLs,Significant_p05,Highly_Sig_p001,Mean_Effect_Size,Tissues,Min_p_value_CORRECTED,Max_neg_log10_pval
CACNA1C,184,184,142,-0.0843,21,2.31e-24,23.64
CHD8,36,36,20,0.1127,9,0.0000004,6.40
CNTNAP2,92,92,61,-0.1512,14,1.05e-11,10.98
FOXP2,12,12,4,0.2034,3,0.00021,3.68
SHANK3,7,7,0,0.0411,2,0.0123,1.91
"""


def test_build_network_end_to_end():
    result = build_network(RELATIONS, STATISTICS)

    node_ids = [node.id for node in result.graph.nodes]
    assert node_ids == ["CACNA1C", "CHD8", "CNTNAP2", "FOXP2", "NOSTATS"]
    assert "SHANK3" not in node_ids

    assert len(result.graph.edges) == 4
    directions = [edge.canonical.direction for edge in result.graph.edges]
    assert directions == ["statistical", "coloc", None, None]

    coloc = result.graph.edge(1)
    assert (coloc.source, coloc.target) == ("CACNA1C", "CHD8")
    assert coloc.canonical.relation.details == "PP.H4 = 0.83, cortex"

    assert result.graph.node("NOSTATS").statistics.min_pvalue == "N/A"
    assert result.graph.node("CACNA1C").size == 66
    assert result.counts.by_kind == {"Statistical Similarity": 2, "Coloc Evidence": 2}
    assert result.summary.total_genes == 5
    assert result.summary.total_connections == 4
    assert result.warnings == ()


def test_build_network_is_idempotent():
    assert build_network(RELATIONS, STATISTICS) == build_network(RELATIONS, STATISTICS)


def test_build_network_per_relation_mode():
    result = build_network(RELATIONS, STATISTICS, mode=EdgeMode.PER_RELATION)

    assert result.mode is EdgeMode.PER_RELATION
    assert not any(edge.arrow for edge in result.graph.edges)
    assert result.graph.edge(1).source == "CHD8"


def test_build_network_uses_precomputed_summary():
    summary = '{"total_genes": 42, "total_eqtls": 1, "total_connections": 1}'

    result = build_network(RELATIONS, STATISTICS, summary_text=summary)

    assert result.summary.total_genes == 42


def test_statistics_error_names_source():
    bad_statistics = STATISTICS.replace("CHD8,36", "CHD8,thirty-six")

    with pytest.raises(FieldConversionError) as exc_info:
        build_network(RELATIONS, bad_statistics)

    assert exc_info.value.source == "statistics"
    assert exc_info.value.row_index == 3
    assert exc_info.value.column == "Total_eQTLs"


def test_relations_error_names_source():
    bad_relations = RELATIONS + "A,B,Kind\n"

    with pytest.raises(RecordParseError) as exc_info:
        build_network(bad_relations, STATISTICS)

    assert exc_info.value.source == "relations"
    assert exc_info.value.row_index == 6


def test_session_keeps_last_good_result():
    session = NetworkSession()

    assert session.load(SourceTexts(relations=RELATIONS, statistics=STATISTICS))
    good = session.result

    bad = SourceTexts(relations=RELATIONS + "broken,row\n", statistics=STATISTICS)
    assert session.load(bad) is False
    assert session.result is good


def test_session_failure_before_any_success():
    session = NetworkSession()

    assert session.load(SourceTexts(relations="h\nx\n", statistics=STATISTICS)) is False
    assert session.result is None
    assert session.select_node("CHD8") is None


def test_session_invalid_summary_fails_load():
    session = NetworkSession()

    texts = SourceTexts(relations=RELATIONS, statistics=STATISTICS, summary='{"total_genes": "x"}')
    assert session.load(texts) is False


def test_session_selection_resolves_back_references():
    session = NetworkSession()
    session.load(SourceTexts(relations=RELATIONS, statistics=STATISTICS))

    stats = session.select_node("CHD8")
    assert stats.total_eqtls == 36
    assert stats.format_min_pvalue() == "4.00e-7"

    canonical = session.select_edge(2)
    assert canonical.relation.connection_type == "Coloc Evidence"
    assert session.select_edge(99) is None


def test_session_refresh_from_config(tmp_path):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "relations.csv").write_text(RELATIONS)
    (data_dir / "stats.csv").write_text(STATISTICS)
    config_file = tmp_path / "config.yaml"
    config_file.write_text(f"""
data_dir: {data_dir}
cache_dir: {tmp_path / "cache"}
edge_mode: per_relation
sources:
  relations: relations.csv
  statistics: stats.csv
catalog:
  FOXP2:
    color: "#E74C3C"
    description: Forkhead box P2
""")
    config = load_config(config_file)
    session = NetworkSession(config)

    assert session.refresh()
    assert session.result.mode is EdgeMode.PER_RELATION
    assert session.result.graph.node("FOXP2").color == "#E74C3C"


def test_session_refresh_missing_source(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(f"""
data_dir: {tmp_path / "data"}
cache_dir: {tmp_path / "cache"}
sources:
  relations: missing.csv
  statistics: missing_stats.csv
""")
    session = NetworkSession(load_config(config_file))

    assert session.refresh(SourceLoader()) is False
    assert session.result is None


def test_session_refresh_undecodable_source(tmp_path):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "relations.csv").write_bytes(RELATIONS.encode("utf-8") + b"\xff\xfe,B,x,1,Weak,d,#fff\n")
    (data_dir / "stats.csv").write_text(STATISTICS)
    config_file = tmp_path / "config.yaml"
    config_file.write_text(f"""
data_dir: {data_dir}
cache_dir: {tmp_path / "cache"}
sources:
  relations: relations.csv
  statistics: stats.csv
""")
    session = NetworkSession(load_config(config_file))

    assert session.refresh(SourceLoader()) is False
    assert session.result is None
