"""Graph model JSON + TSV table writer with provenance sidecar."""

import json
from datetime import datetime, timezone
from pathlib import Path

import yaml

from eqtl_network.output.provenance import ProvenanceTracker
from eqtl_network.output.tables import edge_table, gene_table, node_table, relation_table
from eqtl_network.pipeline import NetworkResult


def network_document(result: NetworkResult) -> dict:
    """JSON-serializable document handed to the presentation layer."""
    return {
        "mode": result.mode.value,
        **result.graph.to_vis(),
        "counts": {
            "by_kind": result.counts.by_kind,
            "by_strength": result.counts.by_strength,
        },
        "summary": result.summary.model_dump(),
        "warnings": [warning.model_dump() for warning in result.warnings],
    }


def write_network_output(
    result: NetworkResult,
    output_dir: Path,
    filename_base: str = "network",
    provenance: ProvenanceTracker | None = None,
) -> dict:
    """
    Write the graph model as JSON and its relations, nodes, edges and genes as TSV.

    Generates a YAML provenance sidecar with counts and metadata.

    Args:
        result: NetworkResult from build_network()
        output_dir: Directory to write output files (created if doesn't exist)
        filename_base: Base filename for the JSON document and sidecar
        provenance: Run metadata merged into the sidecar under "run"

    Returns:
        Dictionary with output file paths:
        {
            "json": graph document,
            "relations": raw relations TSV,
            "nodes": nodes TSV,
            "edges": edges TSV,
            "genes": gene statistics TSV,
            "provenance": YAML provenance sidecar
        }

    Notes:
        - Relations keep source order; node and edge order follow the graph model
        - Genes sort by Total_eQTLs DESC, Gene ASC
        - Min p-values are written as their source strings
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    paths = {
        "json": output_dir / f"{filename_base}.json",
        "relations": output_dir / "relations.tsv",
        "nodes": output_dir / "nodes.tsv",
        "edges": output_dir / "edges.tsv",
        "genes": output_dir / "genes.tsv",
        "provenance": output_dir / f"{filename_base}.provenance.yaml",
    }

    with open(paths["json"], "w") as f:
        json.dump(network_document(result), f, indent=2)

    tables = {
        "relations": relation_table(list(result.relations)),
        "nodes": node_table(result.graph),
        "edges": edge_table(result.graph),
        "genes": gene_table(result.statistics),
    }
    for name, df in tables.items():
        df.write_csv(paths[name], separator="\t", include_header=True)

    directed_count = sum(1 for edge in result.graph.edges if edge.directed)
    sidecar = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "output_files": [path.name for name, path in paths.items() if name != "provenance"],
        "edge_mode": result.mode.value,
        "statistics": {
            "node_count": len(result.graph.nodes),
            "edge_count": len(result.graph.edges),
            "directed_edge_count": directed_count,
            "relation_count": len(result.relations),
            "gene_count": len(result.statistics),
            "integrity_warning_count": len(result.warnings),
        },
        "connection_types": dict(result.counts.by_kind),
        "evidence_strength": dict(result.counts.by_strength),
    }
    if provenance is not None:
        sidecar["run"] = provenance.to_dict()

    with open(paths["provenance"], "w") as f:
        yaml.dump(sidecar, f, default_flow_style=False, sort_keys=False)

    return paths
