"""Output generation: tables, graph export, summary charts and provenance."""

from eqtl_network.output.provenance import ProvenanceTracker
from eqtl_network.output.tables import (
    GENE_TABLE_COLUMNS,
    edge_table,
    effect_size_table,
    gene_table,
    kind_table,
    node_table,
    profile_table,
    relation_table,
    significance_table,
    strength_table,
)
from eqtl_network.output.visualizations import (
    generate_all_plots,
    plot_connection_types,
    plot_effect_sizes,
    plot_eqtl_counts,
    plot_evidence_strength,
    plot_gene_profiles,
    plot_significance,
)
from eqtl_network.output.writers import network_document, write_network_output

__all__ = [
    "ProvenanceTracker",
    "GENE_TABLE_COLUMNS",
    "edge_table",
    "effect_size_table",
    "gene_table",
    "kind_table",
    "node_table",
    "profile_table",
    "relation_table",
    "significance_table",
    "strength_table",
    "generate_all_plots",
    "plot_connection_types",
    "plot_effect_sizes",
    "plot_eqtl_counts",
    "plot_evidence_strength",
    "plot_gene_profiles",
    "plot_significance",
    "network_document",
    "write_network_output",
]
