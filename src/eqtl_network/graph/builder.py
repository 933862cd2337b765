"""Compose statistics and canonical edges into a display graph model."""

from typing import Iterable

import structlog

from eqtl_network.config.schema import DisplayConfig
from eqtl_network.graph.catalog import GeneCatalog
from eqtl_network.graph.models import GraphEdge, GraphModel, GraphNode
from eqtl_network.relations.models import CanonicalEdge
from eqtl_network.statistics.index import StatisticsIndex

logger = structlog.get_logger()


def node_size(total_eqtls: int, display: DisplayConfig | None = None) -> float:
    """Linear-with-floor node size: max(30, total_eqtls / 4 + 20) by default.

    Not normalized across the dataset, so sizes are comparable between loads.
    """
    display = display or DisplayConfig()
    return max(
        display.node_min_size,
        total_eqtls * display.node_size_scale + display.node_size_offset,
    )


def edge_widths(
    weight: float, display: DisplayConfig | None = None
) -> tuple[float, float, float]:
    """Return (base, hover, selection) widths for an edge weight.

    Defaults: base max(1, w*0.8), hover max(1.5, w*1.0), selection max(2, w*1.2).
    For any weight >= 0, hover >= base and selection >= base.
    """
    display = display or DisplayConfig()
    base = max(display.edge_width_floor, weight * display.edge_width_factor)
    hover = max(display.hover_width_floor, weight * display.hover_width_factor)
    selection = max(display.selection_width_floor, weight * display.selection_width_factor)
    return base, hover, selection


def edge_roundness(edge: CanonicalEdge, display: DisplayConfig | None = None) -> float:
    display = display or DisplayConfig()
    if edge.direction == "statistical":
        return display.statistical_roundness
    if edge.direction == "coloc":
        return display.coloc_roundness
    return display.undirected_roundness


def network_genes(edges: Iterable[CanonicalEdge]) -> list[str]:
    """Distinct genes appearing in any edge's relation, first-seen order."""
    seen: dict[str, None] = {}
    for edge in edges:
        seen.setdefault(edge.relation.gene1, None)
        seen.setdefault(edge.relation.gene2, None)
    return list(seen)


def build_graph_model(
    edges: Iterable[CanonicalEdge],
    statistics: StatisticsIndex,
    catalog: GeneCatalog | None = None,
    display: DisplayConfig | None = None,
) -> GraphModel:
    """Build the node/edge graph model.

    Nodes come from relation endpoints only: genes present in statistics but
    in no relation are excluded. Genes missing from statistics get the default
    record (zero counts, min_pvalue "N/A").

    Args:
        edges: Canonical edges from normalize_relations()
        statistics: Per-gene statistics lookup
        catalog: Gene color/description catalog (fallback values if None)
        display: Visual encoding parameters (defaults if None)

    Returns:
        GraphModel with nodes in first-seen gene order and edges in input order,
        edge ids being their position
    """
    edges = list(edges)
    catalog = catalog or GeneCatalog()
    display = display or DisplayConfig()

    nodes = []
    missing = []
    for gene in network_genes(edges):
        if gene not in statistics:
            missing.append(gene)
        gene_stats = statistics.get(gene)
        nodes.append(GraphNode(
            id=gene,
            label=gene,
            size=node_size(gene_stats.total_eqtls, display),
            color=catalog.color(gene),
            description=catalog.description(gene),
            statistics=gene_stats,
        ))

    if missing:
        logger.info("graph_genes_without_statistics", genes=missing)

    graph_edges = []
    for position, edge in enumerate(edges):
        width, hover_width, selection_width = edge_widths(edge.relation.weight, display)
        graph_edges.append(GraphEdge(
            id=position,
            source=edge.source,
            target=edge.target,
            color=edge.relation.color,
            width=width,
            selection_width=selection_width,
            hover_width=hover_width,
            roundness=edge_roundness(edge, display),
            arrow=edge.directed,
            arrow_scale=display.arrow_scale,
            canonical=edge,
        ))

    logger.info("graph_model_built", node_count=len(nodes), edge_count=len(graph_edges))
    return GraphModel(nodes=tuple(nodes), edges=tuple(graph_edges))
