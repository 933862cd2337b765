"""Graph model derivation: nodes sized by eQTL count, edges styled by relation."""

from eqtl_network.graph.builder import (
    build_graph_model,
    edge_roundness,
    edge_widths,
    network_genes,
    node_size,
)
from eqtl_network.graph.catalog import (
    DEFAULT_DESCRIPTION,
    DEFAULT_NODE_COLOR,
    GeneCatalog,
)
from eqtl_network.graph.models import GraphEdge, GraphModel, GraphNode

__all__ = [
    "build_graph_model",
    "edge_roundness",
    "edge_widths",
    "network_genes",
    "node_size",
    "DEFAULT_DESCRIPTION",
    "DEFAULT_NODE_COLOR",
    "GeneCatalog",
    "GraphEdge",
    "GraphModel",
    "GraphNode",
]
