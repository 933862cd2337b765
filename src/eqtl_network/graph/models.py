"""Graph model consumed by the presentation layer."""

from dataclasses import dataclass, field
from typing import Any

from eqtl_network.relations.models import CanonicalEdge
from eqtl_network.statistics.models import GeneStatistics

# Fixed presentation colors
NODE_BORDER_COLOR = "#2C3E50"
HIGHLIGHT_COLOR = "#1565C0"
HIGHLIGHT_BORDER_COLOR = "#0D47A1"


@dataclass(frozen=True)
class GraphNode:
    """A gene node with its display attributes.

    statistics is the full source record (default record for genes missing
    from the statistics source); consumers read it but never mutate it.
    """
    id: str
    label: str
    size: float
    color: str
    description: str
    statistics: GeneStatistics
    border_color: str = NODE_BORDER_COLOR

    def to_vis(self) -> dict[str, Any]:
        """vis-network style node dict."""
        return {
            "id": self.id,
            "label": self.label,
            "size": self.size,
            "color": {
                "background": self.color,
                "border": self.border_color,
                "highlight": {
                    "background": HIGHLIGHT_COLOR,
                    "border": HIGHLIGHT_BORDER_COLOR,
                },
            },
            "geneInfo": {
                **self.statistics.model_dump(),
                "description": self.description,
                "min_pvalue_display": self.statistics.format_min_pvalue(),
            },
        }


@dataclass(frozen=True)
class GraphEdge:
    """An edge with derived display attributes and its source canonical edge."""
    id: int
    source: str
    target: str
    color: str
    width: float
    selection_width: float
    hover_width: float
    roundness: float
    arrow: bool
    arrow_scale: float
    canonical: CanonicalEdge

    @property
    def directed(self) -> bool:
        return self.canonical.directed

    def to_vis(self) -> dict[str, Any]:
        """vis-network style edge dict."""
        return {
            "id": self.id,
            "from": self.source,
            "to": self.target,
            "color": {
                "color": self.color,
                "highlight": HIGHLIGHT_COLOR,
                "hover": HIGHLIGHT_COLOR,
                "inherit": False,
            },
            "width": self.width,
            "selectionWidth": self.selection_width,
            "hoverWidth": self.hover_width,
            "smooth": {
                "enabled": True,
                "type": "continuous",
                "roundness": self.roundness,
            },
            "arrows": {
                "to": {
                    "enabled": self.arrow,
                    "scaleFactor": self.arrow_scale,
                    "type": "arrow",
                },
            },
            "connectionData": {
                **self.canonical.relation.model_dump(exclude={"row_index"}),
                "direction": self.canonical.direction,
            },
        }


@dataclass(frozen=True)
class GraphModel:
    """Nodes and edges in documented order with O(1) lookup by id."""
    nodes: tuple[GraphNode, ...] = ()
    edges: tuple[GraphEdge, ...] = ()
    _node_index: dict[str, GraphNode] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )
    _edge_index: dict[int, GraphEdge] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self):
        self._node_index.update((node.id, node) for node in self.nodes)
        self._edge_index.update((edge.id, edge) for edge in self.edges)

    def node(self, node_id: str) -> GraphNode | None:
        return self._node_index.get(node_id)

    def edge(self, edge_id: int) -> GraphEdge | None:
        return self._edge_index.get(edge_id)

    def to_vis(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "nodes": [node.to_vis() for node in self.nodes],
            "edges": [edge.to_vis() for edge in self.edges],
        }
