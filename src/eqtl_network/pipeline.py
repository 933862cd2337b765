"""End-to-end load: parse -> normalize -> build -> summarize.

A load runs to completion before anything is exposed. NetworkSession keeps the
last successfully built result and only replaces it when a new load succeeds.
"""

from dataclasses import dataclass

import structlog
from pydantic import ValidationError

from eqtl_network.config.schema import DisplayConfig, NetworkConfig
from eqtl_network.graph.builder import build_graph_model
from eqtl_network.graph.catalog import GeneCatalog
from eqtl_network.graph.models import GraphModel
from eqtl_network.parsing.errors import SourceFormatError
from eqtl_network.relations.models import (
    CanonicalEdge,
    EdgeMode,
    IntegrityWarning,
    RawRelation,
)
from eqtl_network.relations.normalizer import normalize_relations
from eqtl_network.relations.parse import parse_relations
from eqtl_network.sources.loader import SourceError, SourceLoader, SourceTexts
from eqtl_network.statistics.index import StatisticsIndex
from eqtl_network.statistics.models import GeneStatistics
from eqtl_network.summary.aggregator import (
    NetworkSummary,
    SummaryCounts,
    resolve_network_summary,
    summarize_edges,
)

logger = structlog.get_logger()

# Failures that abort a load without affecting the previous result
LOAD_ERRORS = (SourceFormatError, SourceError, ValidationError)


@dataclass(frozen=True)
class NetworkResult:
    """Immutable output of one pipeline load."""
    graph: GraphModel
    counts: SummaryCounts
    summary: NetworkSummary
    statistics: StatisticsIndex
    relations: tuple[RawRelation, ...] = ()
    edges: tuple[CanonicalEdge, ...] = ()
    warnings: tuple[IntegrityWarning, ...] = ()
    mode: EdgeMode = EdgeMode.MERGE_DIRECTED


def build_network(
    relations_text: str,
    statistics_text: str,
    summary_text: str | None = None,
    mode: EdgeMode = EdgeMode.MERGE_DIRECTED,
    catalog: GeneCatalog | None = None,
    display: DisplayConfig | None = None,
) -> NetworkResult:
    """Run the full pipeline over in-memory source texts.

    Args:
        relations_text: Relations CSV document
        statistics_text: Statistics CSV document
        summary_text: Optional precomputed summary JSON
        mode: Edge derivation mode
        catalog: Gene color/description catalog
        display: Visual encoding parameters

    Returns:
        NetworkResult; identical inputs produce equal results

    Raises:
        SourceFormatError: On a malformed row (source name attached)
        pydantic.ValidationError: On an invalid summary document
    """
    try:
        statistics = StatisticsIndex.from_text(statistics_text)
    except SourceFormatError as e:
        raise e.with_source("statistics")

    try:
        relations = parse_relations(relations_text)
    except SourceFormatError as e:
        raise e.with_source("relations")

    normalized = normalize_relations(relations, mode=mode)
    graph = build_graph_model(
        normalized.edges,
        statistics,
        catalog=catalog,
        display=display,
    )
    counts = summarize_edges(normalized.edges)
    summary = resolve_network_summary(summary_text, statistics, relations)

    return NetworkResult(
        graph=graph,
        counts=counts,
        summary=summary,
        statistics=statistics,
        relations=tuple(relations),
        edges=normalized.edges,
        warnings=normalized.warnings,
        mode=EdgeMode(mode),
    )


class NetworkSession:
    """Holds the last-good NetworkResult across loads.

    load() returns a single success flag; failure details are logged only.
    """

    def __init__(self, config: NetworkConfig | None = None):
        self.config = config
        self._result: NetworkResult | None = None

    @property
    def result(self) -> NetworkResult | None:
        return self._result

    def load(self, texts: SourceTexts) -> bool:
        """Build from source texts; keep the previous result on failure."""
        config = self.config
        try:
            result = build_network(
                texts.relations,
                texts.statistics,
                summary_text=texts.summary,
                mode=config.edge_mode if config else EdgeMode.MERGE_DIRECTED,
                catalog=GeneCatalog.from_config(config) if config else None,
                display=config.display if config else None,
            )
        except LOAD_ERRORS as e:
            logger.error("network_load_failed", error=str(e), error_type=type(e).__name__)
            return False

        self._result = result
        logger.info(
            "network_load_complete",
            nodes=len(result.graph.nodes),
            edges=len(result.graph.edges),
            warnings=len(result.warnings),
        )
        return True

    def refresh(self, loader: SourceLoader | None = None) -> bool:
        """Read sources named in the config and load them."""
        if self.config is None:
            raise ValueError("NetworkSession.refresh() requires a config")
        loader = loader or SourceLoader.from_config(self.config)
        try:
            texts = loader.load(self.config)
        except SourceError as e:
            logger.error("network_source_failed", location=e.location, reason=e.reason)
            return False
        return self.load(texts)

    def select_node(self, node_id: str) -> GeneStatistics | None:
        """Statistics behind a selected node, via the node's back-reference."""
        if self._result is None:
            return None
        node = self._result.graph.node(node_id)
        return node.statistics if node is not None else None

    def select_edge(self, edge_id: int) -> CanonicalEdge | None:
        """Canonical edge behind a selected edge, via the edge's back-reference."""
        if self._result is None:
            return None
        edge = self._result.graph.edge(edge_id)
        return edge.canonical if edge is not None else None
