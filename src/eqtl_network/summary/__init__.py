"""Relation counts by kind and evidence strength, plus network summary."""

from eqtl_network.summary.aggregator import (
    NetworkSummary,
    SummaryCounts,
    compute_network_summary,
    load_network_summary,
    resolve_network_summary,
    summarize_edges,
    summarize_relations,
)

__all__ = [
    "NetworkSummary",
    "SummaryCounts",
    "compute_network_summary",
    "load_network_summary",
    "resolve_network_summary",
    "summarize_edges",
    "summarize_relations",
]
