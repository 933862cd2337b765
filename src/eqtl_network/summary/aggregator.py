"""Categorical counts and network-level summary for reporting."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

import structlog
from pydantic import BaseModel, Field

from eqtl_network.relations.models import CanonicalEdge, RawRelation, strength_rank
from eqtl_network.statistics.index import StatisticsIndex

logger = structlog.get_logger()


@dataclass(frozen=True)
class SummaryCounts:
    """Frequency tables by relation kind and by evidence strength.

    Both mappings preserve first-seen key order for stable display.
    """
    by_kind: dict[str, int] = field(default_factory=dict)
    by_strength: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.by_kind.values())

    def strengths_ranked(self) -> list[tuple[str, int]]:
        """Strength counts ordered Weak < Moderate < Strong (unknown labels first)."""
        return sorted(self.by_strength.items(), key=lambda item: strength_rank(item[0]))


def summarize_relations(relations: Iterable[RawRelation]) -> SummaryCounts:
    """Fold relations into kind and evidence-strength counts (pure)."""
    by_kind: dict[str, int] = {}
    by_strength: dict[str, int] = {}
    for relation in relations:
        by_kind[relation.connection_type] = by_kind.get(relation.connection_type, 0) + 1
        by_strength[relation.evidence_strength] = (
            by_strength.get(relation.evidence_strength, 0) + 1
        )
    return SummaryCounts(by_kind=by_kind, by_strength=by_strength)


def summarize_edges(edges: Iterable[CanonicalEdge]) -> SummaryCounts:
    """Fold canonical edges into kind and evidence-strength counts."""
    return summarize_relations(edge.relation for edge in edges)


class NetworkSummary(BaseModel):
    """Dataset-level summary, either precomputed (JSON source) or derived.

    Attributes:
        total_genes: Genes in the statistics source
        total_eqtls: Sum of Total_eQTLs over all genes
        total_connections: Raw relation count
        genes_in_network: Distinct genes appearing in relations
        connection_types: Relation kind -> count
        gene_degrees: Gene -> number of relations touching it
    """

    total_genes: int = Field(..., ge=0)
    total_eqtls: int = Field(..., ge=0)
    total_connections: int = Field(..., ge=0)
    genes_in_network: int | None = Field(default=None, ge=0)
    connection_types: dict[str, int] = Field(default_factory=dict)
    gene_degrees: dict[str, int] = Field(default_factory=dict)


def compute_network_summary(
    statistics: StatisticsIndex,
    relations: Iterable[RawRelation],
) -> NetworkSummary:
    """Derive a NetworkSummary from parsed sources."""
    relations = list(relations)
    degrees: Counter[str] = Counter()
    for relation in relations:
        degrees[relation.gene1] += 1
        if relation.gene2 != relation.gene1:
            degrees[relation.gene2] += 1

    return NetworkSummary(
        total_genes=len(statistics),
        total_eqtls=sum(entry.total_eqtls for entry in statistics),
        total_connections=len(relations),
        genes_in_network=len(degrees),
        connection_types=summarize_relations(relations).by_kind,
        gene_degrees=dict(degrees),
    )


def load_network_summary(text: str) -> NetworkSummary:
    """Validate a precomputed summary JSON document.

    Raises:
        pydantic.ValidationError: If the JSON is malformed or fields are invalid
    """
    return NetworkSummary.model_validate_json(text)


def resolve_network_summary(
    summary_text: str | None,
    statistics: StatisticsIndex,
    relations: Iterable[RawRelation],
) -> NetworkSummary:
    """Use the precomputed summary when supplied, otherwise compute one."""
    if summary_text is not None and summary_text.strip():
        logger.info("network_summary_precomputed")
        return load_network_summary(summary_text)
    logger.info("network_summary_computed")
    return compute_network_summary(statistics, relations)
