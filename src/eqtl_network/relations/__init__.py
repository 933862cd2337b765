"""Pairwise gene relations: parsing and canonical edge derivation.

Relation kinds in the shipped datasets:
- Statistical Similarity: correlated eQTL profiles between two genes
- Coloc Evidence: colocalization of association signals

A pair carrying both kinds is displayed as two opposing directed edges.
"""

from eqtl_network.relations.models import (
    COLOC_EVIDENCE,
    EVIDENCE_STRENGTH_ORDER,
    RELATION_COLUMNS,
    STATISTICAL_SIMILARITY,
    CanonicalEdge,
    EdgeMode,
    IntegrityWarning,
    RawRelation,
    strength_rank,
)
from eqtl_network.relations.normalizer import (
    NormalizationResult,
    group_relations,
    normalize_relations,
)
from eqtl_network.relations.parse import parse_relations, record_to_relation

__all__ = [
    "COLOC_EVIDENCE",
    "EVIDENCE_STRENGTH_ORDER",
    "RELATION_COLUMNS",
    "STATISTICAL_SIMILARITY",
    "CanonicalEdge",
    "EdgeMode",
    "IntegrityWarning",
    "RawRelation",
    "strength_rank",
    "NormalizationResult",
    "group_relations",
    "normalize_relations",
    "parse_relations",
    "record_to_relation",
]
