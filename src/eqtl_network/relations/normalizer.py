"""Collapse raw relations into canonical (direction-resolved) edges."""

from dataclasses import dataclass, field
from typing import Iterable

import structlog

from eqtl_network.relations.models import (
    COLOC_EVIDENCE,
    STATISTICAL_SIMILARITY,
    CanonicalEdge,
    EdgeMode,
    IntegrityWarning,
    RawRelation,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class NormalizationResult:
    """Canonical edges plus any non-fatal integrity warnings.

    Attributes:
        edges: Canonical edges in first-seen group order
        warnings: Groups that fell back to independent undirected edges
    """
    edges: tuple[CanonicalEdge, ...]
    warnings: tuple[IntegrityWarning, ...] = field(default_factory=tuple)


def group_relations(
    relations: Iterable[RawRelation],
) -> dict[tuple[str, str], list[RawRelation]]:
    """Group relations by unordered gene pair, preserving first-appearance order."""
    groups: dict[tuple[str, str], list[RawRelation]] = {}
    for relation in relations:
        groups.setdefault(relation.pair_key, []).append(relation)
    return groups


def _merge_group(
    pair_key: tuple[str, str],
    members: list[RawRelation],
) -> tuple[list[CanonicalEdge], IntegrityWarning | None]:
    if len(members) == 1:
        return [CanonicalEdge.undirected(members[0])], None

    kinds = [member.connection_type for member in members]
    if len(members) == 2 and sorted(kinds) == sorted([STATISTICAL_SIMILARITY, COLOC_EVIDENCE]):
        by_kind = {member.connection_type: member for member in members}
        statistical = by_kind[STATISTICAL_SIMILARITY]
        coloc = by_kind[COLOC_EVIDENCE]
        # Coloc endpoints are swapped so the two arrows point in opposite directions
        return [
            CanonicalEdge(
                relation=statistical,
                source=statistical.gene1,
                target=statistical.gene2,
                direction="statistical",
            ),
            CanonicalEdge(
                relation=coloc,
                source=coloc.gene2,
                target=coloc.gene1,
                direction="coloc",
            ),
        ], None

    warning = IntegrityWarning(
        pair_key=pair_key,
        kinds=tuple(kinds),
        row_indices=tuple(member.row_index for member in members),
        message=(
            f"{len(members)} relations for pair {pair_key[0]}/{pair_key[1]} "
            f"with kinds {kinds}; emitting each as an undirected edge"
        ),
    )
    return [CanonicalEdge.undirected(member) for member in members], warning


def normalize_relations(
    relations: Iterable[RawRelation],
    mode: EdgeMode = EdgeMode.MERGE_DIRECTED,
) -> NormalizationResult:
    """Resolve raw relations into canonical edges.

    MERGE_DIRECTED mode:
    1. Group relations by sorted gene pair (first-appearance order)
    2. Single-member group -> one undirected edge, relation unchanged
    3. Exactly one "Statistical Similarity" + one "Coloc Evidence" ->
       two directed edges: statistical gene1->gene2, coloc gene2->gene1
    4. Any other shape -> IntegrityWarning, every member emitted undirected

    PER_RELATION mode emits one undirected edge per relation in input order.

    Args:
        relations: Raw relations in source order
        mode: Edge derivation mode

    Returns:
        NormalizationResult with edges and warnings
    """
    relations = list(relations)
    mode = EdgeMode(mode)
    logger.info("relations_normalize_start", relation_count=len(relations), mode=mode.value)

    if mode is EdgeMode.PER_RELATION:
        edges = tuple(CanonicalEdge.undirected(relation) for relation in relations)
        logger.info("relations_normalize_complete", edge_count=len(edges), warning_count=0)
        return NormalizationResult(edges=edges)

    edges: list[CanonicalEdge] = []
    warnings: list[IntegrityWarning] = []
    groups = group_relations(relations)

    for pair_key, members in groups.items():
        group_edges, warning = _merge_group(pair_key, members)
        edges.extend(group_edges)
        if warning is not None:
            logger.warning(
                "relation_group_integrity",
                pair=list(pair_key),
                kinds=list(warning.kinds),
                rows=list(warning.row_indices),
            )
            warnings.append(warning)

    directed_count = sum(1 for edge in edges if edge.directed)
    logger.info(
        "relations_normalize_complete",
        group_count=len(groups),
        edge_count=len(edges),
        directed_count=directed_count,
        warning_count=len(warnings),
    )

    return NormalizationResult(edges=tuple(edges), warnings=tuple(warnings))
