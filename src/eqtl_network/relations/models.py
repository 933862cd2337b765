"""Data models for pairwise gene relations and canonical edges."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

STATISTICAL_SIMILARITY = "Statistical Similarity"
COLOC_EVIDENCE = "Coloc Evidence"

# Relations source columns, in file order
RELATION_COLUMNS = [
    "gene1",
    "gene2",
    "connection_type",
    "weight",
    "evidence_strength",
    "details",
    "color",
]

# Ordered evidence labels; unknown labels rank below Weak
EVIDENCE_STRENGTH_ORDER = ["Weak", "Moderate", "Strong"]

Direction = Literal["statistical", "coloc"]

# Kind -> direction tag for the two kinds merged into directed edge pairs
DIRECTION_BY_KIND: dict[str, Direction] = {
    STATISTICAL_SIMILARITY: "statistical",
    COLOC_EVIDENCE: "coloc",
}


class EdgeMode(str, Enum):
    """How raw relations become canonical edges.

    MERGE_DIRECTED: group by unordered pair; a statistical+coloc pair becomes
        two directed edges
    PER_RELATION: one undirected edge per raw relation, no grouping
    """

    MERGE_DIRECTED = "merge_directed"
    PER_RELATION = "per_relation"


def strength_rank(label: str) -> int:
    """Rank of an evidence-strength label (Weak=1, Moderate=2, Strong=3, unknown=0)."""
    try:
        return EVIDENCE_STRENGTH_ORDER.index(label) + 1
    except ValueError:
        return 0


class RawRelation(BaseModel):
    """One pairwise relation as read from the relations source.

    Attributes:
        gene1: First gene as recorded
        gene2: Second gene as recorded
        connection_type: Relation kind, e.g. "Statistical Similarity"
        weight: Non-negative relation weight
        evidence_strength: "Weak", "Moderate" or "Strong" (open set)
        details: Free-text description
        color: Display color (hex string)
        row_index: 1-based source line number (0 when built in code)
    """

    model_config = ConfigDict(frozen=True)

    gene1: str = Field(..., min_length=1)
    gene2: str = Field(..., min_length=1)
    connection_type: str
    weight: float = Field(..., ge=0.0)
    evidence_strength: str
    details: str = ""
    color: str = ""
    row_index: int = 0

    @property
    def pair_key(self) -> tuple[str, str]:
        """Unordered pair key: (A, B) and (B, A) collide."""
        return tuple(sorted((self.gene1, self.gene2)))

    @property
    def strength_rank(self) -> int:
        return strength_rank(self.evidence_strength)


class CanonicalEdge(BaseModel):
    """A direction-resolved edge derived from one raw relation.

    Undirected edges keep the recorded endpoint order and have direction None.
    Directed edges carry the tag of the kind that produced them.
    """

    model_config = ConfigDict(frozen=True)

    relation: RawRelation
    source: str
    target: str
    direction: Direction | None = None

    @property
    def directed(self) -> bool:
        return self.direction is not None

    @classmethod
    def undirected(cls, relation: RawRelation) -> "CanonicalEdge":
        return cls(relation=relation, source=relation.gene1, target=relation.gene2)

    def describe(self) -> str:
        """Human-readable endpoint summary: 'A -> B' for directed, 'A <-> B' otherwise."""
        arrow = "->" if self.directed else "<->"
        return f"{self.source} {arrow} {self.target}"


class IntegrityWarning(BaseModel):
    """A relation group that did not match any documented merge shape."""

    model_config = ConfigDict(frozen=True)

    pair_key: tuple[str, str]
    kinds: tuple[str, ...]
    row_indices: tuple[int, ...]
    message: str
