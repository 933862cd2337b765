"""Parse the relations source into RawRelation records."""

from typing import Iterable

import structlog

from eqtl_network.parsing.delimited import (
    Record,
    parse_records,
    to_float,
    to_identifier,
)
from eqtl_network.parsing.errors import FieldConversionError
from eqtl_network.relations.models import RELATION_COLUMNS, RawRelation

logger = structlog.get_logger()


def record_to_relation(record: Record) -> RawRelation:
    """Convert one relations row into a RawRelation.

    Raises:
        FieldConversionError: On an empty gene, a non-numeric or negative weight
    """
    weight = to_float(record, 3, "weight")
    if weight < 0:
        raise FieldConversionError(record.row_index, "weight", record[3], "non-negative number")

    return RawRelation(
        gene1=to_identifier(record, 0, "gene1"),
        gene2=to_identifier(record, 1, "gene2"),
        connection_type=record[2],
        weight=weight,
        evidence_strength=record[4],
        details=record[5],
        color=record[6],
        row_index=record.row_index,
    )


def parse_relations(source: str | Iterable[Record]) -> list[RawRelation]:
    """Parse relations from CSV text or from already-tokenized records.

    Args:
        source: Relations CSV text (header + rows) or parsed Records

    Returns:
        RawRelations in source order

    Raises:
        RecordParseError: On a row with the wrong number of fields
        FieldConversionError: On a malformed value
    """
    if isinstance(source, str):
        records = parse_records(source, expected_fields=len(RELATION_COLUMNS))
    else:
        records = list(source)

    relations = [record_to_relation(record) for record in records]
    logger.info("relations_parsed", relation_count=len(relations))
    return relations
