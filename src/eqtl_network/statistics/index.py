"""Lookup from gene identifier to its eQTL statistics."""

from typing import Iterable, Iterator

import structlog

from eqtl_network.parsing.delimited import (
    Record,
    parse_records,
    to_float,
    to_identifier,
    to_int,
)
from eqtl_network.statistics.models import STATISTICS_COLUMNS, GeneStatistics

logger = structlog.get_logger()


def record_to_statistics(record: Record) -> GeneStatistics:
    """Convert one statistics row into a GeneStatistics.

    Raises:
        FieldConversionError: If a numeric column is malformed or the gene is empty
    """
    return GeneStatistics(
        gene=to_identifier(record, 0, STATISTICS_COLUMNS[0]),
        total_eqtls=to_int(record, 1, STATISTICS_COLUMNS[1]),
        significant_p05=to_int(record, 2, STATISTICS_COLUMNS[2]),
        highly_sig_p001=to_int(record, 3, STATISTICS_COLUMNS[3]),
        mean_effect=to_float(record, 4, STATISTICS_COLUMNS[4]),
        tissues=to_int(record, 5, STATISTICS_COLUMNS[5]),
        min_pvalue=record[6] or "N/A",
        max_neg_log10=to_float(record, 7, STATISTICS_COLUMNS[7]),
    )


class StatisticsIndex:
    """Gene -> GeneStatistics mapping with a documented default for unknown genes.

    Relation membership and statistics coverage come from independent sources,
    so a lookup miss is not an error: get() returns GeneStatistics.default().
    """

    def __init__(self, statistics: Iterable[GeneStatistics] = ()):
        self._by_gene: dict[str, GeneStatistics] = {}
        for entry in statistics:
            if entry.gene in self._by_gene:
                logger.warning("statistics_duplicate_gene", gene=entry.gene)
            self._by_gene[entry.gene] = entry

    @classmethod
    def from_records(cls, records: Iterable[Record]) -> "StatisticsIndex":
        return cls(record_to_statistics(record) for record in records)

    @classmethod
    def from_text(cls, text: str) -> "StatisticsIndex":
        """Parse a statistics CSV document (header + one row per gene).

        Raises:
            RecordParseError: On a row with the wrong number of fields
            FieldConversionError: On a malformed numeric value
        """
        records = parse_records(text, expected_fields=len(STATISTICS_COLUMNS))
        index = cls.from_records(records)
        logger.info("statistics_index_built", gene_count=len(index))
        return index

    def get(self, gene: str) -> GeneStatistics:
        entry = self._by_gene.get(gene)
        if entry is None:
            return GeneStatistics.default(gene)
        return entry

    def __contains__(self, gene: object) -> bool:
        return gene in self._by_gene

    def __len__(self) -> int:
        return len(self._by_gene)

    def __iter__(self) -> Iterator[GeneStatistics]:
        return iter(self._by_gene.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StatisticsIndex):
            return NotImplemented
        return list(self._by_gene.items()) == list(other._by_gene.items())

    def genes(self) -> list[str]:
        return list(self._by_gene)
