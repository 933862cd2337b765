"""Per-gene eQTL statistics: parsing and lookup."""

from eqtl_network.statistics.index import StatisticsIndex, record_to_statistics
from eqtl_network.statistics.models import (
    MISSING_PVALUE,
    STATISTICS_COLUMNS,
    GeneStatistics,
)

__all__ = [
    "StatisticsIndex",
    "record_to_statistics",
    "GeneStatistics",
    "MISSING_PVALUE",
    "STATISTICS_COLUMNS",
]
