"""Tabular views of statistics, nodes and edges for reports and charts."""

import polars as pl

from eqtl_network.graph.models import GraphModel
from eqtl_network.relations.models import RawRelation
from eqtl_network.statistics.index import StatisticsIndex
from eqtl_network.statistics.models import GeneStatistics
from eqtl_network.summary.aggregator import SummaryCounts

# Display column names for the gene statistics table
GENE_TABLE_COLUMNS = {
    "gene": "Gene",
    "total_eqtls": "Total_eQTLs",
    "significant_p05": "Significant_p05",
    "highly_sig_p001": "Highly_Sig_p001",
    "mean_effect": "Mean_Effect_Size",
    "tissues": "Tissues",
    "min_pvalue": "Min_p_value_CORRECTED",
    "max_neg_log10": "Max_neg_log10_pval",
}

GENE_TABLE_SCHEMA = {
    "Gene": pl.Utf8,
    "Total_eQTLs": pl.Int64,
    "Significant_p05": pl.Int64,
    "Highly_Sig_p001": pl.Int64,
    "Mean_Effect_Size": pl.Float64,
    "Tissues": pl.Int64,
    "Min_p_value_CORRECTED": pl.Utf8,
    "Min_p_value_display": pl.Utf8,
    "Max_neg_log10_pval": pl.Float64,
}


PVALUE_COLUMN = "Min_p_value_CORRECTED"


def _pvalue_order(entries: list[GeneStatistics], descending: bool) -> list[GeneStatistics]:
    """Numeric p-value order (Decimal), ties by gene, unparseable values last."""
    entries = sorted(entries, key=lambda entry: entry.gene)
    known = [entry for entry in entries if entry.min_pvalue_value is not None]
    missing = [entry for entry in entries if entry.min_pvalue_value is None]
    known.sort(key=lambda entry: entry.min_pvalue_value, reverse=descending)
    return known + missing


def gene_table(
    statistics: StatisticsIndex,
    sort_by: str = "Total_eQTLs",
    descending: bool = True,
) -> pl.DataFrame:
    """Per-gene statistics table, sortable by any display column.

    Min_p_value_CORRECTED stays a string column; Min_p_value_display holds the
    formatted value. Sorting on either p-value column compares the parsed
    numbers, with "N/A" and other unparseable values last in both directions.

    Raises:
        ValueError: If sort_by is not a table column
    """
    if sort_by not in GENE_TABLE_SCHEMA:
        raise ValueError(f"Unknown sort column: {sort_by}")

    entries = list(statistics)
    by_pvalue = sort_by in (PVALUE_COLUMN, "Min_p_value_display")
    if by_pvalue:
        entries = _pvalue_order(entries, descending)

    rows = []
    for entry in entries:
        row = {GENE_TABLE_COLUMNS[key]: value for key, value in entry.model_dump().items()}
        row["Min_p_value_display"] = entry.format_min_pvalue()
        rows.append(row)

    df = pl.DataFrame(rows, schema=GENE_TABLE_SCHEMA)
    if by_pvalue:
        return df
    return df.sort([sort_by, "Gene"], descending=[descending, False])


def relation_table(relations: list[RawRelation]) -> pl.DataFrame:
    """Raw relations as loaded, in source order."""
    return pl.DataFrame(
        [relation.model_dump() for relation in relations],
        schema={
            "gene1": pl.Utf8,
            "gene2": pl.Utf8,
            "connection_type": pl.Utf8,
            "weight": pl.Float64,
            "evidence_strength": pl.Utf8,
            "details": pl.Utf8,
            "color": pl.Utf8,
            "row_index": pl.Int64,
        },
    )


def node_table(graph: GraphModel) -> pl.DataFrame:
    return pl.DataFrame(
        {
            "id": [node.id for node in graph.nodes],
            "label": [node.label for node in graph.nodes],
            "size": [node.size for node in graph.nodes],
            "color": [node.color for node in graph.nodes],
            "description": [node.description for node in graph.nodes],
            "total_eqtls": [node.statistics.total_eqtls for node in graph.nodes],
        },
        schema={
            "id": pl.Utf8,
            "label": pl.Utf8,
            "size": pl.Float64,
            "color": pl.Utf8,
            "description": pl.Utf8,
            "total_eqtls": pl.Int64,
        },
    )


def edge_table(graph: GraphModel) -> pl.DataFrame:
    return pl.DataFrame(
        {
            "id": [edge.id for edge in graph.edges],
            "source": [edge.source for edge in graph.edges],
            "target": [edge.target for edge in graph.edges],
            "connection_type": [edge.canonical.relation.connection_type for edge in graph.edges],
            "direction": [edge.canonical.direction for edge in graph.edges],
            "weight": [edge.canonical.relation.weight for edge in graph.edges],
            "evidence_strength": [
                edge.canonical.relation.evidence_strength for edge in graph.edges
            ],
            "width": [edge.width for edge in graph.edges],
            "roundness": [edge.roundness for edge in graph.edges],
            "arrow": [edge.arrow for edge in graph.edges],
        },
        schema={
            "id": pl.Int64,
            "source": pl.Utf8,
            "target": pl.Utf8,
            "connection_type": pl.Utf8,
            "direction": pl.Utf8,
            "weight": pl.Float64,
            "evidence_strength": pl.Utf8,
            "width": pl.Float64,
            "roundness": pl.Float64,
            "arrow": pl.Boolean,
        },
    )


def counts_table(counts: dict[str, int], label: str) -> pl.DataFrame:
    """Two-column frame (label, count) preserving mapping order."""
    return pl.DataFrame(
        {label: list(counts.keys()), "count": list(counts.values())},
        schema={label: pl.Utf8, "count": pl.Int64},
    )


def kind_table(counts: SummaryCounts) -> pl.DataFrame:
    return counts_table(counts.by_kind, "connection_type")


def strength_table(counts: SummaryCounts) -> pl.DataFrame:
    return counts_table(dict(counts.strengths_ranked()), "evidence_strength")


def effect_size_table(genes: pl.DataFrame) -> pl.DataFrame:
    """Absolute mean effect size with its sign as a direction label."""
    return genes.select(
        pl.col("Gene"),
        pl.col("Mean_Effect_Size").abs().alias("abs_effect"),
        pl.when(pl.col("Mean_Effect_Size") > 0)
        .then(pl.lit("Positive"))
        .otherwise(pl.lit("Negative"))
        .alias("direction"),
    )


def significance_table(genes: pl.DataFrame) -> pl.DataFrame:
    """Long-format significant eQTL counts at both thresholds."""
    return genes.select("Gene", "Significant_p05", "Highly_Sig_p001").unpivot(
        index="Gene",
        variable_name="threshold",
        value_name="count",
    )


def profile_table(genes: pl.DataFrame) -> pl.DataFrame:
    """Per-gene profile with each metric scaled to percent of its column max.

    A column whose max is zero scales to zero for every gene.
    """
    metrics = {
        "eQTLs": pl.col("Total_eQTLs").cast(pl.Float64),
        "Significance": pl.col("Max_neg_log10_pval"),
        "Tissues": pl.col("Tissues").cast(pl.Float64),
        "Absolute_Effect": pl.col("Mean_Effect_Size").abs(),
    }
    maxima = genes.select(
        [expr.max().alias(name) for name, expr in metrics.items()]
    ).to_dicts()[0] if genes.height else {}

    exprs = [pl.col("Gene")]
    for name, expr in metrics.items():
        col_max = maxima.get(name) or 0.0
        if col_max > 0:
            exprs.append((expr / col_max * 100.0).alias(name))
        else:
            exprs.append(pl.lit(0.0, dtype=pl.Float64).alias(name))
    return genes.select(exprs)
