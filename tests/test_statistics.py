"""Unit tests for per-gene statistics parsing and lookup."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from eqtl_network.parsing import FieldConversionError, RecordParseError
from eqtl_network.statistics import GeneStatistics, StatisticsIndex


@pytest.fixture
def statistics_text() -> str:
    return """Gene,Total_eQTLs,Significant_p05,Highly_Sig_p001,Mean_Effect_Size,Tissues,Min_p_value_CORRECTED,Max_neg_log10_pval
CACNA1C,184,184,142,-0.0843,21,2.31e-24,23.64
CHD8,36,36,20,0.1127,9,0.0000004,6.40
FOXP2,12,12,4,0.2034,3,0.05,1.30
"""


def test_index_parses_typed_columns(statistics_text):
    index = StatisticsIndex.from_text(statistics_text)

    assert len(index) == 3
    cacna1c = index.get("CACNA1C")
    assert cacna1c.total_eqtls == 184
    assert cacna1c.significant_p05 == 184
    assert cacna1c.highly_sig_p001 == 142
    assert cacna1c.mean_effect == pytest.approx(-0.0843)
    assert cacna1c.tissues == 21
    assert cacna1c.max_neg_log10 == pytest.approx(23.64)


def test_min_pvalue_kept_verbatim(statistics_text):
    """Min p-value is stored verbatim, not round-tripped through float."""
    index = StatisticsIndex.from_text(statistics_text)

    assert index.get("CACNA1C").min_pvalue == "2.31e-24"
    assert index.get("CHD8").min_pvalue == "0.0000004"


def test_index_preserves_source_order(statistics_text):
    index = StatisticsIndex.from_text(statistics_text)

    assert index.genes() == ["CACNA1C", "CHD8", "FOXP2"]
    assert [entry.gene for entry in index] == ["CACNA1C", "CHD8", "FOXP2"]


def test_missing_gene_returns_default(statistics_text):
    """Genes absent from statistics resolve to zeros and "N/A", never an error."""
    index = StatisticsIndex.from_text(statistics_text)

    entry = index.get("UNKNOWN")

    assert "UNKNOWN" not in index
    assert entry.gene == "UNKNOWN"
    assert entry.total_eqtls == 0
    assert entry.significant_p05 == 0
    assert entry.highly_sig_p001 == 0
    assert entry.mean_effect == 0.0
    assert entry.tissues == 0
    assert entry.min_pvalue == "N/A"
    assert entry.max_neg_log10 == 0.0


def test_non_numeric_value_reports_row_and_column():
    text = """Gene,Total_eQTLs,Significant_p05,Highly_Sig_p001,Mean_Effect_Size,Tissues,Min_p_value_CORRECTED,Max_neg_log10_pval
GENE1,10,10,5,0.1,2,0.01,2.0
GENE2,ten,10,5,0.1,2,0.01,2.0
"""

    with pytest.raises(FieldConversionError) as exc_info:
        StatisticsIndex.from_text(text)

    assert exc_info.value.row_index == 3
    assert exc_info.value.column == "Total_eQTLs"


def test_short_row_reports_row():
    text = "Gene,Total_eQTLs\nGENE1,10,10,5,0.1,2,0.01,2.0\nGENE2,10\n"

    with pytest.raises(RecordParseError) as exc_info:
        StatisticsIndex.from_text(text)

    assert exc_info.value.row_index == 3


def test_duplicate_gene_last_row_wins():
    index = StatisticsIndex([
        GeneStatistics(gene="A", total_eqtls=1),
        GeneStatistics(gene="A", total_eqtls=2),
    ])

    assert len(index) == 1
    assert index.get("A").total_eqtls == 2


def test_empty_min_pvalue_becomes_na():
    text = "h\nG,1,1,1,0.1,1,,1.0\n"

    index = StatisticsIndex.from_text(text)

    assert index.get("G").min_pvalue == "N/A"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("0.0000001", "1.00e-7"),
        ("2.31e-24", "2.31e-24"),
        ("0.05", "0.050000"),
        ("0.001", "0.001000"),
        ("0.00099", "9.90e-4"),
        ("N/A", "N/A"),
    ],
)
def test_format_min_pvalue(raw, expected):
    """Exponential notation below 0.001, six-decimal fixed otherwise."""
    entry = GeneStatistics(gene="G", min_pvalue=raw)

    assert entry.format_min_pvalue() == expected


def test_min_pvalue_value_keeps_precision():
    entry = GeneStatistics(gene="G", min_pvalue="1.2e-400")

    assert entry.min_pvalue_value == Decimal("1.2e-400")
    assert entry.format_min_pvalue() == "1.20e-400"


def test_min_pvalue_value_none_for_unparseable():
    assert GeneStatistics(gene="G", min_pvalue="bogus").min_pvalue_value is None
    assert GeneStatistics(gene="G").min_pvalue_value is None


def test_statistics_are_immutable():
    entry = GeneStatistics(gene="G")

    with pytest.raises(ValidationError):
        entry.total_eqtls = 5


def test_empty_gene_rejected():
    with pytest.raises(ValidationError):
        GeneStatistics(gene="")
