"""Data models for per-gene eQTL statistics."""

from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict, Field

# Placeholder stored when a gene has no minimum p-value
MISSING_PVALUE = "N/A"

# Values below this are shown in exponential notation
PVALUE_EXPONENT_THRESHOLD = Decimal("0.001")

# Statistics source columns, in file order
STATISTICS_COLUMNS = [
    "Gene",
    "Total_eQTLs",
    "Significant_p05",
    "Highly_Sig_p001",
    "Mean_Effect_Size",
    "Tissues",
    "Min_p_value_CORRECTED",
    "Max_neg_log10_pval",
]


class GeneStatistics(BaseModel):
    """eQTL summary statistics for a single gene.

    Attributes:
        gene: Gene identifier (HGNC symbol in the shipped datasets)
        total_eqtls: Total eQTL observations across tissues
        significant_p05: eQTLs significant at p < 0.05
        highly_sig_p001: eQTLs significant at p < 0.001
        mean_effect: Mean (signed) effect size
        tissues: Number of tissues with at least one eQTL
        min_pvalue: Minimum corrected p-value, kept verbatim as a decimal string
        max_neg_log10: Maximum -log10(p)

    CRITICAL: min_pvalue is never converted to float for storage. Values such
    as "1.2e-310" would underflow; the numeric view is derived on demand.
    """

    model_config = ConfigDict(frozen=True)

    gene: str = Field(..., min_length=1)
    total_eqtls: int = 0
    significant_p05: int = 0
    highly_sig_p001: int = 0
    mean_effect: float = 0.0
    tissues: int = 0
    min_pvalue: str = MISSING_PVALUE
    max_neg_log10: float = 0.0

    @classmethod
    def default(cls, gene: str) -> "GeneStatistics":
        """Record used for genes referenced by relations but absent from statistics."""
        return cls(gene=gene)

    @property
    def min_pvalue_value(self) -> Decimal | None:
        """Numeric view of min_pvalue, or None when missing/unparseable."""
        try:
            value = Decimal(self.min_pvalue)
        except InvalidOperation:
            return None
        if not value.is_finite():
            return None
        return value

    def format_min_pvalue(self) -> str:
        """Format min_pvalue for display.

        Below 0.001 uses exponential notation with two decimals (1.00e-7),
        otherwise fixed notation with six decimals (0.050000).
        """
        value = self.min_pvalue_value
        if value is None:
            return self.min_pvalue
        if value < PVALUE_EXPONENT_THRESHOLD:
            return format(value, ".2e")
        return format(value, ".6f")
