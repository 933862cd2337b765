"""Summary chart generation for network reports."""

import logging
import math
from pathlib import Path

import matplotlib
import polars as pl

# Use Agg backend (non-interactive, safe for headless/CLI use)
matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import seaborn as sns  # noqa: E402

from eqtl_network.output.tables import (  # noqa: E402
    effect_size_table,
    gene_table,
    kind_table,
    profile_table,
    significance_table,
    strength_table,
)
from eqtl_network.pipeline import NetworkResult  # noqa: E402

logger = logging.getLogger(__name__)

KIND_COLORS = {
    "Statistical Similarity": "#F39C12",
    "Coloc Evidence": "#2ECC71",
}
DIRECTION_COLORS = {
    "Positive": "#2ECC71",
    "Negative": "#E74C3C",
}
THRESHOLD_COLORS = {
    "Significant_p05": "#3498DB",
    "Highly_Sig_p001": "#E74C3C",
}


def _save(fig, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, bbox_inches="tight")
    # CRITICAL: Close figure to prevent memory leak
    plt.close(fig)
    return output_path


def plot_eqtl_counts(genes: pl.DataFrame, output_path: Path) -> Path:
    """
    Create bar chart of total eQTLs per gene.

    Args:
        genes: Gene table from gene_table()
        output_path: Path where PNG will be saved

    Returns:
        Path to the saved PNG file
    """
    pdf = genes.to_pandas()
    sns.set_theme(style="whitegrid", context="paper")
    fig, ax = plt.subplots(figsize=(10, 6))

    sns.barplot(data=pdf, x="Gene", y="Total_eQTLs", hue="Gene", palette="viridis", ax=ax, legend=False)
    plt.setp(ax.get_xticklabels(), rotation=45, ha="right")
    ax.set_xlabel("Gene")
    ax.set_ylabel("Total eQTLs")
    ax.set_title("eQTLs per Gene")

    _save(fig, output_path)
    logger.info(f"Saved eQTL count plot to {output_path}")
    return output_path


def plot_effect_sizes(genes: pl.DataFrame, output_path: Path) -> Path:
    """
    Create bar chart of absolute mean effect size, colored by sign.

    Args:
        genes: Gene table from gene_table()
        output_path: Path where PNG will be saved

    Returns:
        Path to the saved PNG file
    """
    pdf = effect_size_table(genes).to_pandas()
    fig, ax = plt.subplots(figsize=(10, 6))

    sns.barplot(data=pdf, x="Gene", y="abs_effect", hue="direction", palette=DIRECTION_COLORS, ax=ax)
    plt.setp(ax.get_xticklabels(), rotation=45, ha="right")
    ax.set_xlabel("Gene")
    ax.set_ylabel("Mean Effect Size (absolute)")
    ax.set_title("Effect Size by Gene")

    _save(fig, output_path)
    logger.info(f"Saved effect size plot to {output_path}")
    return output_path


def plot_significance(genes: pl.DataFrame, output_path: Path) -> Path:
    """
    Create grouped bar chart of significant eQTLs at p < 0.05 and p < 0.001.

    Args:
        genes: Gene table from gene_table()
        output_path: Path where PNG will be saved

    Returns:
        Path to the saved PNG file
    """
    pdf = significance_table(genes).to_pandas()
    fig, ax = plt.subplots(figsize=(10, 6))

    sns.barplot(data=pdf, x="Gene", y="count", hue="threshold", palette=THRESHOLD_COLORS, ax=ax)
    plt.setp(ax.get_xticklabels(), rotation=45, ha="right")
    ax.set_xlabel("Gene")
    ax.set_ylabel("Significant eQTLs")
    ax.set_title("Significant eQTLs by Threshold")

    _save(fig, output_path)
    logger.info(f"Saved significance plot to {output_path}")
    return output_path


def plot_gene_profiles(genes: pl.DataFrame, output_path: Path) -> Path:
    """
    Create radar chart of per-gene profiles, each metric as percent of its maximum.

    Args:
        genes: Gene table from gene_table()
        output_path: Path where PNG will be saved

    Returns:
        Path to the saved PNG file
    """
    profiles = profile_table(genes)
    metrics = [column for column in profiles.columns if column != "Gene"]
    angles = [2 * math.pi * index / len(metrics) for index in range(len(metrics))]
    angles.append(angles[0])

    fig, ax = plt.subplots(figsize=(8, 8), subplot_kw={"projection": "polar"})
    palette = sns.color_palette("husl", max(profiles.height, 1))

    for color, row in zip(palette, profiles.iter_rows(named=True)):
        values = [row[metric] for metric in metrics]
        values.append(values[0])
        ax.plot(angles, values, color=color, linewidth=1.5, label=row["Gene"])
        ax.fill(angles, values, color=color, alpha=0.1)

    ax.set_xticks(angles[:-1])
    ax.set_xticklabels([metric.replace("_", " ") for metric in metrics])
    ax.set_ylim(0, 100)
    ax.set_title("Gene Profiles (% of maximum)")
    ax.legend(loc="upper right", bbox_to_anchor=(1.3, 1.1))

    _save(fig, output_path)
    logger.info(f"Saved gene profile plot to {output_path}")
    return output_path


def plot_connection_types(result: NetworkResult, output_path: Path) -> Path:
    """
    Create pie chart of relation kinds.

    Args:
        result: NetworkResult with summary counts
        output_path: Path where PNG will be saved

    Returns:
        Path to the saved PNG file

    Notes:
        - Unknown kinds use a neutral grey
    """
    kinds = kind_table(result.counts)
    labels = kinds["connection_type"].to_list()
    counts = kinds["count"].to_list()

    fig, ax = plt.subplots(figsize=(8, 8))
    ax.pie(
        counts,
        labels=labels,
        colors=[KIND_COLORS.get(label, "#95A5A6") for label in labels],
        autopct="%1.1f%%",
        startangle=90,
    )
    ax.set_title("Connection Types")

    _save(fig, output_path)
    logger.info(f"Saved connection type plot to {output_path}")
    return output_path


def plot_evidence_strength(result: NetworkResult, output_path: Path) -> Path:
    """
    Create bar chart of relation counts by evidence strength (Weak -> Strong).

    Args:
        result: NetworkResult with summary counts
        output_path: Path where PNG will be saved

    Returns:
        Path to the saved PNG file
    """
    strengths = strength_table(result.counts)
    labels = strengths["evidence_strength"].to_list()
    values = strengths["count"].to_list()

    fig, ax = plt.subplots(figsize=(8, 6))
    sns.barplot(x=labels, y=values, hue=labels, palette="rocket", ax=ax, legend=False)
    ax.set_xlabel("Evidence Strength")
    ax.set_ylabel("Connections")
    ax.set_title("Evidence Strength Distribution")

    _save(fig, output_path)
    logger.info(f"Saved evidence strength plot to {output_path}")
    return output_path


def generate_all_plots(result: NetworkResult, output_dir: Path) -> dict[str, Path]:
    """
    Generate all summary charts.

    Args:
        result: NetworkResult from build_network()
        output_dir: Directory where plots will be saved

    Returns:
        Dictionary mapping plot name to file path

    Notes:
        - Creates output directory if needed
        - Wraps each plot in try/except to continue on individual failures
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    genes = gene_table(result.statistics, sort_by="Gene", descending=False)
    jobs = {
        "eqtl_counts": lambda path: plot_eqtl_counts(genes, path),
        "effect_sizes": lambda path: plot_effect_sizes(genes, path),
        "significance": lambda path: plot_significance(genes, path),
        "gene_profiles": lambda path: plot_gene_profiles(genes, path),
        "connection_types": lambda path: plot_connection_types(result, path),
        "evidence_strength": lambda path: plot_evidence_strength(result, path),
    }

    plots = {}
    for name, job in jobs.items():
        try:
            plots[name] = job(output_dir / f"{name}.png")
        except Exception as e:
            logger.warning(f"Failed to create {name} plot: {e}")

    logger.info(f"Generated {len(plots)} plots in {output_dir}")
    return plots
