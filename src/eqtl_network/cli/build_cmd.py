"""Build command: load sources, derive the graph model and export it.

Orchestrates the full pipeline:
- Reads relations, statistics and optional summary sources
- Normalizes relations into canonical edges
- Builds the graph model and summary counts
- Writes JSON + TSV output and summary charts
"""

import logging
import sys
from pathlib import Path

import click

from eqtl_network.config.loader import load_config_with_overrides
from eqtl_network.output import (
    ProvenanceTracker,
    generate_all_plots,
    write_network_output,
)
from eqtl_network.pipeline import NetworkSession
from eqtl_network.relations.models import EdgeMode

logger = logging.getLogger(__name__)

MODE_CHOICES = [mode.value for mode in EdgeMode]


def load_session(config_path: Path, mode: str | None) -> NetworkSession:
    """Load config and sources into a session; exit 1 with a generic message on failure."""
    config = load_config_with_overrides(config_path, {"edge_mode": mode})
    session = NetworkSession(config)
    if not session.refresh():
        click.echo(click.style(
            "Unable to load network data. See log for details.",
            fg='red'
        ), err=True)
        sys.exit(1)
    return session


@click.command('build')
@click.option(
    '--output-dir',
    type=click.Path(path_type=Path),
    default=None,
    help='Output directory (default: output_dir from config)'
)
@click.option(
    '--mode',
    type=click.Choice(MODE_CHOICES),
    default=None,
    help='Edge derivation mode (default: edge_mode from config)'
)
@click.option(
    '--force',
    is_flag=True,
    help='Overwrite existing output files'
)
@click.option(
    '--skip-viz',
    is_flag=True,
    help='Skip summary chart generation'
)
@click.pass_context
def build(ctx, output_dir, mode, force, skip_viz):
    """Build the gene network graph model and export it.

    Reads the configured sources, collapses relations into canonical edges,
    derives node/edge display attributes, and writes graph JSON, node/edge/gene
    TSV tables and summary charts.

    Examples:

        # Build with config defaults
        eqtl-network build

        # One edge per raw relation, no charts
        eqtl-network build --mode per_relation --skip-viz
    """
    config_path = ctx.obj['config_path']

    click.echo(click.style("=== Network Build ===", bold=True))
    click.echo()

    try:
        # Step 1: Load sources and run pipeline
        click.echo(click.style("Step 1: Loading sources...", bold=True))
        session = load_session(config_path, mode)
        config = session.config
        result = session.result
        provenance = ProvenanceTracker.from_config(config)

        click.echo(click.style(
            f"  {len(result.relations)} relations, {len(result.statistics)} genes with statistics",
            fg='green'
        ))
        provenance.record_step(
            'load_sources',
            relation_count=len(result.relations),
            gene_count=len(result.statistics),
        )
        click.echo()

        # Step 2: Report graph shape and integrity warnings
        click.echo(click.style("Step 2: Graph model...", bold=True))
        directed = sum(1 for edge in result.graph.edges if edge.directed)
        click.echo(click.style(
            f"  Nodes: {len(result.graph.nodes)}  Edges: {len(result.graph.edges)} "
            f"({directed} directed, mode={result.mode.value})",
            fg='green'
        ))
        for warning in result.warnings:
            click.echo(click.style(f"  Warning: {warning.message}", fg='yellow'))
        provenance.record_step(
            'build_graph',
            node_count=len(result.graph.nodes),
            edge_count=len(result.graph.edges),
            directed_edge_count=directed,
            integrity_warnings=len(result.warnings),
        )
        click.echo()

        # Output location
        if output_dir is None:
            output_dir = Path(config.output_dir)
        output_dir = Path(output_dir)

        if (output_dir / "network.json").exists() and not force:
            click.echo(click.style(
                f"Warning: Output files already exist at {output_dir}",
                fg='yellow'
            ))
            click.echo(click.style(
                "  Use --force to overwrite existing files.",
                fg='yellow'
            ))
            return

        # Step 3: Charts (unless --skip-viz)
        if not skip_viz:
            click.echo(click.style("Step 3: Generating charts...", bold=True))
            plot_paths = {}
            try:
                plot_paths = generate_all_plots(result, output_dir / "plots")
                for plot_name, plot_path in plot_paths.items():
                    click.echo(click.style(f"  {plot_name}: {plot_path}", fg='green'))
            except Exception as e:
                click.echo(click.style(f"  Warning: Chart generation failed: {e}", fg='yellow'))
                logger.exception("Failed to generate charts")
            provenance.record_step('generate_charts', plot_count=len(plot_paths))
        else:
            click.echo(click.style("Step 3: Skipping charts (--skip-viz)", fg='yellow'))
        click.echo()

        # Step 4: Write graph, tables and provenance sidecar
        click.echo(click.style("Step 4: Writing output...", bold=True))
        provenance.record_step('write_output', output_dir=str(output_dir))
        output_paths = write_network_output(result, output_dir, provenance=provenance)
        for name, path in output_paths.items():
            click.echo(click.style(f"  {name}: {path}", fg='green'))
        click.echo()

        click.echo(click.style("Build complete!", fg='green', bold=True))

    except Exception as e:
        click.echo(click.style(f"Build command failed: {e}", fg='red'), err=True)
        logger.exception("Build command failed")
        sys.exit(1)
