"""Main CLI entry point for eqtl-network.

Provides command group with global options and subcommands for network operations.
"""

import logging
from pathlib import Path

import click

from eqtl_network import __version__
from eqtl_network.config.loader import load_config
from eqtl_network.cli.build_cmd import build
from eqtl_network.cli.summary_cmd import summary
from eqtl_network.cli.inspect_cmd import inspect


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@click.group()
@click.option(
    '--config',
    type=click.Path(exists=True, path_type=Path),
    default='config/default.yaml',
    help='Path to network configuration YAML file'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Enable verbose logging (DEBUG level)'
)
@click.pass_context
def cli(ctx, config, verbose):
    """eqtl-network: Gene network derivation from eQTL statistics and connection evidence.

    Parses relation and statistics tables, collapses paired relations into
    canonical edges, and exports a display-ready graph model with summaries.
    """
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config
    ctx.obj['verbose'] = verbose

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.debug("Verbose logging enabled")


@cli.command()
@click.pass_context
def info(ctx):
    """Display package information and configuration summary."""
    config_path = ctx.obj['config_path']

    click.echo(f"eqtl-network v{__version__}")
    click.echo(f"Config: {config_path}")
    click.echo()

    try:
        config = load_config(config_path)

        click.echo(f"Config Hash: {config.config_hash()[:16]}...")
        click.echo()

        click.echo(click.style("Sources:", bold=True))
        click.echo(f"  Relations:  {config.resolve_source(config.sources.relations)}")
        click.echo(f"  Statistics: {config.resolve_source(config.sources.statistics)}")
        summary_source = (
            config.resolve_source(config.sources.summary) if config.sources.summary else "(computed)"
        )
        click.echo(f"  Summary:    {summary_source}")
        click.echo()

        click.echo(click.style("Paths:", bold=True))
        click.echo(f"  Data Directory:   {config.data_dir}")
        click.echo(f"  Cache Directory:  {config.cache_dir}")
        click.echo(f"  Output Directory: {config.output_dir}")
        click.echo()

        click.echo(click.style("Display:", bold=True))
        click.echo(f"  Edge Mode:      {config.edge_mode.value}")
        click.echo(f"  Catalog Genes:  {len(config.catalog)}")
        click.echo(f"  Min Node Size:  {config.display.node_min_size:g}")

    except Exception as e:
        click.echo(click.style(f"Error loading config: {e}", fg='red'), err=True)
        ctx.exit(1)


# Register commands
cli.add_command(build)
cli.add_command(summary)
cli.add_command(inspect)


if __name__ == '__main__':
    cli()
