"""Summary command: print relation counts, network summary and the gene table."""

import logging
import sys

import click

from eqtl_network.cli.build_cmd import MODE_CHOICES, load_session
from eqtl_network.output.tables import GENE_TABLE_COLUMNS, gene_table

logger = logging.getLogger(__name__)


@click.command('summary')
@click.option(
    '--mode',
    type=click.Choice(MODE_CHOICES),
    default=None,
    help='Edge derivation mode (default: edge_mode from config)'
)
@click.option(
    '--sort-by',
    type=click.Choice(list(GENE_TABLE_COLUMNS.values())),
    default='Total_eQTLs',
    help='Gene table sort column (default: Total_eQTLs)'
)
@click.option(
    '--ascending',
    is_flag=True,
    help='Sort the gene table ascending'
)
@click.pass_context
def summary(ctx, mode, sort_by, ascending):
    """Display connection counts, network summary and per-gene statistics."""
    config_path = ctx.obj['config_path']

    try:
        session = load_session(config_path, mode)
        result = session.result
        network = result.summary

        click.echo(click.style("Network Summary:", bold=True))
        click.echo(f"  Total genes:       {network.total_genes}")
        click.echo(f"  Total eQTLs:       {network.total_eqtls}")
        click.echo(f"  Total connections: {network.total_connections}")
        if network.genes_in_network is not None:
            click.echo(f"  Genes in network:  {network.genes_in_network}")
        click.echo()

        click.echo(click.style("Connection Types:", bold=True))
        for kind, count in result.counts.by_kind.items():
            click.echo(f"  {kind}: {count}")
        click.echo()

        click.echo(click.style("Evidence Strength:", bold=True))
        for strength, count in result.counts.strengths_ranked():
            click.echo(f"  {strength}: {count}")
        click.echo()

        if network.gene_degrees:
            click.echo(click.style("Gene Degrees:", bold=True))
            for gene, degree in sorted(network.gene_degrees.items(), key=lambda item: -item[1]):
                click.echo(f"  {gene}: {degree}")
            click.echo()

        click.echo(click.style("Genes:", bold=True))
        genes = gene_table(result.statistics, sort_by=sort_by, descending=not ascending)
        for row in genes.iter_rows(named=True):
            click.echo(
                f"  {row['Gene']:<10} eQTLs={row['Total_eQTLs']:<6} "
                f"p<0.001={row['Highly_Sig_p001']:<6} "
                f"effect={row['Mean_Effect_Size']:+.3f} "
                f"tissues={row['Tissues']:<3} "
                f"min_p={row['Min_p_value_display']}"
            )

    except Exception as e:
        click.echo(click.style(f"Summary command failed: {e}", fg='red'), err=True)
        logger.exception("Summary command failed")
        sys.exit(1)
