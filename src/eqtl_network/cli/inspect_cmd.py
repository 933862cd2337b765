"""Inspect commands: resolve a node or edge selection to its source record.

Lookups go through the back-references stored on graph nodes and edges,
the same way a presentation layer resolves click/selection events.
"""

import logging

import click

from eqtl_network.cli.build_cmd import MODE_CHOICES, load_session

logger = logging.getLogger(__name__)


@click.group('inspect')
@click.option(
    '--mode',
    type=click.Choice(MODE_CHOICES),
    default=None,
    help='Edge derivation mode (default: edge_mode from config)'
)
@click.pass_context
def inspect(ctx, mode):
    """Show details for a gene node or a connection edge."""
    ctx.obj['mode'] = mode


@inspect.command('gene')
@click.argument('gene_id')
@click.pass_context
def gene(ctx, gene_id):
    """Show statistics for GENE_ID as attached to its network node."""
    session = load_session(ctx.obj['config_path'], ctx.obj.get('mode'))
    node = session.result.graph.node(gene_id)

    if node is None:
        click.echo(click.style(f"Gene not in network: {gene_id}", fg='red'), err=True)
        ctx.exit(1)

    stats = node.statistics
    click.echo(click.style(f"{node.label}", bold=True))
    click.echo(f"  Description:     {node.description}")
    click.echo(f"  Total eQTLs:     {stats.total_eqtls}")
    click.echo(f"  p < 0.05:        {stats.significant_p05}")
    click.echo(f"  p < 0.001:       {stats.highly_sig_p001}")
    click.echo(f"  Mean effect:     {stats.mean_effect:.4f}")
    click.echo(f"  Tissues:         {stats.tissues}")
    click.echo(f"  Min p-value:     {stats.format_min_pvalue()}")
    click.echo(f"  Max -log10(p):   {stats.max_neg_log10:.2f}")
    click.echo(f"  Node size:       {node.size:g}")


@inspect.command('edge')
@click.argument('edge_id', type=int)
@click.pass_context
def edge(ctx, edge_id):
    """Show the connection behind edge EDGE_ID."""
    session = load_session(ctx.obj['config_path'], ctx.obj.get('mode'))
    graph_edge = session.result.graph.edge(edge_id)

    if graph_edge is None:
        click.echo(click.style(f"No edge with id {edge_id}", fg='red'), err=True)
        ctx.exit(1)

    canonical = graph_edge.canonical
    relation = canonical.relation
    click.echo(click.style(canonical.describe(), bold=True))
    click.echo(f"  Type:      {relation.connection_type}")
    click.echo(f"  Weight:    {relation.weight:g}")
    click.echo(f"  Evidence:  {relation.evidence_strength}")
    click.echo(f"  Details:   {relation.details}")
    if canonical.directed:
        click.echo(f"  Direction: {canonical.direction}")
