"""
Command-line interface for PathLink Network.

Usage:
    python -m pathlink_network run --config configs/demo.yaml
    pathlink-network ppi --de-table de.csv --interactome ppi.csv --order first
    pathlink-network foundation --gmt reactome.gmt --max-distance 0.8
"""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .data_loaders import (
    PathwayLoader,
    load_de_table,
    load_gene_mapping,
    load_interactome,
)
from .exceptions import PathLinkError
from .pathway_network import get_pathway_distances, pathnet_foundation
from .pipeline import NetworkPipeline, PipelineConfig
from .ppi_network import (
    NetworkConfig,
    SeedSelectionConfig,
    build_ppi_network,
    network_summary,
    to_csv,
    to_json,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.option(
    "--verbose/--quiet",
    "-v/-q",
    default=True,
    help="Enable/disable verbose output",
)
@click.version_option(version=__version__, prog_name="pathlink-network")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """PathLink Network - PPI and pathway network construction."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    required=True,
    help="Path to YAML configuration file",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default=None,
    help="Override output directory from config",
)
@click.pass_context
def run(ctx: click.Context, config: str, output: str) -> None:
    """Run the pipeline described by a YAML configuration file."""
    click.echo(f"PathLink Network v{__version__}")
    click.echo("=" * 50)
    click.echo(f"Loading config: {config}")

    try:
        pipeline_config = PipelineConfig.from_yaml(config)
        if output:
            pipeline_config.output_dir = output
        pipeline_config.verbose = ctx.obj["verbose"]

        result = NetworkPipeline(pipeline_config).run()
    except (FileNotFoundError, PathLinkError, ValueError) as e:
        _fail(str(e))
        return

    click.echo("")
    click.echo("Pipeline completed successfully!")
    click.echo(f"Results: {pipeline_config.output_dir} ({len(result.output_files)} files)")


@main.command()
@click.option("--de-table", type=click.Path(exists=True), required=True,
              help="Differential expression results (CSV/TSV), first column gene IDs")
@click.option("--interactome", type=click.Path(exists=True), required=True,
              help="Reference interaction table")
@click.option("--mapping", type=click.Path(exists=True), default=None,
              help="Gene ID to symbol mapping table")
@click.option("--schema", type=click.Choice(["deseq2", "edger", "table"]), default="deseq2",
              show_default=True, help="Layout of the DE table")
@click.option("--column-fc", default=None, help="Fold change column (plain tables)")
@click.option("--column-p", default=None, help="Adjusted p value column (plain tables)")
@click.option("--no-filter", is_flag=True, help="Use every row of an already-filtered table")
@click.option("--p-cutoff", type=float, default=0.05, show_default=True)
@click.option("--fc-cutoff", type=float, default=1.5, show_default=True)
@click.option("--order", type=click.Choice(["zero", "first", "minSimple"]), default="zero",
              show_default=True)
@click.option("--hub-measure", type=click.Choice(["betweenness", "degree", "hubscore"]),
              default="betweenness", show_default=True)
@click.option("--output", "-o", type=click.Path(), default="outputs", show_default=True)
def ppi(de_table, interactome, mapping, schema, column_fc, column_p, no_filter,
        p_cutoff, fc_cutoff, order, hub_measure, output) -> None:
    """Build a PPI network from differential expression results."""
    seed_config = SeedSelectionConfig(
        schema=schema,
        filter_input=not no_filter,
        p_cutoff=p_cutoff,
        fc_cutoff=fc_cutoff,
        column_fc=column_fc,
        column_p=column_p,
    )
    network_config = NetworkConfig(order=order, hub_measure=hub_measure)

    try:
        network = build_ppi_network(
            load_de_table(de_table),
            load_interactome(interactome),
            seed_config=seed_config,
            network_config=network_config,
            mapping=load_gene_mapping(mapping) if mapping else None,
        )
        to_csv(network, output, prefix="ppi_")
        to_json(network, Path(output) / "ppi_network.json")
    except (PathLinkError, ValueError) as e:
        _fail(str(e))
        return

    for line in network_summary(network):
        click.echo(line)


@main.command()
@click.option("--gmt", type=click.Path(exists=True), required=True,
              help="Pathway gene sets in GMT format")
@click.option("--max-distance", type=float, default=None,
              help="Keep pathway pairs with distance <= this value")
@click.option("--prop-to-keep", type=float, default=None,
              help="Keep this fraction of the most similar pathway pairs")
@click.option("--dist-method", type=click.Choice(["jaccard", "dice", "correlation"]),
              default="jaccard", show_default=True)
@click.option("--reactome", is_flag=True, help="Parse Reactome-style GMT identifiers")
@click.option("--output", "-o", type=click.Path(), default="pathway_foundation.csv",
              show_default=True)
def foundation(gmt, max_distance, prop_to_keep, dist_method, reactome, output) -> None:
    """Build a pathway network foundation from pathway gene sets."""
    loader = PathwayLoader()
    try:
        pathway_db = loader.load_reactome(gmt) if reactome else loader.load_gmt(gmt)
        distances = get_pathway_distances(pathway_db, dist_method)
        edges = pathnet_foundation(
            distances,
            max_distance=max_distance,
            prop_to_keep=prop_to_keep,
            pathway_names=pathway_db,
        )
    except (PathLinkError, ValueError) as e:
        _fail(str(e))
        return

    Path(output).parent.mkdir(parents=True, exist_ok=True)
    edges.to_csv(output, index=False)
    click.echo(f"Wrote {len(edges)} pathway pairs to {output}")


if __name__ == "__main__":
    main()
