"""
Load Command - Ingest a workbook and lay it out.

Prints the ingestion summary, or the renderer payload as JSON.
"""

import json
import sys

import click

from ..utils import echo_info, get_settings, load_session


@click.command()
@click.argument("workbook", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "json_mode", is_flag=True, help="Output the laid-out graph as JSON to stdout")
@click.pass_context
def load(ctx: click.Context, workbook: str, json_mode: bool):
    """
    Ingest WORKBOOK, lay it out and report what was loaded.
    """
    session = load_session(workbook, get_settings(ctx), quiet=json_mode)
    if session is None:
        sys.exit(1)

    graph = session.graph
    if json_mode:
        click.echo(json.dumps(graph.to_dict(), indent=2))
        return

    stats = graph.stats()
    echo_info(f"{stats.total_nodes} nodes · {stats.total_edges} edges")
