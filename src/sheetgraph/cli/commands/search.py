"""
Search Command - Filter a workbook's graph by a query.

Shows the matched nodes and their one-hop context.
"""

import json
import sys

import click
from rich.console import Console
from rich.table import Table

from ...core.types import Graph
from ..utils import echo_info, echo_warning, get_settings, load_session

console = Console()


@click.command()
@click.argument("workbook", type=click.Path(exists=True, dir_okay=False))
@click.argument("query")
@click.option("--json", "json_mode", is_flag=True, help="Output the annotated graph as JSON to stdout")
@click.option("--all", "show_all", is_flag=True, help="Include hidden nodes in the table")
@click.pass_context
def search(ctx: click.Context, workbook: str, query: str, json_mode: bool, show_all: bool):
    """
    Search WORKBOOK for QUERY (case-insensitive substring).
    """
    session = load_session(workbook, get_settings(ctx), quiet=True)
    if session is None:
        sys.exit(1)

    graph = session.search_now(query)

    if json_mode:
        click.echo(json.dumps(graph.to_dict(), indent=2))
        return

    print_results(graph, query, show_all=show_all)


def print_results(graph: Graph, query: str, show_all: bool = False) -> None:
    """Render the visible subgraph as a rich table plus a counts line."""
    stats = graph.stats()
    if query and stats.visible_nodes == 0:
        echo_warning(f"No nodes or links match '{query}'")
        return

    table = Table(title=f"Results for '{query}'" if query else "All nodes")
    table.add_column("Node", style="cyan")
    table.add_column("Match", justify="center")
    table.add_column("Links")

    for node in graph.iter_nodes():
        if node.hidden and not show_all:
            continue
        links = [
            f"{e.source} → {e.target}" + (f" ({e.label})" if e.label else "")
            for e in graph.iter_edges()
            if not e.hidden and node.id in (e.source, e.target)
        ]
        marker = "[bold red]●[/bold red]" if node.matched else ("[dim]hidden[/dim]" if node.hidden else "")
        table.add_row(node.label, marker, "\n".join(links))

    console.print(table)
    echo_info(f"{stats.visible_nodes} / {stats.total_nodes} nodes visible · "
              f"{stats.visible_edges} / {stats.total_edges} edges visible")
