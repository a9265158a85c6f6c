"""
Explore Command - Incremental search fed from stdin.

Each input line is a new query, as if typed into a search box. Queries go
through the debounced search, so a burst of lines collapses to the last
one.
"""

import sys

import click

from ..utils import echo_error, get_settings, load_session
from .search import print_results


@click.command()
@click.argument("workbook", type=click.Path(exists=True, dir_okay=False))
@click.option("--timeout", default=5.0, show_default=True, help="Seconds to wait for the last search")
@click.pass_context
def explore(ctx: click.Context, workbook: str, timeout: float):
    """
    Read queries from stdin and show the result of the last one.
    """
    session = load_session(workbook, get_settings(ctx))
    if session is None:
        sys.exit(1)

    stdin = click.get_text_stream("stdin")
    for line in stdin:
        session.search(line.rstrip("\n"))

    if not session.wait_for_search(timeout):
        echo_error("Search did not settle in time")
        sys.exit(1)

    print_results(session.graph, session.query)
