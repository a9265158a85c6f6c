"""
sheetgraph CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging
import sys
from pathlib import Path

import click

from ..config import load_settings
from ..core.exceptions import ConfigError
from .commands import explore, load, search
from .utils import echo_error


@click.group()
@click.version_option(package_name="sheetgraph")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.option("--config", "config_path", type=click.Path(dir_okay=False),
              help="Settings file (default: ./sheetgraph.yaml if present)")
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: str | None):
    """sheetgraph: spreadsheet edge lists as searchable graphs.

    \b
    Workbook layout (row 1 = header):
      A: Source Node   B: Target Node
      C: Edge Label    D: Tooltip (optional)

    \b
    Quick Start:
      sheetgraph load links.xlsx
      sheetgraph search links.xlsx billing
      sheetgraph load links.xlsx --json > graph.json
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(message)s",
        datefmt="[%X]",
    )

    try:
        settings = load_settings(Path(config_path) if config_path else None)
    except ConfigError as e:
        echo_error(str(e))
        sys.exit(2)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


# Register commands
main.add_command(load.load)
main.add_command(search.search)
main.add_command(explore.explore)

if __name__ == "__main__":
    main()
