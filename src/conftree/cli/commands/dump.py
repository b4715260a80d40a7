from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from conftree.cli.utils import load_tree, write_json

console = Console()


def dump_command(
    files: List[Path] = typer.Argument(..., exists=True, readable=True),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the tree as JSON instead of a table",
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write JSON output to file instead of stdout",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Pretty-print JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Load configuration files and show every value in the resulting tree.
    """
    tree = load_tree(files, verbose=verbose)

    if as_json or out:
        write_json(tree.to_dict(), out=out, pretty=pretty)
        return

    table = Table(title="Configuration")
    table.add_column("Path", style="bold")
    table.add_column("Value")

    for path, node in tree.walk():
        if node.display_value is not None:
            table.add_row(path, node.display_value)

    console.print(table)
