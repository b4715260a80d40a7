from __future__ import annotations

from pathlib import Path
from typing import List

import typer
from rich.console import Console

from conftree.cli.utils import load_tree

err_console = Console(stderr=True)


def get_command(
    key: str = typer.Argument(..., help="Dotted path, e.g. logging.output.0.interface"),
    files: List[Path] = typer.Argument(..., exists=True, readable=True),
):
    """
    Print the value stored at KEY after loading the files.
    """
    tree = load_tree(files)
    value = tree.get(key)

    if value is None:
        err_console.print(f"[yellow]No value at[/yellow] {key}")
        raise typer.Exit(code=1)

    typer.echo(value)
