from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, List

import typer
from rich.console import Console

from conftree.loader import load_file
from conftree.tree import ConfTree

console = Console()
err_console = Console(stderr=True)


def load_tree(paths: List[Path], *, verbose: bool = False) -> ConfTree:
    """
    Load every file into one tree, in order; later files override earlier ones.

    Exits with status 1 on the first file that fails to load.
    """
    tree = ConfTree()
    t0 = time.perf_counter()

    for path in paths:
        if not load_file(tree, path):
            err_console.print(f"[red]Failed to load configuration:[/red] {path}")
            raise typer.Exit(code=1)
        if verbose:
            console.log(f"Loaded {path}")

    elapsed = time.perf_counter() - t0

    if verbose:
        console.log(f"Loaded {len(paths)} file(s) in {elapsed:.2f}s")

    return tree


def write_json(
    data: Any,
    *,
    out: Path | None,
    pretty: bool,
):
    """
    Write JSON to stdout or file.
    """
    if pretty:
        payload = json.dumps(data, indent=2, ensure_ascii=False)
    else:
        payload = json.dumps(data, separators=(",", ":"), ensure_ascii=False)

    if out:
        out.write_text(payload, encoding="utf-8")
    else:
        print(payload)
