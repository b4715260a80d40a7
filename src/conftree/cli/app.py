from __future__ import annotations

import typer

from conftree.cli.commands.dump import dump_command
from conftree.cli.commands.get import get_command

app = typer.Typer(
    name="conftree",
    help="Load YAML configuration files and inspect the resulting tree",
    add_completion=False,
)

app.command("dump")(dump_command)
app.command("get")(get_command)


def main():
    app()


if __name__ == "__main__":
    main()
