"""
CLI command modules for conftree.

Each command module defines a single Typer-compatible command function.
"""

from conftree.cli.commands.dump import dump_command
from conftree.cli.commands.get import get_command

__all__ = [
    "dump_command",
    "get_command",
]
