# src/conftree/loader/__init__.py

"""
Public interface for the YAML loader stack.

Intended usage from other parts of the project and tests:

    from conftree.loader import (
        TreeBuilder,
        build_tree,
        check_version,
        load_file,
        load_string,
        open_events,
    )
"""

from __future__ import annotations

from .events import open_events
from .tree_builder import Frame, State, TreeBuilder, build_tree
from .version import check_version, format_version
from .yaml_loader import load_file, load_string

__all__ = [
    "Frame",
    "State",
    "TreeBuilder",
    "build_tree",
    "check_version",
    "format_version",
    "load_file",
    "load_string",
    "open_events",
]
