"""
conftree: load YAML configuration into a generic tree of named nodes.

    from conftree import ConfTree, load_file

    tree = ConfTree()
    if not load_file(tree, "suricata.yaml"):
        raise SystemExit(1)
    tree.get("default-log-dir")
"""

from conftree.core.exceptions import (
    ConfLoadError,
    ConfSyntaxError,
    DepthLimitError,
    InitError,
    InputOpenError,
    VersionError,
)
from conftree.loader import load_file, load_string
from conftree.tree import ConfNode, ConfTree

__all__ = [
    "ConfLoadError",
    "ConfNode",
    "ConfSyntaxError",
    "ConfTree",
    "DepthLimitError",
    "InitError",
    "InputOpenError",
    "VersionError",
    "load_file",
    "load_string",
]
