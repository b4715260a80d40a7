"""In-memory configuration tree produced by the YAML loader."""

from .node import ConfNode
from .store import ConfTree

__all__ = ["ConfNode", "ConfTree"]
