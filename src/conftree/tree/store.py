# src/conftree/tree/store.py

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional

from .node import ConfNode

TRUE_VALUES = frozenset({"1", "yes", "true", "on"})
INT_PREFIXES = {"0x": 16, "0o": 8}


class ConfTree:
    """
    Handle owning the root of one configuration tree.

    The host creates the tree empty, passes it to one or more load calls and
    drops it when done. Paths are dotted node names, e.g. "logging.output.0".
    """

    def __init__(self) -> None:
        self.root = ConfNode(name="")

    # ------------------------------------------------------------------ #
    # Lookup
    # ------------------------------------------------------------------ #

    def get_node(self, path: str) -> Optional[ConfNode]:
        """Return the node at ``path``, or None if any segment is missing."""
        node = self.root
        if not path:
            return node
        for part in path.split("."):
            node = node.lookup_child(part)
            if node is None:
                return None
        return node

    def __contains__(self, path: str) -> bool:
        return self.get_node(path) is not None

    def get(self, path: str, default: Optional[str] = None) -> Optional[str]:
        node = self.get_node(path)
        if node is None or node.value is None:
            return default
        return node.value

    def get_int(self, path: str, default: Optional[int] = None) -> Optional[int]:
        """
        Return the value at ``path`` as an int.

        Decimal unless prefixed with "0x" or "0o"; "0644" is 644. Raises
        ValueError when the value is present but not an integer.
        """
        raw = self.get(path)
        if raw is None:
            return default
        text = raw.strip()
        digits = text.lstrip("+-")[:2].lower()
        base = INT_PREFIXES.get(digits, 10)
        try:
            return int(text, base)
        except ValueError:
            raise ValueError(f"{path}: not an integer -> {raw!r}") from None

    def get_bool(self, path: str, default: bool = False) -> bool:
        raw = self.get(path)
        if raw is None:
            return default
        return raw.strip().lower() in TRUE_VALUES

    # ------------------------------------------------------------------ #
    # Mutation
    # ------------------------------------------------------------------ #

    def ensure_node(self, path: str) -> ConfNode:
        """Return the node at ``path``, creating missing nodes along the way."""
        if not path:
            raise ValueError("empty configuration path")
        node = self.root
        for part in path.split("."):
            child = node.lookup_child(part)
            if child is None:
                child = node.add_child(ConfNode(name=part))
            node = child
        return node

    def set(self, path: str, value: str, final: bool = False) -> bool:
        """
        Set the scalar at ``path``, creating intermediate nodes.

        Returns False without changing anything when the existing node was
        set final.
        """
        existing = self.get_node(path)
        if existing is not None and not existing.allow_override:
            return False
        node = self.ensure_node(path)
        node.value = value
        if final:
            node.allow_override = False
        return True

    def set_final(self, path: str, value: str) -> bool:
        return self.set(path, value, final=True)

    def remove(self, path: str) -> bool:
        node = self.get_node(path)
        if node is None or node is self.root:
            return False
        node.remove()
        return True

    def clear(self) -> None:
        self.root = ConfNode(name="")

    # ------------------------------------------------------------------ #
    # Export
    # ------------------------------------------------------------------ #

    def walk(self) -> Iterator[tuple]:
        """Yield ``(path, node)`` for every node below the root, depth-first."""

        def _walk(node: ConfNode, prefix: str) -> Iterator[tuple]:
            for child in node.children:
                path = f"{prefix}.{child.name}" if prefix else child.name
                yield path, child
                yield from _walk(child, path)

        return _walk(self.root, "")

    def dump(self) -> List[str]:
        """Return ``path = value`` lines for every node holding a value."""
        return [f"{path} = {node.value}" for path, node in self.walk() if node.value is not None]

    def to_dict(self) -> Dict[str, Any]:
        return {c.name: c.to_python() for c in self.root.children}

    def __len__(self) -> int:
        return len(self.root.children)

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<ConfTree top-level={len(self)}>"
