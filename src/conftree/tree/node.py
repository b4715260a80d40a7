# src/conftree/tree/node.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional


@dataclass(eq=False)
class ConfNode:
    """
    A named node in a configuration tree.

    Attributes:
        name: Key within the parent. Sequence entries are named "0", "1", ...
        value: Scalar value for leaves, None for containers. A mapping that is
            an entry of a sequence also carries the name of its first key here.
        is_seq: True for containers created for a mapping inside a sequence.
        allow_override: Whether a later load may replace this node.
        children: Child nodes in the order they were added.
        parent: The containing node, None for a root or a detached node.
    """

    name: str
    value: Optional[str] = None
    is_seq: bool = False
    allow_override: bool = True
    children: List["ConfNode"] = field(default_factory=list, repr=False)
    parent: Optional["ConfNode"] = field(default=None, repr=False)

    # ---------- Child management ----------

    def add_child(self, child: "ConfNode") -> "ConfNode":
        child.parent = self
        self.children.append(child)
        return child

    def lookup_child(self, name: str) -> Optional["ConfNode"]:
        """Return the direct child with exactly this name, or None."""
        for c in self.children:
            if c.name == name:
                return c
        return None

    def remove_child(self, child: "ConfNode") -> None:
        """Detach ``child`` and its whole subtree from this node."""
        for i, c in enumerate(self.children):
            if c is child:
                del self.children[i]
                child.parent = None
                return
        raise ValueError(f"{child.name!r} is not a child of {self.name!r}")

    def remove(self) -> None:
        """Detach this node from its parent."""
        if self.parent is not None:
            self.parent.remove_child(self)

    # ---------- Queries ----------

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def display_value(self) -> Optional[str]:
        """Own value, or the first key of a mapping entry from a sequence."""
        if self.value is not None:
            return self.value
        if self.is_seq and self.children:
            return self.children[0].name
        return None

    def iter_subtree(self) -> Iterator["ConfNode"]:
        """Yield this node and all descendants in depth-first order."""
        yield self
        for child in self.children:
            yield from child.iter_subtree()

    def is_list_like(self) -> bool:
        return bool(self.children) and all(
            c.name == str(i) for i, c in enumerate(self.children)
        )

    def to_python(self) -> Any:
        """Plain Python view: str for leaves, list for sequences, dict otherwise."""
        if self.is_leaf:
            return self.value
        if self.is_list_like():
            return [c.to_python() for c in self.children]
        return {c.name: c.to_python() for c in self.children}

    def __repr__(self) -> str:
        flags = " seq" if self.is_seq else ""
        if not self.allow_override:
            flags += " final"
        return f"<ConfNode {self.name!r}{flags}: {self.value!r} ({len(self.children)} children)>"
