# src/conftree/loader/tree_builder.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

import yaml

from conftree.config import DEFAULT_MAX_DEPTH, DEFAULT_YAML_VERSION
from conftree.core.exceptions import DepthLimitError, VersionError
from conftree.logging import get_logger
from conftree.tree.node import ConfNode

from .version import Version, check_version, format_version

log = get_logger(__name__)


class State(Enum):
    KEY = "key"
    VALUE = "value"


@dataclass
class Frame:
    """
    One level of the builder: a container being populated.

    Attributes:
        target: Node receiving children. None while skipping the value of a
            key that may not be overridden.
        in_seq: Sequence mode. Children are auto-named "0", "1", ... instead
            of alternating key/value.
        state: Whether the next mapping scalar is a key or a value.
        current: Node the next value scalar is written to.
    """

    target: Optional[ConfNode]
    in_seq: bool = False
    state: State = State.KEY
    current: Optional[ConfNode] = None
    seq_idx: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        self.current = self.target

    @property
    def skipping(self) -> bool:
        return self.target is None

    def next_name(self) -> str:
        name = str(self.seq_idx)
        self.seq_idx += 1
        return name


class TreeBuilder:
    """
    Consume a YAML event stream and populate a ConfNode tree.

    Each mapping/sequence level is a Frame on an explicit stack, so nesting
    depth is bounded by ``max_depth`` rather than the interpreter stack.

    Rules:
        - Mapping scalars alternate key, value. A key creates a child of the
          frame's target; the value is stored on that child.
        - An existing child with the same name is replaced if it allows
          override. Otherwise it is kept and the new value is skipped.
        - A mapping in value position populates the key's node. The document's
          outermost mapping populates the root itself.
        - Sequence entries become children named by their index. A mapping
          entry becomes an is_seq container named by its index, and takes its
          first key as its value.
    """

    def __init__(
        self,
        root: ConfNode,
        required_version: Version = DEFAULT_YAML_VERSION,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.root = root
        self.required_version = required_version
        self.max_depth = max_depth
        self.stack: List[Frame] = []
        self._seen_document = False

    # ------------------------------------------------------------------ #
    # Frame helpers
    # ------------------------------------------------------------------ #

    @property
    def depth(self) -> int:
        """Nesting depth of the innermost open mapping/sequence."""
        return max(len(self.stack) - 1, 0)

    def _push(self, target: Optional[ConfNode], in_seq: bool) -> None:
        if self.depth >= self.max_depth:
            raise DepthLimitError(self.max_depth)
        self.stack.append(Frame(target=target, in_seq=in_seq))

    def _pop(self) -> bool:
        """Close the innermost frame. Returns True when the pass is over."""
        self.stack.pop()
        return not self.stack

    # ------------------------------------------------------------------ #
    # Event handlers
    # ------------------------------------------------------------------ #

    def _on_document_start(self, event: yaml.DocumentStartEvent) -> None:
        if not self._seen_document:
            check_version(event, self.required_version)
            self._seen_document = True

    def _on_key(self, frame: Frame, key: str) -> None:
        target = frame.target
        existing = target.lookup_child(key)
        if existing is not None:
            if not existing.allow_override:
                log.debug("Keeping final node %r, skipping new value", key)
                frame.current = None
                frame.state = State.VALUE
                return
            target.remove_child(existing)

        if target.is_seq and target.value is None:
            target.value = key

        frame.current = target.add_child(ConfNode(name=key))
        frame.state = State.VALUE

    def _on_scalar(self, frame: Frame, value: str) -> None:
        if frame.skipping:
            return

        if frame.in_seq:
            frame.target.add_child(ConfNode(name=frame.next_name(), value=value))
        elif frame.state is State.KEY:
            self._on_key(frame, value)
        else:
            if frame.current is not None:
                frame.current.value = value
            frame.state = State.KEY

    def _on_alias(self, frame: Frame) -> None:
        # Aliases are not expanded; an alias key or value is dropped.
        if frame.skipping or frame.in_seq:
            return
        if frame.state is State.KEY:
            frame.current = None
            frame.state = State.VALUE
        else:
            frame.state = State.KEY

    def _on_mapping_start(self, frame: Frame) -> None:
        if frame.skipping:
            self._push(None, in_seq=False)
        elif frame.in_seq:
            entry = frame.target.add_child(
                ConfNode(name=frame.next_name(), is_seq=True)
            )
            self._push(entry, in_seq=False)
        else:
            frame.state = State.KEY
            self._push(frame.current, in_seq=False)

    def _on_sequence_start(self, frame: Frame) -> None:
        if frame.skipping:
            self._push(None, in_seq=True)
        elif frame.in_seq:
            entry = frame.target.add_child(ConfNode(name=frame.next_name()))
            self._push(entry, in_seq=True)
        else:
            frame.state = State.KEY
            self._push(frame.current, in_seq=True)

    # ------------------------------------------------------------------ #
    # Main loop
    # ------------------------------------------------------------------ #

    def build(self, events: Iterable[yaml.Event]) -> ConfNode:
        """
        Run one pass over ``events``, mutating ``self.root``.

        Nodes committed before an error are not rolled back; a tree whose load
        failed should be discarded.

        Raises:
            VersionError: on the first document start, before any mutation.
            DepthLimitError: if nesting exceeds ``max_depth``.
            ConfSyntaxError: propagated from the event source.
        """
        self.stack = [Frame(target=self.root)]
        self._seen_document = False

        for event in events:
            frame = self.stack[-1]

            if isinstance(event, yaml.DocumentStartEvent):
                self._on_document_start(event)
            elif isinstance(event, yaml.ScalarEvent):
                log.debug("scalar %r (in_seq=%s)", event.value, frame.in_seq)
                self._on_scalar(frame, event.value)
            elif isinstance(event, yaml.SequenceStartEvent):
                log.debug("sequence start")
                self._on_sequence_start(frame)
            elif isinstance(event, yaml.SequenceEndEvent):
                log.debug("sequence end")
                if self._pop():
                    break
            elif isinstance(event, yaml.MappingStartEvent):
                log.debug("mapping start")
                self._on_mapping_start(frame)
            elif isinstance(event, yaml.MappingEndEvent):
                log.debug("mapping end")
                if self._pop():
                    break
            elif isinstance(event, yaml.AliasEvent):
                log.debug("alias %r ignored", event.anchor)
                self._on_alias(frame)
            elif isinstance(event, yaml.StreamEndEvent):
                break

        if not self._seen_document:
            # An empty stream never declared a version either.
            raise VersionError(
                f"Configuration is empty; expected %YAML "
                f"{format_version(self.required_version)} and a document"
            )
        return self.root


def build_tree(
    events: Iterable[yaml.Event],
    root: Optional[ConfNode] = None,
    *,
    required_version: Version = DEFAULT_YAML_VERSION,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ConfNode:
    """
    Build (or extend) a configuration tree from a YAML event stream.

        events -> ConfNode(root, children=[...])

    ``root`` is populated in place; a fresh root is created when omitted.
    """
    if root is None:
        root = ConfNode(name="")
    builder = TreeBuilder(root, required_version=required_version, max_depth=max_depth)
    return builder.build(events)
