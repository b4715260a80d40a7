"""
Entry points that load YAML configuration into a ConfTree.

Both return True on success and False on failure, after logging the
diagnostic. Pass ``raise_on_error=True`` to get the ConfLoadError instead.
A failed load may leave a partially populated tree behind; discard it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from conftree.config import get_config
from conftree.core.exceptions import ConfLoadError, InputOpenError
from conftree.logging import get_logger
from conftree.tree.node import ConfNode
from conftree.tree.store import ConfTree

from .events import Stream, open_events
from .tree_builder import TreeBuilder

log = get_logger(__name__)


def _target_node(tree: ConfTree, prefix: Optional[str]) -> ConfNode:
    if not prefix:
        return tree.root
    return tree.ensure_node(prefix)


def _load(
    tree: ConfTree,
    stream: Stream,
    prefix: Optional[str],
) -> None:
    cfg = get_config()
    events = open_events(stream, cfg.yaml_version)
    builder = TreeBuilder(
        _target_node(tree, prefix),
        required_version=cfg.yaml_version,
        max_depth=cfg.max_depth,
    )
    builder.build(events)


def _report(exc: ConfLoadError, source: str, raise_on_error: bool) -> bool:
    log.error("Failed to load configuration from %s: %s", source, exc)
    if raise_on_error:
        raise exc
    return False


def load_file(
    tree: ConfTree,
    path: Union[str, Path],
    *,
    prefix: Optional[str] = None,
    raise_on_error: bool = False,
) -> bool:
    """
    Load a YAML configuration file into ``tree``.

    Args:
        tree: Tree to populate. Existing nodes are overridden where allowed.
        path: File to read.
        prefix: Optional dotted path; the file's keys are placed under it.
        raise_on_error: Re-raise the ConfLoadError instead of returning False.

    Raises:
        InputOpenError, InitError, VersionError, ConfSyntaxError,
        DepthLimitError: only when ``raise_on_error`` is set.
    """
    file_path = Path(path)
    log.info("Loading configuration file: %s", file_path)

    try:
        f = file_path.open("rb")
    except OSError as exc:
        err = InputOpenError(f"Failed to open file: {file_path}: {exc.strerror or exc}")
        return _report(err, str(file_path), raise_on_error)

    try:
        with f:
            _load(tree, f, prefix)
    except ConfLoadError as exc:
        return _report(exc, str(file_path), raise_on_error)

    log.info("Loaded configuration file: %s", file_path)
    return True


def load_string(
    tree: ConfTree,
    data: Union[str, bytes],
    length: Optional[int] = None,
    *,
    prefix: Optional[str] = None,
    raise_on_error: bool = False,
) -> bool:
    """
    Load YAML configuration from an in-memory buffer into ``tree``.

    ``length`` is a byte count limiting how much of ``data`` is parsed; a
    ``str`` is UTF-8 encoded first. The whole buffer is used when it is
    omitted.
    """
    if length is not None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        data = data[:length]

    try:
        _load(tree, data, prefix)
    except ConfLoadError as exc:
        return _report(exc, "<string>", raise_on_error)

    log.debug("Loaded configuration from buffer (%d bytes)", len(data))
    return True
