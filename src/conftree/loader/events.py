# src/conftree/loader/events.py

from __future__ import annotations

from typing import IO, Iterator, Union

import yaml
from yaml.parser import ParserError

from conftree.config import DEFAULT_YAML_VERSION
from conftree.core.exceptions import ConfSyntaxError, InitError, VersionError

from .version import Version, format_version

Stream = Union[str, bytes, IO]


def _syntax_error(exc: yaml.YAMLError) -> ConfSyntaxError:
    """Turn a PyYAML error into a ConfSyntaxError with a 1-based position."""
    mark = getattr(exc, "problem_mark", None)
    problem = getattr(exc, "problem", None) or str(exc)
    if mark is None:
        return ConfSyntaxError(problem)
    return ConfSyntaxError(problem, line=mark.line + 1, column=mark.column + 1)


def open_events(
    stream: Stream,
    required_version: Version = DEFAULT_YAML_VERSION,
) -> Iterator[yaml.Event]:
    """
    Bind a PyYAML event parser to ``stream`` and return its event iterator.

    The parser is constructed eagerly so that a stream PyYAML cannot even
    start reading (undecodable leading bytes, failing reads) is reported as
    InitError here, before any event is consumed.

    PyYAML itself refuses %YAML directives with a major version other than
    1; that refusal is reported as VersionError against ``required_version``.

    Raises:
        InitError: if the parser cannot be set up for ``stream``.
    """
    try:
        loader = yaml.SafeLoader(stream)
    except (yaml.YAMLError, OSError, UnicodeDecodeError) as exc:
        raise InitError(f"Failed to initialize yaml parser: {exc}") from exc

    return _iter_events(loader, required_version)


def _iter_events(
    loader: yaml.SafeLoader,
    required_version: Version,
) -> Iterator[yaml.Event]:
    """
    Yield events until the stream ends.

    Raises:
        VersionError: if the %YAML directive names an unsupported major version.
        ConfSyntaxError: on any lexical or structural problem in the input.
    """
    try:
        while True:
            try:
                if not loader.check_event():
                    return
                event = loader.get_event()
            except ParserError as exc:
                if "incompatible YAML document" in (exc.problem or ""):
                    raise VersionError(
                        f"Invalid YAML version. Must be {format_version(required_version)}"
                    ) from exc
                raise _syntax_error(exc) from exc
            except yaml.YAMLError as exc:
                raise _syntax_error(exc) from exc
            except UnicodeDecodeError as exc:
                raise ConfSyntaxError(f"invalid encoding: {exc}") from exc
            yield event
    finally:
        loader.dispose()
