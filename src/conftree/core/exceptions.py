from __future__ import annotations

from typing import Optional


class ConfLoadError(Exception):
    """Base exception for configuration load failures."""


class InputOpenError(ConfLoadError):
    """Raised when the input file is missing or unreadable."""


class InitError(ConfLoadError):
    """Raised when the YAML event parser cannot be set up for the input."""


class VersionError(ConfLoadError):
    """Raised when the %YAML directive is missing or declares the wrong version."""


class ConfSyntaxError(ConfLoadError):
    """
    Raised when the YAML event parser rejects the input.

    Attributes:
        problem: The parser's description of what went wrong.
        line: 1-based line of the problem, if known.
        column: 1-based column of the problem, if known.
    """

    def __init__(
        self,
        problem: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        self.problem = problem
        self.line = line
        self.column = column
        where = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"Failed to parse configuration: {problem}{where}")


class DepthLimitError(ConfLoadError):
    """Raised when the input nests deeper than the configured maximum."""

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(
            f"Configuration nesting exceeds the maximum depth of {max_depth}"
        )
