from conftree.core.exceptions import (
    ConfLoadError,
    ConfSyntaxError,
    DepthLimitError,
    InitError,
    InputOpenError,
    VersionError,
)

__all__ = [
    "ConfLoadError",
    "ConfSyntaxError",
    "DepthLimitError",
    "InitError",
    "InputOpenError",
    "VersionError",
]
