"""
Logging package for ``conftree``.

Use ``get_logger(__name__)`` in modules to inherit shared handlers and write to a
module-specific log file.
"""

from .logger import get_logger, resolve_log_dir

__all__ = [
    "get_logger",
    "resolve_log_dir",
]
