"""
Project-wide loggers for conftree.

Every logger lives under the ``conftree`` base logger, which owns a console
handler and the master log file. Module loggers add their own file next to
it. Levels and the log directory come from ``config/conftree.yml``; when no
log directory can be created, only the console handler is installed.
"""

from __future__ import annotations

import logging
from logging import Logger, StreamHandler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Iterable, Optional

from conftree.config import get_config

PROJECT_ROOT = Path(__file__).resolve().parents[3]
BASE_LOGGER_NAME = "conftree"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_loggers: Dict[str, Logger] = {}
_level: int = logging.INFO
_rotate: bool = False
_log_dir: Optional[Path] = None


def resolve_log_dir(candidates: Iterable[Path]) -> Optional[Path]:
    """Return the first candidate directory that exists or can be created."""
    for candidate in candidates:
        try:
            candidate.mkdir(parents=True, exist_ok=True)
        except OSError:
            continue
        return candidate
    return None


def _log_dir_candidates() -> list:
    cfg = get_config()
    configured = Path(cfg.logging.get("dir") or cfg.paths.get("logs_dir") or "logs")
    if configured.is_absolute():
        return [configured, Path.cwd() / "logs"]
    return [PROJECT_ROOT / configured, Path.cwd() / configured]


def _file_handler(path: Path) -> logging.Handler:
    if _rotate:
        handler = RotatingFileHandler(
            path, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
    else:
        handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _base_logger() -> Logger:
    global _level, _rotate, _log_dir

    base = logging.getLogger(BASE_LOGGER_NAME)
    if BASE_LOGGER_NAME in _loggers:
        return base

    cfg = get_config()
    level_name = str(cfg.logging.get("level", "INFO")).upper()
    _level = logging.DEBUG if cfg.debug else getattr(logging, level_name, logging.INFO)
    _rotate = bool(cfg.logging.get("rotate", False))
    _log_dir = resolve_log_dir(_log_dir_candidates())

    base.setLevel(_level)
    base.propagate = False

    console = StreamHandler()
    console.setLevel(logging.DEBUG if cfg.debug else logging.INFO)
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    base.addHandler(console)

    if _log_dir is not None:
        base.addHandler(_file_handler(_log_dir / cfg.logging.get("file", "conftree.log")))

    _loggers[BASE_LOGGER_NAME] = base
    return base


def get_logger(name: str | None = None) -> Logger:
    """Return the ``conftree`` logger, or a module logger below it.

    ``get_logger("loader.events")`` and ``get_logger("conftree.loader.events")``
    name the same logger, which also writes ``<log dir>/conftree_loader_events.log``.
    """
    base = _base_logger()
    if not name or name == BASE_LOGGER_NAME:
        return base
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"

    logger = _loggers.get(name)
    if logger is None:
        logger = logging.getLogger(name)
        logger.setLevel(_level)
        logger.propagate = True
        if _log_dir is not None:
            logger.addHandler(_file_handler(_log_dir / f"{name.replace('.', '_')}.log"))
        _loggers[name] = logger
    return logger
