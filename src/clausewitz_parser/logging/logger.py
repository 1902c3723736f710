"""
Logging setup for the Clausewitz parser.

All loggers hang off the ``clausewitz_parser`` base logger, which owns:

* a master log file (``logs/clausewitz_parser.log`` by default),
* a Rich console handler on stderr, so JSON written to stdout stays clean.

Modules listed under ``logging.module_files`` in
``config/clausewitz_parser.yml`` additionally get ``logs/<module>.log``.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from logging import Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional

from rich.console import Console
from rich.logging import RichHandler

from clausewitz_parser.config import get_config
from clausewitz_parser.utils.pathing import configured_dir, project_root, resolve_project_path

BASE_LOGGER_NAME = "clausewitz_parser"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_loggers: Dict[str, Logger] = {}
_settings: Optional["LogSettings"] = None


@dataclass(frozen=True)
class LogSettings:
    level: int = logging.INFO
    directory: Path = field(default_factory=lambda: project_root() / "logs")
    master_file: str = "clausewitz_parser.log"
    rotate: bool = False
    module_files: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_config(cls) -> "LogSettings":
        cfg = get_config()
        section = cfg.logging

        level = getattr(logging, str(section.get("level", "INFO")).upper(), logging.INFO)
        if cfg.debug:
            level = logging.DEBUG

        if section.get("dir"):
            directory = resolve_project_path(section["dir"])
        else:
            directory = configured_dir("logs_dir", "logs")

        return cls(
            level=level,
            directory=directory,
            master_file=section.get("file", "clausewitz_parser.log"),
            rotate=bool(section.get("rotate", False)),
            module_files=frozenset(section.get("module_files") or ()),
        )


def _file_handler(path: Path, settings: LogSettings) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    if settings.rotate:
        handler: logging.Handler = RotatingFileHandler(
            path, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
    else:
        handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(settings.level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _configure() -> LogSettings:
    """Attach the shared handlers to the base logger on first use."""
    global _settings
    if _settings is not None:
        return _settings

    settings = LogSettings.from_config()
    base = logging.getLogger(BASE_LOGGER_NAME)
    base.setLevel(settings.level)
    base.propagate = False

    base.addHandler(_file_handler(settings.directory / settings.master_file, settings))

    console = RichHandler(
        console=Console(file=sys.stderr),
        show_path=False,
        rich_tracebacks=True,
    )
    console.setLevel(settings.level)
    base.addHandler(console)

    _settings = settings
    return settings


def _qualified_name(name: str) -> str:
    """Place short module names ("tree_builder") under the base logger."""
    if name == BASE_LOGGER_NAME or name.startswith(BASE_LOGGER_NAME + "."):
        return name
    return f"{BASE_LOGGER_NAME}.{name}"


def get_logger(name: str | None = None) -> Logger:
    """
    Return a logger under ``clausewitz_parser`` sharing the base handlers.

    ``get_logger("dispatch")`` and ``get_logger("clausewitz_parser.dispatch")``
    return the same logger.
    """
    settings = _configure()
    qualified = _qualified_name(name or BASE_LOGGER_NAME)

    cached = _loggers.get(qualified)
    if cached is not None:
        return cached

    logger = logging.getLogger(qualified)
    if qualified != BASE_LOGGER_NAME:
        short = qualified[len(BASE_LOGGER_NAME) + 1:]
        if short in settings.module_files:
            filename = f"{short.replace('.', '_')}.log"
            logger.addHandler(_file_handler(settings.directory / filename, settings))

    _loggers[qualified] = logger
    return logger


def active_loggers() -> List[str]:
    """Names of loggers handed out so far."""
    return sorted(_loggers)
