# src/clausewitz_parser/utils/pathing.py

from __future__ import annotations

from pathlib import Path
from typing import Union

from clausewitz_parser.config import get_config

PathLike = Union[str, Path]

# <project_root>/src/clausewitz_parser/utils/pathing.py
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


def project_root() -> Path:
    """Directory holding src/, tests/, config/ and samples/."""
    return _PROJECT_ROOT


def resolve_project_path(relative: PathLike) -> Path:
    """
    Resolve `relative` against the project root; absolute paths are
    returned unchanged.
    """
    path = Path(relative)
    return path if path.is_absolute() else project_root() / path


def configured_dir(name: str, default: str) -> Path:
    """
    Directory named by ``paths.<name>`` in the config file.

    Examples:
        configured_dir("samples_dir", "samples")
        configured_dir("logs_dir", "logs")
    """
    return resolve_project_path(get_config().paths.get(name) or default)


def sample_file_path(filename: PathLike) -> Path:
    """Absolute path of a document in the samples directory."""
    return configured_dir("samples_dir", "samples") / filename


def tests_data_path(*parts: PathLike) -> Path:
    """Absolute path under tests/data/, e.g. ``tests_data_path("broken_history.txt")``."""
    return resolve_project_path(Path("tests") / "data" / Path(*parts))
