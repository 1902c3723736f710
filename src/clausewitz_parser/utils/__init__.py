"""Project-relative path helpers."""

from .pathing import (
    configured_dir,
    project_root,
    resolve_project_path,
    sample_file_path,
    tests_data_path,
)

__all__ = [
    "configured_dir",
    "project_root",
    "resolve_project_path",
    "sample_file_path",
    "tests_data_path",
]
