# src/conftree/utils/pathing.py

from __future__ import annotations

from pathlib import Path
from typing import Union


# This file lives at:
#   <project_root>/src/conftree/utils/pathing.py
#
# Path(__file__).resolve().parents gives:
#   [0] .../src/conftree/utils
#   [1] .../src/conftree
#   [2] .../src
#   [3] .../ (project root)
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


def project_root() -> Path:
    """
    Return the absolute path to the project root directory.

    The project root is defined as the directory that contains:
      - src/
      - tests/
      - config/
    """
    return _PROJECT_ROOT


def resolve_project_path(relative: Union[str, Path]) -> Path:
    """
    Resolve a path relative to the project root.

    Examples:
        resolve_project_path("config/conftree.yml")
        resolve_project_path(Path("tests") / "data" / "rule_files.yaml")
    """
    return project_root() / Path(relative)


def tests_data_path(*parts: Union[str, Path]) -> Path:
    """
    Return the absolute path to a file under tests/data/.

    Examples:
        tests_data_path("rule_files.yaml")
        tests_data_path("override", "base.yaml")
    """
    return resolve_project_path(Path("tests") / "data" / Path(*parts))
