# src/conftree/loader/version.py

from __future__ import annotations

from typing import Optional, Tuple

import yaml

from conftree.core.exceptions import VersionError

Version = Tuple[int, int]


def format_version(version: Version) -> str:
    return f"{version[0]}.{version[1]}"


def check_version(event: yaml.DocumentStartEvent, required: Version) -> None:
    """
    Ensure a document declares exactly ``%YAML <required>``.

    Checking the directive makes it much more likely the file is really a
    configuration file meant for this loader.

    Raises:
        VersionError: if the directive is missing or declares another version.
    """
    declared: Optional[Version] = event.version
    if declared is None:
        raise VersionError(
            "Invalid configuration file. The configuration file must begin "
            f"with the following two lines: %YAML {format_version(required)} "
            "and ---"
        )
    if tuple(declared) != tuple(required):
        raise VersionError(
            f"Invalid YAML version {format_version(declared)}. "
            f"Must be {format_version(required)}"
        )
