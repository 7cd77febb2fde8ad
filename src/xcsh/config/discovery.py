"""Locating the xcsh.toml settings file.

``XCSH_CONFIG`` pins an exact file. Without it the search starts in the
working directory and climbs toward the filesystem root, so a project
checkout can carry its own tenant defaults.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "xcsh.toml"
CONFIG_ENV_VAR = "XCSH_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """The nearest xcsh.toml at or above *start*, or None.

    A set ``XCSH_CONFIG`` disables the search; a path that is not a file
    then means no config at all.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        pinned = Path(env_path)
        if pinned.is_file():
            return pinned
        logger.warning("%s points to a missing file: %s", CONFIG_ENV_VAR, env_path)
        return None

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
