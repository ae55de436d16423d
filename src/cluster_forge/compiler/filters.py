"""Decide which files in a manifest directory take part in packaging."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# Raw substring, not a YAML lookup: any occurrence excludes the file.
HOOK_MARKER = b"helm.sh/hook"


def should_skip_file(entry: os.DirEntry[str] | Path, directory: Path) -> bool:
    """Return True when ``entry`` must not be packaged.

    Directories are skipped, as are lifecycle-hook manifests. A file that
    cannot be read is logged and skipped instead of aborting the run.
    """
    if entry.is_dir():
        return True

    path = directory / entry.name
    try:
        content = path.read_bytes()
    except OSError as exc:
        logger.error("Error reading file %s: %s", entry.name, exc)
        return True

    if HOOK_MARKER in content:
        logger.debug("Skipping hook manifest %s", path)
        return True
    return False


__all__ = ["HOOK_MARKER", "should_skip_file"]
