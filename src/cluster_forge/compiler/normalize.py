"""Strip blank lines from finished artifacts."""

from __future__ import annotations

import re
from pathlib import Path

from cluster_forge.compiler.artifacts import decode, encode
from cluster_forge.compiler.errors import NormalizationError

# Whitespace-only lines (with their line breaks), or a trailing
# newline-plus-whitespace run at end of file. ASCII whitespace only.
_BLANK_LINES = re.compile(r"^\s*$[\r\n]*|[\r\n]+\s+\Z", re.MULTILINE | re.ASCII)


def normalize_text(text: str) -> str:
    """Return ``text`` without blank lines; applying it twice is a no-op."""
    return _BLANK_LINES.sub("", text)


def remove_empty_lines(path: Path) -> None:
    """Rewrite ``path`` in place with :func:`normalize_text` applied.

    The whole file is read into memory; artifacts are bounded by a single
    stack's manifest set.

    Raises:
        NormalizationError: if the file cannot be read or rewritten.
    """
    try:
        data = decode(path.read_bytes())
    except OSError as exc:
        raise NormalizationError(path, str(exc)) from exc

    try:
        path.write_bytes(encode(normalize_text(data)))
    except OSError as exc:
        raise NormalizationError(path, str(exc)) from exc


__all__ = ["normalize_text", "remove_empty_lines"]
