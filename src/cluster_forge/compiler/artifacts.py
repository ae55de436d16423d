"""Shared file I/O for compiled artifacts.

Manifest bytes are carried through as text decoded with
``surrogateescape``, so content that is not valid UTF-8 reaches the
artifacts byte for byte.
"""

from __future__ import annotations

from contextlib import ExitStack
from pathlib import Path
from typing import TextIO

from cluster_forge.compiler.errors import ArtifactOpenError, ArtifactWriteError

ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


def decode(data: bytes) -> str:
    return data.decode(ENCODING, errors=ENCODING_ERRORS)


def encode(text: str) -> bytes:
    return text.encode(ENCODING, errors=ENCODING_ERRORS)


def open_artifact(stack: ExitStack, path: Path) -> TextIO:
    """Truncate-create ``path`` for writing and register it for closing."""
    try:
        handle = open(path, "w", encoding=ENCODING, errors=ENCODING_ERRORS, newline="")
    except OSError as exc:
        raise ArtifactOpenError(path, str(exc)) from exc
    return stack.enter_context(handle)


def write_artifact(handle: TextIO, path: Path, text: str) -> None:
    try:
        handle.write(text)
    except OSError as exc:
        raise ArtifactWriteError(path, str(exc)) from exc


__all__ = [
    "ENCODING",
    "ENCODING_ERRORS",
    "decode",
    "encode",
    "open_artifact",
    "write_artifact",
]
