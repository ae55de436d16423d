"""Exceptions raised by the manifest packaging compiler."""

from __future__ import annotations

from pathlib import Path


class ForgeError(RuntimeError):
    """Base class for every error raised by cluster-forge."""


class EnvelopeLoadError(ForgeError):
    """Raised when an envelope template asset is missing or fails to parse."""


class EnvelopeRenderError(ForgeError):
    """Raised when an envelope template cannot be rendered."""

    def __init__(self, template: str, reason: str) -> None:
        self.template = template
        self.reason = reason
        super().__init__(f"Failed to render {template} envelope: {reason}")


class ArtifactOpenError(ForgeError):
    """Raised when an output artifact cannot be opened for writing."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot open output artifact {path}: {reason}")


class ArtifactWriteError(ForgeError):
    """Raised when writing to an already-open output artifact fails."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed writing to {path}: {reason}")


class ManifestReadError(ForgeError):
    """Raised when a manifest that passed the hook filter cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to read manifest {path}: {reason}")


class ClassificationError(ForgeError, ValueError):
    """Raised when a manifest filename does not follow ``<category>_<kind>...yaml``."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(
            f"Cannot classify {filename!r}: expected at least two underscore-delimited segments"
        )


class NormalizationError(ForgeError):
    """Raised when an artifact cannot be normalized in place."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to normalize {path}: {reason}")


__all__ = [
    "ArtifactOpenError",
    "ArtifactWriteError",
    "ClassificationError",
    "EnvelopeLoadError",
    "EnvelopeRenderError",
    "ForgeError",
    "ManifestReadError",
    "NormalizationError",
]
