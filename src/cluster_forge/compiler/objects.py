"""Object compiler: wrap every manifest of a stack into a classified stream.

Each qualifying manifest in the stack's working directory is re-indented,
rendered through the object envelope and appended to exactly one of
``<name>-object.yaml``, ``<name>-crd.yaml`` or ``<name>-secret.yaml``.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path

from cluster_forge.compiler.artifacts import decode, open_artifact, write_artifact
from cluster_forge.compiler.classifier import Stream, classify, route
from cluster_forge.compiler.envelopes import EnvelopeTemplates, load_envelopes
from cluster_forge.compiler.errors import (
    ClassificationError,
    ManifestReadError,
    NormalizationError,
)
from cluster_forge.compiler.filters import should_skip_file
from cluster_forge.compiler.normalize import remove_empty_lines

logger = logging.getLogger(__name__)

INDENT = " " * 16


@dataclass(frozen=True)
class ManifestUnit:
    """One manifest, ready to render. Built fresh for every file."""

    name: str
    kind: str
    content: str


@dataclass(frozen=True)
class SkippedEntry:
    name: str
    reason: str


@dataclass
class ObjectCompilation:
    """Outcome of one object compilation run."""

    package_name: str
    object_file: Path
    crd_file: Path
    secret_file: Path
    routed: dict[Stream, list[str]] = field(
        default_factory=lambda: {stream: [] for stream in Stream}
    )
    skipped: list[SkippedEntry] = field(default_factory=list)
    normalization_errors: list[NormalizationError] = field(default_factory=list)

    @property
    def artifacts(self) -> tuple[Path, Path, Path]:
        return (self.object_file, self.crd_file, self.secret_file)

    @property
    def normalized(self) -> bool:
        """True when every artifact was normalized successfully."""
        return not self.normalization_errors

    def artifact(self, stream: Stream) -> Path:
        return {
            Stream.OBJECT: self.object_file,
            Stream.CRD: self.crd_file,
            Stream.SECRET: self.secret_file,
        }[stream]


def artifact_path(output_dir: Path, package_name: str, stream: Stream) -> Path:
    """Return ``<output_dir>/<package_name>-<stream>.yaml``."""
    return output_dir / f"{package_name}-{stream.value}.yaml"


def indent_manifest(text: str) -> str:
    """Prefix every line, blank ones included, with 16 spaces.

    Lines are split on ``\\n`` only and each is re-terminated with ``\\n``,
    so the line count and order of ``text`` are preserved.
    """
    return "".join(f"{INDENT}{line}\n" for line in text.split("\n"))


def _list_manifests(manifest_dir: Path) -> list[Path]:
    if not manifest_dir.is_dir():
        logger.warning("Manifest directory %s does not exist; no manifests to compile", manifest_dir)
        return []
    return sorted(manifest_dir.iterdir(), key=lambda entry: entry.name)


def _read_manifest(path: Path) -> str:
    try:
        return decode(path.read_bytes())
    except OSError as exc:
        raise ManifestReadError(path, str(exc)) from exc


class ObjectCompiler:
    """Compiles a stack directory into the object, CRD and secret streams."""

    def __init__(self, envelopes: EnvelopeTemplates, output_dir: Path) -> None:
        self.envelopes = envelopes
        self.output_dir = output_dir

    def compile(self, package_name: str, manifest_dir: Path) -> ObjectCompilation:
        """Populate the three classified artifacts for ``package_name``.

        Fatal conditions (artifact open/write failures, unreadable kept
        manifests, render failures) propagate as :class:`ForgeError`
        subclasses. Normalization failures are collected on the result.
        """
        result = ObjectCompilation(
            package_name=package_name,
            object_file=artifact_path(self.output_dir, package_name, Stream.OBJECT),
            crd_file=artifact_path(self.output_dir, package_name, Stream.CRD),
            secret_file=artifact_path(self.output_dir, package_name, Stream.SECRET),
        )

        with ExitStack() as stack:
            handles = {stream: open_artifact(stack, result.artifact(stream)) for stream in Stream}

            for entry in _list_manifests(manifest_dir):
                if should_skip_file(entry, manifest_dir):
                    result.skipped.append(SkippedEntry(entry.name, "filtered"))
                    continue

                try:
                    kind = classify(entry.name)
                except ClassificationError as exc:
                    logger.warning("%s; skipping", exc)
                    result.skipped.append(SkippedEntry(entry.name, "malformed name"))
                    continue

                unit = ManifestUnit(
                    name=package_name,
                    kind=kind,
                    content=indent_manifest(_read_manifest(manifest_dir / entry.name)),
                )
                stream = route(unit.kind)
                rendered = self.envelopes.render_object(unit.name, unit.kind, unit.content)
                write_artifact(handles[stream], result.artifact(stream), rendered)
                result.routed[stream].append(entry.name)
                logger.debug("Routed %s (%s) to %s stream", entry.name, unit.kind, stream.value)

        for path in result.artifacts:
            try:
                remove_empty_lines(path)
            except NormalizationError as exc:
                logger.error("%s", exc)
                result.normalization_errors.append(exc)

        logger.info(
            "Compiled %s: %d object, %d crd, %d secret, %d skipped",
            package_name,
            len(result.routed[Stream.OBJECT]),
            len(result.routed[Stream.CRD]),
            len(result.routed[Stream.SECRET]),
            len(result.skipped),
        )
        return result


def compile_objects(
    package_name: str,
    manifest_dir: Path,
    output_dir: Path = Path("output"),
    envelopes: EnvelopeTemplates | None = None,
) -> ObjectCompilation:
    """Compile ``manifest_dir`` into ``output_dir`` using the bundled envelopes by default."""
    compiler = ObjectCompiler(envelopes or load_envelopes(), output_dir)
    return compiler.compile(package_name, manifest_dir)


__all__ = [
    "INDENT",
    "ManifestUnit",
    "ObjectCompilation",
    "ObjectCompiler",
    "SkippedEntry",
    "artifact_path",
    "compile_objects",
    "indent_manifest",
]
