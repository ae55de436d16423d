"""Manifest packaging compiler.

Filters hook manifests, classifies the rest by filename, wraps them in
envelope templates and writes normalized, deployable artifacts.
"""

from cluster_forge.compiler.classifier import Stream, classify, route
from cluster_forge.compiler.envelopes import EnvelopeTemplates, load_envelopes
from cluster_forge.compiler.errors import (
    ArtifactOpenError,
    ArtifactWriteError,
    ClassificationError,
    EnvelopeLoadError,
    EnvelopeRenderError,
    ForgeError,
    ManifestReadError,
    NormalizationError,
)
from cluster_forge.compiler.filters import HOOK_MARKER, should_skip_file
from cluster_forge.compiler.normalize import normalize_text, remove_empty_lines
from cluster_forge.compiler.objects import (
    ObjectCompilation,
    ObjectCompiler,
    SkippedEntry,
    compile_objects,
    indent_manifest,
)
from cluster_forge.compiler.package import PackageCompilation, PackageCompiler, compile_package

__all__ = [
    "ArtifactOpenError",
    "ArtifactWriteError",
    "ClassificationError",
    "EnvelopeLoadError",
    "EnvelopeRenderError",
    "EnvelopeTemplates",
    "ForgeError",
    "HOOK_MARKER",
    "ManifestReadError",
    "NormalizationError",
    "ObjectCompilation",
    "ObjectCompiler",
    "PackageCompilation",
    "PackageCompiler",
    "SkippedEntry",
    "Stream",
    "classify",
    "compile_objects",
    "compile_package",
    "indent_manifest",
    "load_envelopes",
    "normalize_text",
    "remove_empty_lines",
    "route",
    "should_skip_file",
]
