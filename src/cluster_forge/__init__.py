"""cluster-forge: package per-resource Kubernetes manifests into deployable artifacts."""

from cluster_forge.compiler import (
    EnvelopeTemplates,
    ObjectCompilation,
    ObjectCompiler,
    PackageCompilation,
    PackageCompiler,
    compile_objects,
    compile_package,
    load_envelopes,
)

__version__ = "0.4.0"

__all__ = [
    "EnvelopeTemplates",
    "ObjectCompilation",
    "ObjectCompiler",
    "PackageCompilation",
    "PackageCompiler",
    "__version__",
    "compile_objects",
    "compile_package",
    "load_envelopes",
]
