"""Derive a manifest's kind from its filename and pick its output stream.

Manifest splitters upstream name every file ``<category>_<kind>...yaml``
(for example ``crd_CustomResourceDefinition_foo.yaml``). Only the first two
underscore-delimited segments matter.
"""

from __future__ import annotations

from enum import Enum

from cluster_forge.compiler.errors import ClassificationError

SEGMENT_DELIMITER = "_"
KIND_JOINER = "-"
YAML_SUFFIX = ".yaml"


class Stream(str, Enum):
    """Classified output streams, valued by their artifact designator."""

    OBJECT = "object"
    CRD = "crd"
    SECRET = "secret"


def classify(filename: str) -> str:
    """Return the kind string for ``filename``.

    >>> classify("crd_CustomResourceDefinition_foo.yaml")
    'crd-CustomResourceDefinition'
    >>> classify("obj_Deployment.yaml")
    'obj-Deployment'

    Raises:
        ClassificationError: if the name has fewer than two segments.
    """
    segments = filename.split(SEGMENT_DELIMITER)
    if len(segments) < 2:
        raise ClassificationError(filename)
    kind = KIND_JOINER.join(segments[:2])
    return kind.removesuffix(YAML_SUFFIX)


def route(kind: str) -> Stream:
    """Pick the stream for a classified kind; CRDs win over secrets."""
    if "CustomResourceDefinition" in kind:
        return Stream.CRD
    if "Secret" in kind:
        return Stream.SECRET
    return Stream.OBJECT


__all__ = ["Stream", "classify", "route"]
