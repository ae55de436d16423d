"""Package compiler: wrap prepared YAML in the header and footer envelopes."""

from __future__ import annotations

import logging
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path

from cluster_forge.compiler.artifacts import open_artifact, write_artifact
from cluster_forge.compiler.envelopes import EnvelopeTemplates, load_envelopes
from cluster_forge.compiler.errors import NormalizationError
from cluster_forge.compiler.normalize import remove_empty_lines

logger = logging.getLogger(__name__)

PACKAGE_DESIGNATOR = "packages"


@dataclass(frozen=True)
class PackageCompilation:
    package_name: str
    package_file: Path
    normalization_error: NormalizationError | None = None

    @property
    def normalized(self) -> bool:
        return self.normalization_error is None


def package_path(packages_dir: Path, package_name: str) -> Path:
    """Return ``<packages_dir>/<package_name>-packages.yaml``."""
    return packages_dir / f"{package_name}-{PACKAGE_DESIGNATOR}.yaml"


class PackageCompiler:
    """Builds one aggregate package document.

    No classification, routing or indentation happens here: the body is
    written exactly as given between the rendered header and footer.
    """

    def __init__(self, envelopes: EnvelopeTemplates, packages_dir: Path) -> None:
        self.envelopes = envelopes
        self.packages_dir = packages_dir

    def compile(self, package_name: str, raw_content: str) -> PackageCompilation:
        path = package_path(self.packages_dir, package_name)

        with ExitStack() as stack:
            handle = open_artifact(stack, path)
            write_artifact(handle, path, self.envelopes.render_header(package_name))
            write_artifact(handle, path, raw_content)
            write_artifact(handle, path, self.envelopes.render_footer(package_name))

        try:
            remove_empty_lines(path)
        except NormalizationError as exc:
            logger.error("%s", exc)
            return PackageCompilation(package_name, path, normalization_error=exc)

        logger.info("Wrote package %s", path)
        return PackageCompilation(package_name, path)


def compile_package(
    package_name: str,
    raw_content: str,
    packages_dir: Path = Path("packages"),
    envelopes: EnvelopeTemplates | None = None,
) -> PackageCompilation:
    """Aggregate ``raw_content`` into ``<packages_dir>/<package_name>-packages.yaml``."""
    compiler = PackageCompiler(envelopes or load_envelopes(), packages_dir)
    return compiler.compile(package_name, raw_content)


__all__ = [
    "PACKAGE_DESIGNATOR",
    "PackageCompilation",
    "PackageCompiler",
    "compile_package",
    "package_path",
]
