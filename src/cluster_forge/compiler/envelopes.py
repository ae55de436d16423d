"""Envelope templates that wrap rendered manifests into Crossplane documents.

Three templates make up a set:

- ``object.yaml.j2`` wraps one manifest; receives ``name``, ``kind`` and ``content``.
- ``header.yaml.j2`` opens an aggregate package; receives ``name``.
- ``footer.yaml.j2`` closes an aggregate package; receives ``name``.

The set is parsed once by :func:`load_envelopes` and handed to the compilers,
which only ever render from it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from jinja2 import (
    BaseLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    Template,
    TemplateError,
)

from cluster_forge.compiler.errors import EnvelopeLoadError, EnvelopeRenderError

logger = logging.getLogger(__name__)

OBJECT_TEMPLATE = "object.yaml.j2"
HEADER_TEMPLATE = "header.yaml.j2"
FOOTER_TEMPLATE = "footer.yaml.j2"
TEMPLATE_NAMES = (OBJECT_TEMPLATE, HEADER_TEMPLATE, FOOTER_TEMPLATE)


@dataclass(frozen=True)
class EnvelopeTemplates:
    """Immutable, parsed envelope template set."""

    wrapper: Template
    header: Template
    footer: Template
    origin: str = "package"

    def render_object(self, name: str, kind: str, content: str) -> str:
        return _render(self.wrapper, OBJECT_TEMPLATE, name=name, kind=kind, content=content)

    def render_header(self, name: str) -> str:
        return _render(self.header, HEADER_TEMPLATE, name=name)

    def render_footer(self, name: str) -> str:
        return _render(self.footer, FOOTER_TEMPLATE, name=name)

    @classmethod
    def from_strings(cls, *, wrapper: str, header: str, footer: str) -> "EnvelopeTemplates":
        """Build a set from in-memory sources, e.g. substitute templates in tests."""
        loader = DictLoader(
            {OBJECT_TEMPLATE: wrapper, HEADER_TEMPLATE: header, FOOTER_TEMPLATE: footer}
        )
        return _load(loader, origin="inline")


def _render(template: Template, label: str, **fields: str) -> str:
    try:
        return template.render(**fields)
    except TemplateError as exc:
        raise EnvelopeRenderError(label, str(exc)) from exc


def _environment(loader: BaseLoader) -> Environment:
    # Output is YAML, not markup: no escaping, and trailing newlines are
    # part of the envelope.
    return Environment(
        loader=loader,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )


def _load(loader: BaseLoader, origin: str) -> EnvelopeTemplates:
    env = _environment(loader)
    parsed: dict[str, Template] = {}
    for name in TEMPLATE_NAMES:
        try:
            parsed[name] = env.get_template(name)
        except TemplateError as exc:
            raise EnvelopeLoadError(f"Cannot load envelope {name} from {origin}: {exc}") from exc
    return EnvelopeTemplates(
        wrapper=parsed[OBJECT_TEMPLATE],
        header=parsed[HEADER_TEMPLATE],
        footer=parsed[FOOTER_TEMPLATE],
        origin=origin,
    )


def load_envelopes(template_dir: Path | None = None) -> EnvelopeTemplates:
    """Parse the envelope template set.

    Args:
        template_dir: Directory holding substitute ``*.yaml.j2`` envelopes.
            When omitted, the templates bundled with the package are used.

    Raises:
        EnvelopeLoadError: if a template is missing or has a syntax error.
    """
    if template_dir is None:
        loader: BaseLoader = PackageLoader("cluster_forge.compiler", "templates")
        origin = "package"
    else:
        if not template_dir.is_dir():
            raise EnvelopeLoadError(f"Envelope template directory not found: {template_dir}")
        loader = FileSystemLoader(str(template_dir))
        origin = str(template_dir)

    envelopes = _load(loader, origin)
    logger.debug("Loaded envelope templates from %s", origin)
    return envelopes


__all__ = [
    "EnvelopeTemplates",
    "FOOTER_TEMPLATE",
    "HEADER_TEMPLATE",
    "OBJECT_TEMPLATE",
    "TEMPLATE_NAMES",
    "load_envelopes",
]
