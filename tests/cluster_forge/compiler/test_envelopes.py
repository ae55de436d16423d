"""Tests for envelope template loading and rendering."""

from __future__ import annotations

from pathlib import Path

import pytest
from ruamel.yaml import YAML

from cluster_forge.compiler.envelopes import (
    FOOTER_TEMPLATE,
    HEADER_TEMPLATE,
    OBJECT_TEMPLATE,
    EnvelopeTemplates,
    load_envelopes,
)
from cluster_forge.compiler.errors import EnvelopeLoadError, EnvelopeRenderError


def test_bundled_envelopes_load() -> None:
    envelopes = load_envelopes()

    assert envelopes.origin == "package"
    assert "kind: Composition" in envelopes.render_header("stack1")
    assert "name: stack1" in envelopes.render_footer("stack1")


def test_bundled_object_envelope_wraps_content() -> None:
    envelopes = load_envelopes()
    content = "                kind: ConfigMap\n                metadata:\n                  name: cm\n"

    rendered = envelopes.render_object("stack1", "obj-ConfigMap", content)

    assert "name: stack1-obj-ConfigMap" in rendered
    assert "kind: Object" in rendered
    assert rendered.rstrip().endswith("name: cm")


def test_bundled_envelopes_form_valid_yaml() -> None:
    envelopes = load_envelopes()
    body = envelopes.render_object(
        "stack1",
        "obj-ConfigMap",
        "                apiVersion: v1\n                kind: ConfigMap\n",
    )
    document = envelopes.render_header("stack1") + body + envelopes.render_footer("stack1")

    composition, claim = list(YAML(typ="safe").load_all(document))

    resource = composition["spec"]["resources"][0]
    assert resource["base"]["spec"]["forProvider"]["manifest"] == {
        "apiVersion": "v1",
        "kind": "ConfigMap",
    }
    assert claim["metadata"]["name"] == "stack1"


def test_from_strings_substitutes_templates() -> None:
    envelopes = EnvelopeTemplates.from_strings(
        wrapper="{{ name }}|{{ kind }}|{{ content }}",
        header="H {{ name }}\n",
        footer="F {{ name }}\n",
    )

    assert envelopes.render_object("n", "k", "c") == "n|k|c"
    assert envelopes.render_header("n") == "H n\n"
    assert envelopes.render_footer("n") == "F n\n"


def test_content_is_not_escaped() -> None:
    envelopes = EnvelopeTemplates.from_strings(
        wrapper="{{ content }}", header="", footer=""
    )

    assert envelopes.render_object("n", "k", 'a: "<b> & c"') == 'a: "<b> & c"'


def test_header_with_unknown_field_fails_to_render() -> None:
    envelopes = EnvelopeTemplates.from_strings(
        wrapper="{{ content }}",
        header="{{ name }} {{ kind }}\n",
        footer="",
    )

    with pytest.raises(EnvelopeRenderError) as excinfo:
        envelopes.render_header("stack1")

    assert excinfo.value.template == HEADER_TEMPLATE


def test_syntax_error_fails_at_load() -> None:
    with pytest.raises(EnvelopeLoadError):
        EnvelopeTemplates.from_strings(wrapper="{{ name ", header="", footer="")


def test_load_from_directory(tmp_path: Path) -> None:
    (tmp_path / OBJECT_TEMPLATE).write_text("custom {{ kind }}\n", encoding="utf-8")
    (tmp_path / HEADER_TEMPLATE).write_text("top\n", encoding="utf-8")
    (tmp_path / FOOTER_TEMPLATE).write_text("bottom\n", encoding="utf-8")

    envelopes = load_envelopes(tmp_path)

    assert envelopes.origin == str(tmp_path)
    assert envelopes.render_object("n", "obj-Service", "") == "custom obj-Service\n"


def test_load_from_directory_missing_template(tmp_path: Path) -> None:
    (tmp_path / OBJECT_TEMPLATE).write_text("x", encoding="utf-8")

    with pytest.raises(EnvelopeLoadError, match=HEADER_TEMPLATE):
        load_envelopes(tmp_path)


def test_load_from_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(EnvelopeLoadError, match="not found"):
        load_envelopes(tmp_path / "nope")


def test_envelope_set_is_immutable() -> None:
    envelopes = load_envelopes()

    with pytest.raises(AttributeError):
        envelopes.header = envelopes.footer  # type: ignore[misc]
