from __future__ import annotations

from pathlib import Path

import pytest

from cluster_forge.compiler.envelopes import EnvelopeTemplates

OBJECT_ENVELOPE = "- object: {{ name }}/{{ kind }}\n{{ content }}"
HEADER_ENVELOPE = "# header {{ name }}\n"
FOOTER_ENVELOPE = "# footer {{ name }}\n"

HOOK_MANIFEST = """apiVersion: batch/v1
kind: Job
metadata:
  name: cleanup
  annotations:
    "helm.sh/hook": post-delete
"""


@pytest.fixture
def hook_manifest() -> str:
    return HOOK_MANIFEST


@pytest.fixture
def envelopes() -> EnvelopeTemplates:
    """Minimal substitute envelopes with easily asserted output."""
    return EnvelopeTemplates.from_strings(
        wrapper=OBJECT_ENVELOPE,
        header=HEADER_ENVELOPE,
        footer=FOOTER_ENVELOPE,
    )


@pytest.fixture
def stack_dir(tmp_path: Path) -> Path:
    """A working/stack1 directory with one manifest per stream plus a hook."""
    manifests = tmp_path / "working" / "stack1"
    manifests.mkdir(parents=True)
    (manifests / "crd_CustomResourceDefinition_foo.yaml").write_text(
        "apiVersion: apiextensions.k8s.io/v1\nkind: CustomResourceDefinition\nmetadata:\n  name: foo\n",
        encoding="utf-8",
    )
    (manifests / "sec_Secret_bar.yaml").write_text(
        "apiVersion: v1\nkind: Secret\nmetadata:\n  name: bar\n",
        encoding="utf-8",
    )
    (manifests / "obj_Deployment_baz.yaml").write_text(
        "apiVersion: apps/v1\nkind: Deployment\nmetadata:\n  name: baz\n",
        encoding="utf-8",
    )
    (manifests / "hook_Job_cleanup.yaml").write_text(HOOK_MANIFEST, encoding="utf-8")
    return manifests


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "output"
    path.mkdir()
    return path
