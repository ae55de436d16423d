"""Tests for blank-line normalization."""

from __future__ import annotations

from pathlib import Path

import pytest

from cluster_forge.compiler.errors import NormalizationError
from cluster_forge.compiler.normalize import normalize_text, remove_empty_lines


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("A: 1\n\nB: 2\n", "A: 1\nB: 2\n"),
        ("a\n   \n\t\nb\n", "a\nb\n"),
        ("\n\na: 1\n", "a: 1\n"),
        ("a\nb\n\n\n", "a\nb"),
        ("a\nb\n   ", "a\nb"),
        ("  nested:\n    key: v\n", "  nested:\n    key: v\n"),
        ("", ""),
        ("\n \n\t\n", ""),
    ],
)
def test_normalize_text(raw: str, expected: str) -> None:
    assert normalize_text(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "A: 1\n\nB: 2\n",
        "header\n\n\n  body: x\n      \n\nfooter\n\n",
        "                a\n                \n                b\n                \n",
        "x\r\n\r\ny\r\n",
        "\t\n  \nonly: this",
        "trailing spaces   \nkept\n",
    ],
)
def test_normalize_text_is_idempotent(raw: str) -> None:
    once = normalize_text(raw)
    assert normalize_text(once) == once


def test_normalize_keeps_non_blank_lines_in_order() -> None:
    raw = "one\n\ntwo\n   \nthree\n"
    assert normalize_text(raw).splitlines() == ["one", "two", "three"]


def test_remove_empty_lines_rewrites_file(tmp_path: Path) -> None:
    artifact = tmp_path / "stack1-object.yaml"
    artifact.write_bytes(b"a: 1\n\n    \nb: 2\n")

    remove_empty_lines(artifact)
    first = artifact.read_bytes()
    remove_empty_lines(artifact)

    assert first == b"a: 1\nb: 2\n"
    assert artifact.read_bytes() == first


def test_remove_empty_lines_missing_file(tmp_path: Path) -> None:
    missing = tmp_path / "absent.yaml"

    with pytest.raises(NormalizationError) as excinfo:
        remove_empty_lines(missing)

    assert excinfo.value.path == missing


def test_only_ascii_whitespace_counts_as_blank() -> None:
    assert normalize_text("a\n\xa0\nb\n") == "a\n\xa0\nb\n"
    assert normalize_text("a\n\u2003\n\nb\n") == "a\n\u2003\nb\n"


def test_remove_empty_lines_keeps_invalid_utf8_bytes(tmp_path: Path) -> None:
    artifact = tmp_path / "stack1-object.yaml"
    artifact.write_bytes(b"city: M\xfcnchen\n\n  \nzone: \xff\n")

    remove_empty_lines(artifact)

    assert artifact.read_bytes() == b"city: M\xfcnchen\nzone: \xff\n"
