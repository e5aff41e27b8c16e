from __future__ import annotations

import sys
import textwrap
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from docspec.extract.adapters.introspection import CatalogIntrospector


@pytest.fixture
def write_java(tmp_path: Path):
    """Writes a Java source for ``qname`` under ``tmp_path/src`` and returns the root."""

    def _write(qname: str, source: str) -> Path:
        root = tmp_path / "src"
        path = root.joinpath(*qname.split(".")).with_suffix(".java")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source).lstrip(), encoding="utf-8")
        return root

    return _write


def ctor(qname: str, *params: str, modifiers=("public",)) -> dict:
    return {
        "name": qname,
        "kind": "constructor",
        "parameters": list(params),
        "modifiers": list(modifiers),
    }


def method(name: str, *params: str, modifiers=("public",)) -> dict:
    return {
        "name": name,
        "kind": "method",
        "parameters": list(params),
        "modifiers": list(modifiers),
    }


STANDARD_TYPES = [
    "java.lang.IllegalArgumentException",
    "java.lang.NullPointerException",
    "java.io.IOException",
]


@pytest.fixture
def catalog():
    def _catalog(classes: dict, types: list[str] | None = None) -> CatalogIntrospector:
        return CatalogIntrospector(
            classes=classes, types=STANDARD_TYPES if types is None else types
        )

    return _catalog
