from __future__ import annotations

from docspec.extract.javadoc_ops import BlockTag, JavadocUtils
from docspec.extract.models import TypeRef


def test_block_tags_in_comment_order() -> None:
    raw = """/**
     * Adds an element.
     *
     * @param value the element
     *     to add
     * @return true if added
     * @throws IllegalStateException if full
     * @since 1.2
     */"""
    assert JavadocUtils.block_tags(raw) == [
        BlockTag("param", "value", "the element to add"),
        BlockTag("return", None, "true if added"),
        BlockTag("throws", None, "IllegalStateException if full"),
        BlockTag("since", None, "1.2"),
    ]


def test_block_tags_of_missing_comment() -> None:
    assert JavadocUtils.block_tags(None) == []
    assert JavadocUtils.block_tags("/** Only a description. */") == []


def test_param_tag_without_text() -> None:
    assert JavadocUtils.block_tags("/** @param x */") == [BlockTag("param", "x", "")]


def test_type_ref_erasure_and_simple_name() -> None:
    assert TypeRef("java.util.Map<K, java.util.List<V>>").erased == "java.util.Map"
    assert TypeRef("java.util.List<String>[]").simple_name == "List[]"
    assert TypeRef("String...").simple_name == "String[]"
    assert TypeRef("java.util.Map$Entry").simple_name == "Entry"
    assert TypeRef("Map.Entry<K, V>").simple_name == "Entry"
    assert TypeRef("int").simple_name == "int"
