from __future__ import annotations

import pytest

from docspec.extract.adapters.introspection import CatalogIntrospector
from docspec.extract.adapters.source import SourceScope
from docspec.extract.exceptions import ExceptionTypeNotFoundError
from docspec.extract.models import TypeRef
from docspec.extract.resolver import ExceptionResolver


def _scope(*imports: str) -> SourceScope:
    return SourceScope(path="Foo.java", imports=tuple(imports))


def _resolver(*types: str) -> ExceptionResolver:
    return ExceptionResolver(CatalogIntrospector(types=types))


def test_direct_lookup_wins() -> None:
    resolver = _resolver("java.io.IOException", "java.lang.java.io.IOException")
    result = resolver.resolve("java.io.IOException", _scope())
    assert result.ok
    assert result.type == TypeRef("java.io.IOException")
    assert result.strategy == "direct"


def test_standard_namespace_fallback() -> None:
    resolver = _resolver("java.lang.IOException")
    result = resolver.resolve("IOException", _scope("java.util.List"))
    assert result.type == TypeRef("java.lang.IOException")
    assert result.strategy == "standard"


def test_import_scan_fallback() -> None:
    resolver = _resolver("com.acme.FooException")
    result = resolver.resolve("FooException", _scope("java.util.List", "com.acme.FooException"))
    assert result.type == TypeRef("com.acme.FooException")
    assert result.strategy == "import"


def test_import_scan_matches_substrings() -> None:
    resolver = _resolver("com.acme.MyIOExceptionWrapper")
    result = resolver.resolve("IOException", _scope("com.acme.MyIOExceptionWrapper"))
    assert result.type == TypeRef("com.acme.MyIOExceptionWrapper")


def test_import_scan_uses_first_matching_import() -> None:
    resolver = _resolver("a.BarException", "b.BarException")
    result = resolver.resolve("BarException", _scope("a.BarException", "b.BarException"))
    assert result.type == TypeRef("a.BarException")


def test_unresolvable_name_fails_with_name() -> None:
    resolver = _resolver("java.lang.IllegalStateException")
    result = resolver.resolve("UnknownType", _scope("java.util.List"))
    assert not result.ok
    assert result.name == "UnknownType"

    with pytest.raises(ExceptionTypeNotFoundError) as exc:
        resolver.resolve_or_raise("UnknownType", _scope("java.util.List"))
    assert exc.value.name == "UnknownType"


def test_custom_standard_namespace() -> None:
    resolver = ExceptionResolver(
        CatalogIntrospector(types=["kotlin.IllegalStateException"]),
        standard_namespace="kotlin",
    )
    assert resolver.resolve_or_raise("IllegalStateException", _scope()) == TypeRef(
        "kotlin.IllegalStateException"
    )


@pytest.mark.parametrize("name", ["", "-version", "Foo<Bar>", "a..b"])
def test_malformed_names_never_resolve(name) -> None:
    resolver = _resolver("java.util.List", "java.lang.IllegalStateException")
    assert not resolver.resolve(name, _scope("java.util.List")).ok
