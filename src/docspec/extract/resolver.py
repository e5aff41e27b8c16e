"""
Resolution of exception names found in ``@throws`` tags.

A name is resolved by trying, in order: the name as written, the name inside
the implicit standard namespace (``java.lang``), and finally the imports of
the declaring compilation unit. The import scan accepts the first import
whose qualified name *contains* the short name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .adapters.introspection import Introspector, is_qualified_name
from .adapters.source import SourceScope
from .exceptions import ClassNotFoundError, ExceptionTypeNotFoundError
from .models import TypeRef

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Resolution:
    name: str
    type: TypeRef | None = None
    strategy: str | None = None

    @property
    def ok(self) -> bool:
        return self.type is not None

    @classmethod
    def failure(cls, name: str) -> "Resolution":
        return cls(name)


Strategy = Callable[[str, SourceScope], Resolution]


class ExceptionResolver:
    def __init__(self, introspector: Introspector, standard_namespace: str = "java.lang"):
        self._introspector = introspector
        self._standard_namespace = standard_namespace
        self._strategies: list[tuple[str, Strategy]] = [
            ("direct", self._direct),
            ("standard", self._standard),
            ("import", self._imported),
        ]

    def resolve(self, name: str, scope: SourceScope) -> Resolution:
        if not is_qualified_name(name):
            logger.debug(f"Not a type name: {name!r}")
            return Resolution.failure(name)
        for label, strategy in self._strategies:
            result = strategy(name, scope)
            if result.ok:
                logger.debug(f"Resolved {name} to {result.type} ({label})")
                return Resolution(name, result.type, label)
        return Resolution.failure(name)

    def resolve_or_raise(self, name: str, scope: SourceScope) -> TypeRef:
        result = self.resolve(name, scope)
        if result.type is None:
            raise ExceptionTypeNotFoundError(name)
        return result.type

    def _load(self, name: str, qualified_name: str) -> Resolution:
        try:
            handle = self._introspector.load_class(qualified_name)
        except ClassNotFoundError:
            return Resolution.failure(name)
        return Resolution(name, TypeRef(handle.qualified_name))

    def _direct(self, name: str, scope: SourceScope) -> Resolution:
        return self._load(name, name)

    def _standard(self, name: str, scope: SourceScope) -> Resolution:
        return self._load(name, f"{self._standard_namespace}.{name}")

    def _imported(self, name: str, scope: SourceScope) -> Resolution:
        for imported in scope.imports:
            if name in imported:
                return self._load(name, imported)
        return Resolution.failure(name)
