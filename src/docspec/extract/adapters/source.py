"""
Source declaration adapter.

Wraps the ``javalang`` parser and exposes, for one compilation unit, the
non-private constructor and method declarations of a class together with the
information the extractor needs: parameter names and written types,
parameter annotations, the raw Javadoc comment, and an explicit scope handle
carrying the unit's imports.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import javalang.parse
import javalang.tree
from javalang.parser import JavaSyntaxError
from javalang.tokenizer import LexerError
from javalang.tree import ClassDeclaration, ConstructorDeclaration

from ..exceptions import SourceFileNotFoundError, SourceParseError
from ..javadoc_ops import JavadocUtils

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class SourceScope:
    """The compilation unit a declaration was parsed from."""

    path: str
    imports: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class SourceParameter:
    name: str
    type_text: str
    annotations: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class SourceDeclaration:
    name: str
    is_constructor: bool
    parameters: tuple[SourceParameter, ...]
    modifiers: frozenset[str]
    documentation: str | None
    scope: SourceScope

    @property
    def signature(self) -> str:
        return f"{self.name}({', '.join(p.type_text for p in self.parameters)})"


@dataclass(slots=True)
class CompilationUnit:
    scope: SourceScope
    tree: javalang.tree.CompilationUnit

    def find_class(self, name: str) -> ClassDeclaration | None:
        for decl in self.tree.types or []:
            if isinstance(decl, ClassDeclaration) and decl.name == name:
                return decl
        return None

    def declarations(self, class_name: str) -> list[SourceDeclaration]:
        """
        Non-private constructors then non-private methods of ``class_name``,
        each group in declaration order. A missing class yields no members.
        """
        cls = self.find_class(class_name)
        if cls is None:
            logger.debug(f"Class {class_name} not declared in {self.scope.path}")
            return []

        result: list[SourceDeclaration] = []
        for node in [*cls.constructors, *cls.methods]:
            if "private" in node.modifiers:
                continue
            result.append(
                SourceDeclaration(
                    name=node.name,
                    is_constructor=isinstance(node, ConstructorDeclaration),
                    parameters=tuple(
                        SourceParameter(
                            name=p.name,
                            type_text=JavadocUtils.type_text(p.type, p.varargs),
                            annotations=tuple(JavadocUtils.annotation_names(p)),
                        )
                        for p in node.parameters
                    ),
                    modifiers=frozenset(node.modifiers),
                    documentation=node.documentation,
                    scope=self.scope,
                )
            )
        return result


class SourceParser(Protocol):
    def parse_file(self, path: Path) -> CompilationUnit: ...


class JavalangSourceParser:
    """
    Parses Java source files with javalang.
    """

    ENCODING = "utf-8"
    FALLBACK_ENCODING = "latin-1"

    def parse_file(self, path: Path) -> CompilationUnit:
        if not path.is_file():
            raise SourceFileNotFoundError(str(path))

        data = path.read_bytes()
        try:
            text = data.decode(self.ENCODING)
        except UnicodeDecodeError:
            logger.debug(f"{path} is not {self.ENCODING}, using {self.FALLBACK_ENCODING}")
            text = data.decode(self.FALLBACK_ENCODING)

        try:
            tree = javalang.parse.parse(text)
        except (JavaSyntaxError, LexerError) as e:
            raise SourceParseError(str(path), getattr(e, "description", None) or repr(e)) from e

        imports = tuple(imp.path for imp in tree.imports or [])
        return CompilationUnit(
            scope=SourceScope(path=str(path), imports=imports),
            tree=tree,
        )
