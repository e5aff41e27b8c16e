from __future__ import annotations

import logging
from pathlib import Path

from .adapters.introspection import Introspector, non_private_executables
from .adapters.source import JavalangSourceParser, SourceParser
from .config import normalize_extension
from .models import ExecutableMember, MemberKind, TypeRef
from .parameters import NullabilityPolicy, build_parameters
from .reconcile import reconcile
from .resolver import ExceptionResolver
from .tags import TagExtractor

logger = logging.getLogger(__name__)


class JavadocExtractor:
    """
    Extracts the documented executable members of a top-level Java class by
    reconciling its introspected members with its source declarations.
    """

    def __init__(
        self,
        introspector: Introspector,
        *,
        parser: SourceParser | None = None,
        policy: NullabilityPolicy | None = None,
        standard_namespace: str = "java.lang",
        source_extension: str = ".java",
    ) -> None:
        self._introspector = introspector
        self._parser = parser or JavalangSourceParser()
        self._policy = policy or NullabilityPolicy()
        self._resolver = ExceptionResolver(introspector, standard_namespace)
        self._source_extension = normalize_extension(source_extension)

    def source_file(self, class_name: str, source_root: str | Path) -> Path:
        return Path(source_root).joinpath(*class_name.split(".")).with_suffix(
            self._source_extension
        )

    def extract(self, class_name: str, source_root: str | Path) -> list[ExecutableMember]:
        """
        Returns the non-private constructors and methods of ``class_name``
        in source declaration order.

        Raises ClassNotFoundError or SourceFileNotFoundError when a view is
        unavailable, and the reconciliation errors of
        ``docspec.extract.exceptions`` when the views disagree.
        """
        handle = self._introspector.load_class(class_name)
        executables = non_private_executables(self._introspector, handle)

        path = self.source_file(class_name, source_root)
        unit = self._parser.parse_file(path)
        declarations = unit.declarations(handle.simple_name)
        logger.debug(
            f"{class_name}: {len(executables)} introspected, "
            f"{len(declarations)} declared in {path}"
        )

        pairs = reconcile(class_name, executables, declarations)

        tag_extractor = TagExtractor(self._resolver, class_name)
        declaring = TypeRef(class_name)
        members: list[ExecutableMember] = []
        for decl, executable in pairs:
            parameters = build_parameters(class_name, decl, executable, self._policy)
            members.append(
                ExecutableMember(
                    declaring_class=declaring,
                    kind=MemberKind.CONSTRUCTOR if decl.is_constructor else MemberKind.METHOD,
                    name=decl.name,
                    parameters=parameters,
                    tags=tag_extractor.extract(decl, parameters),
                    modifiers=executable.modifiers,
                )
            )
        return members
