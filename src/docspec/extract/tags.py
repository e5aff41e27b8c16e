from __future__ import annotations

import logging

from .adapters.source import SourceDeclaration
from .exceptions import ExceptionTypeNotFoundError, UnresolvedExceptionTypeError
from .javadoc_ops import BlockTag, JavadocUtils
from .models import Parameter, ParamTag, ReturnTag, Tag, ThrowsTag
from .resolver import ExceptionResolver

logger = logging.getLogger(__name__)


class TagExtractor:
    """
    Turns the block tags of a Javadoc comment into Param/Return/Throws tags.
    Tags of any other kind are dropped.
    """

    def __init__(self, resolver: ExceptionResolver, class_name: str) -> None:
        self._resolver = resolver
        self._class_name = class_name

    def extract(
        self, declaration: SourceDeclaration, parameters: tuple[Parameter, ...]
    ) -> tuple[Tag, ...]:
        tags: list[Tag] = []
        for block in JavadocUtils.block_tags(declaration.documentation):
            tag: Tag | None = None
            if block.kind == "param":
                tag = self._param_tag(block, parameters, declaration)
            elif block.kind == "return":
                tag = ReturnTag(block.text)
            elif block.kind == "throws":
                tag = self._throws_tag(block, declaration)
            if tag is not None:
                tags.append(tag)
        return tuple(tags)

    def _param_tag(
        self,
        block: BlockTag,
        parameters: tuple[Parameter, ...],
        declaration: SourceDeclaration,
    ) -> ParamTag | None:
        matching = [p for p in parameters if p.name == (block.name or "")]
        if not matching:
            # TODO: surface undocumented/misspelled @param names as a warning in the batch report.
            logger.debug(
                f"{self._class_name}.{declaration.signature}: "
                f"@param {block.name} matches no parameter, tag dropped"
            )
            return None
        return ParamTag(matching[0], block.text)

    def _throws_tag(self, block: BlockTag, declaration: SourceDeclaration) -> ThrowsTag:
        # The exception name must not contain a space.
        name, _, comment = block.text.partition(" ")
        try:
            exception = self._resolver.resolve_or_raise(name, declaration.scope)
        except ExceptionTypeNotFoundError as e:
            raise UnresolvedExceptionTypeError(
                self._class_name, declaration.signature, name
            ) from e
        return ThrowsTag(exception, comment.strip())
