import re
from typing import Any, NamedTuple

from javalang.tree import BasicType, ReferenceType

_TAG_LINE = re.compile(r"^@(?P<kind>[A-Za-z]+)\b\s*(?P<rest>.*)$")


class BlockTag(NamedTuple):
    """A Javadoc block tag such as ``@param x the value``."""

    kind: str
    name: str | None
    text: str


class JavadocUtils:
    """
    Static utilities for Javadoc comments and javalang type nodes.
    """

    @staticmethod
    def comment_lines(raw: str | None) -> list[str]:
        if not raw:
            return []
        body = raw.strip()
        if body.startswith("/**"):
            body = body[3:]
        elif body.startswith("/*"):
            body = body[2:]
        if body.endswith("*/"):
            body = body[:-2]

        lines: list[str] = []
        for line in body.splitlines():
            line = line.strip()
            if line.startswith("*"):
                line = line[1:]
                if line.startswith(" "):
                    line = line[1:]
            lines.append(line.strip())
        return lines

    @staticmethod
    def block_tags(raw: str | None) -> list[BlockTag]:
        """
        Splits a Javadoc comment into its block tags, in comment order.
        The leading description is discarded. Continuation lines are joined
        with single spaces.
        """
        groups: list[tuple[str, list[str]]] = []
        for line in JavadocUtils.comment_lines(raw):
            m = _TAG_LINE.match(line)
            if m:
                groups.append((m.group("kind"), [m.group("rest")]))
            elif groups and line:
                groups[-1][1].append(line)

        tags: list[BlockTag] = []
        for kind, parts in groups:
            content = " ".join(p for p in parts if p).strip()
            if kind == "param":
                name, _, text = content.partition(" ")
                tags.append(BlockTag(kind, name, text.strip()))
            else:
                tags.append(BlockTag(kind, None, content))
        return tags

    @staticmethod
    def type_text(node: Any, varargs: bool = False) -> str:
        """Renders a javalang type node as written, generic arguments included."""
        if isinstance(node, BasicType):
            text = node.name
        elif isinstance(node, ReferenceType):
            text = JavadocUtils._reference_text(node)
        else:
            text = getattr(node, "name", None) or "?"

        dims = getattr(node, "dimensions", None) or []
        text += "[]" * len(dims)
        if varargs:
            text += "[]"
        return text

    @staticmethod
    def _reference_text(node: ReferenceType) -> str:
        text = node.name
        if node.arguments:
            args = []
            for a in node.arguments:
                if a.type is None:
                    args.append("?")
                elif a.pattern_type:
                    args.append(f"? {a.pattern_type} {JavadocUtils.type_text(a.type)}")
                else:
                    args.append(JavadocUtils.type_text(a.type))
            text += "<" + ", ".join(args) + ">"
        if node.sub_type is not None:
            text += "." + JavadocUtils._reference_text(node.sub_type)
        return text

    @staticmethod
    def annotation_names(node: Any) -> list[str]:
        return [a.name for a in getattr(node, "annotations", None) or []]
