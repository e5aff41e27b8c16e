"""
Pairs source declarations with introspected executables.

Members are matched on their simple name and on the sequence of their
parameter types, compared by erased simple name: ``List<String>`` and
``java.util.List`` both become ``List``.
"""

from __future__ import annotations

from typing import NamedTuple

from .adapters.introspection import IntrospectedExecutable
from .adapters.source import SourceDeclaration
from .exceptions import AmbiguousMemberError, MemberNotFoundError, StructuralMismatchError
from .models import TypeRef

MemberKey = tuple[str, tuple[str, ...]]


class MemberPair(NamedTuple):
    declaration: SourceDeclaration
    executable: IntrospectedExecutable


def source_key(decl: SourceDeclaration) -> MemberKey:
    return decl.name, tuple(TypeRef(p.type_text).simple_name for p in decl.parameters)


def introspected_key(executable: IntrospectedExecutable) -> MemberKey:
    return executable.simple_name, tuple(t.simple_name for t in executable.parameter_types)


def reconcile(
    class_name: str,
    executables: list[IntrospectedExecutable],
    declarations: list[SourceDeclaration],
) -> list[MemberPair]:
    """
    Returns one pair per source declaration, in source order.
    """
    if len(executables) != len(declarations):
        raise StructuralMismatchError(class_name, len(executables), len(declarations))

    keyed = [(introspected_key(e), e) for e in executables]
    claimed: dict[int, SourceDeclaration] = {}
    pairs: list[MemberPair] = []
    for decl in declarations:
        key = source_key(decl)
        matches = [e for k, e in keyed if k == key]
        if not matches:
            raise MemberNotFoundError(class_name, decl.signature)
        if len(matches) > 1:
            raise AmbiguousMemberError(class_name, decl.signature, len(matches))
        # Each executable pairs with at most one declaration
        if id(matches[0]) in claimed:
            raise AmbiguousMemberError(
                class_name,
                f"{decl.signature} and {claimed[id(matches[0])].signature}",
                1,
            )
        claimed[id(matches[0])] = decl
        pairs.append(MemberPair(decl, matches[0]))
    return pairs
