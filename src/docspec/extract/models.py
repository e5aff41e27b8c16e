from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Any, Literal, TypedDict

_GENERIC_ARGS = re.compile(r"<[^<>]*>")


# --- Domain Models ---


@dataclass(slots=True, frozen=True)
class TypeRef:
    """A concrete type reference such as ``java.util.List<java.lang.String>[]``."""

    qualified_name: str

    @property
    def erased(self) -> str:
        """Qualified name with generic arguments removed, array suffixes kept."""
        name = self.qualified_name.replace("...", "[]")
        while "<" in name:
            stripped = _GENERIC_ARGS.sub("", name)
            if stripped == name:
                break
            name = stripped
        return name.replace(" ", "")

    @property
    def simple_name(self) -> str:
        erased = self.erased
        dims = ""
        while erased.endswith("[]"):
            erased = erased[:-2]
            dims += "[]"
        return re.split(r"[.$]", erased)[-1] + dims

    def __str__(self) -> str:
        return self.qualified_name


class Nullability(enum.Enum):
    NOT_NULL = "not_null"
    NULLABLE = "nullable"
    UNKNOWN = "unknown"


class MemberKind(enum.Enum):
    CONSTRUCTOR = "constructor"
    METHOD = "method"


@dataclass(slots=True, frozen=True)
class Parameter:
    type: TypeRef
    name: str
    nullability: Nullability = Nullability.UNKNOWN


@dataclass(slots=True, frozen=True)
class ParamTag:
    parameter: Parameter
    comment: str

    kind: Literal["param"] = field(default="param", init=False)


@dataclass(slots=True, frozen=True)
class ReturnTag:
    comment: str

    kind: Literal["return"] = field(default="return", init=False)


@dataclass(slots=True, frozen=True)
class ThrowsTag:
    exception: TypeRef
    comment: str

    kind: Literal["throws"] = field(default="throws", init=False)


Tag = ParamTag | ReturnTag | ThrowsTag


@dataclass(slots=True, frozen=True)
class ExecutableMember:
    """A reconciled constructor or method with its parameters and Javadoc tags."""

    declaring_class: TypeRef
    kind: MemberKind
    name: str
    parameters: tuple[Parameter, ...]
    tags: tuple[Tag, ...] = ()
    modifiers: frozenset[str] = frozenset()

    @property
    def is_constructor(self) -> bool:
        return self.kind is MemberKind.CONSTRUCTOR

    @property
    def signature(self) -> str:
        types = ", ".join(p.type.qualified_name for p in self.parameters)
        return f"{self.name}({types})"

    @property
    def param_tags(self) -> list[ParamTag]:
        return [t for t in self.tags if isinstance(t, ParamTag)]

    @property
    def return_tag(self) -> ReturnTag | None:
        for t in self.tags:
            if isinstance(t, ReturnTag):
                return t
        return None

    @property
    def throws_tags(self) -> list[ThrowsTag]:
        return [t for t in self.tags if isinstance(t, ThrowsTag)]

    def to_record(self) -> MemberRecord:
        tags: list[TagRecord] = []
        for t in self.tags:
            rec = TagRecord(kind=t.kind, comment=t.comment)
            if isinstance(t, ParamTag):
                rec["parameter"] = t.parameter.name
            elif isinstance(t, ThrowsTag):
                rec["exception"] = t.exception.qualified_name
            tags.append(rec)

        return MemberRecord(
            name=self.name,
            kind=self.kind.value,
            signature=self.signature,
            modifiers=sorted(self.modifiers),
            parameters=[
                ParamRecord(
                    name=p.name,
                    type=p.type.qualified_name,
                    nullability=p.nullability.value,
                )
                for p in self.parameters
            ],
            tags=tags,
        )


# --- Report Records ---


class ParamRecord(TypedDict):
    name: str
    type: str
    nullability: Literal["not_null", "nullable", "unknown"]


class TagRecord(TypedDict, total=False):
    kind: Literal["param", "return", "throws"]
    comment: str
    parameter: str
    exception: str


class MemberRecord(TypedDict):
    name: str
    kind: Literal["constructor", "method"]
    signature: str
    modifiers: list[str]
    parameters: list[ParamRecord]
    tags: list[TagRecord]


class ClassRecord(TypedDict, total=False):
    qname: str
    source_path: str
    status: Literal["ok", "error"]
    error: str
    members: list[MemberRecord]


class ExtractionStats(TypedDict):
    classes_requested: int
    classes_ok: int
    classes_failed: int
    members: int
    parameters: int
    tags: int


class Metadata(TypedDict):
    schema_version: str
    generated_at: str
    source_root: str
    config_effective: dict[str, Any]


class ExtractionReport(TypedDict):
    meta: Metadata
    stats: ExtractionStats
    classes: list[ClassRecord]
