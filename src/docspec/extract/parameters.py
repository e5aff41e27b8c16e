from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from .adapters.introspection import IntrospectedExecutable
from .adapters.source import SourceDeclaration
from .exceptions import ParameterCountMismatchError
from .models import Nullability, Parameter

logger = logging.getLogger(__name__)

DEFAULT_NOT_NULL = ("NotNull", "NonNull", "Nonnull")
DEFAULT_NULLABLE = ("Nullable", "CheckForNull")


@dataclass(slots=True, frozen=True)
class NullabilityPolicy:
    """Recognized annotation names for each nullability class."""

    not_null: frozenset[str] = frozenset(DEFAULT_NOT_NULL)
    nullable: frozenset[str] = frozenset(DEFAULT_NULLABLE)

    @classmethod
    def from_config(cls, config: dict) -> "NullabilityPolicy":
        return cls(
            not_null=frozenset(config.get("not_null_annotations") or DEFAULT_NOT_NULL),
            nullable=frozenset(config.get("nullable_annotations") or DEFAULT_NULLABLE),
        )

    def classify(self, annotation_names: Iterable[str]) -> Nullability:
        names = set()
        for a in annotation_names:
            names.add(a)
            names.add(a.rsplit(".", 1)[-1])

        not_null = names & self.not_null
        nullable = names & self.nullable

        if not_null and nullable:
            logger.debug(f"Conflicting nullability annotations: {sorted(names)}")
            return Nullability.UNKNOWN
        if not_null:
            return Nullability.NOT_NULL
        if nullable:
            return Nullability.NULLABLE
        return Nullability.UNKNOWN


def build_parameters(
    class_name: str,
    declaration: SourceDeclaration,
    executable: IntrospectedExecutable,
    policy: NullabilityPolicy,
) -> tuple[Parameter, ...]:
    """
    Zips source and introspected parameters by position: the type comes
    from introspection, the name and nullability from source.
    """
    source_params = declaration.parameters
    types = executable.parameter_types
    if len(source_params) != len(types):
        raise ParameterCountMismatchError(
            class_name, declaration.signature, len(types), len(source_params)
        )

    return tuple(
        Parameter(
            type=t,
            name=p.name,
            nullability=policy.classify(p.annotations),
        )
        for p, t in zip(source_params, types)
    )
