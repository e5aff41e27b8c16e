"""
Introspection adapters.

An introspector reports the compiled view of a class: its declared
constructors and methods with exact parameter types and modifiers. Two
implementations are provided: a YAML reflection catalog and a wrapper around
the JDK ``javap`` tool.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Protocol

import yaml

from ..exceptions import ClassNotFoundError
from ..models import TypeRef

logger = logging.getLogger(__name__)

JAVA_MODIFIERS = frozenset(
    {
        "public",
        "protected",
        "private",
        "static",
        "final",
        "abstract",
        "synchronized",
        "native",
        "strictfp",
        "default",
        "transient",
        "volatile",
    }
)


@dataclass(slots=True, frozen=True)
class ClassHandle:
    qualified_name: str
    listing: str | None = None

    @property
    def simple_name(self) -> str:
        return re.split(r"[.$]", self.qualified_name)[-1]


@dataclass(slots=True, frozen=True)
class IntrospectedExecutable:
    name: str
    parameter_types: tuple[TypeRef, ...]
    modifiers: frozenset[str]
    is_constructor: bool

    @property
    def simple_name(self) -> str:
        # Constructor names are reported with their package.
        return self.name.rsplit(".", 1)[-1]

    @property
    def is_private(self) -> bool:
        return "private" in self.modifiers


class Introspector(Protocol):
    def load_class(self, qualified_name: str) -> ClassHandle: ...

    def declared_executables(
        self, handle: ClassHandle
    ) -> list[IntrospectedExecutable]: ...


def non_private_executables(
    introspector: Introspector, handle: ClassHandle
) -> list[IntrospectedExecutable]:
    """Constructors first, then methods, private members removed."""
    executables = introspector.declared_executables(handle)
    ordered = [e for e in executables if e.is_constructor] + [
        e for e in executables if not e.is_constructor
    ]
    return [e for e in ordered if not e.is_private]


class CatalogIntrospector:
    """
    Introspector backed by a reflection catalog, typically dumped once from
    a running JVM and stored as YAML::

        classes:
          com.acme.Foo:
            - name: com.acme.Foo
              kind: constructor
              parameters: [java.lang.String]
              modifiers: [public]
        types:
          - java.lang.IllegalArgumentException
    """

    def __init__(
        self,
        classes: dict[str, list[dict[str, Any]]] | None = None,
        types: Iterable[str] = (),
    ) -> None:
        self._classes: dict[str, list[IntrospectedExecutable]] = {}
        for qname, entries in (classes or {}).items():
            self._classes[qname] = [
                self._executable(qname, entry) for entry in entries or []
            ]
        self._types = set(types)

    @classmethod
    def from_file(cls, path: str | Path) -> "CatalogIntrospector":
        p_path = Path(path)
        if not p_path.is_file():
            raise FileNotFoundError(f"Catalog file not found: {p_path}")
        with open(p_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Catalog {p_path} must be a mapping.")
        return cls(classes=data.get("classes"), types=data.get("types") or [])

    def load_class(self, qualified_name: str) -> ClassHandle:
        if qualified_name in self._classes or qualified_name in self._types:
            return ClassHandle(qualified_name)
        raise ClassNotFoundError(qualified_name)

    def declared_executables(self, handle: ClassHandle) -> list[IntrospectedExecutable]:
        return list(self._classes.get(handle.qualified_name, []))

    @staticmethod
    def _executable(qname: str, entry: dict[str, Any]) -> IntrospectedExecutable:
        name = entry["name"]
        kind = entry.get("kind")
        is_ctor = kind == "constructor" if kind else name in (qname, qname.rsplit(".", 1)[-1])
        if is_ctor and "." not in name:
            name = qname
        return IntrospectedExecutable(
            name=name,
            parameter_types=tuple(TypeRef(t) for t in entry.get("parameters") or []),
            modifiers=frozenset(entry.get("modifiers") or ["public"]),
            is_constructor=is_ctor,
        )


_QUALIFIED_NAME = re.compile(r"^[A-Za-z_\$][\w\$]*(?:\.[A-Za-z_\$][\w\$]*)*$")


def is_qualified_name(name: str) -> bool:
    """True for Java names such as ``IOException`` or ``java.util.Map$Entry``."""
    return bool(_QUALIFIED_NAME.match(name))


_MEMBER_LINE = re.compile(
    r"^(?P<head>[^(]*?)(?P<name>[\w$.]+)\((?P<params>.*)\)(?:\s+throws\s+[^;]+)?;$"
)


class JavapIntrospector:
    """
    Introspector that shells out to the JDK ``javap`` disassembler.
    """

    def __init__(
        self,
        classpath: list[str] | None = None,
        *,
        executable: str = "javap",
    ) -> None:
        self._classpath = classpath or []
        self._executable = executable

    def load_class(self, qualified_name: str) -> ClassHandle:
        if not is_qualified_name(qualified_name):
            raise ClassNotFoundError(qualified_name)

        cmd = [self._executable, "-p"]
        if self._classpath:
            cmd += ["-cp", os.pathsep.join(self._classpath)]
        cmd.append(qualified_name)

        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except FileNotFoundError as e:
            raise RuntimeError(f"javap executable not found: {self._executable}") from e

        if proc.returncode != 0:
            logger.debug(f"javap {qualified_name}: {proc.stderr.strip()}")
            raise ClassNotFoundError(qualified_name)
        return ClassHandle(qualified_name, listing=proc.stdout)

    def declared_executables(self, handle: ClassHandle) -> list[IntrospectedExecutable]:
        return self.parse_listing(handle.qualified_name, handle.listing or "")

    @staticmethod
    def parse_listing(qualified_name: str, listing: str) -> list[IntrospectedExecutable]:
        """
        Parses the member lines of a ``javap -p`` listing. Fields, static
        initializers and the class header are ignored.
        """
        result: list[IntrospectedExecutable] = []
        for line in listing.splitlines():
            line = line.strip()
            if not line or line.endswith("{") or line == "}" or line.startswith("static {"):
                continue
            m = _MEMBER_LINE.match(line)
            if not m:
                continue

            name = m.group("name")
            modifiers = [t for t in m.group("head").split() if t in JAVA_MODIFIERS]
            params = JavapIntrospector._split_params(m.group("params"))
            result.append(
                IntrospectedExecutable(
                    name=name,
                    parameter_types=tuple(TypeRef(p.replace("...", "[]")) for p in params),
                    modifiers=frozenset(modifiers),
                    is_constructor=name == qualified_name,
                )
            )
        return result

    @staticmethod
    def _split_params(text: str) -> list[str]:
        params: list[str] = []
        depth = 0
        current = ""
        for ch in text:
            if ch == "<":
                depth += 1
            elif ch == ">":
                depth -= 1
            if ch == "," and depth == 0:
                params.append(current.strip())
                current = ""
            else:
                current += ch
        if current.strip():
            params.append(current.strip())
        return params
