"""Errors raised while extracting executable members from a Java class."""


class ExtractionError(Exception):
    """Base class for every failure of a class extraction."""


class ClassNotFoundError(ExtractionError):
    def __init__(self, class_name: str) -> None:
        super().__init__(f"Class not found: {class_name}")
        self.class_name = class_name


class SourceFileNotFoundError(ExtractionError, FileNotFoundError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Source file not found: {path}")
        self.path = path


class SourceParseError(ExtractionError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to parse {path}: {reason}")
        self.path = path


class StructuralMismatchError(ExtractionError):
    """Introspection and source disagree on the number of members."""

    def __init__(self, class_name: str, introspected: int, declared: int) -> None:
        super().__init__(
            f"{class_name}: introspection reports {introspected} member(s) "
            f"but the source declares {declared}"
        )
        self.class_name = class_name


class ParameterCountMismatchError(ExtractionError):
    def __init__(self, class_name: str, member: str, introspected: int, declared: int):
        super().__init__(
            f"{class_name}.{member}: introspection reports {introspected} "
            f"parameter(s) but the source declares {declared}"
        )
        self.class_name = class_name
        self.member = member


class MemberNotFoundError(ExtractionError):
    def __init__(self, class_name: str, member: str) -> None:
        super().__init__(
            f"{class_name}: cannot find introspected member corresponding to {member}"
        )
        self.class_name = class_name
        self.member = member


class AmbiguousMemberError(ExtractionError):
    def __init__(self, class_name: str, member: str, candidates: int) -> None:
        super().__init__(
            f"{class_name}: found {candidates} introspected members "
            f"corresponding to {member}"
        )
        self.class_name = class_name
        self.member = member


class ExceptionTypeNotFoundError(ExtractionError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Impossible to load exception type {name}")
        self.name = name


class UnresolvedExceptionTypeError(ExtractionError):
    """A @throws tag names a type that no resolution strategy could load."""

    def __init__(self, class_name: str, member: str, name: str) -> None:
        super().__init__(
            f"{class_name}.{member}: unresolved exception type '{name}' in @throws tag"
        )
        self.class_name = class_name
        self.member = member
        self.name = name
