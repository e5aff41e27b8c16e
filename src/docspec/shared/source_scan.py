import os
from pathlib import Path

import pathspec

SKIP_DIRS: set[str] = {
    ".git",
    ".hg",
    ".svn",
    ".idea",
    ".vscode",
    ".gradle",
    "build",
    "target",
    "out",
    "bin",
    "node_modules",
}

SKIP_FILES: set[str] = {"package-info.java", "module-info.java"}


class SourceScanner:
    """
    Finds top-level class sources under a source root and derives their
    qualified names from the directory layout.
    """

    def __init__(
        self, *, extension: str = ".java", exclude: list[str] | None = None
    ) -> None:
        self._extension = extension
        self._exclude = (
            pathspec.PathSpec.from_lines("gitwildmatch", exclude) if exclude else None
        )

    def scan(self, root: Path) -> list[str]:
        """Returns the sorted qualified class names found under ``root``."""
        names: list[str] = []
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)
            for f in filenames:
                if not f.endswith(self._extension) or f in SKIP_FILES:
                    continue
                rel = (Path(dirpath) / f).relative_to(root).as_posix()
                if self._exclude and self._exclude.match_file(rel):
                    continue
                names.append(rel[: -len(self._extension)].replace("/", "."))
        return sorted(names)
