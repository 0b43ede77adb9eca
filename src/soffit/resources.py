"""Resource catalogs — what template files exist under a path prefix.

Listing is servlet-style: ``list_resources("soffit/weather/")`` returns
the *direct* children of that prefix, each as ``prefix + name``, with a
trailing ``/`` for sub-directories.  The view selector only ever looks
for exact file paths in the result.
"""

from collections.abc import Iterable
from pathlib import Path, PurePosixPath
from typing import Protocol, runtime_checkable


@runtime_checkable
class ResourceCatalog(Protocol):
    """Enumerates resource paths under a directory-like prefix."""

    def list_resources(self, prefix: str) -> frozenset[str]: ...


def _has_parent_reference(prefix: str) -> bool:
    return ".." in PurePosixPath(prefix).parts


class FileSystemCatalog:
    """Catalog backed by a directory tree on disk.

    Paths are relative to *root*, so they double as template names for a
    loader rooted at the same directory.  A missing directory lists as
    empty.
    """

    __slots__ = ("_root",)

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def list_resources(self, prefix: str) -> frozenset[str]:
        if _has_parent_reference(prefix):
            return frozenset()
        directory = self._root / prefix.lstrip("/")
        if not directory.is_dir():
            return frozenset()

        base = prefix if prefix.endswith("/") else f"{prefix}/"
        found: set[str] = set()
        for item in directory.iterdir():
            found.add(f"{base}{item.name}/" if item.is_dir() else f"{base}{item.name}")
        return frozenset(found)


class StaticCatalog:
    """In-memory catalog over a fixed set of resource paths."""

    __slots__ = ("_paths",)

    def __init__(self, paths: Iterable[str]) -> None:
        self._paths = frozenset(paths)

    def list_resources(self, prefix: str) -> frozenset[str]:
        base = prefix if prefix.endswith("/") else f"{prefix}/"
        found: set[str] = set()
        for path in self._paths:
            if not path.startswith(base) or path == base:
                continue
            rest = path[len(base) :]
            head, sep, _tail = rest.partition("/")
            found.add(f"{base}{head}{sep}")
        return frozenset(found)
