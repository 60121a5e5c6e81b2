"""Content providers: map module references to files and read them."""

import io
import posixpath
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Sequence, TextIO

from .errors import LoadError


DEFAULT_EXTENSIONS = (".js", ".ts")

# Tried in order when a reference has no recognized extension.
DEFAULT_CANDIDATES = (
    ".ts",
    ".d.ts",
    ".js",
    "/index.js",
    "/index.ts",
    "/index.d.ts",
)


class ContentProvider(ABC):
    """
    Source of module contents.

    Subclasses say whether a path exists and how to open it; resolution of
    a reference to a concrete path is shared.
    """

    def __init__(
        self,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        candidates: Sequence[str] = DEFAULT_CANDIDATES,
    ):
        self.extensions = tuple(extensions)
        self.candidates = tuple(candidates)

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check whether a concrete module exists at path."""

    @abstractmethod
    def load(self, path: str) -> TextIO:
        """
        Open a resolved module for reading.

        Raises:
            LoadError: If the module cannot be read.
        """

    def normalize(self, reference: str) -> str:
        return posixpath.normpath(reference)

    def join(self, importer: str, reference: str) -> str:
        """Join a reference as written onto the directory of the importing module."""
        return posixpath.join(posixpath.dirname(importer), reference)

    def resolve_import(self, importer: str, reference: str) -> Optional[str]:
        """Resolve a reference relative to the module that imports it."""
        return self.resolve(self.join(importer, reference))

    def resolve(self, reference: str) -> Optional[str]:
        """
        Resolve a module reference to a concrete module path.

        A reference that already carries a recognized extension is used
        as-is. Otherwise each candidate suffix is tried in order, which
        also covers directories with an index module.

        Args:
            reference: Module path, possibly without extension or pointing
                at a directory.

        Returns:
            The resolved path, or None if no module matches.
        """
        if not reference:
            return None

        name = self.normalize(reference)

        if name.endswith(self.extensions) and self.exists(name):
            return name

        for suffix in self.candidates:
            option = name + suffix
            if self.exists(option):
                return option

        return None


class FileProvider(ContentProvider):
    """Serves module contents from the filesystem."""

    def __init__(self, encoding: str = "utf-8", **kwargs):
        super().__init__(**kwargs)
        self.encoding = encoding

    def normalize(self, reference: str) -> str:
        return str(Path(reference).resolve())

    def join(self, importer: str, reference: str) -> str:
        return str(Path(importer).parent / reference)

    def exists(self, path: str) -> bool:
        return Path(path).is_file()

    def load(self, path: str) -> TextIO:
        if not path:
            raise LoadError(path)
        try:
            return Path(path).open("r", encoding=self.encoding)
        except FileNotFoundError as e:
            raise LoadError(path) from e
        except OSError as e:
            raise LoadError(path, reason=e.strerror or "unreadable file") from e


class MemoryProvider(ContentProvider):
    """Serves predefined module contents from memory, keyed by path."""

    def __init__(self, files: Dict[str, str], **kwargs):
        super().__init__(**kwargs)
        self.files = dict(files)

    def exists(self, path: str) -> bool:
        return path in self.files

    def load(self, path: str) -> TextIO:
        if path not in self.files:
            raise LoadError(path)
        return io.StringIO(self.files[path])


def relative_display(path: str, base: str) -> str:
    """
    Get a ``./``-prefixed display path relative to base.

    Paths outside base are returned unchanged.
    """
    try:
        rel = Path(path).relative_to(base)
    except ValueError:
        return path
    return "./" + rel.as_posix()
