"""Statement records for import and export declarations found in a module."""

import hashlib
from dataclasses import dataclass, field, replace
from typing import Dict


NAMESPACE_NAME = "*"


def statement_hash(*fields) -> int:
    """
    Compute a stable identity hash for a statement.

    The fields are joined with ``:`` and hashed with BLAKE2b, so the same
    logical statement always produces the same key, across processes too.

    Args:
        *fields: The semantically relevant values of the statement.

    Returns:
        A 64-bit unsigned integer.
    """
    sig = ":".join(str(f) for f in fields)
    digest = hashlib.blake2b(sig.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big")


@dataclass(frozen=True)
class ImportStatement:
    """
    One imported binding.

    Examples:
        import * as stuff from './somewhere'  -> name "*", namespace "stuff"
        import { myfunc } from './somewhere'  -> name "myfunc", namespace ""
    """

    imported_name: str
    module_path: str
    namespace: str = ""

    @property
    def key(self) -> int:
        return statement_hash(self.imported_name, self.module_path, self.namespace)

    @property
    def is_namespace(self) -> bool:
        return bool(self.namespace)

    def with_path(self, canonical: str) -> "ImportStatement":
        """Return a copy that points at the canonical module path."""
        return replace(self, module_path=canonical)


@dataclass
class ExportStatement:
    """
    One exported declaration whose references are counted.

    ``path`` is a copy of the owning module's canonical path. Only the
    path, line and signature take part in the identity; ``ref_count`` is
    updated during reference counting.
    """

    path: str
    line: int
    name: str
    signature: str
    ref_count: int = field(default=0, compare=False)

    @property
    def key(self) -> int:
        return statement_hash(self.path, self.line, self.signature)

    def matches(self, imp: ImportStatement) -> bool:
        """
        Check whether an import statement refers to this export.

        Module paths are not compared here; the caller only pairs imports
        with exports of the module they resolved to.

        A namespace import matches every export of its target module, since
        qualified calls such as ``ns.func()`` are not tracked. This may
        report an export as used when it is not.
        """
        if not imp.is_namespace:
            return imp.imported_name == self.name
        return True


class Module:
    """A scanned source file: its canonical path and its statements."""

    def __init__(self, path: str):
        self.path = path
        self.imports: Dict[int, ImportStatement] = {}
        self.exports: Dict[int, ExportStatement] = {}

    def add_import(self, stmt: ImportStatement) -> None:
        self.imports[stmt.key] = stmt

    def add_export(self, stmt: ExportStatement) -> None:
        self.exports[stmt.key] = stmt

    def rewrite_import(self, stmt: ImportStatement, canonical: str) -> ImportStatement:
        """
        Replace an import with a copy pointing at its canonical path.

        The statement is re-keyed, so two imports that only differed in how
        the path was written (`./a` and `./a.js`) collapse into one. Reference
        counts are therefore per distinct canonical binding: a module that
        imports the same name through both spellings counts once.

        Args:
            stmt: An import currently held by this module.
            canonical: The resolved module path.

        Returns:
            The rewritten statement.
        """
        self.imports.pop(stmt.key, None)
        rewritten = stmt.with_path(canonical)
        self.add_import(rewritten)
        return rewritten

    def __repr__(self) -> str:
        return f"Module(path={self.path!r}, imports={len(self.imports)}, exports={len(self.exports)})"
