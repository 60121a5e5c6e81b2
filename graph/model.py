"""Module graph built during traversal, and the reference counting pass."""

import logging
from typing import Dict, Iterator, List, Optional

from .statements import ExportStatement, Module


logger = logging.getLogger(__name__)


class ModuleGraph:
    """
    All modules visited during an analysis, keyed by canonical path.

    Each canonical path appears at most once. The import relationships
    between modules may still contain cycles; the graph itself does not
    care, as traversal never inserts a path twice.
    """

    def __init__(self):
        self._modules: Dict[str, Module] = {}

    @property
    def modules(self) -> Dict[str, Module]:
        """Return a shallow copy of the path -> module mapping."""
        return dict(self._modules)

    def add(self, module: Module) -> None:
        """
        Insert a scanned module.

        Raises:
            ValueError: If the module's path is already in the graph.
        """
        if module.path in self._modules:
            raise ValueError(f"module already visited: {module.path!r}")
        self._modules[module.path] = module

    def get(self, path: str) -> Optional[Module]:
        """Return the module at path, or None if it was not visited."""
        return self._modules.get(path)

    def visited(self) -> List[str]:
        """Return the paths of all visited modules."""
        return list(self._modules)

    def iter_exports(self) -> Iterator[ExportStatement]:
        """Iterate over the exports of every module in the graph."""
        for module in self._modules.values():
            yield from module.exports.values()

    def update_reference_counts(self) -> List[str]:
        """
        Match every import in the graph against the exports of its target.

        Reference counts are reset first, so the result only depends on the
        contents of the graph, never on traversal order or on earlier calls.
        An import whose target is not in the graph is logged and skipped.

        Returns:
            Warning messages for imports whose target module was not found.
        """
        warnings: List[str] = []

        for export in self.iter_exports():
            export.ref_count = 0

        for module in self._modules.values():
            for imp in module.imports.values():
                target = self._modules.get(imp.module_path)
                if target is None:
                    msg = f"unmatched path: {imp.module_path!r}"
                    logger.warning("%s (imported by %s)", msg, module.path)
                    warnings.append(msg)
                    continue

                for export in target.exports.values():
                    if export.matches(imp):
                        export.ref_count += 1

        return warnings

    def find_exports(self, ref_count: int = 0) -> List[ExportStatement]:
        """Return all exports with the given reference count, ordered by path and line."""
        found = [e for e in self.iter_exports() if e.ref_count == ref_count]
        return sorted(found, key=lambda e: (e.path, e.line))

    def __len__(self) -> int:
        return len(self._modules)

    def __contains__(self, path: str) -> bool:
        return path in self._modules

    def __repr__(self) -> str:
        imports = sum(len(m.imports) for m in self._modules.values())
        exports = sum(len(m.exports) for m in self._modules.values())
        return f"ModuleGraph(modules={len(self._modules)}, imports={imports}, exports={exports})"
