"""Analysis engine: follows imports from an entry module and reports unused exports."""

import gc
import logging
from collections import deque
from typing import Deque, List, Optional

from graph.model import ModuleGraph
from graph.report import Report
from graph.statements import Module
from .errors import ResolutionError
from .parser import scan
from .resolver import ContentProvider


logger = logging.getLogger(__name__)

DEFAULT_GC_INTERVAL = 10000


class Engine:
    """
    Visits every module reachable from an entry module exactly once.

    Modules are followed breadth-first. A path is checked against the graph
    before it is scanned and enqueued, so cyclic and diamond-shaped imports
    terminate and no module is scanned twice.
    """

    def __init__(
        self,
        entry: str,
        provider: ContentProvider,
        gc_interval: int = DEFAULT_GC_INTERVAL,
    ):
        self.entry = entry
        self.provider = provider
        self.gc_interval = gc_interval
        self.graph = ModuleGraph()

    def run(self) -> Report:
        """
        Run the analysis.

        Returns:
            Report of the visited modules and their unused exports.

        Raises:
            ResolutionError: If the entry or any import cannot be resolved.
            LoadError: If a resolved module cannot be read.
            ScanError: If a module contains an unreadable import.
        """
        canonical = self.provider.resolve(self.entry)
        if canonical is None:
            raise ResolutionError(self.entry)

        queue: Deque[Module] = deque([self._visit(canonical)])
        processed = 0

        while queue:
            module = queue.popleft()
            queue.extend(self._follow_imports(module))

            processed += 1
            if self.gc_interval and processed % self.gc_interval == 0:
                logger.debug("Processed %d modules, collecting garbage", processed)
                gc.collect()

        warnings = self.graph.update_reference_counts()
        return self._create_report(warnings)

    def _follow_imports(self, module: Module) -> List[Module]:
        """
        Resolve each import of a module and visit targets not seen before.

        Imports are rewritten to their canonical paths.

        Returns:
            Newly visited modules, to be enqueued.
        """
        new_modules: List[Module] = []

        for imp in list(module.imports.values()):
            canonical = self.provider.resolve_import(module.path, imp.module_path)
            if canonical is None:
                raise ResolutionError(imp.module_path, importer=module.path)

            module.rewrite_import(imp, canonical)

            if canonical in self.graph:
                continue
            new_modules.append(self._visit(canonical))

        return new_modules

    def _visit(self, path: str) -> Module:
        """Load and scan a module, then insert it into the graph."""
        logger.debug("Scanning %s", path)
        stream = self.provider.load(path)
        with stream:
            module = scan(stream, path)
        self.graph.add(module)
        return module

    def _create_report(self, warnings) -> Report:
        unused = self.graph.find_exports(0)
        logger.info(
            "Checked %d modules, found %d unused exports", len(self.graph), len(unused)
        )
        return Report(
            files_checked=len(self.graph),
            unused_exports=tuple(unused),
            errors=tuple(warnings),
        )


def analyze(
    entry: str,
    provider: ContentProvider,
    gc_interval: Optional[int] = None,
) -> Report:
    """
    Analyze a project starting at its entry module.

    Args:
        entry: Path to the entry module, with or without extension.
        provider: Content provider used to resolve and read modules.
        gc_interval: Run a garbage collection every N processed modules
            (0 disables). Defaults to DEFAULT_GC_INTERVAL.

    Returns:
        The analysis report.
    """
    if gc_interval is None:
        gc_interval = DEFAULT_GC_INTERVAL
    engine = Engine(entry, provider, gc_interval=gc_interval)
    return engine.run()
