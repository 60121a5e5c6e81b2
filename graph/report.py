"""Final analysis summary."""

from dataclasses import dataclass
from typing import Tuple

from .statements import ExportStatement


@dataclass(frozen=True)
class Report:
    """Result of one analysis run: modules checked, unused exports and warnings."""

    files_checked: int
    unused_exports: Tuple[ExportStatement, ...] = ()
    errors: Tuple[str, ...] = ()

    @property
    def unused_count(self) -> int:
        return len(self.unused_exports)
