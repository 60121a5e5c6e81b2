"""JSON exporter for analysis reports (machine-friendly format)."""

import json
from typing import Any, Dict, List, Optional

from graph.report import Report
from scanner.resolver import relative_display


def to_json(
    report: Report,
    base: Optional[str] = None,
    indent: int = 2,
) -> str:
    """
    Convert a report to JSON format.

    Args:
        report: The report to export.
        base: Optional base directory for relative path display.
        indent: JSON indentation level.

    Returns:
        JSON string representation of the report.
    """
    unused: List[Dict[str, Any]] = []
    for export in report.unused_exports:
        unused.append({
            "path": _get_path_str(export.path, base),
            "line": export.line,
            "name": export.name,
            "signature": export.signature,
        })

    data: Dict[str, Any] = {
        "files_checked": report.files_checked,
        "unused_exports": unused,
        "errors": list(report.errors),
        "total": report.unused_count,
    }

    return json.dumps(data, indent=indent)


def _get_path_str(path: str, base: Optional[str]) -> str:
    """Get the string representation of a path."""
    if base is None:
        return path.replace("\\", "/")
    return relative_display(path, base)
