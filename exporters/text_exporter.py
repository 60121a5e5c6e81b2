"""Plain text exporter for analysis reports (human-friendly format)."""

import json
from typing import List, Optional

from graph.report import Report
from scanner.resolver import relative_display


HEADER = "Unused exports:"
ERRORS_HEADER = "Errors:"
INDENT = "  "


def to_text(report: Report, base: Optional[str] = None) -> str:
    """
    Convert a report to text.

    Each unused export is listed as ``./<path>:<line> "<signature>"``,
    followed by any warnings and the total count.

    Args:
        report: The report to export.
        base: Directory that paths are shown relative to. Absolute paths are
            shown when omitted.

    Returns:
        The report text.
    """
    lines: List[str] = [HEADER]

    for export in report.unused_exports:
        path = relative_display(export.path, base) if base else export.path
        # json.dumps gives a double-quoted, escaped signature
        lines.append(f"{INDENT}{path}:{export.line} {json.dumps(export.signature)}")

    if report.errors:
        lines.append(ERRORS_HEADER)
        for error in report.errors:
            lines.append(f"{INDENT}{error}")

    lines.append("")
    lines.append(f"Unused exports in total: {report.unused_count}")

    return "\n".join(lines)
