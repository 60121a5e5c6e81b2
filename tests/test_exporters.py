"""Tests for exporters."""

import json

from graph.report import Report
from graph.statements import ExportStatement
from exporters.text_exporter import to_text
from exporters.json_exporter import to_json


def sample_report(errors=()):
    unused = (
        ExportStatement("/repo/src/a.js", 3, "a", "export function a()"),
        ExportStatement("/repo/src/lib/b.ts", 12, "name", "export const name = 'Bob';"),
    )
    return Report(files_checked=4, unused_exports=unused, errors=errors)


class TestTextExporter:
    """Tests for the text exporter."""

    def test_empty_report(self):
        """Test exporting a report without findings."""
        output = to_text(Report(files_checked=1), "/repo")
        assert output == "Unused exports:\n\nUnused exports in total: 0"

    def test_unused_lines(self):
        """Test one line per unused export, relative to the base."""
        output = to_text(sample_report(), "/repo")
        lines = output.splitlines()

        assert lines[0] == "Unused exports:"
        assert lines[1] == '  ./src/a.js:3 "export function a()"'
        assert lines[2] == "  ./src/lib/b.ts:12 \"export const name = 'Bob';\""
        assert lines[-1] == "Unused exports in total: 2"
        assert "Errors:" not in output

    def test_signature_is_escaped(self):
        """Test that quotes inside signatures are escaped."""
        report = Report(
            files_checked=1,
            unused_exports=(ExportStatement("/repo/a.js", 1, "s", 'export const s = "x"'),),
        )
        assert '"export const s = \\"x\\""' in to_text(report, "/repo")

    def test_absolute_paths_without_base(self):
        """Test that paths are left absolute when no base is given."""
        output = to_text(sample_report())
        assert "  /repo/src/a.js:3" in output

    def test_errors_section(self):
        """Test that warnings are listed before the total."""
        output = to_text(sample_report(errors=("unmatched path: '/repo/x.js'",)), "/repo")
        lines = output.splitlines()

        index = lines.index("Errors:")
        assert lines[index + 1] == "  unmatched path: '/repo/x.js'"
        assert lines[-1] == "Unused exports in total: 2"


class TestJSONExporter:
    """Tests for JSON exporter."""

    def test_empty_report(self):
        """Test exporting a report without findings."""
        data = json.loads(to_json(Report(files_checked=1)))

        assert data == {"files_checked": 1, "unused_exports": [], "errors": [], "total": 0}

    def test_unused_exports(self):
        """Test that every unused export is listed with its details."""
        data = json.loads(to_json(sample_report(), base="/repo"))

        assert data["files_checked"] == 4
        assert data["total"] == 2
        assert data["unused_exports"][0] == {
            "path": "./src/a.js",
            "line": 3,
            "name": "a",
            "signature": "export function a()",
        }
        assert data["unused_exports"][1]["path"] == "./src/lib/b.ts"

    def test_errors(self):
        """Test that warnings are exported."""
        data = json.loads(to_json(sample_report(errors=("unmatched path: '/x.js'",))))
        assert data["errors"] == ["unmatched path: '/x.js'"]

    def test_indent(self):
        """Test custom indentation."""
        output = to_json(Report(files_checked=1), indent=4)
        assert '\n    "files_checked": 1' in output
