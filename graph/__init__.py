"""Module graph, statement records and reports."""

from .model import ModuleGraph
from .report import Report
from .statements import ExportStatement, ImportStatement, Module, statement_hash

__all__ = [
    "ModuleGraph",
    "Report",
    "ExportStatement",
    "ImportStatement",
    "Module",
    "statement_hash",
]
