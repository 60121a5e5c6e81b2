"""Scanner module for statement extraction, module resolution and traversal."""

from .errors import AnalysisError, LoadError, ResolutionError, ScanError
from .parser import scan, find_name, find_imports, clean_sig
from .resolver import ContentProvider, FileProvider, MemoryProvider
from .engine import Engine, analyze

__all__ = [
    "AnalysisError",
    "LoadError",
    "ResolutionError",
    "ScanError",
    "scan",
    "find_name",
    "find_imports",
    "clean_sig",
    "ContentProvider",
    "FileProvider",
    "MemoryProvider",
    "Engine",
    "analyze",
]
