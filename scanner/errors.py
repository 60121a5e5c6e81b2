"""Errors that abort an analysis run."""


class AnalysisError(Exception):
    """Base class for all fatal analysis errors."""


class ResolutionError(AnalysisError):
    """A module reference could not be mapped to a concrete file."""

    def __init__(self, reference: str, importer: str = ""):
        self.reference = reference
        self.importer = importer
        msg = f"unable to resolve file {reference!r}"
        if importer:
            msg += f" (imported by {importer!r})"
        super().__init__(msg)


class LoadError(AnalysisError):
    """A resolved module could not be read."""

    def __init__(self, path: str, reason: str = "no such file"):
        self.path = path
        super().__init__(f"{reason}: {path!r}")


class ScanError(AnalysisError):
    """Module text did not match a recognized statement shape."""

    def __init__(self, path: str, message: str, line: int = 0):
        self.path = path
        self.line = line
        location = f"{path}:{line}" if line else path
        super().__init__(f"{location}: {message}")
