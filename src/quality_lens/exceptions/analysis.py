"""Analysis-related exceptions: missing paths and per-file failures."""

from pathlib import Path
from typing import Union

from .base import QualityLensError


class AnalysisError(QualityLensError):
    """Base class for analysis-related errors."""
    pass


class PathNotFoundError(AnalysisError, FileNotFoundError):
    """Raised when the file or directory handed to an analysis call does not exist.

    Fatal for the call that raised it.
    """

    def __init__(self, path: Union[str, Path], kind: str = "path"):
        super().__init__(
            f"{kind.capitalize()} not found: {path}",
            details={"path": str(path), "kind": kind},
        )
        self.path = Path(path)
        self.kind = kind


class FileAnalysisError(AnalysisError):
    """Raised when a single file cannot be read or analyzed.

    Recoverable: directory runs log it and skip the file.
    """

    def __init__(self, filepath: Union[str, Path], reason: str):
        super().__init__(
            f"Cannot analyze file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = Path(filepath)
        self.reason = reason
