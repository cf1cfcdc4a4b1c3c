"""File discovery, orchestration and outcome model."""

from .discovery import compile_pattern, discover_files, is_excluded
from .models import FileOutcome, Issue, ProjectOutcome, Severity
from .orchestrator import AnalysisOrchestrator

__all__ = [
    "AnalysisOrchestrator",
    "discover_files",
    "is_excluded",
    "compile_pattern",
    "Severity",
    "Issue",
    "FileOutcome",
    "ProjectOutcome",
]
