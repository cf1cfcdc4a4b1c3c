"""Exception hierarchy for Quality Lens."""

from .analysis import AnalysisError, FileAnalysisError, PathNotFoundError
from .base import QualityLensError
from .config import ConfigurationError, InvalidConfigError

__all__ = [
    "QualityLensError",
    "AnalysisError",
    "PathNotFoundError",
    "FileAnalysisError",
    "ConfigurationError",
    "InvalidConfigError",
]
