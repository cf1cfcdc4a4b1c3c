"""
Quality Lens - Heuristic Multi-Language Code Quality Analysis

Classifies source files by language, extracts a lightweight structural
inventory with per-language pattern rules, and scores each file with seven
weighted metrics: complexity, function length, comments, error handling,
naming, duplication and structure.
"""

__version__ = "0.1.0"

from .analysis import AnalysisOrchestrator, FileOutcome, Issue, ProjectOutcome, Severity
from .api import analyze
from .config import AnalysisConfig, MetricWeights, ThresholdConfig, load_config
from .scanning import Language, ParsedFile, StructuralExtractor, detect_language, is_supported

__all__ = [
    "analyze",  # Main entry point
    "AnalysisOrchestrator",  # Advanced usage (reuse across runs)
    "AnalysisConfig",
    "MetricWeights",
    "ThresholdConfig",
    "load_config",
    "ProjectOutcome",
    "FileOutcome",
    "Issue",
    "Severity",
    "Language",
    "ParsedFile",
    "StructuralExtractor",
    "detect_language",
    "is_supported",
]
