"""Metric rules: ParsedFile -> MetricOutcome."""

from .base import BaseMetric, MetricOutcome, clamp
from .comment_ratio import CommentRatioMetric
from .complexity import CyclomaticComplexityMetric, function_complexity
from .duplication import CodeDuplicationMetric, duplicate_blocks, levenshtein, similarity
from .error_handling import ErrorHandlingMetric, has_error_handling
from .function_length import FunctionLengthMetric, body_length
from .naming import NamingConventionMetric
from .registry import METRIC_CLASSES, MetricSet, build_metric_set
from .structure import StructureAnalysisMetric

__all__ = [
    "BaseMetric",
    "MetricOutcome",
    "MetricSet",
    "METRIC_CLASSES",
    "build_metric_set",
    "clamp",
    # Metrics
    "CyclomaticComplexityMetric",
    "FunctionLengthMetric",
    "CommentRatioMetric",
    "ErrorHandlingMetric",
    "NamingConventionMetric",
    "CodeDuplicationMetric",
    "StructureAnalysisMetric",
    # Helpers
    "function_complexity",
    "body_length",
    "has_error_handling",
    "levenshtein",
    "similarity",
    "duplicate_blocks",
]
