"""Outcome model: per-file and per-project analysis results.

All outcomes are frozen. A ProjectOutcome is built fresh per run and has
no identity beyond it; two runs over unchanged input compare equal once
``elapsed_seconds`` is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..metrics.base import MetricOutcome
from ..scanning.languages import Language


class Severity(Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"

    @classmethod
    def from_score(
        cls, score: float, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
    ) -> "Severity":
        """Issue severity from the score of the metric that raised it."""
        if score >= thresholds.severity_critical:
            return cls.CRITICAL
        if score >= thresholds.severity_warning:
            return cls.WARNING
        return cls.INFO


@dataclass(frozen=True)
class Issue:
    metric: str
    message: str
    severity: Severity

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.metric}: {self.message}"


def _count(issues: tuple[Issue, ...], severity: Severity) -> int:
    return sum(1 for issue in issues if issue.severity is severity)


@dataclass(frozen=True)
class FileOutcome:
    """Scores and issues for one analysed file.

    Attributes:
        path: File path as discovered
        language: Detected language
        score: Weighted file score in [0, 1]
        total_lines, code_lines, comment_lines, blank_lines: Line counts
        issues: Every metric issue, tagged with severity
        metric_scores: Metric name -> score
        metric_outcomes: Full per-metric results, in metric-set order
    """

    path: str
    language: Language
    score: float
    total_lines: int = 0
    code_lines: int = 0
    comment_lines: int = 0
    blank_lines: int = 0
    issues: tuple[Issue, ...] = ()
    metric_scores: dict[str, float] = field(default_factory=dict)
    metric_outcomes: tuple[MetricOutcome, ...] = ()

    @property
    def critical_issues(self) -> int:
        return _count(self.issues, Severity.CRITICAL)

    @property
    def warning_issues(self) -> int:
        return _count(self.issues, Severity.WARNING)

    @property
    def info_issues(self) -> int:
        return _count(self.issues, Severity.INFO)

    def top_issues(self, limit: int) -> list[Issue]:
        """Most severe issues first, original order within a severity."""
        rank = {Severity.CRITICAL: 0, Severity.WARNING: 1, Severity.INFO: 2}
        return sorted(self.issues, key=lambda i: rank[i.severity])[:limit]


@dataclass(frozen=True)
class ProjectOutcome:
    """Aggregate result of one analysis run.

    Attributes:
        root: Analysed file or directory
        overall_score: Mean of file scores (0.0 when no file was analysed)
        total_files: Files successfully analysed
        total_lines: Sum of their total lines
        elapsed_seconds: Wall-clock time of the run
        metrics: Metric name -> last analysed file's MetricOutcome
        metric_averages: Metric name -> mean score across files
        files: FileOutcome per analysed file, in discovery order
        failed_files: Files skipped after a read or analysis failure
        incomplete: True when the run was cancelled before every file was analysed
    """

    root: str
    overall_score: float = 0.0
    total_files: int = 0
    total_lines: int = 0
    elapsed_seconds: float = 0.0
    metrics: dict[str, MetricOutcome] = field(default_factory=dict)
    metric_averages: dict[str, float] = field(default_factory=dict)
    files: tuple[FileOutcome, ...] = ()
    failed_files: tuple[str, ...] = ()
    incomplete: bool = False

    @property
    def total_issues(self) -> int:
        return sum(len(f.issues) for f in self.files)

    @property
    def critical_issues(self) -> int:
        return sum(f.critical_issues for f in self.files)

    @property
    def warning_issues(self) -> int:
        return sum(f.warning_issues for f in self.files)

    @property
    def info_issues(self) -> int:
        return sum(f.info_issues for f in self.files)

    def worst_files(self, limit: Optional[int] = None) -> list[FileOutcome]:
        ranked = sorted(self.files, key=lambda f: f.score, reverse=True)
        return ranked if limit is None else ranked[:limit]

    def to_dict(self, max_issues: Optional[int] = None) -> dict[str, Any]:
        """JSON-serialisable view."""
        return {
            "root": self.root,
            "overall_score": round(self.overall_score, 4),
            "total_files": self.total_files,
            "total_lines": self.total_lines,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
            "incomplete": self.incomplete,
            "issues": {
                "total": self.total_issues,
                "critical": self.critical_issues,
                "warning": self.warning_issues,
                "info": self.info_issues,
            },
            "metrics": {
                name: {
                    "title": outcome.title,
                    "description": outcome.description,
                    "weight": outcome.weight,
                    "average_score": round(self.metric_averages.get(name, 0.0), 4),
                }
                for name, outcome in self.metrics.items()
            },
            "files": [
                {
                    "path": f.path,
                    "language": f.language.value,
                    "score": round(f.score, 4),
                    "lines": {
                        "total": f.total_lines,
                        "code": f.code_lines,
                        "comment": f.comment_lines,
                        "blank": f.blank_lines,
                    },
                    "metric_scores": {k: round(v, 4) for k, v in f.metric_scores.items()},
                    "issues": [
                        {"metric": i.metric, "severity": i.severity.value, "message": i.message}
                        for i in (f.top_issues(max_issues) if max_issues else f.issues)
                    ],
                }
                for f in self.files
            ],
            "failed_files": list(self.failed_files),
        }
