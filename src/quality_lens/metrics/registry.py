"""Metric registry: the single source of truth for the metric set.

Adding a new metric requires:
1. Subclass BaseMetric in its own module.
2. Add the class to METRIC_CLASSES below and a weight field to MetricWeights.
build_metric_set, the orchestrator and the CLI pick it up automatically.
"""

from __future__ import annotations

from typing import Iterator, Optional, Sequence

from ..config import AnalysisConfig
from ..scanning.languages import Language
from .base import BaseMetric
from .comment_ratio import CommentRatioMetric
from .complexity import CyclomaticComplexityMetric
from .duplication import CodeDuplicationMetric
from .error_handling import ErrorHandlingMetric
from .function_length import FunctionLengthMetric
from .naming import NamingConventionMetric
from .structure import StructureAnalysisMetric

METRIC_CLASSES: tuple[type[BaseMetric], ...] = (
    CyclomaticComplexityMetric,
    FunctionLengthMetric,
    CommentRatioMetric,
    ErrorHandlingMetric,
    NamingConventionMetric,
    CodeDuplicationMetric,
    StructureAnalysisMetric,
)


class MetricSet:
    """Ordered, read-only collection of configured metrics."""

    def __init__(self, metrics: Sequence[BaseMetric]) -> None:
        self._metrics = tuple(metrics)
        names = [m.name for m in self._metrics]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate metric names: {names}")

    def __iter__(self) -> Iterator[BaseMetric]:
        return iter(self._metrics)

    def __len__(self) -> int:
        return len(self._metrics)

    def __getitem__(self, name: str) -> BaseMetric:
        for metric in self._metrics:
            if metric.name == name:
                return metric
        raise KeyError(name)

    @property
    def names(self) -> list[str]:
        return [m.name for m in self._metrics]

    def applicable(self, language: Language) -> list[BaseMetric]:
        """Metrics that support ``language``, in registry order."""
        return [m for m in self._metrics if m.supports(language)]


def build_metric_set(config: Optional[AnalysisConfig] = None) -> MetricSet:
    """Instantiate every registered metric with the config's weights and thresholds."""
    config = config or AnalysisConfig()
    return MetricSet(
        [
            cls(weight=config.weights.get(cls.name), thresholds=config.thresholds)
            for cls in METRIC_CLASSES
        ]
    )
