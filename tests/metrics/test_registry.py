"""Tests for the metric registry and MetricSet."""

import pytest

from quality_lens.config import AnalysisConfig, MetricWeights
from quality_lens.metrics import (
    METRIC_CLASSES,
    CommentRatioMetric,
    MetricSet,
    build_metric_set,
)
from quality_lens.scanning import Language


class TestBuildMetricSet:
    """Test build_metric_set wiring."""

    def test_seven_metrics_in_order(self):
        metrics = build_metric_set()
        assert len(metrics) == 7
        assert metrics.names == [
            "cyclomatic_complexity",
            "function_length",
            "comment_ratio",
            "error_handling",
            "naming_convention",
            "code_duplication",
            "structure_analysis",
        ]

    def test_default_weights_sum_to_one(self):
        metrics = build_metric_set()
        assert sum(m.weight for m in metrics) == pytest.approx(1.0)
        assert metrics["cyclomatic_complexity"].weight == pytest.approx(0.20)
        assert metrics["comment_ratio"].weight == pytest.approx(0.10)

    def test_weights_come_from_config(self):
        config = AnalysisConfig(weights=MetricWeights(comment_ratio=0.4))
        assert build_metric_set(config)["comment_ratio"].weight == pytest.approx(0.4)

    def test_every_registered_metric_has_a_weight_field(self):
        weight_names = set(MetricWeights().as_dict())
        assert {cls.name for cls in METRIC_CLASSES} == weight_names


class TestMetricSet:
    """Test MetricSet lookups."""

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError):
            MetricSet([CommentRatioMetric(weight=0.1), CommentRatioMetric(weight=0.2)])

    def test_unknown_name_raises(self):
        with pytest.raises(KeyError):
            build_metric_set()["no_such_metric"]

    def test_applicable(self):
        metrics = build_metric_set()
        assert len(metrics.applicable(Language.PYTHON)) == 7
        assert metrics.applicable(Language.UNSUPPORTED) == []
