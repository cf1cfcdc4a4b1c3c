"""Tests for AnalysisOrchestrator: scoring, folding, failures and cancellation."""

import threading
from dataclasses import replace

import pytest

from quality_lens.analysis import AnalysisOrchestrator, Severity
from quality_lens.config import AnalysisConfig, MetricWeights
from quality_lens.exceptions import PathNotFoundError
from quality_lens.metrics import BaseMetric, CommentRatioMetric, MetricSet


class ExplodingMetric(BaseMetric):
    name = "exploding"
    title = "Exploding"
    description = "Always fails"

    def evaluate(self, parsed, rules):
        raise RuntimeError("boom")


# Weighted score of a flat ten-line Python file under the default weights:
# comment_ratio 0.8 (weight 0.10) and structure_analysis 1 - 2.8/3 (weight 0.15)
FLAT_FILE_SCORE = 0.10 * 0.8 + 0.15 * (1 - 2.8 / 3)


class TestEndToEnd:
    """Test a directory holding one flat ten-line file."""

    @pytest.fixture
    def outcome(self, write_file, tmp_path, flat_python_source):
        write_file("flat.py", flat_python_source)
        return AnalysisOrchestrator().analyze_directory(tmp_path)

    def test_metric_scores(self, outcome):
        scores = outcome.files[0].metric_scores
        assert scores["comment_ratio"] == pytest.approx(0.8)
        assert scores["cyclomatic_complexity"] == 0.0
        assert scores["function_length"] == 0.0
        assert scores["error_handling"] == 0.0
        assert scores["naming_convention"] == 0.0
        assert scores["code_duplication"] == 0.0
        assert scores["structure_analysis"] == pytest.approx(1 - 2.8 / 3)

    def test_weighted_scores(self, outcome):
        assert outcome.files[0].score == pytest.approx(FLAT_FILE_SCORE)
        assert outcome.overall_score == pytest.approx(FLAT_FILE_SCORE)

    def test_totals(self, outcome):
        assert outcome.total_files == 1
        assert outcome.total_lines == 10
        assert outcome.files[0].code_lines == 10
        assert outcome.failed_files == ()
        assert not outcome.incomplete

    def test_issue_severity_follows_metric_score(self, outcome):
        issues = {i.message: i for i in outcome.files[0].issues}
        assert issues["comment ratio too low: 0.0%"].severity is Severity.CRITICAL
        assert issues["file blank lines insufficient: 0.0%"].severity is Severity.INFO
        assert outcome.critical_issues == 1

    def test_metric_aggregates(self, outcome):
        assert set(outcome.metrics) == set(MetricWeights().as_dict())
        assert outcome.metric_averages["comment_ratio"] == pytest.approx(0.8)

    def test_idempotent(self, outcome, tmp_path):
        again = AnalysisOrchestrator().analyze_directory(tmp_path)
        assert replace(again, elapsed_seconds=0.0) == replace(outcome, elapsed_seconds=0.0)


class TestScoring:
    """Test the weighted score fold."""

    def test_score_uses_configured_weights(self, write_file, flat_python_source):
        path = write_file("flat.py", flat_python_source)
        config = AnalysisConfig(
            weights=MetricWeights(
                cyclomatic_complexity=0.0,
                function_length=0.0,
                comment_ratio=1.0,
                error_handling=0.0,
                naming_convention=0.0,
                code_duplication=0.0,
                structure_analysis=0.0,
            )
        )
        outcome = AnalysisOrchestrator(config).analyze_file(path)
        assert outcome.files[0].score == pytest.approx(0.8)

    def test_weights_normalised_by_sum(self, write_file, flat_python_source):
        path = write_file("flat.py", flat_python_source)
        metrics = MetricSet([CommentRatioMetric(weight=3.0)])
        outcome = AnalysisOrchestrator(metrics=metrics).analyze_file(path)
        assert outcome.files[0].score == pytest.approx(0.8)

    def test_scores_are_bounded(self, write_file, tmp_path):
        write_file("a.cs", "public class A\n{\n    public void B() { if (x) { y(); } }\n}\n")
        write_file("b.go", "package b\n\nfunc f() {\n\treturn\n}\n")
        write_file("c.ts", "// c\nexport const c = 1;\n")
        outcome = AnalysisOrchestrator().analyze_directory(tmp_path)
        assert outcome.total_files == 3
        assert 0.0 <= outcome.overall_score <= 1.0
        for f in outcome.files:
            assert 0.0 <= f.score <= 1.0
            assert all(0.0 <= s <= 1.0 for s in f.metric_scores.values())

    def test_empty_directory(self, tmp_path):
        outcome = AnalysisOrchestrator().analyze_directory(tmp_path)
        assert outcome.total_files == 0
        assert outcome.overall_score == 0.0
        assert outcome.metrics == {}


class TestFailures:
    """Test fatal and per-file error handling."""

    def test_missing_directory(self, tmp_path):
        with pytest.raises(PathNotFoundError) as exc_info:
            AnalysisOrchestrator().analyze_directory(tmp_path / "missing")
        assert isinstance(exc_info.value, FileNotFoundError)
        assert exc_info.value.kind == "directory"

    def test_missing_file(self, tmp_path):
        with pytest.raises(PathNotFoundError):
            AnalysisOrchestrator().analyze_file(tmp_path / "missing.py")

    def test_failing_file_is_skipped(self, write_file, tmp_path):
        write_file("a.py", "x = 1\n")
        write_file("b.py", "y = 2\n")
        metrics = MetricSet([ExplodingMetric(weight=1.0)])
        outcome = AnalysisOrchestrator(metrics=metrics).analyze_directory(tmp_path)
        assert outcome.total_files == 0
        assert outcome.failed_files == (str(tmp_path / "a.py"), str(tmp_path / "b.py"))
        assert not outcome.incomplete

    def test_per_call_config_keeps_supplied_metrics(self, write_file, tmp_path):
        write_file("keep/a.py", "x = 1\n")
        write_file("skip/b.py", "y = 2\n")
        orchestrator = AnalysisOrchestrator(metrics=MetricSet([ExplodingMetric(weight=1.0)]))
        config = AnalysisConfig(exclude_patterns=("**/skip/**",), workers=1)
        outcome = orchestrator.analyze_directory(tmp_path, config=config)
        assert outcome.total_files == 0
        assert outcome.failed_files == (str(tmp_path / "keep" / "a.py"),)


class TestConcurrency:
    """Test the worker pool and cancellation."""

    def test_parallel_matches_sequential(self, write_file, tmp_path):
        for i in range(12):
            write_file(f"mod_{i:02d}.py", f"def f_{i}(a):\n    if a:\n        return {i}\n")
        parallel = AnalysisOrchestrator(AnalysisConfig(workers=4)).analyze_directory(tmp_path)
        sequential = AnalysisOrchestrator(AnalysisConfig(workers=1)).analyze_directory(tmp_path)

        assert parallel.total_files == 12
        assert [f.path for f in parallel.files] == sorted(f.path for f in parallel.files)
        assert replace(parallel, elapsed_seconds=0.0) == replace(sequential, elapsed_seconds=0.0)

    def test_cancelled_before_start(self, write_file, tmp_path):
        write_file("a.py", "x = 1\n")
        cancel = threading.Event()
        cancel.set()
        outcome = AnalysisOrchestrator().analyze_directory(tmp_path, cancel_event=cancel)
        assert outcome.incomplete
        assert outcome.total_files == 0

    def test_per_call_config(self, write_file, tmp_path):
        write_file("keep/a.py", "x = 1\n")
        write_file("skip/b.py", "y = 2\n")
        config = AnalysisConfig(exclude_patterns=("**/skip/**",))
        outcome = AnalysisOrchestrator().analyze_directory(tmp_path, config=config)
        assert [f.path for f in outcome.files] == [str(tmp_path / "keep" / "a.py")]
