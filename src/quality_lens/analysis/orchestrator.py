"""AnalysisOrchestrator: discover -> extract -> score -> fold.

Usage:
    orchestrator = AnalysisOrchestrator(load_config())
    outcome = orchestrator.analyze_directory("src/")
    outcome = orchestrator.analyze_file("src/app.py")

Files are independent, so they are analysed on a thread pool. Workers
only produce FileOutcomes; the fold into the ProjectOutcome runs on the
calling thread in discovery order once every worker has finished.
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Optional, Union

from ..config import AnalysisConfig
from ..exceptions import FileAnalysisError, PathNotFoundError
from ..logging_config import get_logger
from ..metrics.base import MetricOutcome
from ..metrics.registry import MetricSet, build_metric_set
from ..scanning.extractor import StructuralExtractor
from ..scanning.languages import detect_language
from ..scanning.models import ParsedFile
from .discovery import discover_files
from .models import FileOutcome, Issue, ProjectOutcome, Severity

logger = get_logger(__name__)

# Below this many files the pool costs more than it saves
_PARALLEL_MIN_FILES = 10


class AnalysisOrchestrator:
    """Runs the metric set over files and aggregates the results.

    The extractor and metric set are built once per orchestrator and
    shared by every run; runs keep no state between calls.

    Args:
        config: Analysis configuration (defaults to AnalysisConfig())
        metrics: Pre-built metric set; built from ``config`` when omitted
    """

    def __init__(
        self, config: Optional[AnalysisConfig] = None, metrics: Optional[MetricSet] = None
    ) -> None:
        self.config = config or AnalysisConfig()
        self.metrics = metrics if metrics is not None else build_metric_set(self.config)
        self._custom_metrics = metrics is not None
        self.extractor = StructuralExtractor(deduplicate=self.config.deduplicate_records)

    def analyze_file(
        self, path: Union[str, Path], cancel_event: Optional[threading.Event] = None
    ) -> ProjectOutcome:
        """Analyse a single file, wrapped in a one-file ProjectOutcome.

        Raises:
            PathNotFoundError: If ``path`` is not an existing file
        """
        path = Path(path)
        if not path.is_file():
            raise PathNotFoundError(str(path), kind="file")
        return self._run(str(path), [path], cancel_event)

    def analyze_directory(
        self,
        root: Union[str, Path],
        config: Optional[AnalysisConfig] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> ProjectOutcome:
        """Analyse every supported, non-excluded file under ``root``.

        Args:
            root: Directory to analyse
            config: Per-call configuration; overrides the orchestrator's own.
                A metric set passed to the constructor is still used.
            cancel_event: Checked before each file. Once set, remaining files
                are skipped and the outcome is marked incomplete.

        Raises:
            PathNotFoundError: If ``root`` is not an existing directory
        """
        if config is not None and config != self.config:
            # A caller-supplied metric set is kept; a built one is rebuilt
            # only when the per-call weights or thresholds change it.
            keep_metrics = self._custom_metrics or (
                config.weights == self.config.weights
                and config.thresholds == self.config.thresholds
            )
            runner = AnalysisOrchestrator(config, metrics=self.metrics if keep_metrics else None)
            return runner.analyze_directory(root, cancel_event=cancel_event)

        root = Path(root)
        if not root.is_dir():
            raise PathNotFoundError(str(root), kind="directory")

        files = discover_files(root, self.config)
        return self._run(str(root), files, cancel_event)

    def score(self, parsed: ParsedFile) -> FileOutcome:
        """Run every applicable metric on ``parsed`` and combine the results."""
        outcomes = [metric.analyze(parsed) for metric in self.metrics.applicable(parsed.language)]

        weight_sum = sum(o.weight for o in outcomes)
        score = sum(o.score * o.weight for o in outcomes) / weight_sum if weight_sum > 0 else 0.0

        thresholds = self.config.thresholds
        issues = tuple(
            Issue(metric=o.name, message=message, severity=Severity.from_score(o.score, thresholds))
            for o in outcomes
            for message in o.issues
        )

        return FileOutcome(
            path=parsed.path,
            language=parsed.language,
            score=score,
            total_lines=parsed.total_lines,
            code_lines=parsed.code_lines,
            comment_lines=parsed.comment_lines,
            blank_lines=parsed.blank_lines,
            issues=issues,
            metric_scores={o.name: o.score for o in outcomes},
            metric_outcomes=tuple(outcomes),
        )

    def _analyze_path(self, path: Path) -> FileOutcome:
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise FileAnalysisError(str(path), f"cannot read file: {e}") from e

        try:
            parsed = self.extractor.parse(str(path), text, detect_language(path))
            return self.score(parsed)
        except Exception as e:
            raise FileAnalysisError(str(path), f"{e.__class__.__name__}: {e}") from e

    def _run(
        self, root: str, files: list[Path], cancel_event: Optional[threading.Event]
    ) -> ProjectOutcome:
        start = time.perf_counter()
        results: dict[int, FileOutcome] = {}
        failed: dict[int, str] = {}
        cancelled = threading.Event()
        lock = threading.Lock()  # Thread-safe result updates

        def _task(index: int, path: Path) -> None:
            if cancelled.is_set() or (cancel_event is not None and cancel_event.is_set()):
                cancelled.set()
                return
            try:
                outcome = self._analyze_path(path)
            except FileAnalysisError as e:
                logger.warning(f"Skipping {e.filepath}: {e.reason}")
                with lock:
                    failed[index] = str(path)
                return
            with lock:
                results[index] = outcome

        workers = self.config.effective_workers
        if workers == 1 or len(files) < _PARALLEL_MIN_FILES:
            for index, path in enumerate(files):
                _task(index, path)
                if cancelled.is_set():
                    break
        else:
            logger.debug(f"Analysing {len(files)} files with {workers} workers")
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = {executor.submit(_task, i, fp): fp for i, fp in enumerate(files)}
                for future in as_completed(futures):
                    # _task handles per-file failures; anything else is a bug
                    future.result()

        if cancelled.is_set():
            logger.info(f"Analysis cancelled after {len(results)} of {len(files)} files")

        outcome = _fold(
            root,
            [results[i] for i in sorted(results)],
            [failed[i] for i in sorted(failed)],
            incomplete=cancelled.is_set(),
            elapsed=time.perf_counter() - start,
        )
        logger.info(
            f"Analysed {outcome.total_files} files in {outcome.elapsed_seconds:.2f}s "
            f"(overall score {outcome.overall_score:.3f})"
        )
        return outcome


def _fold(
    root: str,
    files: list[FileOutcome],
    failed: list[str],
    incomplete: bool,
    elapsed: float,
) -> ProjectOutcome:
    """Aggregate FileOutcomes, in order, into a ProjectOutcome."""
    overall = sum(f.score for f in files) / len(files) if files else 0.0

    latest: dict[str, MetricOutcome] = {}
    sums: dict[str, float] = {}
    counts: dict[str, int] = {}
    for f in files:
        for metric in f.metric_outcomes:
            latest[metric.name] = metric
            sums[metric.name] = sums.get(metric.name, 0.0) + metric.score
            counts[metric.name] = counts.get(metric.name, 0) + 1

    return ProjectOutcome(
        root=root,
        overall_score=overall,
        total_files=len(files),
        total_lines=sum(f.total_lines for f in files),
        elapsed_seconds=elapsed,
        metrics=latest,
        metric_averages={name: sums[name] / counts[name] for name in sums},
        files=tuple(files),
        failed_files=tuple(failed),
        incomplete=incomplete,
    )
