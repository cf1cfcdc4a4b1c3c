"""Public API for Quality Lens.

This module provides the main entry point for analysis. Users should call
analyze() instead of wiring configuration, metrics and orchestrator by hand.

Example:
    >>> from quality_lens import analyze
    >>>
    >>> # Simple usage
    >>> outcome = analyze("/path/to/code")
    >>>
    >>> # With customization
    >>> outcome = analyze(
    ...     "/path/to/code",
    ...     workers=4,
    ...     exclude_patterns=["**/generated/**"],
    ... )
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional

from .analysis import AnalysisOrchestrator, ProjectOutcome
from .config import load_config
from .exceptions import PathNotFoundError
from .logging_config import get_logger

logger = get_logger(__name__)


def analyze(
    path: str = ".",
    config_file: Optional[Path] = None,
    cancel_event: Optional[threading.Event] = None,
    **overrides,
) -> ProjectOutcome:
    """Analyze a file or directory and return its quality outcome.

    1. Load configuration (auto-discover TOML + environment + overrides)
    2. Build the metric set and orchestrator
    3. Analyze the file, or every supported file under the directory

    Args:
        path: File or directory to analyze (default: current directory)
        config_file: Optional explicit config file path
        cancel_event: Optional event; setting it stops the run early
        **overrides: Configuration overrides (e.g., workers=2, exclude_patterns=[...])

    Returns:
        ProjectOutcome with per-file and overall scores

    Raises:
        PathNotFoundError: If path doesn't exist
        ConfigurationError: If configuration is invalid
    """
    target = Path(path)
    if not target.exists():
        raise PathNotFoundError(str(target))

    config = load_config(config_file=config_file, **overrides)
    if not config.validate():
        logger.warning(
            f"Metric weights sum to {config.weights.total:.2f}, not 1.0; "
            "file scores are normalised by the weight sum"
        )

    orchestrator = AnalysisOrchestrator(config)
    logger.info(f"Starting analysis of {target}")

    if target.is_file():
        return orchestrator.analyze_file(target, cancel_event=cancel_event)
    return orchestrator.analyze_directory(target, cancel_event=cancel_event)
