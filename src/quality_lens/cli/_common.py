"""Shared CLI helpers."""

from dataclasses import replace
from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config

console = Console()


def score_style(score: float, config: Optional[AnalysisConfig] = None) -> str:
    """Rich style for a badness score, using the severity thresholds."""
    thresholds = (config or AnalysisConfig()).thresholds
    if score >= thresholds.severity_critical:
        return "bold red"
    if score >= thresholds.severity_warning:
        return "yellow"
    return "green"


def resolve_config(
    config: Optional[Path] = None,
    exclude: Optional[list[str]] = None,
    workers: Optional[int] = None,
    top: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> AnalysisConfig:
    """Build configuration from CLI options.

    ``--exclude`` patterns are added to the configured ones rather than
    replacing them.
    """
    overrides: dict = {"verbose": verbose, "quiet": quiet}
    if workers is not None:
        overrides["workers"] = workers
    if top is not None:
        overrides["top_files"] = top

    settings = load_config(config_file=config, **overrides)
    if not exclude:
        return settings
    return replace(settings, exclude_patterns=settings.exclude_patterns + tuple(exclude))
