"""Main analysis command."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..analysis import AnalysisOrchestrator, ProjectOutcome
from ..config import AnalysisConfig
from ..exceptions import ConfigurationError, PathNotFoundError, QualityLensError
from ..logging_config import setup_logging
from . import app
from ._common import console, resolve_config, score_style

_SEVERITY_STYLE = {"critical": "bold red", "warning": "yellow", "info": "dim"}


@app.command()
def analyze(
    path: Path = typer.Argument(
        Path("."),
        help="File or directory to analyze",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    exclude: Optional[list[str]] = typer.Option(
        None,
        "--exclude",
        "-e",
        help="Extra exclude pattern (repeatable), e.g. '**/generated/**'",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Parallel workers (default: auto-detect)",
        min=1,
        max=32,
    ),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        "-t",
        help="Number of worst files to show",
        min=1,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
):
    """
    Score code quality for a file or directory.

    Every supported file is scored by seven weighted metrics. Scores are in
    [0, 1]; lower is better.

    [bold cyan]Examples:[/bold cyan]

      quality-lens analyze src/

      quality-lens analyze . --exclude '**/migrations/**' --top 10

      quality-lens analyze app.py --json
    """
    log_path = str(log_file) if log_file else None
    flag_verbosity = "verbose" if verbose else "quiet" if quiet else "normal"
    logger = setup_logging(flag_verbosity, log_file=log_path)

    try:
        settings = resolve_config(
            config=config,
            exclude=exclude,
            workers=workers,
            top=top,
            verbose=verbose,
            quiet=quiet,
        )
        # Verbosity may also come from a config file or the environment
        logger = setup_logging(settings.verbosity, log_file=log_path)
        if not settings.validate():
            logger.warning(
                f"Metric weights sum to {settings.weights.total:.2f}, not 1.0; "
                "file scores are normalised by the weight sum"
            )

        orchestrator = AnalysisOrchestrator(settings)
        if path.is_file():
            outcome = orchestrator.analyze_file(path)
        else:
            outcome = orchestrator.analyze_directory(path)

    except PathNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    except ConfigurationError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)

    except QualityLensError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)

    if json_output:
        _output_json(outcome, settings)
    else:
        _output_rich(outcome, settings)


def _output_json(outcome: ProjectOutcome, settings: AnalysisConfig) -> None:
    """Machine-readable JSON output."""
    print(json.dumps(outcome.to_dict(max_issues=settings.max_issues), indent=2))


def _output_rich(outcome: ProjectOutcome, settings: AnalysisConfig) -> None:
    """Human-readable Rich terminal output."""
    console.print()
    if outcome.total_files == 0:
        console.print("[yellow]No supported source files found.[/yellow]")
        return

    style = score_style(outcome.overall_score, settings)
    console.print(
        f"[bold]Overall score:[/bold] [{style}]{outcome.overall_score:.3f}[/{style}]  "
        f"[dim]({outcome.total_files} files, {outcome.total_lines} lines, "
        f"{outcome.elapsed_seconds:.2f}s)[/dim]"
    )
    console.print(
        f"Issues: {outcome.total_issues} "
        f"([bold red]{outcome.critical_issues} critical[/bold red], "
        f"[yellow]{outcome.warning_issues} warning[/yellow], "
        f"{outcome.info_issues} info)"
    )
    if outcome.incomplete:
        console.print("[yellow]Analysis was cancelled; results are partial.[/yellow]")
    if outcome.failed_files:
        console.print(f"[yellow]{len(outcome.failed_files)} files could not be analyzed.[/yellow]")
    console.print()

    table = Table(title="Metrics", show_header=True, header_style="bold")
    table.add_column("Metric")
    table.add_column("Weight", justify="right")
    table.add_column("Avg score", justify="right")
    table.add_column("Description", style="dim")
    for name, metric in outcome.metrics.items():
        avg = outcome.metric_averages.get(name, 0.0)
        s = score_style(avg, settings)
        table.add_row(
            metric.title, f"{metric.weight:.2f}", f"[{s}]{avg:.3f}[/{s}]", metric.description
        )
    console.print(table)
    console.print()

    console.print(f"[bold]Worst files[/bold] (top {settings.top_files})")
    for f in outcome.worst_files(settings.top_files):
        s = score_style(f.score, settings)
        console.print(
            f"  [{s}]{f.score:.3f}[/{s}]  {f.path}  "
            f"[dim]{f.language.value}, {f.total_lines} lines "
            f"({f.code_lines} code, {f.comment_lines} comment, {f.blank_lines} blank)[/dim]"
        )
        for issue in f.top_issues(settings.max_issues):
            sev = _SEVERITY_STYLE[issue.severity.value]
            console.print(
                f"      [{sev}]{issue.severity.value:<8}[/{sev}] {issue.metric}: {issue.message}"
            )
    console.print()
