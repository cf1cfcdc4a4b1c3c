"""CLI entry point. Registers all subcommands."""

import typer

app = typer.Typer(
    name="quality-lens",
    help="Quality Lens - Heuristic Multi-Language Code Quality Analyzer",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .languages import languages as _languages  # noqa: F401, E402
