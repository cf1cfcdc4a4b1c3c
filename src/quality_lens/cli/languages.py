"""List supported languages and their file extensions."""

import json

import typer
from rich.table import Table

from ..scanning import LANGUAGE_RULES
from . import app
from ._common import console


@app.command()
def languages(
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
):
    """
    Show the languages Quality Lens recognises and their extensions.
    """
    rows = {rules.language.value: list(rules.extensions) for rules in LANGUAGE_RULES.values()}

    if json_output:
        print(json.dumps(rows, indent=2))
        return

    table = Table(title="Supported languages", show_header=True, header_style="bold")
    table.add_column("Language")
    table.add_column("Extensions")
    table.add_column("Comments", style="dim")
    for rules in LANGUAGE_RULES.values():
        comments = "#" if rules.comment_style == "hash" else "// and /* */"
        table.add_row(rules.language.value, ", ".join(rules.extensions), comments)
    console.print(table)
