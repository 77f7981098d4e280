"""Per-course content statistics."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from courselint.cli.commands import load_corpus
from courselint.core.catalog import course_stats


def format_languages(languages: dict[str, int], limit: int = 5) -> str:
    parts = [f"{language or '(none)'} {count}" for language, count in languages.items()]
    if len(parts) > limit:
        parts = parts[:limit] + [f"+{len(parts) - limit} more"]
    return ", ".join(parts)


@click.command()
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format",
)
def stats(path: Path, output_format: str):
    """Show section, lesson, code example and challenge counts per course.

    Examples:
        courselint stats content/
        courselint stats content/ --format=json
    """
    corpus = load_corpus(path)
    rows = [course_stats(course) for course in corpus.courses]

    if output_format == "json":
        click.echo(json.dumps(rows, indent=2, ensure_ascii=False))
        return

    table = Table(title=f"Courses in {corpus.root}")
    table.add_column("Course", style="cyan")
    table.add_column("Sections", justify="right")
    table.add_column("Lessons", justify="right")
    table.add_column("Code examples", justify="right")
    table.add_column("Challenges", justify="right")
    table.add_column("Languages")
    for row in rows:
        table.add_row(
            f"{row['tech']}/{row['course']}" if row["tech"] else row["course"],
            str(row["sections"]),
            str(row["lessons"]),
            str(row["code_examples"]),
            str(row["practice_challenges"]),
            format_languages(row["languages"]),
        )
    if len(rows) > 1:
        table.add_section()
        table.add_row(
            "Total",
            str(sum(row["sections"] for row in rows)),
            str(sum(row["lessons"] for row in rows)),
            str(sum(row["code_examples"] for row in rows)),
            str(sum(row["practice_challenges"] for row in rows)),
            "",
            style="bold",
        )
    Console(soft_wrap=True).print(table)
