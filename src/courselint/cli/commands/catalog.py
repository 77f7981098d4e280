"""Catalog command exporting the loaded content model."""

import json
from pathlib import Path

import click
import yaml

from courselint.cli.commands import load_corpus
from courselint.core.catalog import corpus_to_dict


def dump_catalog(data: dict, output_format: str) -> str:
    if output_format == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


@click.command()
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Output format",
)
@click.option(
    "-o",
    "--output",
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the catalog to FILE instead of stdout.",
)
def catalog(path: Path, output_format: str, output_file: Path | None):
    """Export courses, sections and lessons below PATH as JSON or YAML.

    Examples:

    \b
        courselint catalog content/
        courselint catalog content/ --format yaml -o catalog.yaml
    """
    corpus = load_corpus(path)
    content = dump_catalog(corpus_to_dict(corpus), output_format.lower())

    if output_file:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(content, encoding="utf-8")
        click.echo(f"Written: {output_file}")
    else:
        click.echo(content, nl=False)
