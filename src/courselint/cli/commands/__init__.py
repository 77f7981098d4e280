from pathlib import Path

import click

from courselint.core.corpus import Corpus
from courselint.core.errors import CourseLintError
from courselint.infrastructure.config import get_config


def load_corpus(path: Path) -> Corpus:
    """Load the content tree at `path`, reporting failures as click errors."""
    try:
        return Corpus.from_dir(path, get_config(reload=True).content)
    except CourseLintError as e:
        raise click.ClickException(str(e)) from None
