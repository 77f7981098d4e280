"""Outline command for generating course outlines in Markdown format.

This module provides a command to export the structure of the courses in a
content tree as a Markdown outline, with section titles as headings and
lesson titles as bullet points.
"""

from collections import Counter
from pathlib import Path

import click

from courselint.cli.commands import load_corpus
from courselint.core.course import Course


def generate_outline(course: Course) -> str:
    """Generate a Markdown outline for a course.

    Args:
        course: The course to generate an outline for

    Returns:
        Markdown string with the course outline
    """
    lines = [f"# {course.display_title}", ""]

    if course.description:
        lines.append(course.description)
        lines.append("")

    for section in course.sections:
        heading = f"{section.emoji} {section.title}" if section.emoji else section.title
        lines.append(f"## {heading}")
        for lesson in section.lessons:
            lines.append(f"- {lesson.title}")
        lines.append("")

    return "\n".join(lines)


def get_output_filename(course: Course, needs_prefix: bool) -> str:
    """Generate the output filename for a course outline.

    Args:
        course: The course
        needs_prefix: Whether to add the technology as prefix (when course
            slugs are not unique)

    Returns:
        Filename with .md extension
    """
    if needs_prefix and course.tech:
        return f"{course.tech}-{course.slug}.md"
    return f"{course.slug}.md"


def get_output_filenames(courses: list[Course]) -> list[str]:
    """Pick a distinct outline filename for every course.

    Courses start with their plain slug. Courses whose filename collides
    with another course's get the technology prefix, and names that still
    collide are numbered.

    Args:
        courses: The courses, in output order

    Returns:
        One filename per course, unique ignoring case
    """
    prefixed = [False] * len(courses)
    while True:
        names = [get_output_filename(c, p) for c, p in zip(courses, prefixed)]
        name_counts = Counter(name.lower() for name in names)
        changed = False
        for index, name in enumerate(names):
            if name_counts[name.lower()] > 1 and not prefixed[index] and courses[index].tech:
                prefixed[index] = True
                changed = True
        if not changed:
            break

    taken: set[str] = set()
    filenames = []
    for name in names:
        candidate, number = name, 1
        while candidate.lower() in taken:
            number += 1
            candidate = f"{name.removesuffix('.md')}-{number}.md"
        taken.add(candidate.lower())
        filenames.append(candidate)
    return filenames


@click.command()
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "-o",
    "--output",
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write output to FILE (mutually exclusive with --output-dir).",
)
@click.option(
    "-d",
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Write one file per course to DIR (mutually exclusive with --output).",
)
def outline(path: Path, output_file: Path | None, output_dir: Path | None):
    """Generate a Markdown outline of the courses below PATH.

    Creates a Markdown document with the course title as top heading,
    section titles as headings and lesson titles as bullet points.

    Examples:

    \b
        courselint outline content/react/react-hooks-deep-dive
        courselint outline content/ -o outline.md
        courselint outline content/ -d ./outlines
    """
    if output_file and output_dir:
        raise click.UsageError("--output and --output-dir are mutually exclusive.")

    corpus = load_corpus(path)

    if output_dir:
        output_dir.mkdir(parents=True, exist_ok=True)
        filenames = get_output_filenames(corpus.courses)

        for course, filename in zip(corpus.courses, filenames):
            file_path = output_dir / filename
            file_path.write_text(generate_outline(course), encoding="utf-8")
            click.echo(f"Written: {file_path}")
        return

    content = "\n".join(generate_outline(course) for course in corpus.courses)
    if output_file:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(content, encoding="utf-8")
        click.echo(f"Written: {output_file}")
    else:
        click.echo(content)
