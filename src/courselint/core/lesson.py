import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any

import frontmatter
import yaml
from attrs import Factory, define, field

from courselint.core.utils.markdown_utils import (
    CodeBlock,
    Link,
    MarkdownDocument,
    parse_markdown,
    read_text_file,
)
from courselint.core.utils.text_utils import normalize_heading, slug_to_title
from courselint.infrastructure.config import ContentConfig
from courselint.infrastructure.utils.path_utils import parse_ordered_name

if TYPE_CHECKING:
    from courselint.core.course import Course
    from courselint.core.section import Section

logger = logging.getLogger(__name__)

FRONT_MATTER_REGEX = re.compile(r"\A---[ \t]*\r?\n(?:.*?\r?\n)??---[ \t]*(?:\r?\n|\Z)", re.S)
FRONT_MATTER_KEY_REGEX = re.compile(r"^([A-Za-z_][\w-]*)\s*:")


def split_front_matter(text: str) -> tuple[bool, str, int]:
    """Split the body off a Markdown file.

    Returns `(has_front_matter, body, first_body_line)`.
    """
    match = FRONT_MATTER_REGEX.match(text)
    if not match:
        return False, text, 1
    return True, text[match.end() :], text[: match.end()].count("\n") + 1


def load_front_matter(text: str) -> tuple[dict[str, Any], str | None]:
    """Parse the YAML front matter of `text`.

    Returns the metadata and an error description if it can't be parsed.
    """
    handler = frontmatter.YAMLHandler()
    try:
        fm, _ = handler.split(text)
        metadata = handler.load(fm)
    except yaml.YAMLError as e:
        problem = getattr(e, "problem", None) or str(e).splitlines()[0]
        return {}, f"invalid YAML: {problem}"
    if metadata is None:
        return {}, None
    if not isinstance(metadata, dict):
        return {}, f"front matter is a {type(metadata).__name__}, not a mapping"
    return dict(metadata), None


def find_front_matter_lines(text: str) -> dict[str, int]:
    lines = {}
    for line_no, line in enumerate(text.splitlines()[1:], start=2):
        if line.strip() == "---":
            break
        match = FRONT_MATTER_KEY_REGEX.match(line)
        if match:
            lines.setdefault(match[1], line_no)
    return lines


@define
class Lesson:
    path: Path
    section: "Section" = field(repr=False)
    number: int | None = None
    slug: str = ""
    metadata: dict[str, Any] = Factory(dict)
    has_front_matter: bool = False
    front_matter_error: str | None = None
    read_error: str | None = None
    # Line of each top-level front matter key
    front_matter_lines: dict[str, int] = Factory(dict)
    document: MarkdownDocument = Factory(MarkdownDocument)

    @classmethod
    def from_file(cls, path: Path, section: "Section", config: ContentConfig) -> "Lesson":
        number, slug = parse_ordered_name(path.name, config.lesson_suffix)
        lesson = cls(path=path, section=section, number=number, slug=slug)
        text, lesson.read_error = read_text_file(path)
        if text is None:
            return lesson

        lesson.has_front_matter, body, first_line = split_front_matter(text)
        if lesson.has_front_matter:
            lesson.metadata, lesson.front_matter_error = load_front_matter(text)
            lesson.front_matter_lines = find_front_matter_lines(text)
        elif text.startswith("---"):
            lesson.front_matter_error = "front matter block is not closed"
        lesson.document = parse_markdown(body, first_line)
        logger.debug(
            f"Loaded lesson {path.name}: {len(lesson.document.headings)} headings, "
            f"{len(lesson.document.code_blocks)} code blocks"
        )
        return lesson

    @property
    def course(self) -> "Course":
        return self.section.course

    @property
    def source_course(self) -> str | None:
        return self.front_matter_value("source_course")

    @property
    def source_lesson(self) -> str | None:
        return self.front_matter_value("source_lesson")

    def front_matter_value(self, key: str) -> str | None:
        value = self.metadata.get(key)
        if value is None:
            return None
        return str(value).strip()

    @property
    def title(self) -> str:
        heading = self.document.first_heading(1)
        if heading and heading.text:
            return heading.text
        return slug_to_title(self.slug)

    @property
    def body_sections(self) -> list[str]:
        """Normalized titles of the H2 sections."""
        return [normalize_heading(h.text) for h in self.document.headings if h.level == 2]

    @property
    def code_examples(self) -> list[CodeBlock]:
        return self.document.code_blocks

    @property
    def links(self) -> list[Link]:
        return self.document.links

    @property
    def resources(self) -> list[Link]:
        heading = self.document.find_heading(lambda text: normalize_heading(text) == "resources")
        if heading is None:
            return []
        span = self.document.section_span(heading)
        return [link for link in self.document.in_span(self.links, span) if not link.is_image]

    @property
    def footer(self) -> tuple[int, str] | None:
        return self.document.last_text_line()

    @property
    def unclosed_fence_line(self) -> int | None:
        return self.document.unclosed_fence_line
