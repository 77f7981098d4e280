import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from attrs import Factory, define, field, frozen

from courselint.core.lesson import Lesson
from courselint.core.utils.markdown_utils import (
    Link,
    MarkdownDocument,
    first_paragraph_after,
    parse_markdown,
    read_text_file,
)
from courselint.core.utils.text_utils import (
    normalize_heading,
    slug_to_title,
    split_emoji,
)
from courselint.infrastructure.config import ContentConfig
from courselint.infrastructure.utils.path_utils import parse_ordered_name

if TYPE_CHECKING:
    from courselint.core.course import Course

logger = logging.getLogger(__name__)

LESSON_COUNT_REGEX = re.compile(r"\b(\d+)\s+lessons?\b", re.IGNORECASE)
CHALLENGE_COUNT_REGEX = re.compile(r"\b(\d+)\s+(?:practice\s+)?challenges?\b", re.IGNORECASE)


def find_declared_count(doc: MarkdownDocument, regex: re.Pattern) -> tuple[int, int] | None:
    """Find a count like "12 lessons" outside of list items.

    Returns `(count, line)` for the first match.
    """
    item_lines = {item.line for item in doc.list_items}
    for line_no, text in doc.text_lines:
        if line_no in item_lines:
            continue
        match = regex.search(text)
        if match:
            return int(match[1]), line_no
    return None


def is_practice_heading(text: str) -> bool:
    return "practice challenge" in normalize_heading(text)


@frozen
class PracticeChallenge:
    emoji: str
    text: str
    line: int


@frozen
class Readme:
    """Parsed index file of a course or section."""

    path: Path
    document: MarkdownDocument
    title: str
    emoji: str
    description: str

    @classmethod
    def from_file(cls, path: Path, default_title: str) -> tuple["Readme | None", str | None]:
        text, error = read_text_file(path)
        if text is None:
            return None, error
        doc = parse_markdown(text)
        heading = doc.first_heading(1)
        emoji, title = split_emoji(heading.text) if heading else ("", "")
        return (
            cls(
                path=path,
                document=doc,
                title=title or default_title,
                emoji=emoji,
                description=first_paragraph_after(doc, heading),
            ),
            None,
        )

    @property
    def links(self) -> list[Link]:
        return self.document.links


@define
class Section:
    path: Path
    course: "Course" = field(repr=False)
    number: int | None = None
    slug: str = ""
    readme: Readme | None = None
    readme_error: str | None = None
    lessons: list[Lesson] = Factory(list)

    @classmethod
    def from_dir(cls, path: Path, course: "Course", config: ContentConfig) -> "Section":
        number, slug = parse_ordered_name(path.name)
        section = cls(path=path, course=course, number=number, slug=slug)
        readme_path = path / config.readme_name
        if readme_path.is_file():
            section.readme, section.readme_error = Readme.from_file(
                readme_path, slug_to_title(slug)
            )
        else:
            logger.debug(f"Section without {config.readme_name}: {path}")

        for lesson_path in sorted(path.iterdir()):
            if not lesson_path.is_file():
                continue
            if lesson_path.name == config.readme_name:
                continue
            if lesson_path.suffix.lower() != config.lesson_suffix.lower():
                continue
            section.lessons.append(Lesson.from_file(lesson_path, section, config))
        section.lessons.sort(
            key=lambda lesson: (lesson.number is None, lesson.number or 0, lesson.path.name)
        )
        logger.debug(f"Built section {path.name} with {len(section.lessons)} lessons")
        return section

    @property
    def readme_path(self) -> Path:
        return self.path / self.course.config.readme_name

    @property
    def title(self) -> str:
        return self.readme.title if self.readme else slug_to_title(self.slug)

    @property
    def emoji(self) -> str:
        return self.readme.emoji if self.readme else ""

    @property
    def description(self) -> str:
        return self.readme.description if self.readme else ""

    @property
    def _readme_document(self) -> MarkdownDocument:
        return self.readme.document if self.readme else MarkdownDocument()

    @property
    def lesson_links(self) -> list[Link]:
        """Lesson references of the README, in list order."""
        doc = self._readme_document
        practice = doc.find_heading(is_practice_heading)
        practice_span = doc.section_span(practice) if practice else (0, 0)
        suffix = self.course.config.lesson_suffix.lower()
        readme_name = self.course.config.readme_name
        links_by_line: dict[int, list[Link]] = {}
        for link in doc.links:
            links_by_line.setdefault(link.line, []).append(link)

        refs = []
        for item in doc.list_items:
            if practice_span[0] < item.line < practice_span[1]:
                continue
            for link in links_by_line.get(item.line, []):
                local = link.local_path()
                if local is None or link.is_image:
                    continue
                if local.suffix.lower() == suffix and local.name != readme_name:
                    refs.append(link)
                    break
        return refs

    @property
    def declared_lesson_count(self) -> tuple[int, int] | None:
        return find_declared_count(self._readme_document, LESSON_COUNT_REGEX)

    @property
    def practice_challenges(self) -> list[PracticeChallenge]:
        doc = self._readme_document
        heading = doc.find_heading(is_practice_heading)
        if heading is None:
            return []
        challenges = []
        for item in doc.in_span(doc.list_items, doc.section_span(heading)):
            if item.ordered:
                continue
            emoji, text = split_emoji(item.text)
            challenges.append(PracticeChallenge(emoji=emoji, text=text, line=item.line))
        return challenges

    @property
    def declared_challenge_count(self) -> tuple[int, int] | None:
        return find_declared_count(self._readme_document, CHALLENGE_COUNT_REGEX)

    @property
    def practice_challenge_count(self) -> int:
        declared = self.declared_challenge_count
        if declared is not None:
            return declared[0]
        return len(self.practice_challenges)

    @property
    def call_to_action_links(self) -> list[Link]:
        host = self.course.config.platform_host.lower()
        return [
            link
            for link in self._readme_document.links
            if link.host == host or link.host.endswith("." + host)
        ]

    def find_lesson(self, path: Path) -> Lesson | None:
        abspath = path.resolve()
        for lesson in self.lessons:
            if lesson.path.resolve() == abspath:
                return lesson
        return None
