import logging
from pathlib import Path

from attrs import Factory, define, field

from courselint.core.lesson import Lesson
from courselint.core.section import LESSON_COUNT_REGEX, Readme, Section, find_declared_count
from courselint.core.utils.markdown_utils import Link
from courselint.core.utils.text_utils import slug_to_title
from courselint.infrastructure.config import ContentConfig
from courselint.infrastructure.utils.path_utils import is_ordered_name, iter_subdirs

logger = logging.getLogger(__name__)


@define
class Course:
    path: Path
    config: ContentConfig = field(repr=False)
    slug: str = ""
    tech: str = ""
    readme: Readme | None = None
    readme_error: str | None = None
    sections: list[Section] = Factory(list)
    # Directories in the course that are not numbered sections (assets etc.)
    other_dirs: list[Path] = Factory(list)

    @classmethod
    def from_dir(cls, path: Path, config: ContentConfig | None = None) -> "Course":
        if config is None:
            config = ContentConfig()
        path = path.resolve()
        logger.debug(f"Building course from {path}")
        course = cls(path=path, config=config, slug=path.name, tech=path.parent.name)
        readme_path = path / config.readme_name
        if readme_path.is_file():
            course.readme, course.readme_error = Readme.from_file(
                readme_path, slug_to_title(course.slug)
            )
        course._build_sections()
        return course

    def _build_sections(self):
        for section_dir in iter_subdirs(self.path, self.config.skip_dirs):
            if not is_ordered_name(section_dir.name):
                logger.debug(f"Not a section directory: {section_dir}")
                self.other_dirs.append(section_dir)
                continue
            self.sections.append(Section.from_dir(section_dir, self, self.config))
        self.sections.sort(key=lambda section: (section.number, section.path.name))
        logger.debug(f"Built course {self.slug} with {len(self.sections)} sections")

    @property
    def readme_path(self) -> Path:
        return self.path / self.config.readme_name

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
    def display_title(self) -> str:
        return f"{self.emoji} {self.title}" if self.emoji else self.title

    @property
    def links(self) -> list[Link]:
        return self.readme.links if self.readme else []

    @property
    def lessons(self) -> list[Lesson]:
        return [lesson for section in self.sections for lesson in section.lessons]

    @property
    def lesson_count(self) -> int:
        return len(self.lessons)

    @property
    def declared_lesson_count(self) -> tuple[int, int] | None:
        if self.readme is None:
            return None
        return find_declared_count(self.readme.document, LESSON_COUNT_REGEX)

    @property
    def practice_challenge_count(self) -> int:
        return sum(section.practice_challenge_count for section in self.sections)

    def find_lesson(self, path: Path) -> Lesson | None:
        """Return the lesson for `path`, if it belongs to this course."""
        for section in self.sections:
            lesson = section.find_lesson(path)
            if lesson:
                return lesson
        return None
