import logging
from pathlib import Path

from attrs import Factory, define

from courselint.core.course import Course
from courselint.core.errors import ContentRootError
from courselint.core.lesson import Lesson
from courselint.core.section import Section
from courselint.infrastructure.config import ContentConfig
from courselint.infrastructure.utils.path_utils import find_course_dirs

logger = logging.getLogger(__name__)


@define
class Corpus:
    """All courses found below a content root."""

    root: Path
    courses: list[Course] = Factory(list)

    @classmethod
    def from_dir(cls, root: Path, config: ContentConfig | None = None) -> "Corpus":
        if config is None:
            config = ContentConfig()
        root = root.resolve()
        if not root.is_dir():
            raise ContentRootError(f"Content root is not a directory: {root}")

        course_dirs = find_course_dirs(root, config.skip_dirs)
        if not course_dirs:
            raise ContentRootError(
                f"No courses found in {root}: expected directories with numbered "
                "section folders like '01-getting-started'"
            )
        logger.info(f"Found {len(course_dirs)} course(s) in {root}")
        return cls(root=root, courses=[Course.from_dir(path, config) for path in course_dirs])

    @property
    def sections(self) -> list[Section]:
        return [section for course in self.courses for section in course.sections]

    @property
    def lessons(self) -> list[Lesson]:
        return [lesson for course in self.courses for lesson in course.lessons]

    @property
    def readme_paths(self) -> list[Path]:
        paths = [course.readme_path for course in self.courses if course.readme]
        paths.extend(section.readme_path for section in self.sections if section.readme)
        return paths

    @property
    def file_count(self) -> int:
        return len(self.lessons) + len(self.readme_paths)

    def find_course(self, slug: str) -> Course | None:
        for course in self.courses:
            if course.slug == slug:
                return course
        return None

    def find_lesson(self, path: Path) -> Lesson | None:
        for course in self.courses:
            lesson = course.find_lesson(path)
            if lesson:
                return lesson
        return None
