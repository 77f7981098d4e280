from collections import defaultdict
from collections.abc import Iterator

from courselint.core.corpus import Corpus
from courselint.core.lesson import Lesson
from courselint.infrastructure.config import ContentConfig
from courselint.lint.issues import LintIssue
from courselint.lint.rule import Rule, register


@register
class FrontMatterRule(Rule):
    code = "CL001"
    name = "front-matter"
    default_severity = "error"
    description = "Lesson has a YAML front matter block defining the source identifiers"

    def check(self, corpus: Corpus, config: ContentConfig) -> Iterator[LintIssue]:
        for lesson in corpus.lessons:
            if lesson.read_error:
                continue
            if lesson.front_matter_error:
                yield self.issue(
                    lesson.path,
                    f"Invalid front matter: {lesson.front_matter_error}",
                    "Fix the YAML block between the '---' lines at the top of the file.",
                    line=1,
                )
                continue
            if not lesson.has_front_matter:
                yield self.issue(
                    lesson.path,
                    "Lesson has no front matter block",
                    "Start the file with a '---' block defining "
                    + ", ".join(config.front_matter_keys)
                    + ".",
                    line=1,
                )
                continue
            for key in config.front_matter_keys:
                if not lesson.front_matter_value(key):
                    yield self.issue(
                        lesson.path,
                        f"Front matter is missing '{key}'",
                        f"Add '{key}: <value>' to the front matter.",
                        line=lesson.front_matter_lines.get(key, 1),
                        key=key,
                    )


@register
class SourceCourseMismatchRule(Rule):
    code = "CL002"
    name = "source-course-mismatch"
    default_severity = "error"
    description = "Front matter 'source_course' matches the containing course directory"

    def check(self, corpus: Corpus, config: ContentConfig) -> Iterator[LintIssue]:
        for course in corpus.courses:
            for lesson in course.lessons:
                source_course = lesson.source_course
                if not source_course or source_course == course.slug:
                    continue
                yield self.issue(
                    lesson.path,
                    f"source_course is '{source_course}' but the lesson is in course "
                    f"'{course.slug}'",
                    f"Set 'source_course: {course.slug}' or move the lesson to "
                    f"the '{source_course}' course.",
                    line=lesson.front_matter_lines.get("source_course"),
                    expected=course.slug,
                    actual=source_course,
                )


@register
class DuplicateLessonIdRule(Rule):
    code = "CL003"
    name = "duplicate-lesson-id"
    default_severity = "error"
    description = "Front matter 'source_lesson' is unique within a course"

    def check(self, corpus: Corpus, config: ContentConfig) -> Iterator[LintIssue]:
        for course in corpus.courses:
            by_id: dict[str, list[Lesson]] = defaultdict(list)
            for lesson in course.lessons:
                if lesson.source_lesson:
                    by_id[lesson.source_lesson].append(lesson)
            for lesson_id, lessons in by_id.items():
                first, *duplicates = lessons
                for lesson in duplicates:
                    yield self.issue(
                        lesson.path,
                        f"source_lesson '{lesson_id}' is already used by {first.path.name}",
                        "Give every lesson in a course its own source_lesson identifier.",
                        line=lesson.front_matter_lines.get("source_lesson"),
                        lesson_id=lesson_id,
                        first_path=str(first.path),
                    )
