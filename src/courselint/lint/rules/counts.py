from collections import Counter
from collections.abc import Iterator
from pathlib import Path

from courselint.core.corpus import Corpus
from courselint.core.section import Section
from courselint.infrastructure.config import ContentConfig
from courselint.infrastructure.utils.path_utils import path_exists
from courselint.lint.issues import LintIssue
from courselint.lint.rule import Rule, register


@register
class LessonCountRule(Rule):
    code = "CL005"
    name = "lesson-count"
    default_severity = "error"
    description = "Lesson counts declared in READMEs match the lesson files present"

    def check(self, corpus: Corpus, config: ContentConfig) -> Iterator[LintIssue]:
        for course in corpus.courses:
            declared = course.declared_lesson_count
            if declared and declared[0] != course.lesson_count:
                yield self._mismatch(course.readme_path, declared, course.lesson_count, "course")
            for section in course.sections:
                declared = section.declared_lesson_count
                if declared and declared[0] != len(section.lessons):
                    yield self._mismatch(
                        section.readme_path, declared, len(section.lessons), "section"
                    )

    def _mismatch(self, path: Path, declared: tuple[int, int], actual: int, scope: str):
        count, line = declared
        return self.issue(
            path,
            f"README declares {count} lessons but the {scope} has {actual}",
            f"Update the count to {actual}.",
            line=line,
            declared=count,
            actual=actual,
        )


@register
class UnlistedLessonRule(Rule):
    code = "CL007"
    name = "unlisted-lesson"
    default_severity = "warning"
    description = "Section READMEs list exactly the lesson files of the section, in order"

    def check(self, corpus: Corpus, config: ContentConfig) -> Iterator[LintIssue]:
        for section in corpus.sections:
            if section.readme is None:
                continue
            yield from self._check_section(section)

    def _check_section(self, section: Section) -> Iterator[LintIssue]:
        lesson_paths = {lesson.path.resolve(): lesson for lesson in section.lessons}
        listed: list[Path] = []
        for link in section.lesson_links:
            target = link.resolve(section.path).resolve()
            if target in lesson_paths:
                listed.append(target)
            elif path_exists(target):
                yield self.issue(
                    section.readme_path,
                    f"README lists '{link.target}', which is not a lesson of this section",
                    "Move the lesson into this section or remove it from the list.",
                    line=link.line,
                    target=link.target,
                )

        for path, lesson in lesson_paths.items():
            if path not in listed:
                yield self.issue(
                    lesson.path,
                    f"Lesson is not listed in {section.readme_path.name}",
                    f"Add '[{lesson.title}]({lesson.path.name})' to the lesson list.",
                    line=None,
                )

        order = [lesson_paths[path].path.name for path in dict.fromkeys(listed)]
        if order != sorted(order, key=lambda name: _number_key(lesson_paths, section, name)):
            yield self.issue(
                section.readme_path,
                "Lessons are listed in a different order than their file numbers",
                "Reorder the lesson list to match the lesson numbers.",
                line=section.lesson_links[0].line if section.lesson_links else None,
            )


def _number_key(lesson_paths, section: Section, name: str):
    lesson = lesson_paths[(section.path / name).resolve()]
    return lesson.number is None, lesson.number or 0, name


def _numbering_problem(numbers: list[int]) -> str | None:
    counts = Counter(numbers)
    duplicates = sorted(number for number, count in counts.items() if count > 1)
    if duplicates:
        return "numbers are duplicated: " + ", ".join(str(n) for n in duplicates)
    ordered = sorted(numbers)
    start = ordered[0] if ordered and ordered[0] in (0, 1) else 1
    if ordered != list(range(start, start + len(ordered))):
        return "numbers are not contiguous: " + ", ".join(str(n) for n in ordered)
    return None


@register
class LessonNumberingRule(Rule):
    code = "CL008"
    name = "lesson-numbering"
    default_severity = "warning"
    description = "Section and lesson numbers are unique and contiguous"

    def check(self, corpus: Corpus, config: ContentConfig) -> Iterator[LintIssue]:
        for course in corpus.courses:
            numbers = [section.number for section in course.sections if section.number is not None]
            problem = _numbering_problem(numbers)
            if problem:
                yield self.issue(
                    course.path,
                    f"Section {problem}",
                    "Renumber the section directories 01, 02, 03, ...",
                    numbers=sorted(numbers),
                )
            for section in course.sections:
                numbers = [lesson.number for lesson in section.lessons if lesson.number is not None]
                problem = _numbering_problem(numbers)
                if problem:
                    yield self.issue(
                        section.path,
                        f"Lesson {problem}",
                        "Renumber the lesson files 01, 02, 03, ...",
                        numbers=sorted(numbers),
                    )
