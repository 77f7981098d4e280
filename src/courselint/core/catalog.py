"""Plain-data export of the content model.

The dictionaries built here contain only strings, numbers, lists and dicts
so they can be written as JSON or YAML.
"""

from collections import Counter
from pathlib import Path
from typing import Any

from courselint.core.corpus import Corpus
from courselint.core.course import Course
from courselint.core.lesson import Lesson
from courselint.core.section import Section
from courselint.core.utils.markdown_utils import Link


def _relative(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def link_to_dict(link: Link) -> dict[str, Any]:
    return {"text": link.text, "target": link.target, "line": link.line}


def lesson_to_dict(lesson: Lesson, root: Path) -> dict[str, Any]:
    footer = lesson.footer
    return {
        "path": _relative(lesson.path, root),
        "number": lesson.number,
        "slug": lesson.slug,
        "title": lesson.title,
        "source_course": lesson.source_course,
        "source_lesson": lesson.source_lesson,
        # YAML scalars like dates are exported as strings
        "front_matter": {str(key): str(value) for key, value in lesson.metadata.items()},
        "body_sections": lesson.body_sections,
        "code_examples": [
            {"language": block.language, "line": block.line, "lines": len(block.code.splitlines())}
            for block in lesson.code_examples
        ],
        "resources": [link_to_dict(link) for link in lesson.resources],
        "footer": footer[1] if footer else None,
    }


def section_to_dict(section: Section, root: Path) -> dict[str, Any]:
    return {
        "path": _relative(section.path, root),
        "number": section.number,
        "slug": section.slug,
        "title": section.title,
        "emoji": section.emoji,
        "description": section.description,
        "declared_lesson_count": (
            section.declared_lesson_count[0] if section.declared_lesson_count else None
        ),
        "practice_challenge_count": section.practice_challenge_count,
        "practice_challenges": [
            {"emoji": challenge.emoji, "text": challenge.text}
            for challenge in section.practice_challenges
        ],
        "call_to_action": [link.target for link in section.call_to_action_links],
        "lessons": [lesson_to_dict(lesson, root) for lesson in section.lessons],
    }


def course_to_dict(course: Course, root: Path) -> dict[str, Any]:
    return {
        "slug": course.slug,
        "tech": course.tech,
        "path": _relative(course.path, root),
        "title": course.title,
        "emoji": course.emoji,
        "description": course.description,
        "lesson_count": course.lesson_count,
        "declared_lesson_count": (
            course.declared_lesson_count[0] if course.declared_lesson_count else None
        ),
        "sections": [section_to_dict(section, root) for section in course.sections],
    }


def corpus_to_dict(corpus: Corpus) -> dict[str, Any]:
    return {
        "root": corpus.root.as_posix(),
        "courses": [course_to_dict(course, corpus.root) for course in corpus.courses],
    }


def code_languages(course: Course) -> Counter:
    """Count fenced code blocks per language; untagged blocks count as ''."""
    return Counter(block.language for lesson in course.lessons for block in lesson.code_examples)


def course_stats(course: Course) -> dict[str, Any]:
    languages = code_languages(course)
    return {
        "course": course.slug,
        "tech": course.tech,
        "title": course.title,
        "sections": len(course.sections),
        "lessons": course.lesson_count,
        "code_examples": sum(languages.values()),
        "practice_challenges": course.practice_challenge_count,
        "languages": dict(languages.most_common()),
    }
