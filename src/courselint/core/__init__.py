"""The course content model.

The model mirrors the content tree: a corpus holds courses, a course holds
numbered sections, and a section holds lesson files. Loading never fails on
authoring mistakes; parse problems are recorded on the model objects so the
lint rules can report them.
"""

from courselint.core.corpus import Corpus
from courselint.core.course import Course
from courselint.core.errors import (
    ConfigError,
    ContentRootError,
    CourseLintError,
    RuleSelectionError,
)
from courselint.core.lesson import Lesson
from courselint.core.section import PracticeChallenge, Readme, Section

__all__ = [
    "ConfigError",
    "ContentRootError",
    "Corpus",
    "Course",
    "CourseLintError",
    "Lesson",
    "PracticeChallenge",
    "Readme",
    "RuleSelectionError",
    "Section",
]
