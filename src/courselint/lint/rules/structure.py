import re
from collections.abc import Iterator

from courselint.core.corpus import Corpus
from courselint.core.utils.text_utils import is_kebab_slug
from courselint.infrastructure.config import ContentConfig
from courselint.infrastructure.utils.path_utils import parse_ordered_name
from courselint.lint.issues import LintIssue
from courselint.lint.rule import Rule, register

# A challenge bullet like "🧩 3 quizzes" stands for several challenges
_COUNTED_BULLET_REGEX = re.compile(r"^\d+\s")


@register
class MissingReadmeRule(Rule):
    code = "CL009"
    name = "missing-readme"
    default_severity = "error"
    description = "Every section directory has a README; a missing course README is a warning"

    def check(self, corpus: Corpus, config: ContentConfig) -> Iterator[LintIssue]:
        for course in corpus.courses:
            if not course.readme_path.is_file():
                yield self.issue(
                    course.path,
                    f"Course has no {config.readme_name}",
                    f"Add a {config.readme_name} with the course title and section list.",
                    severity="warning",
                )
            for section in course.sections:
                if not section.readme_path.is_file():
                    yield self.issue(
                        section.path,
                        f"Section has no {config.readme_name}",
                        f"Add a {config.readme_name} with the section title, lesson list "
                        "and practice challenges.",
                    )


@register
class PracticeChallengesRule(Rule):
    code = "CL011"
    name = "practice-challenges"
    default_severity = "warning"
    description = "Section READMEs list their practice challenges and declare a matching count"

    def check(self, corpus: Corpus, config: ContentConfig) -> Iterator[LintIssue]:
        for section in corpus.sections:
            if section.readme is None:
                continue
            challenges = section.practice_challenges
            if not challenges:
                yield self.issue(
                    section.readme_path,
                    "README lists no practice challenges",
                    "Add a 'Practice Challenges' heading followed by one bullet per "
                    "challenge type.",
                )
                continue
            declared = section.declared_challenge_count
            if declared is None:
                continue
            if any(_COUNTED_BULLET_REGEX.match(challenge.text) for challenge in challenges):
                continue
            count, line = declared
            if count != len(challenges):
                yield self.issue(
                    section.readme_path,
                    f"README declares {count} practice challenges but lists {len(challenges)}",
                    "Update the declared count or the challenge list.",
                    line=line,
                    declared=count,
                    actual=len(challenges),
                )


@register
class PathConventionRule(Rule):
    code = "CL014"
    name = "path-convention"
    default_severity = "warning"
    description = "Section directories and lesson files are named <number>-<kebab-slug>"

    def check(self, corpus: Corpus, config: ContentConfig) -> Iterator[LintIssue]:
        for course in corpus.courses:
            for section in course.sections:
                if not is_kebab_slug(section.slug):
                    yield self.issue(
                        section.path,
                        f"Section slug '{section.slug}' is not lowercase kebab-case",
                        "Rename the directory to '<number>-<words-joined-by-dashes>'.",
                        slug=section.slug,
                    )
                for lesson in section.lessons:
                    number, slug = parse_ordered_name(lesson.path.name, config.lesson_suffix)
                    if number is None:
                        yield self.issue(
                            lesson.path,
                            "Lesson file name has no number prefix",
                            "Rename the file to '<number>-<slug>"
                            f"{config.lesson_suffix}', e.g. '01-{slug.lower()}"
                            f"{config.lesson_suffix}'.",
                        )
                    elif not is_kebab_slug(slug):
                        yield self.issue(
                            lesson.path,
                            f"Lesson slug '{slug}' is not lowercase kebab-case",
                            "Use lowercase words joined by dashes.",
                            slug=slug,
                        )


@register
class MissingCallToActionRule(Rule):
    code = "CL015"
    name = "missing-call-to-action"
    default_severity = "warning"
    description = "Section READMEs link to the learning platform"

    def check(self, corpus: Corpus, config: ContentConfig) -> Iterator[LintIssue]:
        for section in corpus.sections:
            if section.readme is None:
                continue
            if not section.call_to_action_links:
                yield self.issue(
                    section.readme_path,
                    f"README has no link to {config.platform_host}",
                    f"Add a call-to-action link to https://{config.platform_host}/.",
                    host=config.platform_host,
                )


@register
class UnreadableFileRule(Rule):
    code = "CL016"
    name = "unreadable-file"
    default_severity = "error"
    description = "Lesson and README files can be read as UTF-8"

    def check(self, corpus: Corpus, config: ContentConfig) -> Iterator[LintIssue]:
        for course in corpus.courses:
            if course.readme_error:
                yield self._unreadable(course.readme_path, course.readme_error)
            for section in course.sections:
                if section.readme_error:
                    yield self._unreadable(section.readme_path, section.readme_error)
                for lesson in section.lessons:
                    if lesson.read_error:
                        yield self._unreadable(lesson.path, lesson.read_error)

    def _unreadable(self, path, reason: str) -> LintIssue:
        return self.issue(
            path,
            f"File {reason}",
            "Save the file as UTF-8.",
            reason=reason,
        )
