import logging
from collections.abc import Iterator
from pathlib import Path

from courselint.core.corpus import Corpus
from courselint.core.utils.markdown_utils import Link
from courselint.infrastructure.config import ContentConfig
from courselint.infrastructure.utils.path_utils import path_exists
from courselint.lint.issues import LintIssue
from courselint.lint.rule import Rule, register

logger = logging.getLogger(__name__)


@register
class BrokenLinkRule(Rule):
    code = "CL004"
    name = "broken-link"
    default_severity = "error"
    description = "Relative links in READMEs and lessons point to existing files"

    def check(self, corpus: Corpus, config: ContentConfig) -> Iterator[LintIssue]:
        for course in corpus.courses:
            if course.readme:
                yield from self._check_links(course.readme_path, course.links)
            for section in course.sections:
                if section.readme:
                    yield from self._check_links(section.readme_path, section.readme.links)
                for lesson in section.lessons:
                    yield from self._check_links(lesson.path, lesson.links)

    def _check_links(self, path: Path, links: list[Link]) -> Iterator[LintIssue]:
        for link in links:
            target = link.resolve(path.parent)
            if target is None:
                continue
            if path_exists(target):
                continue
            kind = "Image" if link.is_image else "Link"
            logger.debug(f"{kind} target missing: {target}")
            yield self.issue(
                path,
                f"{kind} target does not exist: {link.target}",
                "Fix the path or add the missing file.",
                line=link.line,
                target=link.target,
                text=link.text,
            )
