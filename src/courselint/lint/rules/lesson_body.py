import re
from collections.abc import Iterator

from courselint.core.corpus import Corpus
from courselint.core.utils.text_utils import normalize_heading
from courselint.infrastructure.config import ContentConfig
from courselint.lint.issues import LintIssue
from courselint.lint.rule import Rule, register


@register
class MissingFooterRule(Rule):
    code = "CL006"
    name = "missing-footer"
    default_severity = "error"
    description = "Lesson ends with the attribution footer line"

    def check(self, corpus: Corpus, config: ContentConfig) -> Iterator[LintIssue]:
        pattern = re.compile(config.footer_pattern)
        for lesson in corpus.lessons:
            if lesson.read_error:
                continue
            footer = lesson.footer
            if footer is None:
                yield self.issue(
                    lesson.path,
                    "Lesson is empty and has no footer",
                    "Add the lesson content and end it with the attribution footer.",
                )
                continue
            line_no, text = footer
            if not pattern.search(text):
                yield self.issue(
                    lesson.path,
                    "Lesson does not end with the attribution footer",
                    f"End the lesson with a line matching {config.footer_pattern!r}.",
                    line=line_no,
                    last_line=text,
                )


@register
class MissingBodySectionRule(Rule):
    code = "CL010"
    name = "missing-body-section"
    default_severity = "warning"
    description = "Lesson has every required prose section heading"

    def check(self, corpus: Corpus, config: ContentConfig) -> Iterator[LintIssue]:
        required = [(title, normalize_heading(title)) for title in config.required_sections]
        for lesson in corpus.lessons:
            if lesson.read_error:
                continue
            present = set(lesson.body_sections)
            missing = [title for title, key in required if key not in present]
            if missing:
                yield self.issue(
                    lesson.path,
                    "Lesson is missing section(s): " + ", ".join(missing),
                    "Add a '## <title>' heading for each missing section.",
                    missing=missing,
                )


@register
class UntaggedCodeBlockRule(Rule):
    code = "CL012"
    name = "untagged-code-block"
    default_severity = "info"
    description = "Fenced code blocks name their language"

    def check(self, corpus: Corpus, config: ContentConfig) -> Iterator[LintIssue]:
        for lesson in corpus.lessons:
            for block in lesson.code_examples:
                if not block.language:
                    yield self.issue(
                        lesson.path,
                        "Code block has no language tag",
                        "Add the language after the opening fence, e.g. ```python.",
                        line=block.line,
                    )


@register
class UnclosedCodeFenceRule(Rule):
    code = "CL013"
    name = "unclosed-code-fence"
    default_severity = "error"
    description = "Every fenced code block is closed"

    def check(self, corpus: Corpus, config: ContentConfig) -> Iterator[LintIssue]:
        for lesson in corpus.lessons:
            if lesson.unclosed_fence_line is not None:
                yield self.issue(
                    lesson.path,
                    "Code block is never closed",
                    "Add the closing fence; the rest of the file is treated as code.",
                    line=lesson.unclosed_fence_line,
                )
