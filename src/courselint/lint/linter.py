"""Run lint rules over a content tree.

The `Linter` loads the content model, runs the selected rules, applies
severity overrides and returns a `LintSummary` with the issues ordered by
file and line.
"""

import logging
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from time import time

from courselint.core.corpus import Corpus
from courselint.infrastructure.config import CourseLintConfig, RulesConfig
from courselint.lint.issues import LintIssue, LintSummary
from courselint.lint.rule import Rule, resolve_rule, select_rules

logger = logging.getLogger(__name__)


def issue_sort_key(issue: LintIssue) -> tuple:
    return issue.file_path, issue.line or 0, issue.rule


def resolve_severity_overrides(severity: dict[str, str]) -> dict[str, str]:
    """Map rule identifiers in `severity` to rule codes."""
    return {resolve_rule(identifier).code: level for identifier, level in severity.items()}


class Linter:
    def __init__(
        self,
        config: CourseLintConfig | None = None,
        select: Iterable[str] | None = None,
        ignore: Iterable[str] | None = None,
    ):
        """Create a linter.

        Args:
            config: Configuration; defaults to `CourseLintConfig()`
            select: Rules to run instead of `config.rules.select`
            ignore: Rules to skip in addition to `config.rules.ignore`
        """
        self.config = config or CourseLintConfig()
        rules_config: RulesConfig = self.config.rules
        select = list(select) if select else rules_config.select
        ignore = [*rules_config.ignore, *(ignore or ())]
        self.rules: list[type[Rule]] = select_rules(select, ignore)
        self.severity_overrides = resolve_severity_overrides(rules_config.severity)

    def load(self, root: Path) -> Corpus:
        return Corpus.from_dir(root, self.config.content)

    def check(self, corpus: Corpus) -> list[LintIssue]:
        issues = []
        for rule_cls in self.rules:
            rule = rule_cls()
            rule_issues = list(rule.check(corpus, self.config.content))
            logger.debug(f"{rule.code} ({rule.name}): {len(rule_issues)} issue(s)")
            override = self.severity_overrides.get(rule.code)
            if override:
                for issue in rule_issues:
                    issue.severity = override
            issues.extend(rule_issues)
        return sorted(issues, key=issue_sort_key)

    def run(self, root: Path) -> LintSummary:
        start_time = datetime.now()
        started = time()
        logger.info(f"Linting {root} with {len(self.rules)} rule(s)")

        corpus = self.load(root)
        issues = self.check(corpus)

        summary = LintSummary(
            root=corpus.root,
            duration=time() - started,
            courses=len(corpus.courses),
            sections=len(corpus.sections),
            lessons=len(corpus.lessons),
            files_checked=corpus.file_count,
            rules_run=[rule.code for rule in self.rules],
            issues=issues,
            start_time=start_time,
            end_time=datetime.now(),
        )
        logger.info(
            f"Lint finished: {summary.count('error')} errors, "
            f"{summary.count('warning')} warnings, {summary.count('info')} notes"
        )
        return summary
