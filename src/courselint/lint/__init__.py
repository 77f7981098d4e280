from courselint.lint.issues import LintIssue, LintSummary
from courselint.lint.linter import Linter
from courselint.lint.rule import Rule, all_rules, resolve_rule, select_rules

__all__ = [
    "LintIssue",
    "LintSummary",
    "Linter",
    "Rule",
    "all_rules",
    "resolve_rule",
    "select_rules",
]
