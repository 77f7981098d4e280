import pytest

from content_fixtures import lesson_text
from courselint.core.errors import ContentRootError, RuleSelectionError
from courselint.infrastructure.config import CourseLintConfig, RulesConfig
from courselint.lint.issues import LintIssue
from courselint.lint.linter import Linter, issue_sort_key


def break_course(course_dir):
    """Introduce one error, one warning and one note."""
    hooks = course_dir / "01-hooks-fundamentals"
    (hooks / "01-use-state-basics.md").write_text(
        lesson_text("T", "use-state-basics", footer="The end."), encoding="utf-8"
    )
    (hooks / "02-use-effect-basics.md").write_text(
        lesson_text("T", "use-effect-basics", language="", headings=["Summary", "Code Examples"]),
        encoding="utf-8",
    )


class TestLinter:
    def test_valid_course_has_no_issues(self, content_root):
        summary = Linter().run(content_root)
        assert summary.issues == []
        assert not summary.has_errors()
        assert summary.courses == 1
        assert summary.sections == 2
        assert summary.lessons == 3
        assert summary.files_checked == 6
        assert len(summary.rules_run) == 16
        assert summary.root == content_root.resolve()
        assert summary.start_time <= summary.end_time

    def test_counts_by_severity(self, content_root, course_dir):
        break_course(course_dir)
        summary = Linter().run(content_root)
        assert summary.count("error") == 1
        assert summary.count("warning") == 1
        assert summary.count("info") == 1
        assert summary.fails("error")
        assert summary.files_with_issues == 2

    def test_issues_are_sorted(self, content_root, course_dir):
        break_course(course_dir)
        issues = Linter().run(content_root).issues
        assert issues == sorted(issues, key=issue_sort_key)
        assert [issue.rule for issue in issues] == ["CL006", "CL010", "CL012"]

    def test_severity_override_by_name(self, content_root, course_dir):
        break_course(course_dir)
        config = CourseLintConfig(rules=RulesConfig(severity={"missing-footer": "info"}))
        summary = Linter(config).run(content_root)
        assert summary.count("error") == 0
        assert summary.count("info") == 2

    def test_config_select_and_cli_ignore(self, content_root, course_dir):
        break_course(course_dir)
        config = CourseLintConfig(rules=RulesConfig(select=["CL006", "CL012"]))
        summary = Linter(config, ignore=["CL006"]).run(content_root)
        assert summary.rules_run == ["CL012"]
        assert [issue.rule for issue in summary.issues] == ["CL012"]

    def test_cli_select_replaces_config_select(self, content_root):
        config = CourseLintConfig(rules=RulesConfig(select=["CL006"]))
        assert Linter(config, select=["CL004"]).run(content_root).rules_run == ["CL004"]

    def test_config_ignore_applies(self, content_root):
        config = CourseLintConfig(rules=RulesConfig(ignore=["CL012"]))
        assert "CL012" not in Linter(config).run(content_root).rules_run

    def test_unknown_override_rule(self):
        config = CourseLintConfig(rules=RulesConfig(severity={"CL999": "info"}))
        with pytest.raises(RuleSelectionError):
            Linter(config)

    def test_missing_root(self, tmp_path):
        with pytest.raises(ContentRootError):
            Linter().run(tmp_path / "nope")


def test_sort_key_puts_file_level_issues_first():
    issues = [
        LintIssue("CL006", "missing-footer", "error", "b.md", "m", line=4),
        LintIssue("CL010", "missing-body-section", "warning", "b.md", "m"),
        LintIssue("CL004", "broken-link", "error", "a.md", "m", line=9),
    ]
    assert [issue.rule for issue in sorted(issues, key=issue_sort_key)] == [
        "CL004",
        "CL010",
        "CL006",
    ]
