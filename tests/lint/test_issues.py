from pathlib import Path

from courselint.lint.issues import LintIssue, LintSummary, severity_at_least


def make_issue(severity="error", line=3, **kwargs):
    return LintIssue(
        rule="CL004",
        category="broken-link",
        severity=severity,
        file_path="course/01-intro/README.md",
        message="Link target does not exist: 02-next.md",
        actionable_guidance="Fix the path or add the missing file.",
        line=line,
        **kwargs,
    )


class TestLintIssue:
    def test_str_is_compiler_style(self):
        assert str(make_issue()) == (
            "course/01-intro/README.md:3: error CL004 [broken-link] "
            "Link target does not exist: 02-next.md"
        )

    def test_location_without_line(self):
        assert make_issue(line=None).location == "course/01-intro/README.md"

    def test_json_round_trip(self):
        issue = make_issue(details={"target": "02-next.md"})
        assert LintIssue.from_json(issue.to_json()) == issue


class TestLintSummary:
    def test_fails_threshold(self):
        summary = LintSummary(root=Path("."), issues=[make_issue("warning")])
        assert not summary.fails("error")
        assert summary.fails("warning")
        assert summary.fails("info")

    def test_no_issues_never_fails(self):
        summary = LintSummary(root=Path("."))
        assert not summary.fails("info")
        assert summary.files_with_issues == 0

    def test_error_and_warning_lists(self):
        summary = LintSummary(
            root=Path("."), issues=[make_issue("error"), make_issue("warning"), make_issue("info")]
        )
        assert len(summary.errors) == 1
        assert len(summary.warnings) == 1
        assert summary.count("info") == 1

    def test_str(self):
        summary = LintSummary(root=Path("."), files_checked=6, issues=[make_issue()])
        text = str(summary)
        assert "Checked 6 files" in text
        assert "1 errors, 0 warnings, 0 notes" in text


def test_severity_at_least():
    assert severity_at_least("error", "warning")
    assert severity_at_least("warning", "warning")
    assert not severity_at_least("info", "warning")
