"""Data classes for lint reporting.

This module defines the records rules emit and the summary of a lint run.
"""

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Literal

Severity = Literal["error", "warning", "info"]

SEVERITY_RANK: dict[str, int] = {"info": 0, "warning": 1, "error": 2}


def severity_at_least(severity: str, threshold: str) -> bool:
    return SEVERITY_RANK[severity] >= SEVERITY_RANK[threshold]


@dataclass
class LintIssue:
    """A single rule violation.

    Attributes:
        rule: Rule code (e.g., 'CL004')
        category: Rule name (e.g., 'broken-link')
        severity: Issue severity
        file_path: File the issue was found in
        message: What is wrong
        actionable_guidance: Suggestion for how to fix it
        line: 1-based line number, if the issue has a position
        details: Additional data (e.g., expected and actual values)
    """

    rule: str
    category: str
    severity: Severity
    file_path: str
    message: str
    actionable_guidance: str = ""
    line: int | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def location(self) -> str:
        if self.line is not None:
            return f"{self.file_path}:{self.line}"
        return self.file_path

    def __str__(self) -> str:
        """Compiler-style one-line representation."""
        return f"{self.location}: {self.severity} {self.rule} [{self.category}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, json_str: str) -> "LintIssue":
        return cls(**json.loads(json_str))


@dataclass
class LintSummary:
    """Summary of a lint run.

    Attributes:
        root: Content root that was linted
        duration: Run duration in seconds
        courses: Number of courses found
        sections: Number of sections found
        lessons: Number of lesson files found
        files_checked: Lesson and README files read
        rules_run: Codes of the rules that ran
        issues: Issues found, ordered by file and line
    """

    root: Path
    duration: float = 0.0
    courses: int = 0
    sections: int = 0
    lessons: int = 0
    files_checked: int = 0
    rules_run: list[str] = field(default_factory=list)
    issues: list[LintIssue] = field(default_factory=list)
    start_time: datetime | None = None
    end_time: datetime | None = None

    def count(self, severity: Severity) -> int:
        return len([issue for issue in self.issues if issue.severity == severity])

    @property
    def errors(self) -> list[LintIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> list[LintIssue]:
        return [issue for issue in self.issues if issue.severity == "warning"]

    def has_errors(self) -> bool:
        return self.count("error") > 0

    def fails(self, fail_on: Severity = "error") -> bool:
        """True if any issue is at or above `fail_on`."""
        return any(severity_at_least(issue.severity, fail_on) for issue in self.issues)

    @property
    def files_with_issues(self) -> int:
        return len({issue.file_path for issue in self.issues})

    def __str__(self) -> str:
        status = "✗" if self.has_errors() else "✓"
        parts = [f"{status} Checked {self.files_checked} files in {self.duration:.1f}s"]
        parts.append(
            f"  {self.courses} courses, {self.sections} sections, {self.lessons} lessons"
        )
        parts.append(
            f"  {self.count('error')} errors, {self.count('warning')} warnings, "
            f"{self.count('info')} notes"
        )
        return "\n".join(parts)
