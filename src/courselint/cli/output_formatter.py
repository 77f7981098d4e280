"""Output formatting for lint reports.

This module provides output formatters for displaying lint results in
different modes (default, verbose, quiet, json).
"""

import json
import sys
from abc import ABC, abstractmethod
from collections import defaultdict
from enum import Enum
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from courselint.cli.text_utils import format_issue_path
from courselint.infrastructure.logging.log_paths import find_log_dir
from courselint.lint.issues import LintIssue, LintSummary

SEVERITY_STYLES = {
    "error": ("✗", "red"),
    "warning": ("⚠", "yellow"),
    "info": ("ℹ", "blue"),
}


class OutputMode(Enum):
    """Output mode for lint reporting."""

    DEFAULT = "default"
    VERBOSE = "verbose"
    QUIET = "quiet"
    JSON = "json"


class OutputFormatter(ABC):
    """Abstract base class for output formatting."""

    @abstractmethod
    def show_lint_start(self, root: Path, num_rules: int) -> None:
        """Display lint initialization.

        Args:
            root: Content root being linted
            num_rules: Number of rules that will run
        """
        pass

    @abstractmethod
    def should_show_issue(self, issue: LintIssue) -> bool:
        """Determine if an issue should be displayed as it is reported.

        Args:
            issue: Lint issue

        Returns:
            True if the issue should be shown immediately
        """
        pass

    @abstractmethod
    def show_issue(self, issue: LintIssue) -> None:
        """Display an issue.

        Args:
            issue: Lint issue to display
        """
        pass

    @abstractmethod
    def show_summary(self, summary: LintSummary) -> None:
        """Display the final lint summary.

        Args:
            summary: Lint summary data
        """
        pass

    def report(self, summary: LintSummary) -> None:
        """Show the issues the formatter displays immediately, then the summary."""
        for issue in summary.issues:
            if self.should_show_issue(issue):
                self.show_issue(issue)
        self.show_summary(summary)


class DefaultOutputFormatter(OutputFormatter):
    """Default human-readable output: a summary with the first issues per file."""

    def __init__(self, use_color: bool = True, max_issues_shown: int = 20):
        """Initialize formatter.

        Args:
            use_color: Whether to use colored output
            max_issues_shown: Issues listed in the summary before truncating
        """
        self.use_color = use_color
        self.max_issues_shown = max_issues_shown
        self.console = Console(file=sys.stderr, no_color=not use_color, soft_wrap=True)

    def show_lint_start(self, root: Path, num_rules: int) -> None:
        self.console.print(f"\n[bold]Linting:[/bold] {escape(str(root))}", style="cyan")
        self.console.print(f"Rules: {num_rules}\n")

    def should_show_issue(self, issue: LintIssue) -> bool:
        return False

    def show_issue(self, issue: LintIssue) -> None:
        symbol, color = SEVERITY_STYLES[issue.severity]
        location = format_issue_path(issue.file_path, issue.line)
        self.console.print(
            f"[{color}]{symbol} {escape(location)}[/{color}] "
            f"[dim]{issue.rule}[/dim] {escape(issue.message)}"
        )

    def _show_status(self, summary: LintSummary) -> None:
        if summary.has_errors():
            status_symbol, status_color, status_text = "✗", "red", "with errors"
        elif summary.issues:
            status_symbol, status_color, status_text = "⚠", "yellow", "with warnings"
        else:
            status_symbol, status_color, status_text = "✓", "green", "cleanly"

        self.console.print(
            f"\n[bold {status_color}]{status_symbol} Lint completed {status_text}"
            f"[/bold {status_color}] in {summary.duration:.1f}s\n"
        )
        self.console.print("[bold]Summary:[/bold]")
        self.console.print(
            f"  {summary.courses} courses, {summary.sections} sections, "
            f"{summary.lessons} lessons ({summary.files_checked} files checked)"
        )
        self.console.print(f"  [red]{summary.count('error')} errors[/red]")
        self.console.print(f"  [yellow]{summary.count('warning')} warnings[/yellow]")
        self.console.print(f"  [blue]{summary.count('info')} notes[/blue]")

    def _show_log_hint(self, summary: LintSummary) -> None:
        log_dir = find_log_dir()
        if summary.issues and log_dir is not None:
            self.console.print(f"\n[dim]Full logs available in: {escape(str(log_dir))}[/dim]")

    def show_summary(self, summary: LintSummary) -> None:
        self._show_status(summary)

        if summary.issues:
            self.console.print("\n[bold]Issues:[/bold]")
            by_file: dict[str, list[LintIssue]] = defaultdict(list)
            for issue in summary.issues[: self.max_issues_shown]:
                by_file[issue.file_path].append(issue)
            for file_path, issues in by_file.items():
                self.console.print(f"  [bold]{escape(format_issue_path(file_path))}[/bold]")
                for issue in issues:
                    _, color = SEVERITY_STYLES[issue.severity]
                    line = f"{issue.line}: " if issue.line is not None else ""
                    self.console.print(
                        f"    [{color}]{line}{issue.rule}[/{color}] {escape(issue.message)}"
                    )

            hidden = len(summary.issues) - self.max_issues_shown
            if hidden > 0:
                self.console.print(f"  ... and {hidden} more issues")
                self.console.print(
                    "\nRun with [bold]--output-mode verbose[/bold] to see every issue"
                )

        self._show_log_hint(summary)


class VerboseOutputFormatter(DefaultOutputFormatter):
    """Verbose output showing every issue with its guidance."""

    def should_show_issue(self, issue: LintIssue) -> bool:
        """Always show issues in verbose mode."""
        return True

    def show_issue(self, issue: LintIssue) -> None:
        symbol, color = SEVERITY_STYLES[issue.severity]
        location = format_issue_path(issue.file_path, issue.line)
        label = escape(f"[{issue.severity.title()} {issue.rule} - {issue.category}]")
        self.console.print(f"\n[bold {color}]{symbol} {label}[/bold {color}]")
        self.console.print(f"  File: {escape(location)}")
        self.console.print(f"  Problem: {escape(issue.message)}")
        if issue.actionable_guidance:
            self.console.print(f"  [bold]Action:[/bold] {escape(issue.actionable_guidance)}")

    def show_summary(self, summary: LintSummary) -> None:
        self._show_status(summary)
        self.console.print(f"  Rules run: {', '.join(summary.rules_run)}")
        self._show_log_hint(summary)


class QuietOutputFormatter(OutputFormatter):
    """Minimal output, only errors and a one-line result."""

    def __init__(self):
        self.console = Console(file=sys.stderr, soft_wrap=True, highlight=False)
        self.errors_shown = 0

    def show_lint_start(self, root: Path, num_rules: int) -> None:
        """Silent in quiet mode."""
        pass

    def should_show_issue(self, issue: LintIssue) -> bool:
        return issue.severity == "error"

    def show_issue(self, issue: LintIssue) -> None:
        location = format_issue_path(issue.file_path, issue.line)
        self.console.print(
            f"ERROR: {escape(location)}: {issue.rule} {escape(issue.message)}", style="red"
        )
        self.errors_shown += 1

    def show_summary(self, summary: LintSummary) -> None:
        if summary.has_errors():
            self.console.print(
                f"\nLint failed with {summary.count('error')} errors in {summary.duration:.1f}s",
                style="red bold",
            )
        else:
            self.console.print(
                f"\nLint passed with {len(summary.issues)} non-error issues "
                f"in {summary.duration:.1f}s",
                style="green bold",
            )


class JSONOutputFormatter(OutputFormatter):
    """Machine-readable JSON output for CI integration."""

    def __init__(self):
        self.output_data: dict[str, Any] = {"status": "in_progress", "issues": []}

    def show_lint_start(self, root: Path, num_rules: int) -> None:
        """Record lint start (silent in JSON mode)."""
        self.output_data["root"] = str(root)
        self.output_data["num_rules"] = num_rules

    def should_show_issue(self, issue: LintIssue) -> bool:
        """Never show issues immediately in JSON mode."""
        return False

    def show_issue(self, issue: LintIssue) -> None:
        """Silent in JSON mode (issues collected in summary)."""
        pass

    def show_summary(self, summary: LintSummary) -> None:
        """Output final JSON to stdout."""
        self.output_data["status"] = "failed" if summary.has_errors() else "success"
        self.output_data["root"] = str(summary.root)
        self.output_data["duration_seconds"] = summary.duration
        self.output_data["courses"] = summary.courses
        self.output_data["sections"] = summary.sections
        self.output_data["lessons"] = summary.lessons
        self.output_data["files_checked"] = summary.files_checked
        self.output_data["rules_run"] = summary.rules_run
        self.output_data["issues"] = [issue.to_dict() for issue in summary.issues]

        self.output_data["error_count"] = summary.count("error")
        self.output_data["warning_count"] = summary.count("warning")
        self.output_data["info_count"] = summary.count("info")

        if summary.start_time:
            self.output_data["start_time"] = summary.start_time.isoformat()
        if summary.end_time:
            self.output_data["end_time"] = summary.end_time.isoformat()

        log_dir = find_log_dir()
        self.output_data["log_directory"] = str(log_dir) if log_dir else None

        print(json.dumps(self.output_data, indent=2))


def create_output_formatter(
    output_mode: str, use_color: bool = True, max_issues_shown: int = 20
) -> OutputFormatter:
    """Create the output formatter for `output_mode`."""
    output_mode = output_mode.lower()

    if output_mode == OutputMode.JSON.value:
        return JSONOutputFormatter()
    elif output_mode == OutputMode.QUIET.value:
        return QuietOutputFormatter()
    elif output_mode == OutputMode.VERBOSE.value:
        return VerboseOutputFormatter(use_color=use_color, max_issues_shown=max_issues_shown)
    else:  # default
        return DefaultOutputFormatter(use_color=use_color, max_issues_shown=max_issues_shown)
