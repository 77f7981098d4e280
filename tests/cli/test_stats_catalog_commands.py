"""Tests for the stats, catalog and rules commands."""

import json

import pytest
import yaml
from click.testing import CliRunner

from content_fixtures import lesson_text
from courselint.cli.commands.catalog import dump_catalog
from courselint.cli.commands.stats import format_languages
from courselint.cli.main import cli


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    # Keep rich from wrapping table cells
    monkeypatch.setenv("COLUMNS", "200")


class TestStatsCommand:
    def test_json(self, content_root):
        result = CliRunner().invoke(cli, ["stats", str(content_root), "--format", "json"])
        assert result.exit_code == 0
        (row,) = json.loads(result.stdout)
        assert row["course"] == "react-hooks-deep-dive"
        assert row["tech"] == "react"
        assert row["sections"] == 2
        assert row["lessons"] == 3
        assert row["code_examples"] == 3
        assert row["practice_challenges"] == 4
        assert row["languages"] == {"jsx": 2, "tsx": 1}

    def test_table_with_total_row(self, content_root):
        other = content_root / "go" / "go-basics" / "01-intro"
        other.mkdir(parents=True)
        (other / "01-hello.md").write_text(
            lesson_text("Hello", "hello", source_course="go-basics", language="go"),
            encoding="utf-8",
        )
        result = CliRunner().invoke(cli, ["stats", str(content_root)])
        assert result.exit_code == 0
        assert "react/react-hooks-deep-dive" in result.stdout
        assert "go/go-basics" in result.stdout
        assert "Total" in result.stdout

    def test_missing_path(self, tmp_path):
        result = CliRunner().invoke(cli, ["stats", str(tmp_path / "nope")])
        assert result.exit_code == 2


def test_format_languages():
    assert format_languages({"jsx": 2, "": 1}) == "jsx 2, (none) 1"
    languages = {f"lang{n}": 1 for n in range(7)}
    assert format_languages(languages, limit=5).endswith("lang4 1, +2 more")


class TestCatalogCommand:
    def test_json_to_stdout(self, content_root):
        result = CliRunner().invoke(cli, ["catalog", str(content_root)])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["root"] == str(content_root.resolve())
        (course,) = data["courses"]
        assert [section["slug"] for section in course["sections"]] == [
            "hooks-fundamentals",
            "advanced-hooks",
        ]

    def test_yaml_to_file(self, content_root, tmp_path):
        output = tmp_path / "catalog.yaml"
        result = CliRunner().invoke(
            cli, ["catalog", str(content_root), "--format", "yaml", "-o", str(output)]
        )
        assert result.exit_code == 0
        assert f"Written: {output}" in result.output
        data = yaml.safe_load(output.read_text(encoding="utf-8"))
        lesson = data["courses"][0]["sections"][1]["lessons"][0]
        assert lesson["source_lesson"] == "use-reducer"
        assert lesson["code_examples"][0]["language"] == "tsx"

    def test_yaml_keeps_emoji_and_key_order(self):
        text = dump_catalog({"title": "\u269b\ufe0f React", "a": 1}, "yaml")
        assert "\u269b\ufe0f React" in text
        assert list(yaml.safe_load(text)) == ["title", "a"]


class TestRulesCommand:
    def test_json(self):
        result = CliRunner().invoke(cli, ["rules", "--format", "json"])
        assert result.exit_code == 0
        rules = json.loads(result.stdout)
        assert len(rules) == 16
        assert rules[3] == {
            "code": "CL004",
            "name": "broken-link",
            "severity": "error",
            "description": "Relative links in READMEs and lessons point to existing files",
        }

    def test_table(self):
        result = CliRunner().invoke(cli, ["rules"])
        assert result.exit_code == 0
        assert "Lint Rules" in result.stdout
        assert "unclosed-code-fence" in result.stdout


def test_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "courselint, version 0.1.0" in result.output
