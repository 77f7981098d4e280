"""Tests for the configuration system."""

import tomllib
from pathlib import Path

import pytest

from courselint.core.errors import ConfigError
from courselint.infrastructure.config import (
    ContentConfig,
    CourseLintConfig,
    create_example_config,
    find_config_files,
    get_config,
    get_config_file_locations,
    write_example_config,
)


class TestConfigDefaults:
    """Test default configuration values."""

    def test_default_content(self):
        config = CourseLintConfig()
        assert config.content.readme_name == "README.md"
        assert config.content.lesson_suffix == ".md"
        assert config.content.platform_host == "stanza.dev"
        assert config.content.front_matter_keys == ["source_course", "source_lesson"]
        assert "Deep Dive" in config.content.required_sections
        assert config.content.skip_dirs == []

    def test_default_rules(self):
        config = CourseLintConfig()
        assert config.rules.select == []
        assert config.rules.ignore == []
        assert config.rules.severity == {}
        assert config.rules.fail_on == "error"

    def test_default_logging_and_output(self):
        config = CourseLintConfig()
        assert config.logging.log_level == "WARNING"
        assert config.logging.console_logging is False
        assert config.output.output_mode == "default"
        assert config.output.max_issues_shown == 20


class TestConfigValidation:
    def test_log_level_is_normalized(self):
        config = CourseLintConfig(logging={"log_level": "debug"})
        assert config.logging.log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValueError, match="Log level must be one of"):
            CourseLintConfig(logging={"log_level": "LOUD"})

    def test_invalid_footer_pattern(self):
        with pytest.raises(ValueError, match="Invalid footer pattern"):
            ContentConfig(footer_pattern="(unclosed")

    def test_invalid_severity(self):
        with pytest.raises(ValueError):
            CourseLintConfig(rules={"severity": {"CL004": "fatal"}})


class TestConfigSources:
    """Values from files and environment variables."""

    def test_environment_variable(self, monkeypatch):
        monkeypatch.setenv("COURSELINT_LOGGING__LOG_LEVEL", "INFO")
        monkeypatch.setenv("COURSELINT_CONTENT__PLATFORM_HOST", "learn.example.com")
        config = CourseLintConfig()
        assert config.logging.log_level == "INFO"
        assert config.content.platform_host == "learn.example.com"

    def test_project_config_file(self):
        Path("courselint.toml").write_text(
            '[rules]\nignore = ["CL012"]\nfail_on = "warning"\n', encoding="utf-8"
        )
        config = CourseLintConfig()
        assert config.rules.ignore == ["CL012"]
        assert config.rules.fail_on == "warning"

    def test_dot_dir_config_takes_precedence(self):
        Path("courselint.toml").write_text('[output]\noutput_mode = "quiet"\n', encoding="utf-8")
        Path(".courselint").mkdir()
        Path(".courselint/config.toml").write_text(
            '[output]\noutput_mode = "json"\n', encoding="utf-8"
        )
        assert CourseLintConfig().output.output_mode == "json"

    def test_environment_overrides_file(self, monkeypatch):
        Path("courselint.toml").write_text('[output]\noutput_mode = "quiet"\n', encoding="utf-8")
        monkeypatch.setenv("COURSELINT_OUTPUT__OUTPUT_MODE", "verbose")
        assert CourseLintConfig().output.output_mode == "verbose"

    def test_project_overrides_user(self):
        user_config = get_config_file_locations()["user"]
        user_config.parent.mkdir(parents=True)
        user_config.write_text(
            '[content]\nplatform_host = "user.example.com"\nreadme_name = "INDEX.md"\n',
            encoding="utf-8",
        )
        Path("courselint.toml").write_text(
            '[content]\nplatform_host = "project.example.com"\n', encoding="utf-8"
        )
        config = CourseLintConfig()
        assert config.content.platform_host == "project.example.com"
        assert config.content.readme_name == "INDEX.md"

    def test_init_arguments_override_everything(self, monkeypatch):
        monkeypatch.setenv("COURSELINT_RULES__FAIL_ON", "warning")
        assert CourseLintConfig(rules={"fail_on": "info"}).rules.fail_on == "info"


class TestFindConfigFiles:
    def test_no_files(self):
        files = find_config_files()
        assert files["user"] is None
        assert files["project"] is None

    def test_project_file(self):
        Path("courselint.toml").write_text("", encoding="utf-8")
        assert find_config_files()["project"] == Path.cwd() / "courselint.toml"

    def test_locations(self):
        locations = get_config_file_locations()
        assert locations["system"] == Path("/etc/courselint/config.toml")
        assert locations["project"] == Path.cwd() / ".courselint" / "config.toml"
        assert locations["user"].name == "config.toml"


class TestGetConfig:
    def test_is_cached(self):
        assert get_config() is get_config()

    def test_reload(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("COURSELINT_RULES__FAIL_ON", "info")
        assert get_config() is first
        assert get_config(reload=True).rules.fail_on == "info"

    def test_invalid_value_raises_config_error(self, monkeypatch):
        monkeypatch.setenv("COURSELINT_OUTPUT__MAX_ISSUES_SHOWN", "0")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            get_config(reload=True)

    def test_invalid_toml_raises_config_error(self):
        Path("courselint.toml").write_text("[rules\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            get_config(reload=True)


class TestExampleConfig:
    def test_example_is_valid_toml_matching_defaults(self):
        data = tomllib.loads(create_example_config())
        defaults = CourseLintConfig()
        assert data["content"]["required_sections"] == defaults.content.required_sections
        assert data["content"]["footer_pattern"] == defaults.content.footer_pattern
        assert data["rules"]["fail_on"] == defaults.rules.fail_on
        assert data["output"]["max_issues_shown"] == defaults.output.max_issues_shown

    def test_example_loads_as_project_config(self):
        Path("courselint.toml").write_text(create_example_config(), encoding="utf-8")
        config = CourseLintConfig()
        assert config.content == ContentConfig()
        assert config.rules.severity == {}

    def test_write_example_config(self):
        path = write_example_config("project")
        assert path == Path.cwd() / ".courselint" / "config.toml"
        assert path.read_text(encoding="utf-8") == create_example_config()

    def test_write_example_config_invalid_location(self):
        with pytest.raises(ValueError, match="Invalid location"):
            write_example_config("nowhere")
