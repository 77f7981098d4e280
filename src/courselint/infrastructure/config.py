"""Configuration management for courselint.

This module provides a unified configuration system that supports:
- Configuration files in TOML format
- Environment variables
- Multiple configuration file locations (project, user, system)
- Type-safe configuration using Pydantic

Configuration Priority (highest to lowest):
1. Environment variables
2. Project configuration file (.courselint/config.toml or courselint.toml)
3. User configuration file (~/.config/courselint/config.toml)
4. System configuration file (/etc/courselint/config.toml)
5. Default values

Environment Variable Naming:
- Nested fields: COURSELINT_<SECTION>__<FIELD> (e.g., COURSELINT_LOGGING__LOG_LEVEL)
"""

import logging
import re
import tomllib
from pathlib import Path
from typing import Literal

import platformdirs
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

logger = logging.getLogger(__name__)

APP_NAME = "courselint"

Severity = Literal["error", "warning", "info"]

DEFAULT_REQUIRED_SECTIONS = [
    "Introduction",
    "Key Concepts",
    "Real World Context",
    "Deep Dive",
    "Common Pitfalls",
    "Best Practices",
    "Summary",
    "Code Examples",
    "Resources",
]


class ContentConfig(BaseModel):
    """Conventions of the course content tree."""

    readme_name: str = Field(
        default="README.md",
        description="File name of course and section index files",
    )

    lesson_suffix: str = Field(
        default=".md",
        description="File suffix of lesson files",
    )

    required_sections: list[str] = Field(
        default_factory=lambda: list(DEFAULT_REQUIRED_SECTIONS),
        description="Prose section headings every lesson should contain",
    )

    footer_pattern: str = Field(
        default=r"(?i)\bstanza\b",
        description="Regular expression the last line of a lesson must match",
    )

    platform_host: str = Field(
        default="stanza.dev",
        description="Host of the learning platform section READMEs link to",
    )

    front_matter_keys: list[str] = Field(
        default_factory=lambda: ["source_course", "source_lesson"],
        description="Front matter keys every lesson must define",
    )

    skip_dirs: list[str] = Field(
        default_factory=list,
        description="Additional directory names to skip during discovery",
    )

    @field_validator("footer_pattern")
    @classmethod
    def validate_footer_pattern(cls, v: str) -> str:
        """Validate that the footer pattern compiles."""
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid footer pattern {v!r}: {e}") from e
        return v


class RulesConfig(BaseModel):
    """Rule selection configuration."""

    select: list[str] = Field(
        default_factory=list,
        description="Only run these rules (codes or names); empty means all",
    )

    ignore: list[str] = Field(
        default_factory=list,
        description="Never run these rules (codes or names)",
    )

    severity: dict[str, Severity] = Field(
        default_factory=dict,
        description="Per-rule severity overrides, e.g. {CL012 = 'warning'}",
    )

    fail_on: Severity = Field(
        default="error",
        description="Lowest severity that makes 'courselint lint' fail",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    console_logging: bool = Field(
        default=False,
        description="Also log to the console",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}, got {v}")
        return v_upper


class OutputConfig(BaseModel):
    """Report output configuration."""

    output_mode: Literal["default", "verbose", "quiet", "json"] = Field(
        default="default",
        description="Report style for 'courselint lint'",
    )

    max_issues_shown: int = Field(
        default=20,
        ge=1,
        description="Issues listed in the default summary before truncating",
    )


class CourseLintConfig(BaseSettings):
    """Main courselint configuration.

    Loaded from multiple sources in priority order: environment variables >
    project config > user config > system config > defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="COURSELINT_",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    content: ContentConfig = Field(
        default_factory=ContentConfig,
        description="Content tree conventions",
    )

    rules: RulesConfig = Field(
        default_factory=RulesConfig,
        description="Rule selection",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )

    output: OutputConfig = Field(
        default_factory=OutputConfig,
        description="Report output configuration",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the sources and their priority for settings.

        Priority order (highest to lowest):
        1. Init settings (programmatic overrides)
        2. Environment variables
        3. Project configuration file
        4. User configuration file
        5. System configuration file
        """
        config_files = find_config_files()

        # pydantic-settings gives sources further left a higher priority
        toml_sources = []
        for location in ("project", "user", "system"):
            config_file = config_files[location]
            if config_file is None:
                continue
            toml_sources.append(TomlConfigSettingsSource(settings_cls, toml_file=config_file))
            logger.debug(f"Using {location} config: {config_file}")

        return (
            init_settings,
            env_settings,
            *toml_sources,
        )


def find_config_files() -> dict[str, Path | None]:
    """Find configuration files in standard locations.

    Returns:
        Dictionary with keys 'system', 'user', 'project', each containing
        a Path to the config file if it exists, or None otherwise.
    """
    config_files: dict[str, Path | None] = {
        "system": None,
        "user": None,
        "project": None,
    }

    system_config = Path("/etc") / APP_NAME / "config.toml"
    if system_config.exists():
        config_files["system"] = system_config

    user_config = Path(platformdirs.user_config_dir(APP_NAME, appauthor=False)) / "config.toml"
    if user_config.exists():
        config_files["user"] = user_config

    # .courselint/config.toml takes precedence over courselint.toml
    cwd = Path.cwd()
    for project_config in (cwd / f".{APP_NAME}" / "config.toml", cwd / f"{APP_NAME}.toml"):
        if project_config.exists():
            config_files["project"] = project_config
            break

    return config_files


def get_config_file_locations() -> dict[str, Path]:
    """Get the standard configuration file locations.

    Returns:
        Dictionary with keys 'system', 'user', 'project', each containing
        the Path where the config file should be located (may not exist).
    """
    return {
        "system": Path("/etc") / APP_NAME / "config.toml",
        "user": Path(platformdirs.user_config_dir(APP_NAME, appauthor=False)) / "config.toml",
        "project": Path.cwd() / f".{APP_NAME}" / "config.toml",
    }


_config: CourseLintConfig | None = None


def get_config(reload: bool = False) -> CourseLintConfig:
    """Get the global configuration instance.

    Args:
        reload: If True, reload the configuration from files and environment.

    Raises:
        ConfigError: If a configuration file or environment variable holds
            an invalid value.
    """
    # courselint.core imports this module
    from courselint.core.errors import ConfigError

    global _config

    if _config is None or reload:
        try:
            _config = CourseLintConfig()
        except (ValidationError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    return _config


def create_example_config() -> str:
    """Create an example configuration file content with all options
    documented."""
    return """# courselint configuration file
#
# Configuration files are loaded from (in priority order):
#   1. .courselint/config.toml or courselint.toml (project directory)
#   2. ~/.config/courselint/config.toml (user directory)
#   3. /etc/courselint/config.toml (system directory, Linux/Unix only)
#
# Environment variables override any setting (highest priority).
# Nested settings use double underscores: COURSELINT_<SECTION>__<KEY>
#
# Examples:
#   COURSELINT_LOGGING__LOG_LEVEL=DEBUG
#   COURSELINT_CONTENT__PLATFORM_HOST=stanza.dev
#   COURSELINT_RULES__FAIL_ON=warning

[content]
# File name of course and section index files
readme_name = "README.md"

# File suffix of lesson files
lesson_suffix = ".md"

# Prose section headings every lesson should contain (emoji prefixes and
# case are ignored when comparing)
required_sections = [
    "Introduction",
    "Key Concepts",
    "Real World Context",
    "Deep Dive",
    "Common Pitfalls",
    "Best Practices",
    "Summary",
    "Code Examples",
    "Resources",
]

# Regular expression the attribution footer (last line of a lesson) must match
footer_pattern = '(?i)\\bstanza\\b'

# Host of the learning platform section READMEs link to
platform_host = "stanza.dev"

# Front matter keys every lesson must define
front_matter_keys = ["source_course", "source_lesson"]

# Additional directory names to skip during discovery
skip_dirs = []

[rules]
# Only run these rules (codes like "CL004" or names like "broken-link")
select = []

# Never run these rules
ignore = []

# Lowest severity that makes 'courselint lint' fail: error, warning, info
fail_on = "error"

[rules.severity]
# Per-rule severity overrides
# CL012 = "warning"

[logging]
# Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL
# Environment variable: COURSELINT_LOGGING__LOG_LEVEL
log_level = "WARNING"

# Also log to the console
console_logging = false

[output]
# Report style: default, verbose, quiet, json
output_mode = "default"

# Issues listed in the default summary before truncating
max_issues_shown = 20
"""


def write_example_config(location: str = "user") -> Path:
    """Write an example configuration file to a standard location.

    Args:
        location: One of "user", "project", "system".

    Returns:
        Path to the created configuration file.

    Raises:
        ValueError: If location is invalid.
        PermissionError: If cannot write to the location.
    """
    locations = get_config_file_locations()

    if location not in locations:
        raise ValueError(f"Invalid location '{location}'. Must be one of: user, project, system")

    config_path = locations[location]
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(create_example_config(), encoding="utf-8")

    logger.info(f"Created example configuration at: {config_path}")

    return config_path
