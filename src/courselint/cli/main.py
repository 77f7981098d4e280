import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from courselint import __version__
from courselint.cli.commands.catalog import catalog
from courselint.cli.commands.outline import outline
from courselint.cli.commands.stats import stats
from courselint.cli.output_formatter import create_output_formatter
from courselint.core.errors import CourseLintError
from courselint.infrastructure.config import CourseLintConfig, get_config
from courselint.infrastructure.logging.log_paths import get_main_log_path
from courselint.lint.linter import Linter
from courselint.lint.rule import all_rules

# Shared console for CLI output - uses stderr to avoid mixing with JSON output
cli_console = Console(file=sys.stderr)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setup_logging(log_level_name: str, console_logging: bool = False):
    """Configure logging for courselint.

    By default, logs go to a file in the system-appropriate log directory.
    Console logging can be enabled for debugging.

    Args:
        log_level_name: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_logging: If True, also log to console via Rich
    """
    log_level = logging.getLevelName(log_level_name.upper())

    # Close and remove any existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers.clear()

    try:
        log_file = get_main_log_path()
    except OSError as e:
        log_file = None
        if console_logging:
            cli_console.print(f"[dim]File logging disabled: {e}[/dim]")

    if log_file is not None:
        # File handler with rotation (10 MB max, keep 3 backups)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)  # Capture all levels in file
        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

    # Console handler (only if requested)
    if console_logging:
        console_handler = RichHandler(
            console=Console(file=sys.stderr),
            rich_tracebacks=True,
            show_path=False,
        )
        console_handler.setLevel(log_level)
        root_logger.addHandler(console_handler)

    # Set levels
    root_logger.setLevel(logging.DEBUG)  # Let handlers filter
    logging.getLogger("courselint").setLevel(log_level)


def _load_config() -> CourseLintConfig:
    try:
        return get_config(reload=True)
    except CourseLintError as e:
        raise click.ClickException(str(e)) from None


@click.group()
@click.version_option(__version__, prog_name="courselint")
def cli():
    """Validate and export course content trees."""


@cli.command()
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "--output-mode",
    type=click.Choice(["default", "verbose", "quiet", "json"], case_sensitive=False),
    default=None,
    help="Report style. Default: from config ('default').",
)
@click.option(
    "--select",
    multiple=True,
    help="Only run this rule (code or name). May be repeated.",
)
@click.option(
    "--ignore",
    multiple=True,
    help="Skip this rule (code or name). May be repeated.",
)
@click.option(
    "--fail-on",
    type=click.Choice(["error", "warning", "info"], case_sensitive=False),
    default=None,
    help="Lowest severity that makes the command fail. Default: from config ('error').",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level. Default: from config ('WARNING').",
)
@click.option(
    "--console-logging",
    is_flag=True,
    help="Also log to the console (stderr).",
)
@click.option(
    "--no-color",
    is_flag=True,
    help="Disable colored output.",
)
def lint(path, output_mode, select, ignore, fail_on, log_level, console_logging, no_color):
    """Check a content tree for authoring problems.

    PATH may be a single course, a technology directory holding courses, or
    the root of the whole content tree.

    Exit status is 0 when no issue reaches the --fail-on severity and 1
    otherwise.

    Examples:

    \b
        courselint lint content/
        courselint lint content/react/react-hooks-deep-dive --output-mode verbose
        courselint lint content/ --select CL004 --select lesson-count
        courselint lint content/ --ignore untagged-code-block --fail-on warning
        courselint lint content/ --output-mode json > report.json
    """
    cfg = _load_config()
    setup_logging(
        log_level or cfg.logging.log_level,
        console_logging or cfg.logging.console_logging,
    )

    output_mode = output_mode or cfg.output.output_mode
    fail_on = (fail_on or cfg.rules.fail_on).lower()

    try:
        linter = Linter(cfg, select=select, ignore=ignore)
        formatter = create_output_formatter(
            output_mode,
            use_color=not no_color,
            max_issues_shown=cfg.output.max_issues_shown,
        )
        formatter.show_lint_start(path.resolve(), len(linter.rules))
        summary = linter.run(path)
    except CourseLintError as e:
        logger.error(f"Lint aborted: {e}")
        raise click.ClickException(str(e)) from None

    formatter.report(summary)
    if summary.fails(fail_on):
        sys.exit(1)


@cli.command(name="rules")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format",
)
def list_rules(output_format):
    """List the available lint rules.

    Examples:
        courselint rules
        courselint rules --format=json
    """
    rules = all_rules()

    if output_format == "json":
        import json

        data = [
            {
                "code": rule.code,
                "name": rule.name,
                "severity": rule.default_severity,
                "description": rule.description,
            }
            for rule in rules
        ]
        click.echo(json.dumps(data, indent=2))
        return

    table = Table(title="Lint Rules")
    table.add_column("Code", style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("Severity")
    table.add_column("Checks")
    for rule in rules:
        table.add_row(rule.code, rule.name, rule.default_severity, rule.description)
    Console(soft_wrap=True).print(table)


@cli.group()
def config():
    """Manage courselint configuration files."""
    pass


@config.command(name="init")
@click.option(
    "--location",
    type=click.Choice(["user", "project"], case_sensitive=False),
    default="user",
    help="Where to create the configuration file.",
)
@click.option(
    "--force",
    is_flag=True,
    help="Overwrite existing configuration file.",
)
def config_init(location, force):
    """Create an example configuration file.

    This command creates a configuration file with all available options
    documented. By default, it creates a user-level config file at
    ~/.config/courselint/config.toml (or platform equivalent).

    Use --location=project to create a project-level config file at
    .courselint/config.toml in the current directory.

    Examples:
        courselint config init                     # Create user config
        courselint config init --location=project  # Create project config
        courselint config init --force             # Overwrite existing config
    """
    from courselint.infrastructure.config import (
        get_config_file_locations,
        write_example_config,
    )

    locations = get_config_file_locations()
    config_path = locations[location.lower()]

    if config_path.exists() and not force:
        click.echo(f"Configuration file already exists at {config_path}\nUse --force to overwrite.")
        return

    try:
        created_path = write_example_config(location=location.lower())
    except OSError as e:
        raise click.ClickException(f"Cannot create configuration file: {e}") from None
    click.echo(f"✓ Created configuration file: {created_path}")
    click.echo("\nEdit this file to customize courselint settings.")


@config.command(name="show")
def config_show():
    """Show current configuration values.

    This command displays the current configuration, including values
    from all sources (config files and environment variables).
    """
    cfg = _load_config()

    click.echo("Current courselint Configuration:")
    click.echo("=" * 60)

    click.echo("\n[Content]")
    click.echo(f"  readme_name: {cfg.content.readme_name}")
    click.echo(f"  lesson_suffix: {cfg.content.lesson_suffix}")
    click.echo(f"  required_sections: {', '.join(cfg.content.required_sections)}")
    click.echo(f"  footer_pattern: {cfg.content.footer_pattern}")
    click.echo(f"  platform_host: {cfg.content.platform_host}")
    click.echo(f"  front_matter_keys: {', '.join(cfg.content.front_matter_keys)}")
    click.echo(f"  skip_dirs: {', '.join(cfg.content.skip_dirs) or '(none)'}")

    click.echo("\n[Rules]")
    click.echo(f"  select: {', '.join(cfg.rules.select) or '(all)'}")
    click.echo(f"  ignore: {', '.join(cfg.rules.ignore) or '(none)'}")
    overrides = ", ".join(f"{code}={level}" for code, level in cfg.rules.severity.items())
    click.echo(f"  severity: {overrides or '(none)'}")
    click.echo(f"  fail_on: {cfg.rules.fail_on}")

    click.echo("\n[Logging]")
    click.echo(f"  log_level: {cfg.logging.log_level}")
    click.echo(f"  console_logging: {cfg.logging.console_logging}")

    click.echo("\n[Output]")
    click.echo(f"  output_mode: {cfg.output.output_mode}")
    click.echo(f"  max_issues_shown: {cfg.output.max_issues_shown}")


@config.command(name="locate")
def config_locate():
    """Show configuration file locations.

    This command shows where courselint looks for configuration files
    and which files currently exist.
    """
    from courselint.infrastructure.config import find_config_files, get_config_file_locations

    locations = get_config_file_locations()
    existing = find_config_files()

    click.echo("Configuration File Locations:")
    click.echo("=" * 60)

    for location, label in (
        ("system", "System config (lowest priority)"),
        ("user", "User config"),
        ("project", "Project config (highest priority)"),
    ):
        click.echo(f"\n{label}:")
        click.echo(f"  Path: {existing[location] or locations[location]}")
        click.echo("  Status: ✓ Exists" if existing[location] else "  Status: Not found")

    click.echo("\nPriority order (highest to lowest):")
    click.echo("  1. Environment variables (COURSELINT_<SECTION>__<KEY>)")
    click.echo("  2. Project config (.courselint/config.toml or courselint.toml)")
    click.echo("  3. User config (~/.config/courselint/config.toml)")
    click.echo("  4. System config (/etc/courselint/config.toml)")
    click.echo("  5. Default values")


cli.add_command(outline)
cli.add_command(stats)
cli.add_command(catalog)


if __name__ == "__main__":
    cli()
