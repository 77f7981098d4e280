"""Pytest configuration and fixtures.

Every test runs with its own config and log directories (via the XDG
variables platformdirs honors) and with a clean working directory, so user
or project config files on the machine running the tests are never read.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest
from rich.logging import RichHandler

from content_fixtures import write_valid_course
from courselint.infrastructure import config as config_module


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path_factory, monkeypatch):
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(home / "state"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(home / "cache"))
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))
    for name in list(os.environ):
        if name.startswith("COURSELINT_"):
            monkeypatch.delenv(name)
    monkeypatch.setattr(config_module, "_config", None)
    yield
    # The CLI installs handlers on the root logger; don't leak them
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if isinstance(handler, (RotatingFileHandler, RichHandler)):
            handler.close()
            root_logger.removeHandler(handler)


@pytest.fixture
def content_root(tmp_path) -> Path:
    """A content tree with one lint-clean course: content/react/<course>."""
    root = tmp_path / "content"
    write_valid_course(root)
    return root


@pytest.fixture
def course_dir(content_root) -> Path:
    return content_root / "react" / "react-hooks-deep-dive"
