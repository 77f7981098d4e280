import os

from courselint.infrastructure.logging.log_paths import find_log_dir, get_log_dir, get_main_log_path


def test_log_dir_is_created_under_state_home():
    log_dir = get_log_dir()
    assert log_dir.is_dir()
    assert str(log_dir).startswith(os.environ["XDG_STATE_HOME"])


def test_main_log_path():
    assert get_main_log_path() == get_log_dir() / "courselint.log"


def test_find_log_dir_returns_none_when_it_cannot_be_created(tmp_path, monkeypatch):
    blocker = tmp_path / "state"
    blocker.write_text("not a directory", encoding="utf-8")
    monkeypatch.setenv("XDG_STATE_HOME", str(blocker))
    assert find_log_dir() is None
