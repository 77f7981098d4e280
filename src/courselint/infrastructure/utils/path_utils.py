import logging
import re
from collections.abc import Iterable, Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

ORDERED_NAME_REGEX = re.compile(r"^(\d+)[-_](.+)$")

SKIP_DIRS_FOR_CONTENT = frozenset(
    (
        "__pycache__",
        ".git",
        ".github",
        ".idea",
        ".mypy_cache",
        ".pytest_cache",
        ".tox",
        ".venv",
        ".vs",
        ".vscode",
        "build",
        "dist",
        "node_modules",
        "site",
        "venv",
    )
)

IGNORE_PATH_REGEX = re.compile(r"(.*\.egg-info.*|.*\.bkp|.*\.bak|\..*)")


def is_ignored_dir(dir_path: Path, extra: Iterable[str] = ()) -> bool:
    extra = frozenset(extra)
    name = dir_path.name
    if name in SKIP_DIRS_FOR_CONTENT or name in extra:
        return True
    return bool(IGNORE_PATH_REGEX.fullmatch(name))


def strip_suffix(name: str, suffix: str = ".md") -> str:
    if suffix and name.lower().endswith(suffix.lower()):
        return name[: -len(suffix)]
    return name


def parse_ordered_name(name: str, suffix: str = "") -> tuple[int | None, str]:
    """Split a `<number>-<slug>` file or directory name.

    >>> parse_ordered_name("03-use-effect.md", ".md")
    (3, 'use-effect')
    >>> parse_ordered_name("README.md", ".md")
    (None, 'README')
    """
    stem = strip_suffix(name, suffix)
    match = ORDERED_NAME_REGEX.match(stem)
    if not match:
        return None, stem
    return int(match[1]), match[2]


def is_ordered_name(name: str, suffix: str = "") -> bool:
    return parse_ordered_name(name, suffix)[0] is not None


def path_exists(path: Path) -> bool:
    """Like `Path.exists`, but False for paths the OS refuses to look up,
    e.g. names longer than the file system allows."""
    try:
        return path.exists()
    except OSError as e:
        logger.debug(f"Cannot check {path}: {e.strerror or e}")
        return False


def iter_subdirs(path: Path, extra_skip: Iterable[str] = ()) -> Iterator[Path]:
    """Yield non-ignored child directories in name order."""
    extra_skip = tuple(extra_skip)
    for child in sorted(path.iterdir()):
        if not child.is_dir():
            continue
        if is_ignored_dir(child, extra_skip):
            logger.debug(f"Skipping ignored dir: {child}")
            continue
        yield child


def is_course_dir(path: Path, extra_skip: Iterable[str] = ()) -> bool:
    """A course directory contains at least one numbered section directory."""
    return any(is_ordered_name(child.name) for child in iter_subdirs(path, extra_skip))


def find_course_dirs(root: Path, extra_skip: Iterable[str] = (), max_depth: int = 2) -> list[Path]:
    """Find course directories at or below `root`.

    `root` may be a course, a technology directory holding courses, or the
    corpus root holding technology directories.
    """
    extra_skip = tuple(extra_skip)
    if is_course_dir(root, extra_skip):
        return [root]
    if max_depth <= 0:
        return []
    course_dirs = []
    for child in iter_subdirs(root, extra_skip):
        course_dirs.extend(find_course_dirs(child, extra_skip, max_depth - 1))
    return course_dirs
