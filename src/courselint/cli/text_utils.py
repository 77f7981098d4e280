"""Path formatting for CLI output."""

import os
from pathlib import Path


def make_relative_path(file_path: str | Path, base_path: str | Path | None = None) -> str:
    """Convert an absolute path to a relative path if possible.

    Args:
        file_path: The file path to convert
        base_path: Base path for relative conversion (defaults to cwd)

    Returns:
        Relative path if possible, otherwise the original path
    """
    if not file_path:
        return str(file_path)

    path = Path(file_path)
    if not path.is_absolute():
        return str(file_path)

    base = Path.cwd() if base_path is None else Path(base_path)
    try:
        return str(path.relative_to(base))
    except ValueError:
        pass

    try:
        rel_path = os.path.relpath(path, base)
    except ValueError:
        # Different drives on Windows
        return str(file_path)
    # Paths that climb far out of the base read better in absolute form
    if rel_path.count("..") > 3:
        return str(file_path)
    return rel_path


def truncate_path(file_path: str | Path, max_length: int = 60) -> str:
    """Shorten a path to `max_length`, always keeping the file name."""
    path_str = str(file_path)
    if len(path_str) <= max_length:
        return path_str

    filename = Path(file_path).name
    if len(filename) >= max_length - 3:
        return f"...{filename[-(max_length - 3) :]}"

    available = max_length - len(filename) - 4
    parent = str(Path(file_path).parent)
    return f"{parent[:available]}.../{filename}"


def format_issue_path(
    file_path: str | Path,
    line: int | None = None,
    base_path: str | Path | None = None,
    max_length: int | None = None,
) -> str:
    """Format an issue location as `path[:line]` for display.

    The path is made relative to `base_path` (default: cwd) and truncated
    to `max_length` if given.
    """
    result = make_relative_path(file_path, base_path)
    if max_length is not None and len(result) > max_length:
        result = truncate_path(result, max_length)
    if line is not None:
        result = f"{result}:{line}"
    return result
