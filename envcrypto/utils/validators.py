"""
Validation Utilities
====================

Path validation confining file access to the current working directory.

Both the plaintext and the container path may come from configuration
supplied by another system, so every path the engine touches is checked
before any file is opened.
"""

from __future__ import annotations

import os
import platform
from pathlib import Path, PureWindowsPath
from typing import Final, Optional

from envcrypto.core.errors import InvalidPathError

IS_WINDOWS: Final[bool] = platform.system() == "Windows"


def _normalize_separators(raw_path: str) -> str:
    """Treat backslashes as separators on every platform."""
    if IS_WINDOWS:
        return raw_path
    return raw_path.replace("\\", "/")


def is_path_within_directory(path: Path, directory: Path) -> bool:
    """
    Check if a path is lexically within a directory (prevents path traversal).

    Args:
        path: Absolute, normalized path to check
        directory: Absolute, normalized containing directory

    Returns:
        True if path is the directory itself or below it
    """
    return path.is_relative_to(directory)


def validate_path(
    raw_path: str | os.PathLike[str],
    base_directory: Optional[Path] = None,
) -> Path:
    """
    Resolve a path and ensure it stays inside the working directory.

    Resolution is lexical: ``..`` segments are collapsed without touching
    the filesystem, nothing needs to exist, and symlinks are not followed.

    Args:
        raw_path: Caller-supplied path (relative or absolute, either separator)
        base_directory: Directory to confine to (defaults to the current
            working directory, read at call time)

    Returns:
        Absolute, normalized Path

    Raises:
        InvalidPathError: If the path escapes the base directory or is unusable
    """
    raw = os.fspath(raw_path)

    if not raw:
        raise InvalidPathError("Invalid file path: empty path")
    if "\x00" in raw:
        raise InvalidPathError("Invalid file path: contains NUL character")

    # Drive-qualified and UNC paths can never point into a POSIX tree
    if not IS_WINDOWS and PureWindowsPath(raw).drive:
        raise InvalidPathError("Invalid file path: outside working directory")

    base = Path(os.path.abspath(base_directory if base_directory is not None else os.getcwd()))
    resolved = Path(os.path.normpath(os.path.join(base, _normalize_separators(raw))))

    if not is_path_within_directory(resolved, base):
        raise InvalidPathError("Invalid file path: outside working directory")

    return resolved
