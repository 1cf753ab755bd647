"""Directory listing utilities for scanning projects."""

import os
from pathlib import Path
from typing import Iterable, List, Set, Tuple


DEFAULT_EXTENSIONS = [".js"]
DEFAULT_IGNORE_DIRS = {
    ".git", ".svn", ".hg",
    ".idea",
    "node_modules", "bower_components",
}


def list_directory(directory: Path) -> Tuple[List[Path], List[Path]]:
    """
    List the immediate entries of a directory without descending.

    Symbolic links are not followed and are left out of both lists, so a
    link cycle can never be walked.

    Args:
        directory: Directory to list.

    Returns:
        (files, subdirectories), each sorted by name.

    Raises:
        OSError: If the directory cannot be listed.
    """
    files: List[Path] = []
    subdirs: List[Path] = []

    with os.scandir(directory) as entries:
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                subdirs.append(Path(entry.path))
            elif entry.is_file(follow_symlinks=False):
                files.append(Path(entry.path))

    return sorted(files), sorted(subdirs)


def build_ignore_dirs(extra: Iterable[str] = ()) -> Set[str]:
    """Combine the built-in ignored directory names with user-supplied ones."""
    return DEFAULT_IGNORE_DIRS | set(extra)


def is_ignored_dir(directory: Path, ignore_dirs: Set[str]) -> bool:
    """Check if a directory should be skipped; entries match the basename exactly."""
    return directory.name in ignore_dirs


def has_watched_extension(file_path: Path, extensions: Iterable[str]) -> bool:
    """Check if a file's suffix is one of the scanned extensions."""
    return file_path.suffix in extensions


def get_relative_path(file_path: Path, root: Path) -> Path:
    """Get the path relative to root, handling edge cases."""
    try:
        return file_path.resolve().relative_to(root.resolve())
    except ValueError:
        return file_path
