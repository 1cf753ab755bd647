"""Scanner module for directory listing and module reference extraction.

The tree reducer lives in ``scanner.builder`` and is imported from there.
"""

from .discovery import list_directory, is_ignored_dir, DEFAULT_EXTENSIONS, DEFAULT_IGNORE_DIRS
from .parser import extract_references, extract_file_references, read_source
from .resolver import normalize_specifier, normalize_specifiers
from .errors import (
    DepcheckError,
    ParseFailure,
    UnreadableFile,
    SubtreeAccessFailure,
    ManifestError,
    ConfigError,
)

__all__ = [
    "list_directory",
    "is_ignored_dir",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_IGNORE_DIRS",
    "extract_references",
    "extract_file_references",
    "read_source",
    "normalize_specifier",
    "normalize_specifiers",
    "DepcheckError",
    "ParseFailure",
    "UnreadableFile",
    "SubtreeAccessFailure",
    "ManifestError",
    "ConfigError",
]
