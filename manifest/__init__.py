"""Manifest and configuration loading."""

from .package import load_package, filter_dependencies, has_bin, is_ignored
from .config import DepcheckOptions, load_config

__all__ = [
    "load_package",
    "filter_dependencies",
    "has_bin",
    "is_ignored",
    "DepcheckOptions",
    "load_config",
]
