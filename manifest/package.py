"""Reading and filtering the dependencies declared in package.json."""

import fnmatch
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Set, Union

from scanner.errors import ManifestError

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"
NODE_MODULES = "node_modules"


def load_package(root: Path) -> Dict[str, Any]:
    """
    Load the package manifest of a project.

    Args:
        root: Project root directory.

    Returns:
        The parsed package.json object.

    Raises:
        ManifestError: If package.json is missing, unreadable or not a JSON object.
    """
    path = root / MANIFEST_NAME
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ManifestError(f"{path} not found") from e
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ManifestError(f"Failed to parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"{path} must contain a JSON object")
    return data


def get_declared(package: Mapping[str, Any], section: str) -> Union[Mapping[str, Any], list, None]:
    """
    Return a dependency section of a manifest.

    Raises:
        ManifestError: If the section is neither an object nor a list.
    """
    declared = package.get(section)
    if declared is None or isinstance(declared, (dict, list)):
        return declared
    raise ManifestError(f'"{section}" must be an object')


def has_bin(root: Path, name: str) -> bool:
    """
    Check if an installed dependency provides a command-line binary.

    Such packages are typically invoked from scripts rather than required.
    A dependency that is not installed, or whose metadata cannot be read,
    is treated as providing no binary.
    """
    path = root / NODE_MODULES / name / MANIFEST_NAME
    if not path.is_file():
        return False
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.debug("Failed to parse %s: %s", path, e)
        return False
    return isinstance(data, dict) and "bin" in data


def is_ignored(name: str, patterns: Iterable[str]) -> bool:
    """Check if a dependency name matches any ignore glob."""
    return any(fnmatch.fnmatchcase(name, pattern) for pattern in patterns)


def filter_dependencies(
    root: Path,
    declared: Union[Mapping[str, Any], Iterable[str], None],
    ignore_matches: Iterable[str] = (),
) -> Set[str]:
    """
    Select the declared dependencies whose usage should be checked.

    Args:
        root: Project root, used to find installed packages.
        declared: A package.json dependency section (name -> version) or a
                  plain list of names. None means no dependencies.
        ignore_matches: Glob patterns of names to leave out.

    Returns:
        Names that provide no binary and match no ignore pattern.
    """
    if not declared:
        return set()

    patterns = list(ignore_matches)
    names: Set[str] = set()
    for name in declared:
        if has_bin(root, name):
            logger.debug("Skipping %s: provides a binary", name)
            continue
        if is_ignored(name, patterns):
            logger.debug("Skipping %s: matches an ignore pattern", name)
            continue
        names.add(name)
    return names
