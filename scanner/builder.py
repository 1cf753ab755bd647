"""Concurrent tree reduction that finds unused dependencies."""

import asyncio
import logging
from pathlib import Path
from typing import AbstractSet, Iterable, List, Optional, Set, Union

from manifest.config import DepcheckOptions
from manifest.package import filter_dependencies, get_declared, load_package
from report.model import DirectoryResult, InvalidFileRecord
from .discovery import build_ignore_dirs, has_watched_extension, is_ignored_dir, list_directory
from .errors import ParseFailure, SubtreeAccessFailure
from .parser import extract_file_references
from .resolver import normalize_specifiers

logger = logging.getLogger(__name__)


async def check_directory(
    directory: Path,
    ignore_dirs: AbstractSet[str],
    deps: AbstractSet[str],
    dev_deps: AbstractSet[str],
    extensions: Iterable[str],
    jsx: bool = False,
) -> DirectoryResult:
    """
    Find which candidate dependencies no file under a directory references.

    Files directly in the directory are scanned first and remove the names
    they reference from both candidate sets. Each subdirectory is then
    checked concurrently, starting from the same narrowed sets, and the
    results are folded by intersection. A subdirectory that fails is left
    out of the fold.

    Subdirectories are not entered once both candidate sets are empty, so
    invalid files below them are not reported either.

    Args:
        directory: Directory to check.
        ignore_dirs: Directory names that are never entered.
        deps: Runtime dependency names not yet seen referenced.
        dev_deps: Development dependency names not yet seen referenced.
        extensions: File suffixes to scan.
        jsx: Accept JSX syntax when parsing.

    Returns:
        DirectoryResult with the names still unreferenced in this subtree.

    Raises:
        SubtreeAccessFailure: If the directory cannot be listed.
    """
    try:
        files, subdirs = await asyncio.to_thread(list_directory, directory)
    except OSError as e:
        raise SubtreeAccessFailure(directory, e) from e

    extensions = list(extensions)
    remaining_deps: Set[str] = set(deps)
    remaining_dev_deps: Set[str] = set(dev_deps)
    invalid_files: InvalidFileRecord = {}

    for file_path in files:
        if not has_watched_extension(file_path, extensions):
            continue
        try:
            specifiers = await asyncio.to_thread(extract_file_references, file_path, jsx)
        except ParseFailure as e:
            logger.warning("Could not parse %s: %s", file_path, e)
            invalid_files[str(file_path)] = str(e)
            continue

        used = normalize_specifiers(specifiers)
        remaining_deps -= used
        remaining_dev_deps -= used

    result = DirectoryResult(remaining_deps, remaining_dev_deps, invalid_files)

    spawned: List[Path] = []
    for subdir in subdirs:
        if is_ignored_dir(subdir, ignore_dirs):
            logger.debug("Skipping ignored directory %s", subdir)
            continue
        if not remaining_deps and not remaining_dev_deps:
            logger.debug("Every dependency is used; not entering %s", subdir)
            break
        spawned.append(subdir)

    # Each child gets its own immutable snapshot of the narrowed sets
    deps_snapshot = frozenset(remaining_deps)
    dev_deps_snapshot = frozenset(remaining_dev_deps)
    outcomes = await asyncio.gather(
        *(
            check_directory(subdir, ignore_dirs, deps_snapshot, dev_deps_snapshot, extensions, jsx)
            for subdir in spawned
        ),
        return_exceptions=True,
    )

    for subdir, outcome in zip(spawned, outcomes):
        if isinstance(outcome, Exception):
            logger.warning("Skipping %s: %s", subdir, outcome)
            continue
        if isinstance(outcome, BaseException):
            raise outcome
        result = result.fold(outcome)

    return result


async def depcheck_async(
    root: Union[str, Path],
    options: Optional[DepcheckOptions] = None,
) -> DirectoryResult:
    """
    Check a project for declared dependencies that its sources never reference.

    Args:
        root: Project root directory (containing package.json).
        options: Check settings; defaults are used when None.

    Returns:
        DirectoryResult for the whole project.

    Raises:
        ManifestError: If package.json is missing or malformed.
        SubtreeAccessFailure: If the root directory cannot be listed.
    """
    if options is None:
        options = DepcheckOptions()
    root = Path(root)

    package = options.package if options.package is not None else load_package(root)
    deps = filter_dependencies(
        root, get_declared(package, "dependencies"), options.ignore_matches
    )
    if options.without_dev:
        dev_deps: Set[str] = set()
    else:
        dev_deps = filter_dependencies(
            root, get_declared(package, "devDependencies"), options.ignore_matches
        )

    logger.info(
        "Checking %d dependencies and %d devDependencies under %s",
        len(deps), len(dev_deps), root,
    )

    return await check_directory(
        directory=root,
        ignore_dirs=build_ignore_dirs(options.ignore_dirs),
        deps=deps,
        dev_deps=dev_deps,
        extensions=options.extensions,
        jsx=options.jsx,
    )


def depcheck(
    root: Union[str, Path],
    options: Optional[DepcheckOptions] = None,
) -> DirectoryResult:
    """Synchronous entry point for :func:`depcheck_async`."""
    return asyncio.run(depcheck_async(root, options))
