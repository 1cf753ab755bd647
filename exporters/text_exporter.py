"""Plain-text exporter for dependency check results."""

from pathlib import Path
from typing import Iterable, List

from report.model import DirectoryResult
from scanner.discovery import get_relative_path


NO_UNUSED_MESSAGE = "No unused dependencies"
BULLET = "• "
ASCII_BULLET = "* "


def to_text(
    result: DirectoryResult,
    root: Path,
    style: str = "ascii",
    include_invalid: bool = True,
) -> str:
    """
    Convert a dependency check result to a human-readable report.

    Args:
        result: The result of the check.
        root: Project root for relative paths.
        style: Bullet style - "ascii" (``*``) or "unicode" (``•``).
        include_invalid: If True, list files that could not be parsed.

    Returns:
        Report text.
    """
    bullet = ASCII_BULLET if style == "ascii" else BULLET

    lines: List[str] = []

    if not result.has_unused():
        lines.append(NO_UNUSED_MESSAGE)
    else:
        _add_section(lines, "Unused dependencies", sorted(result.dependencies), bullet)
        _add_section(lines, "Unused devDependencies", sorted(result.dev_dependencies), bullet)

    if include_invalid and result.has_invalid_files():
        entries = [
            f"{get_relative_path(Path(path), root).as_posix()}: {reason}"
            for path, reason in sorted(result.invalid_files.items())
        ]
        _add_section(lines, "Invalid files", entries, bullet)

    return "\n".join(lines)


def _add_section(lines: List[str], title: str, entries: Iterable[str], bullet: str) -> None:
    entries = list(entries)
    if not entries:
        return
    if lines:
        lines.append("")
    lines.append(title)
    lines.extend(f"{bullet}{entry}" for entry in entries)
