"""JSON exporter for dependency check results (machine-friendly format)."""

import json
from pathlib import Path
from typing import Any, Dict

from report.model import DirectoryResult
from scanner.discovery import get_relative_path


def to_json(
    result: DirectoryResult,
    root: Path,
    indent: int = 2,
    include_invalid: bool = True,
) -> str:
    """
    Convert a dependency check result to JSON format.

    Args:
        result: The result of the check.
        root: Project root for relative paths.
        indent: JSON indentation level.
        include_invalid: If True, include files that could not be parsed.

    Returns:
        JSON string with ``dependencies``, ``devDependencies`` and
        ``invalidFiles`` keys.
    """
    data: Dict[str, Any] = result.to_dict()

    if include_invalid:
        data["invalidFiles"] = {
            get_relative_path(Path(path), root).as_posix(): reason
            for path, reason in data["invalidFiles"].items()
        }
    else:
        del data["invalidFiles"]

    return json.dumps(data, indent=indent)
