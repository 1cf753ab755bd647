"""Result model for dependency usage checks."""

from dataclasses import dataclass, field
from typing import Any, Dict, Set


# file path -> reason it could not be analyzed
InvalidFileRecord = Dict[str, str]


@dataclass
class DirectoryResult:
    """
    Outcome of checking one directory subtree.

    ``dependencies`` and ``dev_dependencies`` hold the declared names that no
    scanned file in the subtree references. ``invalid_files`` maps each file
    that could not be parsed to the reason.
    """

    dependencies: Set[str] = field(default_factory=set)
    dev_dependencies: Set[str] = field(default_factory=set)
    invalid_files: InvalidFileRecord = field(default_factory=dict)

    def fold(self, child: "DirectoryResult") -> "DirectoryResult":
        """
        Combine this result with a subtree's result.

        A name stays unused only if it is unused on both sides, so candidate
        sets are intersected. Invalid files from both sides are kept; the
        child's entry wins on a path collision.
        """
        invalid_files = dict(self.invalid_files)
        invalid_files.update(child.invalid_files)
        return DirectoryResult(
            dependencies=self.dependencies & child.dependencies,
            dev_dependencies=self.dev_dependencies & child.dev_dependencies,
            invalid_files=invalid_files,
        )

    @property
    def unused_count(self) -> int:
        """Return the number of unused dependencies of both kinds."""
        return len(self.dependencies) + len(self.dev_dependencies)

    def has_unused(self) -> bool:
        """Check if any declared dependency is unused."""
        return self.unused_count > 0

    def has_invalid_files(self) -> bool:
        """Check if any file could not be parsed."""
        return bool(self.invalid_files)

    def to_dict(self) -> Dict[str, Any]:
        """Return a serializable view with sorted members."""
        return {
            "dependencies": sorted(self.dependencies),
            "devDependencies": sorted(self.dev_dependencies),
            "invalidFiles": dict(sorted(self.invalid_files.items())),
        }

    def __repr__(self) -> str:
        return (
            f"DirectoryResult(dependencies={len(self.dependencies)}, "
            f"dev_dependencies={len(self.dev_dependencies)}, "
            f"invalid_files={len(self.invalid_files)})"
        )
