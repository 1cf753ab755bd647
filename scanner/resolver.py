"""Normalization of module specifiers to top-level package names."""

from typing import Iterable, Set


def is_scoped(specifier: str) -> bool:
    """Check if a specifier names a scoped package (``@scope/name``)."""
    return specifier.startswith("@")


def normalize_specifier(specifier: str) -> str:
    """
    Reduce a module specifier to the package name it belongs to.

    Everything after the first ``/`` is dropped, except for scoped packages
    where the first two segments are kept.

    Examples:
        lodash/fp          -> lodash
        @scope/pkg/sub     -> @scope/pkg
        ./local/module     -> .

    Args:
        specifier: The module specifier as written in source.

    Returns:
        The top-level package name.
    """
    segments = specifier.split("/")
    if is_scoped(specifier) and len(segments) > 1:
        return "/".join(segments[:2])
    return segments[0]


def normalize_specifiers(specifiers: Iterable[str]) -> Set[str]:
    """Normalize every specifier and collect the distinct package names."""
    return {normalize_specifier(specifier) for specifier in specifiers}
