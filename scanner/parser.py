"""Extraction of module references from JavaScript source files."""

import logging
from pathlib import Path
from typing import Iterator, List, Optional

import esprima
from esprima.error_handler import Error as EsprimaError
from esprima.nodes import Node

from .errors import ParseFailure, UnreadableFile

logger = logging.getLogger(__name__)


# Function whose literal argument names a required module
REQUIRE_FUNCTION = "require"

# Method names whose literal argument names a module loaded as a plugin
# e.g. grunt.loadNpmTasks('grunt-contrib-concat')
PLUGIN_LOADER_METHODS = {"loadNpmTasks"}


def read_source(file_path: Path) -> str:
    """
    Read a source file as UTF-8 text.

    Args:
        file_path: Path to the file to read.

    Returns:
        The file content.

    Raises:
        UnreadableFile: If the file cannot be read or decoded.
    """
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise UnreadableFile(f"cannot read from file {file_path}: {e}") from e


def extract_references(source: str, jsx: bool = False) -> List[str]:
    """
    Extract the module specifiers a piece of source text references.

    Recognized forms, collected in source order:
    - ``require('x')``
    - ``grunt.loadNpmTasks('x')``
    - ``import ... from 'x'`` and ``import 'x'``

    Calls whose first argument is not a string literal are skipped.

    Args:
        source: JavaScript source text, parsed as an ES module.
        jsx: If True, accept JSX syntax.

    Returns:
        List of module specifiers as written in source.

    Raises:
        ParseFailure: If the source does not parse.
    """
    try:
        tree = esprima.parseModule(_blank_shebang(source), {"jsx": jsx})
    except (EsprimaError, RecursionError) as e:
        raise ParseFailure(str(e)) from e

    specifiers: List[str] = []
    for node in _iter_nodes(tree):
        specifier = _get_referenced_module(node)
        if specifier is not None:
            specifiers.append(specifier)
    return specifiers


def extract_file_references(file_path: Path, jsx: bool = False) -> List[str]:
    """Read a file and extract its module references."""
    specifiers = extract_references(read_source(file_path), jsx=jsx)
    logger.debug("%s references %d module(s)", file_path, len(specifiers))
    return specifiers


def _blank_shebang(source: str) -> str:
    """Blank out a leading ``#!`` line, keeping line numbers intact."""
    if not source.startswith("#!"):
        return source
    newline = source.find("\n")
    if newline == -1:
        return ""
    return source[newline:]


def _iter_nodes(root: Node) -> Iterator[Node]:
    """Walk a syntax tree depth-first, parents before children."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node

        children: List[Node] = []
        for value in vars(node).values():
            if isinstance(value, Node):
                children.append(value)
            elif isinstance(value, list):
                children.extend(item for item in value if isinstance(item, Node))
        stack.extend(reversed(children))


def _get_referenced_module(node: Node) -> Optional[str]:
    """Return the module a node references, or None."""
    node_type = getattr(node, "type", None)

    if node_type == "CallExpression":
        if _is_require_call(node) or _is_plugin_loader_call(node):
            return _get_literal_argument(node)
        return None

    if node_type == "ImportDeclaration":
        source = getattr(node, "source", None)
        value = getattr(source, "value", None)
        return value if isinstance(value, str) else None

    return None


def _is_require_call(node: Node) -> bool:
    callee = getattr(node, "callee", None)
    return (
        getattr(callee, "type", None) == "Identifier"
        and getattr(callee, "name", None) == REQUIRE_FUNCTION
    )


def _is_plugin_loader_call(node: Node) -> bool:
    callee = getattr(node, "callee", None)
    prop = getattr(callee, "property", None)
    return getattr(prop, "name", None) in PLUGIN_LOADER_METHODS


def _get_literal_argument(node: Node) -> Optional[str]:
    """Return the first argument of a call if it is a string literal."""
    arguments = getattr(node, "arguments", None) or []
    if not arguments:
        return None
    first = arguments[0]
    if getattr(first, "type", None) != "Literal":
        return None
    value = getattr(first, "value", None)
    return value if isinstance(value, str) else None
