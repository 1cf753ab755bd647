#!/usr/bin/env python3
"""
depcheck CLI

A tool for finding dependencies declared in package.json that no source
file in the project references.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from exporters import to_json, to_text
from manifest.config import DepcheckOptions, load_config, normalize_extension
from scanner.builder import depcheck
from scanner.errors import DepcheckError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNUSED = 1
EXIT_ERROR = 2


def _split_list(value: str) -> List[str]:
    """Split a comma-separated option value."""
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="depcheck",
        description="Find declared dependencies that no source file references.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  depcheck                              # Check the current directory
  depcheck ./app --jsx                  # Parse JSX syntax
  depcheck . --ignores "eslint*,babel-*" # Leave matching dependencies out
  depcheck . --ignore-dirs dist,build   # Do not scan build output
  depcheck . --extensions .js,.jsx      # Scan more file types
  depcheck . --json -o unused.json      # JSON output to file
        """,
    )

    # Positional arguments
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root directory containing package.json (default: current directory)",
    )

    # Output options
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Output the result as JSON",
    )

    parser.add_argument(
        "--style",
        choices=["ascii", "unicode"],
        default="ascii",
        help="Bullet style for the text report (default: ascii)",
    )

    parser.add_argument(
        "--hide-invalid",
        action="store_true",
        help="Do not list files that could not be parsed",
    )

    # Scanning options
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Config file (default: .depcheckrc* or the depcheck key of package.json)",
    )

    parser.add_argument(
        "--ignores",
        type=_split_list,
        default=None,
        help="Comma-separated glob patterns of dependency names to ignore",
    )

    parser.add_argument(
        "--ignore-dirs",
        type=_split_list,
        default=None,
        help="Comma-separated directory names to skip",
    )

    parser.add_argument(
        "--extensions",
        type=_split_list,
        default=None,
        help="Comma-separated file extensions to scan (default: .js)",
    )

    parser.add_argument(
        "--jsx",
        action="store_true",
        default=None,
        help="Accept JSX syntax",
    )

    parser.add_argument(
        "--without-dev",
        action="store_true",
        default=None,
        help="Do not check devDependencies",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args(args)


def build_options(parsed, root: Path) -> DepcheckOptions:
    """Combine file configuration with command line overrides."""
    config_path = Path(parsed.config) if parsed.config else None
    options = DepcheckOptions.from_mapping(load_config(root, config_path))

    extensions = None
    if parsed.extensions:
        extensions = [normalize_extension(ext) for ext in parsed.extensions]

    return options.merge(
        extensions=extensions,
        jsx=parsed.jsx,
        ignore_dirs=parsed.ignore_dirs,
        ignore_matches=parsed.ignores,
        without_dev=parsed.without_dev,
    )


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)

    level = logging.DEBUG if parsed.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    root = Path(parsed.root).resolve()
    if not root.is_dir():
        print(f"Error: '{parsed.root}' is not a directory", file=sys.stderr)
        return EXIT_ERROR

    try:
        options = build_options(parsed, root)
        result = depcheck(root, options)
    except DepcheckError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    logger.debug("Check finished: %r", result)

    include_invalid = not parsed.hide_invalid
    if parsed.json:
        output = to_json(result, root, include_invalid=include_invalid)
    else:
        output = to_text(result, root, style=parsed.style, include_invalid=include_invalid)

    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output + "\n", encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return EXIT_ERROR
    else:
        print(output)

    return EXIT_UNUSED if result.has_unused() else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
