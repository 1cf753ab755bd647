"""Options for a dependency check and the files they are loaded from."""

import json
import logging
import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from scanner.discovery import DEFAULT_EXTENSIONS
from scanner.errors import ConfigError
from .package import MANIFEST_NAME

logger = logging.getLogger(__name__)


CONFIG_FILE_NAMES = [
    ".depcheckrc",
    ".depcheckrc.yml",
    ".depcheckrc.yaml",
    ".depcheckrc.json",
    ".depcheckrc.toml",
]

# Key under which package.json may carry the configuration
PACKAGE_CONFIG_KEY = "depcheck"

# camelCase keys as written in config files
KEY_ALIASES = {
    "ignoreDirs": "ignore_dirs",
    "ignoreMatches": "ignore_matches",
    "withoutDev": "without_dev",
}


@dataclass
class DepcheckOptions:
    """
    Settings that control a dependency check.

    Attributes:
        extensions: File suffixes to scan.
        jsx: Accept JSX syntax when parsing.
        ignore_dirs: Directory names to skip, in addition to the built-in set.
        ignore_matches: Glob patterns of dependency names to leave out.
        without_dev: Do not check devDependencies.
        package: Pre-loaded package.json object; read from disk when None.
    """

    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    jsx: bool = False
    ignore_dirs: List[str] = field(default_factory=list)
    ignore_matches: List[str] = field(default_factory=list)
    without_dev: bool = False
    package: Optional[Dict[str, Any]] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DepcheckOptions":
        """
        Build options from a configuration mapping.

        Raises:
            ConfigError: On unknown keys or values of the wrong type.
        """
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}

        for key, value in data.items():
            name = KEY_ALIASES.get(key, key)
            if name not in known:
                raise ConfigError(f"Unknown option: {key}")
            values[name] = value

        for name in ("extensions", "ignore_dirs", "ignore_matches"):
            if name in values:
                values[name] = _as_string_list(name, values[name])
        for name in ("jsx", "without_dev"):
            if name in values and not isinstance(values[name], bool):
                raise ConfigError(f"Option {name} must be true or false")
        if values.get("package") is not None and not isinstance(values["package"], dict):
            raise ConfigError("Option package must be an object")

        if "extensions" in values:
            values["extensions"] = [normalize_extension(ext) for ext in values["extensions"]]

        return cls(**values)

    def merge(self, **overrides: Any) -> "DepcheckOptions":
        """Return a copy with every override that is not None applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def normalize_extension(ext: str) -> str:
    """Ensure an extension starts with a dot."""
    return ext if ext.startswith(".") else "." + ext


def _as_string_list(name: str, value: Any) -> List[str]:
    """Accept a list of strings or a single comma-separated string."""
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ConfigError(f"Option {name} must be a list of strings")


def find_config_file(root: Path) -> Optional[Path]:
    """Return the first config file present in the project root."""
    for name in CONFIG_FILE_NAMES:
        path = root / name
        if path.is_file():
            return path
    return None


def parse_config_file(path: Path) -> Dict[str, Any]:
    """
    Parse a configuration file.

    ``.json`` files are read as JSON, ``.toml`` as TOML, anything else
    (including the extension-less ``.depcheckrc``) as YAML.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e

    try:
        if path.suffix == ".json":
            data = json.loads(content)
        elif path.suffix == ".toml":
            data = tomllib.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to parse {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping of options")
    return data


def load_config(root: Path, explicit: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load the configuration mapping for a project.

    Looks at, in order: an explicitly given file, the ``.depcheckrc``
    variants in the project root, then the ``depcheck`` key of package.json.

    Args:
        root: Project root directory.
        explicit: Config file given on the command line.

    Returns:
        The configuration mapping, empty when none is found.

    Raises:
        ConfigError: If a config file is missing or malformed.
    """
    if explicit is not None:
        if not explicit.is_file():
            raise ConfigError(f"Config file not found: {explicit}")
        logger.debug("Using config file %s", explicit)
        return parse_config_file(explicit)

    path = find_config_file(root)
    if path is not None:
        logger.debug("Using config file %s", path)
        return parse_config_file(path)

    manifest = root / MANIFEST_NAME
    if manifest.is_file():
        try:
            data = json.loads(manifest.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            # reported by load_package
            return {}
        section = data.get(PACKAGE_CONFIG_KEY) if isinstance(data, dict) else None
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ConfigError(f'"{PACKAGE_CONFIG_KEY}" in {manifest} must be an object')
        logger.debug("Using %s key of %s", PACKAGE_CONFIG_KEY, manifest)
        return section

    return {}
