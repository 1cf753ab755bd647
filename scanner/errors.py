"""Exceptions raised while checking a project."""


class DepcheckError(Exception):
    """Base exception for depcheck errors."""


class ParseFailure(DepcheckError):
    """Source text does not conform to the configured grammar."""


class UnreadableFile(ParseFailure):
    """File content could not be obtained."""


class SubtreeAccessFailure(DepcheckError):
    """A directory could not be listed."""

    def __init__(self, path, cause: Exception):
        super().__init__(f"cannot list directory {path}: {cause}")
        self.path = path
        self.cause = cause


class ManifestError(DepcheckError):
    """package.json is missing or malformed."""


class ConfigError(DepcheckError):
    """Configuration file or options are malformed."""
