"""Result model for dependency usage checks."""

from .model import DirectoryResult, InvalidFileRecord

__all__ = ["DirectoryResult", "InvalidFileRecord"]
