"""Error types raised while loading a GPX file.

Every failure is terminal for the load it belongs to; callers either get a
complete track collection or one of these exceptions.
"""

from enum import Enum


class ErrorKind(Enum):
    FILESYSTEM = "filesystem"
    RESOURCE_LIMIT = "resource_limit"
    FORMAT = "format"
    SEMANTIC = "semantic"


class LoadError(Exception):
    """Base class for every load failure."""

    kind = ErrorKind.FORMAT

    def __init__(self, message, path=None):
        super().__init__(message)
        self.message = message
        self.path = path

    def with_path(self, path):
        """Attach the source path if the error was raised without one."""
        if self.path is None:
            self.path = path
        return self

    def __str__(self):
        if self.path is None:
            return self.message
        return f"'{self.path}': {self.message}"


class FileLoadError(LoadError):
    kind = ErrorKind.FILESYSTEM


class FileTooLargeError(LoadError):
    kind = ErrorKind.RESOURCE_LIMIT


class FormatError(LoadError):
    kind = ErrorKind.FORMAT


class CoercionError(FormatError):
    """A numeric or timestamp field could not be parsed."""


class InvalidCoordinatesError(LoadError):
    kind = ErrorKind.SEMANTIC
