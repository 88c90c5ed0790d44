from __future__ import annotations

from typing import Optional, Union


class ConfigError(Exception):
    """Base class for everything the config engine raises."""

    def __init__(self, message: str, path: Optional[str] = None, line_number: Optional[int] = None):
        self.message = message
        self.path = path
        self.line_number = line_number
        super().__init__(self.__str__())

    def __str__(self) -> str:
        if self.path and self.line_number:
            return f"{self.path}:{self.line_number}: {self.message}"
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class ConfigIOError(ConfigError):
    """A config file or an included file could not be opened or read.

    ``target`` names the included file when the error is reported against the
    ``Include`` line that pulled it in.
    """

    def __init__(
        self,
        error: Union[OSError, UnicodeDecodeError],
        path: Optional[str] = None,
        line_number: Optional[int] = None,
        target: Optional[str] = None,
    ):
        self.error = error
        self.target = target
        reason = getattr(error, "strerror", None) or str(error)
        if target:
            reason = f"{target}: {reason}"
        super().__init__(reason, path=path or getattr(error, "filename", None), line_number=line_number)

    @property
    def not_found(self) -> bool:
        return isinstance(self.error, FileNotFoundError)


class UnparseableLineError(ConfigError):
    def __init__(self, line: str, path: Optional[str] = None, line_number: Optional[int] = None):
        self.line = line
        super().__init__(f"Invalid line: {line}", path=path, line_number=line_number)


class UnknownEntryError(ConfigError):
    def __init__(self, key: str, line: str, path: Optional[str] = None, line_number: Optional[int] = None):
        self.key = key
        self.line = line
        super().__init__(f"Unknown entry {key!r}: {line}", path=path, line_number=line_number)


class InvalidIncludeError(ConfigError):
    def __init__(self, line: str, reason: str, path: Optional[str] = None, line_number: Optional[int] = None):
        self.line = line
        self.reason = reason
        super().__init__(f"Invalid include ({reason}): {line}", path=path, line_number=line_number)


__all__ = [
    "ConfigError",
    "ConfigIOError",
    "UnparseableLineError",
    "UnknownEntryError",
    "InvalidIncludeError",
]
