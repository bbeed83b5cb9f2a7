from __future__ import annotations


class UnistrError(Exception):
    """Base exception for this project."""


class EncodingError(UnistrError, ValueError):
    """Raised when raw bytes cannot be transcoded to canonical UTF-8."""

    def __init__(self, message: str, *, encoding: str | None = None):
        super().__init__(f"{encoding}: {message}" if encoding else message)
        self.encoding = encoding


class InvalidOperationError(UnistrError, AttributeError):
    """Raised when an operation name resolves to no registered primitive."""

    def __init__(self, operation: str):
        super().__init__(f"{operation!r} is not a valid Str operation")
        self.operation = operation


class StrIndexError(UnistrError, IndexError):
    def __init__(self, index: int, length: int):
        super().__init__(f"codepoint index {index} out of range for length {length}")
        self.index = index
        self.length = length


class ConfigError(UnistrError):
    """Raised when settings are invalid or incomplete."""

    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path
