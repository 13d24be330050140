from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    SESSION_NOT_INITIALIZED = "session_not_initialized"
    DIRECTORY_NOT_ACCESSIBLE = "directory_not_accessible"


class RunlogError(Exception):
    """Base error; carries the `ErrorKind` and a human-readable message."""

    kind: ErrorKind

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class SessionNotInitializedError(RunlogError):
    def __init__(self, message: str = "Logger session is not initialized"):
        super().__init__(ErrorKind.SESSION_NOT_INITIALIZED, message)


class DirectoryNotAccessibleError(RunlogError):
    def __init__(self, message: str = "Log directory is not accessible"):
        super().__init__(ErrorKind.DIRECTORY_NOT_ACCESSIBLE, message)


_ERRORS_BY_KIND = {
    ErrorKind.SESSION_NOT_INITIALIZED: SessionNotInitializedError,
    ErrorKind.DIRECTORY_NOT_ACCESSIBLE: DirectoryNotAccessibleError,
}


def error_for(kind: ErrorKind, message: str) -> RunlogError:
    """Build the exception matching `kind`."""
    return _ERRORS_BY_KIND[kind](message)


__all__ = [
    "ErrorKind",
    "RunlogError",
    "SessionNotInitializedError",
    "DirectoryNotAccessibleError",
    "error_for",
]
