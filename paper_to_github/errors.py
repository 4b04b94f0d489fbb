from __future__ import annotations

from typing import Optional


class PaperSyncError(RuntimeError):
    """Base class for every failure the sync tool reports to its caller."""

    exit_code = 1


class ConfigurationError(PaperSyncError):
    """Raised when required configuration is missing or malformed."""

    exit_code = 2


class DocumentIdExtractionError(PaperSyncError):
    """Raised when a Paper URL does not end in a recognizable document ID."""

    exit_code = 3


class _HTTPFailure(PaperSyncError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DocumentFetchError(_HTTPFailure):
    exit_code = 4


class RepositoryListError(_HTTPFailure):
    exit_code = 5


class WriteError(_HTTPFailure):
    exit_code = 7


class WriteConflictError(WriteError):
    """The remote file no longer matches the sha we sent (or exists when we tried to create it)."""

    exit_code = 6


class RequestTimeoutError(PaperSyncError):
    """Raised when a request to Dropbox or GitHub exceeds the configured timeout."""

    exit_code = 8

    def __init__(self, operation: str, timeout: float) -> None:
        super().__init__(f"{operation} timed out after {timeout:g}s")
        self.operation = operation
        self.timeout = timeout
