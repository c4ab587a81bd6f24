"""Custom exceptions for pr-context."""

from __future__ import annotations


class PRContextError(Exception):
    """Base exception for all pr-context errors."""


class ConfigurationError(PRContextError):
    """Missing credential, unusable remote, missing tool or not a repository."""


class SyncError(PRContextError):
    """Fetching branch refs from the remote failed."""

    def __init__(self, message: str, output: str = ""):
        self.output = output.strip()
        if self.output:
            message = f"{message} Git output:\n{self.output}"
        super().__init__(message)


class ApiError(PRContextError):
    """Hosting API request failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class DiffError(PRContextError):
    """Diff or changed-file computation failed."""


class ReportWriteError(PRContextError, OSError):
    """The report could not be written to disk."""
