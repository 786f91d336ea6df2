"""Exception hierarchy for the test-case sync flow."""

from __future__ import annotations


class SyncError(Exception):
    """Base class for every error raised by the sync package."""


class ConfigurationError(SyncError):
    """config.json could not be found, read, or is missing a required key."""


class SecretRetrievalError(SyncError):
    """The PAT could not be read from Key Vault."""


class SourceFileError(SyncError):
    """The local test-case file is unreadable or malformed."""


class RemoteApiError(SyncError):
    """
    A call to the Azure DevOps REST API failed.

    Attributes:
        status_code: HTTP status of the response, or None when the request
            never produced one (connection error, timeout).
        body: Raw response body, if any.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        message = super().__str__()
        if self.status_code is None:
            return message
        return f"{message} (HTTP {self.status_code})"
