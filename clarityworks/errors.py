from typing import Optional


class AdvisorError(Exception):
    """Base class for errors surfaced to the dashboard."""


class ConfigurationError(AdvisorError):
    """The model API credential is not configured."""


class UpstreamError(AdvisorError):
    """The model provider could not be reached or rejected the request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(AdvisorError):
    """The model provider answered with something that is not the expected JSON."""

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message)
        self.raw = raw


class StorageError(AdvisorError):
    """The key/value backend failed to read or write a document."""


class DocumentError(AdvisorError):
    """An uploaded document set was rejected before parsing."""
