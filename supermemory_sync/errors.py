"""
Error types for the Supermemory sync.

Every error aborts the whole run; nothing here is retried.
"""


class SupermemorySyncError(Exception):
    """Base class for all sync errors."""


class ConfigurationError(SupermemorySyncError, ValueError):
    """Raised when the configuration is incomplete or invalid."""


class APIError(SupermemorySyncError):
    """Raised when the Supermemory API returns a non-success status."""

    prefix = "API request failed"

    def __init__(self, status_code: int, reason: str):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"{self.prefix}: {status_code} {reason}".rstrip())


class APIConnectionError(APIError):
    """Connectivity check failed."""

    prefix = "API connection failed"


class FetchError(APIError):
    """Listing a page of memories failed."""

    prefix = "Failed to fetch memories"


class DeserializationError(SupermemorySyncError):
    """Raised when a response body cannot be turned into memories."""
