from typing import Optional


class SyncClientError(Exception):
    """Base exception for all client errors."""

    status: Optional[int] = None


class RemoteHTTPError(SyncClientError):
    """Raised for non-2xx HTTP responses. Carries status, error code and description."""

    def __init__(self, status: int, code: Optional[str] = None, description: Optional[str] = None, *, url: str = "") -> None:
        self.status = status
        self.code = code
        self.description = description
        self.url = url
        super().__init__(f"HTTP error {status}" + (f" [{code}]" if code else "") + (f": {description}" if description else ""))


class RateLimitError(RemoteHTTPError):
    """Raised when an API returns 429 Too Many Requests."""


class ResponseFormatError(SyncClientError):
    """Raised when the API response format is invalid or malformed."""
