from typing import Optional


class CatalogError(Exception):
    """Base for all catalog client errors"""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class TransportError(CatalogError):
    """Connection failure, timeout or non-2xx HTTP status."""

    def __init__(self, reason: str, status_code: Optional[int] = None):
        super().__init__(reason)
        self.status_code = status_code

    @classmethod
    def from_status(cls, status_code: int) -> "TransportError":
        return cls(f"HTTP error code: {status_code}", status_code=status_code)


class DecodeError(CatalogError):
    """Response body is not a valid envelope."""


class RemoteError(CatalogError):
    """Server answered with `success: false`."""

    def __str__(self):
        return f"API returned error: {self.reason}"


class ClientClosedError(CatalogError, RuntimeError):
    """Operation invoked on a client that was already closed."""
