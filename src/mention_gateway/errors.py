"""
Error taxonomy for the mention gateway.

Every failure aborts the current request; the HTTP layer maps ``status_code``
onto the response.
"""

from typing import Optional


class GatewayError(Exception):
    """Base class for failures surfaced to the caller."""
    status_code: int = 500


class ValidationError(GatewayError):
    """Required inbound fields are missing."""
    status_code = 400


class ClassificationError(GatewayError):
    """The completion service failed or returned an unusable label."""


class MediaFetchError(GatewayError):
    """The attachment could not be downloaded."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class InvalidCategoryError(GatewayError):
    """No endpoint is configured for the resolved category."""

    def __init__(self, category: str):
        super().__init__(f"Invalid category: {category}")
        self.category = category


class DispatchTransportError(GatewayError):
    """The backend capability call failed or returned a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = status_code
