"""Custom exception hierarchy for flixor-cache."""

from __future__ import annotations


class FlixorError(Exception):
    """Base exception for all flixor-cache errors."""


class CacheError(FlixorError):
    """Base exception for cache failures."""


class CacheEncodeError(CacheError):
    """Raised when a value cannot be serialized for caching."""


class CacheDecodeError(CacheError):
    """Raised when cached bytes cannot be decoded as the requested type."""


class ServiceError(FlixorError):
    """Base exception for metadata service wrappers."""


class ServiceRequestError(ServiceError):
    """Raised when a metadata API answers with a non-success status."""

    def __init__(self, service: str, status_code: int, url: str) -> None:
        """Record the failing service, status and URL."""
        super().__init__(f"{service} request failed with HTTP {status_code}: {url}")
        self.service = service
        self.status_code = status_code
        self.url = url


class ServiceAuthError(ServiceRequestError):
    """Raised when a metadata API rejects the configured credentials."""


class ServiceResponseError(ServiceError):
    """Raised when a metadata API answers 2xx with a body that cannot be used."""

    def __init__(self, service: str, url: str, reason: str) -> None:
        """Record the failing service, URL and what was wrong with the body."""
        super().__init__(f"{service} returned an unusable response from {url}: {reason}")
        self.service = service
        self.url = url
        self.reason = reason
