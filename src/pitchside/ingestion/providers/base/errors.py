from __future__ import annotations

from typing import ClassVar


class ProviderError(RuntimeError):
    """Base exception for provider-related failures."""

    http_status: ClassVar[int] = 502


class ProviderRequestError(ProviderError):
    """HTTP/network/transport layer failures (connection errors, non-2xx, bad JSON, etc.)."""


class ProviderTimeoutError(ProviderRequestError):
    """The provider did not answer within the client timeout."""

    http_status: ClassVar[int] = 504


class ProviderRateLimited(ProviderRequestError):
    """Provider throttled the request (e.g., HTTP 429)."""


class ProviderResponseError(ProviderError):
    """Provider returned a well-formed response indicating an application-level error."""
