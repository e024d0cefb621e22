from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx

from .errors import ProviderRateLimited, ProviderRequestError, ProviderTimeoutError

Json = dict[str, Any]


@dataclass
class BaseHttpClient:
    """
    Provider-agnostic HTTP client wrapper.

    - Uses a single underlying httpx.Client for connection pooling.
    - Maps transport failures onto the provider error hierarchy.
    - Provider-specific clients wrap this and add auth / convenience methods.
    """

    base_url: str
    timeout_s: float = 30.0
    connect_timeout_s: float = 10.0
    headers: Mapping[str, str] = field(default_factory=dict)

    transport: httpx.BaseTransport | None = None

    def __post_init__(self) -> None:
        self._client = httpx.Client(
            base_url=self.base_url.rstrip("/") + "/",
            timeout=httpx.Timeout(self.timeout_s, connect=self.connect_timeout_s),
            headers=dict(self.headers),
            transport=self.transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> BaseHttpClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def request_json_with_headers(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> tuple[Json, Mapping[str, str]]:
        """
        Perform an HTTP request and return parsed JSON (dict) plus response headers.
        Raises ProviderRequestError (or a subclass) on transport issues / non-2xx.
        """
        try:
            resp = self._client.request(
                method=method,
                url=path.lstrip("/"),
                params=params,
                headers=headers,
            )
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(f"Timed out calling {method} {path}: {e}") from e
        except httpx.NetworkError as e:
            raise ProviderRequestError(str(e)) from e

        if resp.status_code == 429:
            raise ProviderRateLimited("Provider rate limited the request (HTTP 429).")

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ProviderRequestError(
                f"HTTP {resp.status_code} for {method} {resp.request.url}"
            ) from e

        try:
            data = resp.json()
        except ValueError as e:
            raise ProviderRequestError("Response was not valid JSON.") from e

        if not isinstance(data, dict):
            raise ProviderRequestError(f"Expected JSON object, got {type(data)}")

        return data, resp.headers

    def get_json_with_headers(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> tuple[Json, Mapping[str, str]]:
        return self.request_json_with_headers("GET", path, params=params, headers=headers)

    def get_json(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Json:
        data, _ = self.get_json_with_headers(path, params=params, headers=headers)
        return data
