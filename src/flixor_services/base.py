"""Base class for cached metadata API clients."""

from __future__ import annotations

from typing import Any, TypeVar
from urllib.parse import urlencode

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from flixor_core.constants import CacheTTL
from flixor_core.exceptions import (
    ServiceAuthError,
    ServiceRequestError,
    ServiceResponseError,
)
from flixor_core.interfaces.cache import CacheClient

T = TypeVar("T")

logger = structlog.get_logger()

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def _is_retryable(exc: BaseException) -> bool:
    """Retry transport failures, rate limiting and server errors."""
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, ServiceRequestError):
        return exc.status_code in RETRYABLE_STATUS_CODES
    return False


class BaseServiceClient:
    """Fetches JSON from one metadata API, memoizing responses in a cache.

    Subclasses set ``service_name`` and ``base_url`` and may override
    ``_headers`` and ``_auth_params``. Auth params are sent with every
    request but never become part of a cache key.
    """

    service_name: str = "base"
    base_url: str = ""

    def __init__(
        self,
        cache: CacheClient,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float = 30.0,
        retry_max: int = 3,
        retry_wait_min: float = 1.0,
        retry_wait_max: float = 10.0,
    ) -> None:
        """Initialize with a cache and optional shared HTTP client."""
        self._cache = cache
        self._http = http_client
        self._timeout = timeout_seconds
        self._retry_max = retry_max
        self._retry_wait_min = retry_wait_min
        self._retry_wait_max = retry_wait_max

    def _headers(self) -> dict[str, str]:
        """Headers sent with every request."""
        return {"Accept": "application/json"}

    def _auth_params(self) -> dict[str, str]:
        """Query parameters carrying credentials."""
        return {}

    def cache_key(self, path: str, params: dict[str, str] | None = None) -> str:
        """Deterministic cache key: service, path and sorted non-auth params."""
        query = urlencode(sorted((params or {}).items()))
        if query:
            return f"{self.service_name}:{path}?{query}"
        return f"{self.service_name}:{path}"

    async def _get(
        self,
        path: str,
        response_model: type[T],
        *,
        params: dict[str, str] | None = None,
        ttl: float = CacheTTL.TRENDING,
    ) -> T:
        """GET ``path`` as ``response_model``, answering from cache when possible."""
        key = self.cache_key(path, params)
        if ttl > 0:
            cached = await self._cache.get(key, response_model)
            if cached is not None:
                return cached

        payload = await self._fetch_json(path, params)
        try:
            result: T = TypeAdapter(response_model).validate_python(payload)
        except ValidationError as e:
            url = f"{self.base_url}{path}"
            msg = f"body does not match {response_model!r}"
            raise ServiceResponseError(self.service_name, url, msg) from e

        if ttl > 0:
            await self._cache.set(key, result, ttl)
        return result

    async def _fetch_json(self, path: str, params: dict[str, str] | None) -> Any:
        """Perform the HTTP request with retries and return the decoded body."""
        url = f"{self.base_url}{path}"
        query = {**(params or {}), **self._auth_params()}

        @retry(
            retry=retry_if_exception(_is_retryable),
            stop=stop_after_attempt(self._retry_max),
            wait=wait_exponential(
                multiplier=1, min=self._retry_wait_min, max=self._retry_wait_max
            ),
            reraise=True,
        )
        async def _do_request() -> Any:
            response = await self._send(url, query)
            if response.status_code == 401:
                raise ServiceAuthError(self.service_name, response.status_code, url)
            if not response.is_success:
                raise ServiceRequestError(self.service_name, response.status_code, url)
            try:
                return response.json()
            except ValueError as e:
                raise ServiceResponseError(self.service_name, url, "body is not JSON") from e

        payload = await _do_request()
        logger.debug("service_fetch_complete", service=self.service_name, path=path)
        return payload

    async def _send(self, url: str, query: dict[str, str]) -> httpx.Response:
        if self._http is not None:
            return await self._http.get(
                url, params=query, headers=self._headers(), timeout=self._timeout
            )
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.get(url, params=query, headers=self._headers())
