"""HTTP client for the photo store REST API.

Provides retry logic for read requests and a single-shot streaming POST for uploads.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import httpx

from photoctl.core.exceptions import (
    NetworkError,
    ResourceNotFoundError,
    RetryExhaustedError,
    ServerUnreachableError,
)
from photoctl.core.timeouts import DEFAULT_HTTP_TIMEOUT_SECONDS, DEFAULT_UPLOAD_TIMEOUT_SECONDS
from photoctl.core.validation import validate_server_url

# =============================================================================
# Constants
# =============================================================================

DEFAULT_MAX_RETRIES = 3
RETRY_BACKOFF_BASE = 2
RETRYABLE_STATUS_CODES = {502, 503, 504}


# =============================================================================
# StoreClient
# =============================================================================


@dataclass
class StoreClient:
    """HTTP client for the photo store with retry on idempotent reads."""

    base_url: str
    timeout: int = DEFAULT_HTTP_TIMEOUT_SECONDS
    upload_timeout: int = DEFAULT_UPLOAD_TIMEOUT_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES
    verify_ssl: bool = True
    max_connections: int = 10
    transport: httpx.BaseTransport | None = field(default=None, repr=False)
    _client: httpx.Client | None = field(init=False, default=None, repr=False)
    _lock: threading.Lock = field(init=False, default_factory=threading.Lock, repr=False)

    def __post_init__(self) -> None:
        """Validate and normalize URL."""
        self.base_url = validate_server_url(self.base_url)

    # =========================================================================
    # Client Management
    # =========================================================================

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client.

        Upload workers share one StoreClient, so creation is serialized and
        every thread gets the same pooled ``httpx.Client``.
        """
        client = self._client
        if client is not None:
            return client
        with self._lock:
            if self._client is None:
                self._client = httpx.Client(
                    base_url=self.base_url,
                    timeout=self.timeout,
                    verify=self.verify_ssl,
                    follow_redirects=True,
                    limits=httpx.Limits(max_connections=self.max_connections),
                    transport=self.transport,
                )
            return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        with self._lock:
            client, self._client = self._client, None
        if client is not None:
            client.close()

    def __enter__(self) -> StoreClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # =========================================================================
    # HTTP Methods
    # =========================================================================

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any | None = None,
        timeout: int | None = None,
    ) -> httpx.Response:
        """Execute an idempotent HTTP request with retry logic.

        Raises:
            ResourceNotFoundError: On HTTP 404.
            httpx.HTTPStatusError: On other non-retryable error statuses.
            RetryExhaustedError: If all retries fail.
        """
        client = self._get_client()
        request_timeout = timeout or self.timeout
        last_error: Exception | None = None

        for attempt in range(self.max_retries + 1):
            try:
                resp = client.request(
                    method,
                    path,
                    params=params,
                    json=json,
                    timeout=request_timeout,
                )

                if resp.status_code == 404:
                    raise ResourceNotFoundError("endpoint", path)

                if resp.status_code in RETRYABLE_STATUS_CODES:
                    last_error = NetworkError(self.base_url, f"HTTP {resp.status_code}")
                    if attempt < self.max_retries:
                        time.sleep(RETRY_BACKOFF_BASE ** (attempt + 1))
                        continue
                    break

                resp.raise_for_status()
                return resp

            except httpx.ConnectError:
                last_error = ServerUnreachableError(self.base_url)
            except httpx.TimeoutException:
                last_error = NetworkError(self.base_url, f"Timeout after {request_timeout}s")

            if attempt < self.max_retries:
                time.sleep(RETRY_BACKOFF_BASE ** (attempt + 1))

        raise RetryExhaustedError(f"{method} {path}", self.max_retries + 1, last_error)

    def get(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        timeout: int | None = None,
    ) -> httpx.Response:
        """GET request."""
        return self._request("GET", path, params=params, timeout=timeout)

    def post(
        self,
        path: str,
        *,
        json: Any | None = None,
        timeout: int | None = None,
    ) -> httpx.Response:
        """POST request for idempotent queries (e.g. search)."""
        return self._request("POST", path, json=json, timeout=timeout)

    def stream_post(
        self,
        path: str,
        content: Iterable[bytes],
        *,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """POST a streamed body exactly once.

        No retry and no status interpretation; the caller owns both. Redirects
        are not followed because the body generator can only be read once, so
        a 3xx comes back as the response. Network faults propagate as
        ``httpx`` exceptions.
        """
        client = self._get_client()
        return client.post(
            path,
            content=content,
            headers=headers,
            timeout=self.upload_timeout,
            follow_redirects=False,
        )
