"""Async HTTP transport for the Notion API.

Request lifecycle:

1. Acquire a token-bucket slot (await if needed).
2. Send the request with auth and ``Notion-Version`` headers.
3. On ``2xx`` -- return the parsed JSON object; any other body raises
   :class:`NotionBlogInvalidResponseError`.
4. On ``429`` -- honour ``Retry-After``, sleep, and retry.
5. On ``5xx`` / timeout / network error -- exponential backoff and retry.
   Other transport failures (protocol, proxy) raise
   :class:`NotionBlogNetworkError` at once.
6. On any other ``4xx`` -- raise the matching typed error immediately.
7. On exhausted attempts -- raise :class:`NotionBlogRetryExhaustedError`.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncIterator
from typing import Any

import httpx

from notionblog.config import BlogConfig
from notionblog.errors import (
    NotionBlogAuthError,
    NotionBlogInvalidResponseError,
    NotionBlogNetworkError,
    NotionBlogNotFoundError,
    NotionBlogPermissionError,
    NotionBlogRetryExhaustedError,
    NotionBlogValidationError,
)
from notionblog.observability import NoopMetricsHook, get_logger

from .rate_limit import AsyncTokenBucket
from .retries import RETRYABLE_STATUSES, compute_backoff, should_retry

log = get_logger("notionblog.transport")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse_retry_after(response: httpx.Response) -> float | None:
    """Extract the ``Retry-After`` header value as a float, or ``None``."""
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    try:
        return float(raw)
    except (ValueError, TypeError):
        return None


def _json_body(response: httpx.Response, path: str) -> dict:
    """Decode a 2xx body, which must be a JSON object."""
    try:
        body = response.json()
    except ValueError as exc:
        raise NotionBlogInvalidResponseError(
            message=f"Response from {path} is not valid JSON",
            context={
                "status_code": response.status_code,
                "path": path,
                "body_preview": response.text[:200],
            },
            cause=exc,
        ) from exc
    if not isinstance(body, dict):
        raise NotionBlogInvalidResponseError(
            message=f"Response from {path} is {type(body).__name__}, not a JSON object",
            context={
                "status_code": response.status_code,
                "path": path,
                "body_preview": response.text[:200],
            },
        )
    return body


def _raise_for_status(response: httpx.Response, method: str, path: str) -> None:
    """Raise the typed error for a non-retryable 4xx response."""
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    notion_message = body.get("message", response.text[:500])
    notion_code = body.get("code", "")
    context: dict[str, Any] = {"status_code": status, "notion_code": notion_code}

    if status == 401:
        raise NotionBlogAuthError(
            message=f"Authentication failed on {method} {path}: {notion_message}",
            context=context,
        )
    if status == 403:
        raise NotionBlogPermissionError(
            message=f"Permission denied on {method} {path}: {notion_message}",
            context={**context, "operation": f"{method} {path}"},
        )
    if status == 404:
        raise NotionBlogNotFoundError(
            message=f"Resource not found on {method} {path}: {notion_message}",
            context={**context, "path": path},
        )
    raise NotionBlogValidationError(
        message=f"Client error {status} on {method} {path}: {notion_message}",
        context={**context, "body": body},
    )


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------

class AsyncNotionTransport:
    """Asynchronous HTTP transport with auth, retry, and rate limiting.

    Parameters
    ----------
    config:
        A :class:`BlogConfig` controlling all transport behaviour.
    """

    def __init__(self, config: BlogConfig) -> None:
        self._config = config
        self._bucket = AsyncTokenBucket(rate_rps=config.rate_limit_rps, burst=10)
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers={
                "Authorization": f"Bearer {config.token}",
                "Notion-Version": config.notion_version,
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(config.timeout_seconds),
            proxy=config.http_proxy,
        )

    # -- public API --------------------------------------------------------

    async def request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Execute an HTTP request against the Notion API.

        Parameters
        ----------
        method:
            HTTP method (``GET``, ``POST``, ...).
        path:
            API path relative to ``base_url`` (e.g. ``/pages/{id}``).
        **kwargs:
            Forwarded to :meth:`httpx.AsyncClient.request` (``json=``,
            ``params=``, ``headers=``).

        Returns
        -------
        dict
            Parsed JSON response body (``{}`` for empty responses).

        Raises
        ------
        NotionBlogAuthError
            On 401 responses.
        NotionBlogPermissionError
            On 403 responses.
        NotionBlogNotFoundError
            On 404 responses.
        NotionBlogValidationError
            On 400 and other non-retryable 4xx responses.
        NotionBlogInvalidResponseError
            On a 2xx body that is not a JSON object.
        NotionBlogNetworkError
            On a transport failure that may not be retried.
        NotionBlogRetryExhaustedError
            When every attempt ended in a retryable failure.
        """
        max_attempts = self._config.retry_max_attempts
        last_status: int | None = None
        tags = {"method": method, "path": path}

        for attempt in range(max_attempts):
            wait = await self._bucket.acquire()
            if wait > 0:
                self._metrics.timing("notionblog.rate_limit_wait_ms", wait * 1000, tags=tags)

            t0 = time.monotonic()
            try:
                response = await self._client.request(method, path, **kwargs)
            except httpx.TransportError as exc:
                await asyncio.sleep(self._network_retry_delay(method, path, exc, attempt))
                continue
            elapsed_ms = (time.monotonic() - t0) * 1000

            last_status = response.status_code
            status_tags = {**tags, "status": str(response.status_code)}
            self._metrics.increment("notionblog.requests_total", tags=status_tags)
            self._metrics.timing("notionblog.request_duration_ms", elapsed_ms, tags=status_tags)

            if 200 <= response.status_code < 300:
                if response.status_code == 204 or not response.content:
                    return {}
                return _json_body(response, path)

            if response.status_code not in RETRYABLE_STATUSES:
                _raise_for_status(response, method, path)

            if not should_retry(response.status_code, None, attempt, max_attempts):
                break

            retry_after: float | None = None
            reason = "server_error"
            if response.status_code == 429:
                retry_after = _parse_retry_after(response)
                reason = "rate_limited"
                self._metrics.increment("notionblog.rate_limited_total", tags=tags)
                log.warning(
                    "Rate limited by Notion API",
                    extra={
                        "extra_fields": {
                            "op": "request",
                            "method": method,
                            "path": path,
                            "retry_after": retry_after,
                            "attempt": attempt + 1,
                        }
                    },
                )

            delay = compute_backoff(
                attempt,
                base=self._config.retry_base_delay,
                maximum=self._config.retry_max_delay,
                jitter=self._config.retry_jitter,
                retry_after=retry_after,
            )
            self._metrics.increment("notionblog.retries_total", tags={**tags, "reason": reason})
            await asyncio.sleep(delay)

        ctx: dict[str, Any] = {"attempts": max_attempts, "last_status_code": last_status}
        raise NotionBlogRetryExhaustedError(
            message=(
                f"All {max_attempts} attempts exhausted for {method} {path} "
                f"(last status: {last_status})"
            ),
            context=ctx,
        )

    async def paginate(
        self,
        path: str,
        *,
        method: str = "GET",
        page_size: int = 100,
        max_pages: int | None = None,
        body: dict[str, Any] | None = None,
    ) -> AsyncIterator[dict]:
        """Yield the result items of a Notion list endpoint.

        Follows ``next_cursor`` until ``has_more`` is false or *max_pages*
        pages have been fetched.  ``GET`` endpoints receive the cursor as
        query parameters, ``POST`` endpoints in the JSON *body*.
        """
        cursor: str | None = None
        pages = 0

        while True:
            paging: dict[str, Any] = {"page_size": page_size}
            if cursor is not None:
                paging["start_cursor"] = cursor

            if method.upper() == "GET":
                data = await self.request(method, path, params=paging)
            else:
                data = await self.request(method, path, json={**(body or {}), **paging})
            pages += 1

            results = data.get("results", [])
            if not isinstance(results, list):
                raise NotionBlogInvalidResponseError(
                    message=f"Expected a results list from {method} {path}",
                    context={"path": path, "body_preview": repr(results)[:200]},
                )
            for item in results:
                yield item

            if not data.get("has_more", False):
                break
            if max_pages is not None and pages >= max_pages:
                log.debug(
                    "Stopped pagination at page limit",
                    extra={"extra_fields": {"op": "paginate", "path": path, "pages": pages}},
                )
                break
            cursor = data.get("next_cursor")
            if cursor is None:
                break

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncNotionTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # -- internals ---------------------------------------------------------

    def _network_retry_delay(
        self, method: str, path: str, exc: Exception, attempt: int,
    ) -> float:
        """Backoff for a network error, or raise if it may not be retried."""
        self._metrics.increment(
            "notionblog.requests_total",
            tags={"method": method, "path": path, "status": "error"},
        )
        log.warning(
            "Request network error",
            extra={
                "extra_fields": {
                    "op": "request",
                    "method": method,
                    "path": path,
                    "attempt": attempt + 1,
                    "error": str(exc),
                }
            },
        )
        if not should_retry(None, exc, attempt, self._config.retry_max_attempts):
            raise NotionBlogNetworkError(
                message=f"Network error on {method} {path}: {exc}",
                context={"url": path, "attempt": attempt + 1},
                cause=exc,
            ) from exc
        self._metrics.increment(
            "notionblog.retries_total",
            tags={"method": method, "path": path, "reason": "network_error"},
        )
        return compute_backoff(
            attempt,
            base=self._config.retry_base_delay,
            maximum=self._config.retry_max_delay,
            jitter=self._config.retry_jitter,
        )
