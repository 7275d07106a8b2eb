# -*- coding: utf-8 -*-
"""Async HTTP client with retries and rate-limit handling."""

from __future__ import annotations

import asyncio
import random
import uuid
import aiohttp
import structlog
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional
from structlog.contextvars import bound_contextvars

from battery_deal_tracker.config import Settings
from battery_deal_tracker.exceptions import RateLimitError, StoreError

# Sent at most once when the outcome is unknown (network error, timeout, 5xx).
_NOT_RETRIED_ON_FAILURE = frozenset({"POST"})


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Status, headers and decoded JSON body (None for an empty body)."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    data: Any = None


def _retry_after_seconds(headers: Mapping[str, str]) -> Optional[float]:
    header = headers.get("Retry-After")
    if not header:
        return None
    try:
        return float(header)
    except ValueError:
        return None


async def _error_detail(response: aiohttp.ClientResponse) -> str:
    """Best-effort message from an error response (PostgREST sends JSON with 'message')."""
    try:
        payload = await response.json(content_type=None)
    except (ValueError, aiohttp.ContentTypeError):
        payload = None
    if isinstance(payload, dict):
        message = payload.get("message") or payload.get("error") or payload.get("msg")
        if message:
            return str(message)
    text = await response.text()
    return text.strip() or (response.reason or "")


class AsyncHttpClient:
    """Async HTTP client for the deal store with retries and 429 handling.

    Network errors, timeouts and 5xx responses are retried with exponential
    backoff, except for POST which fails on the first of them. 429 waits for
    Retry-After when given; any other 4xx fails at once since repeating the
    same request cannot succeed.

    Injects Settings and optionally an aiohttp.ClientSession. If no session
    is provided, one is created and must be closed via aclose() or used
    as an async context manager.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        default_headers: Optional[Dict[str, str]] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Configuration (store.timeout_seconds, store.max_retries).
            session: Optional shared aiohttp session. If None, the client
                creates and owns a session (call aclose() when done).
            default_headers: Headers sent with every request of an owned session.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._default_headers = dict(default_headers or {})
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._settings.store.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout, headers=self._default_headers)
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client owns it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    def _backoff_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter, capped at 4 seconds."""
        base = min(4.0, 0.25 * (2**attempt))
        return base + random.uniform(0.0, 0.15)

    def _request_failed(
        self, method: str, url: str, error: Optional[Exception], attempts: int
    ) -> StoreError:
        status_code = (
            getattr(error, "status", None) if isinstance(error, aiohttp.ClientResponseError) else None
        )
        self._logger.error(
            "http_request_failed",
            http_status_code=status_code,
            http_attempts=attempts,
            error_type=type(error).__name__ if error else None,
            error_message=str(error) if error else None,
        )
        return StoreError(
            f"{method} failed after {attempts} attempt(s): {url}",
            url=url,
            status_code=status_code,
            cause=error,
        )

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> HttpResponse:
        """Perform a request and return status, headers and parsed JSON.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE).
            url: Full URL to request.
            params: Optional query parameters.
            json: Optional JSON-serializable body.
            headers: Optional per-request headers.

        Returns:
            HttpResponse with the decoded body (None when the body is empty).

        Raises:
            StoreError: On a non-retryable 4xx, a non-JSON success body, a
                failed POST, or when retries are exhausted.
            RateLimitError: If the last attempt was answered with 429.
        """
        request_id = uuid.uuid4().hex[:12]
        max_retries = self._settings.store.max_retries
        last_error: Optional[Exception] = None
        rate_limited_after: Optional[float] = None
        was_rate_limited = False

        with bound_contextvars(
            http_method=method,
            http_url=url,
            http_request_id=request_id,
            http_max_retries=max_retries,
        ):
            for attempt in range(max_retries):
                with bound_contextvars(http_attempt=attempt + 1):
                    try:
                        session = await self._get_session()
                        async with session.request(
                            method, url, params=params, json=json, headers=headers
                        ) as response:
                            if response.status == 429:
                                was_rate_limited = True
                                rate_limited_after = _retry_after_seconds(response.headers)
                                self._logger.warning(
                                    "http_request_rate_limited",
                                    http_status_code=429,
                                    http_retry_after_seconds=rate_limited_after,
                                )
                                if rate_limited_after is not None and rate_limited_after > 0:
                                    await asyncio.sleep(rate_limited_after)
                                else:
                                    await asyncio.sleep(self._backoff_delay(attempt))
                                continue

                            if 400 <= response.status < 500:
                                detail = await _error_detail(response)
                                self._logger.warning(
                                    "http_request_rejected",
                                    http_status_code=response.status,
                                    error_message=detail,
                                )
                                raise StoreError(
                                    f"{method} {url} rejected ({response.status}): {detail}",
                                    url=url,
                                    status_code=response.status,
                                )

                            response.raise_for_status()
                            try:
                                data = None if response.status == 204 else await response.json(content_type=None)
                            except ValueError as e:
                                self._logger.warning("http_response_not_json", http_status_code=response.status)
                                raise StoreError(
                                    f"{method} {url} returned a non-JSON body ({response.status})",
                                    url=url,
                                    status_code=response.status,
                                    cause=e,
                                ) from e
                            return HttpResponse(
                                status=response.status,
                                headers=dict(response.headers),
                                data=data,
                            )
                    except aiohttp.ClientResponseError as e:
                        was_rate_limited = False
                        last_error = e
                        if method.upper() in _NOT_RETRIED_ON_FAILURE:
                            raise self._request_failed(method, url, e, attempt + 1) from e
                        self._logger.debug(
                            "http_request_retry",
                            error_type=type(e).__name__,
                            error_message=str(e),
                            http_status_code=getattr(e, "status", None),
                        )
                        await asyncio.sleep(self._backoff_delay(attempt))
                    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                        was_rate_limited = False
                        last_error = e
                        if method.upper() in _NOT_RETRIED_ON_FAILURE:
                            raise self._request_failed(method, url, e, attempt + 1) from e
                        self._logger.debug(
                            "http_request_retry",
                            error_type=type(e).__name__,
                            error_message=str(e),
                        )
                        await asyncio.sleep(self._backoff_delay(attempt))

            if was_rate_limited:
                self._logger.error("http_request_rate_limit_exhausted", http_attempts=max_retries)
                raise RateLimitError(
                    f"{method} rate limited after {max_retries} attempts: {url}",
                    url=url,
                    retry_after=rate_limited_after,
                )

            raise self._request_failed(method, url, last_error, max_retries) from last_error

    async def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> HttpResponse:
        """GET with retries (see request)."""
        return await self.request("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        *,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> HttpResponse:
        """POST a JSON body; only 429 is retried (see request)."""
        return await self.request("POST", url, params=params, json=json, headers=headers)

    async def patch(
        self,
        url: str,
        *,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> HttpResponse:
        """PATCH a JSON body with retries (see request)."""
        return await self.request("PATCH", url, params=params, json=json, headers=headers)

    async def delete(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> HttpResponse:
        """DELETE with retries (see request)."""
        return await self.request("DELETE", url, params=params, headers=headers)
