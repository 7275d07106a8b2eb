# -*- coding: utf-8 -*-
"""Unit tests for AsyncHttpClient retry, rejection and rate-limit policy."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, Mock

import aiohttp
import pytest

from battery_deal_tracker.clients.http import AsyncHttpClient
from battery_deal_tracker.exceptions import RateLimitError, StoreError


class _FakeResponse:
    """Just enough of aiohttp.ClientResponse for the client."""

    def __init__(
        self,
        status: int,
        *,
        data: Any = None,
        headers: dict[str, str] | None = None,
        text: str = "",
    ) -> None:
        self.status = status
        self.headers = headers or {}
        self.reason = "Reason"
        self._data = data
        self._text = text

    async def json(self, content_type: Any = None) -> Any:
        if self._data is None:
            raise ValueError("no json body")
        return self._data

    async def text(self) -> str:
        return self._text

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise aiohttp.ClientResponseError(
                request_info=Mock(), history=(), status=self.status, message="server error"
            )

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *args: Any) -> None:
        return None


class _FakeSession:
    """Replays queued responses (or raises queued exceptions) per request."""

    def __init__(self, *outcomes: Any) -> None:
        self._outcomes = list(outcomes)
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self.closed = False

    def request(self, method: str, url: str, **kwargs: Any) -> _FakeResponse:
        self.calls.append((method, url, kwargs))
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    sleep = AsyncMock()
    monkeypatch.setattr("battery_deal_tracker.clients.http.asyncio.sleep", sleep)
    return sleep


def _client(settings: Any, session: _FakeSession) -> AsyncHttpClient:
    return AsyncHttpClient(settings, session=session)  # type: ignore[arg-type]


async def test_returns_decoded_body_and_headers(settings: Any, no_sleep: AsyncMock) -> None:
    session = _FakeSession(_FakeResponse(200, data=[{"id": "d1"}], headers={"Content-Range": "0-0/1"}))

    response = await _client(settings, session).get("https://store.example/x", params={"a": "1"})

    assert response.status == 200
    assert response.data == [{"id": "d1"}]
    assert response.headers["Content-Range"] == "0-0/1"
    assert session.calls[0][0] == "GET"
    assert session.calls[0][2]["params"] == {"a": "1"}
    no_sleep.assert_not_awaited()


async def test_no_content_response_has_no_data(settings: Any, no_sleep: AsyncMock) -> None:
    session = _FakeSession(_FakeResponse(204))

    response = await _client(settings, session).delete("https://store.example/x")

    assert response.status == 204
    assert response.data is None


async def test_retries_server_errors_then_succeeds(settings: Any, no_sleep: AsyncMock) -> None:
    session = _FakeSession(_FakeResponse(503), _FakeResponse(200, data=[]))

    response = await _client(settings, session).get("https://store.example/x")

    assert response.status == 200
    assert len(session.calls) == 2
    assert no_sleep.await_count == 1


async def test_retries_network_errors_and_raises_store_error_when_exhausted(
    settings_factory: Callable[..., Any],
    no_sleep: AsyncMock,
) -> None:
    settings = settings_factory(max_retries=2)
    session = _FakeSession(aiohttp.ClientConnectionError("down"), TimeoutError())

    with pytest.raises(StoreError) as exc_info:
        await _client(settings, session).get("https://store.example/x")

    assert len(session.calls) == 2
    assert exc_info.value.url == "https://store.example/x"
    assert isinstance(exc_info.value.cause, TimeoutError)


async def test_timed_out_post_is_sent_once(settings: Any, no_sleep: AsyncMock) -> None:
    session = _FakeSession(TimeoutError(), _FakeResponse(201, data=[{"id": "d1"}]))

    with pytest.raises(StoreError) as exc_info:
        await _client(settings, session).post("https://store.example/x", json=[{}])

    assert len(session.calls) == 1
    assert isinstance(exc_info.value.cause, TimeoutError)
    assert exc_info.value.url == "https://store.example/x"
    no_sleep.assert_not_awaited()


async def test_post_server_error_is_not_resent(settings: Any, no_sleep: AsyncMock) -> None:
    session = _FakeSession(_FakeResponse(502), _FakeResponse(201, data=[{"id": "d1"}]))

    with pytest.raises(StoreError) as exc_info:
        await _client(settings, session).post("https://store.example/x", json=[{}])

    assert len(session.calls) == 1
    assert exc_info.value.status_code == 502


async def test_rate_limited_post_is_still_retried(settings: Any, no_sleep: AsyncMock) -> None:
    session = _FakeSession(
        _FakeResponse(429, headers={"Retry-After": "1"}),
        _FakeResponse(201, data=[{"id": "d1"}]),
    )

    response = await _client(settings, session).post("https://store.example/x", json=[{}])

    assert response.status == 201
    assert len(session.calls) == 2


async def test_non_json_success_body_raises_store_error(settings: Any, no_sleep: AsyncMock) -> None:
    session = _FakeSession(_FakeResponse(200, text="<html>gateway</html>"))

    with pytest.raises(StoreError, match="non-JSON") as exc_info:
        await _client(settings, session).get("https://store.example/x")

    assert exc_info.value.status_code == 200
    assert exc_info.value.url == "https://store.example/x"
    assert isinstance(exc_info.value.cause, ValueError)
    assert len(session.calls) == 1


async def test_client_error_fails_immediately_with_detail(settings: Any, no_sleep: AsyncMock) -> None:
    session = _FakeSession(
        _FakeResponse(400, data={"message": 'invalid input syntax for type numeric: "abc"'})
    )

    with pytest.raises(StoreError, match="invalid input syntax") as exc_info:
        await _client(settings, session).post("https://store.example/x", json=[{}])

    assert exc_info.value.status_code == 400
    assert len(session.calls) == 1
    no_sleep.assert_not_awaited()


async def test_rate_limit_honours_retry_after(settings: Any, no_sleep: AsyncMock) -> None:
    session = _FakeSession(
        _FakeResponse(429, headers={"Retry-After": "2"}),
        _FakeResponse(200, data=[]),
    )

    response = await _client(settings, session).get("https://store.example/x")

    assert response.status == 200
    no_sleep.assert_awaited_once_with(2.0)


async def test_rate_limit_exhausted_raises_rate_limit_error(
    settings_factory: Callable[..., Any],
    no_sleep: AsyncMock,
) -> None:
    settings = settings_factory(max_retries=2)
    session = _FakeSession(
        _FakeResponse(429, headers={"Retry-After": "1"}),
        _FakeResponse(429, headers={"Retry-After": "3"}),
    )

    with pytest.raises(RateLimitError) as exc_info:
        await _client(settings, session).get("https://store.example/x")

    assert exc_info.value.status_code == 429
    assert exc_info.value.retry_after == 3.0


async def test_aclose_leaves_injected_session_open(settings: Any) -> None:
    session = _FakeSession()

    async with _client(settings, session):
        pass

    assert session.closed is False
