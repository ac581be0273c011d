from __future__ import annotations

import asyncio

import httpx
import pytest

from inflight.fetch import RetryConfig, fetch_r, is_retryable
from inflight.errors import RetryableResponseError

URL = "http://www.example.com/api"


def run_async(coro):
    return asyncio.run(coro)


def scripted_client(*steps):
    """Client whose transport replays ``steps``: status codes, exceptions or coroutines."""
    remaining = list(steps)
    seen: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        step = remaining.pop(0)
        if isinstance(step, BaseException):
            raise step
        if callable(step):
            return await step(request)
        return httpx.Response(step, json={"message": f"status {step}"})

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return client, seen, remaining


def test_happy_flow():
    async def scenario() -> None:
        client, seen, remaining = scripted_client(200)
        async with client:
            response = await fetch_r(URL, client=client)
        assert response.status_code == 200
        assert response.json() == {"message": "status 200"}
        assert len(seen) == 1
        assert seen[0].method == "GET"
        assert not remaining

    run_async(scenario())


def test_success_after_initial_503():
    async def scenario() -> None:
        client, seen, remaining = scripted_client(503, 200)
        async with client:
            response = await fetch_r(
                URL, client=client, retry_config=RetryConfig(retry_delay_s=0.001)
            )
        assert response.status_code == 200
        assert len(seen) == 2
        assert not remaining

    run_async(scenario())


def test_success_after_two_503s_reports_retry_attempts():
    async def scenario() -> None:
        attempts: list[int] = []
        config = RetryConfig(
            retry_delay_s=0.001,
            on_retry_attempt=lambda attempt, error: attempts.append(attempt),
        )
        client, seen, remaining = scripted_client(503, 503, 200)
        async with client:
            response = await fetch_r(URL, client=client, retry_config=config)
        assert response.status_code == 200
        assert attempts == [1, 2]
        assert not remaining

    run_async(scenario())


def test_returns_last_response_after_exhausting_retries():
    async def scenario() -> None:
        client, seen, remaining = scripted_client(503, 503, 503)
        async with client:
            response = await fetch_r(
                URL, client=client, retry_config=RetryConfig(retry_delay_s=0)
            )
        assert response.status_code == 503
        assert len(seen) == 3
        assert not remaining

    run_async(scenario())


def test_non_retryable_status_is_returned_immediately():
    async def scenario() -> None:
        client, seen, remaining = scripted_client(404, 200)
        async with client:
            response = await fetch_r(URL, client=client)
        assert response.status_code == 404
        assert len(seen) == 1
        assert remaining == [200]

    run_async(scenario())


def test_retries_connection_reset():
    async def scenario() -> None:
        errors: list[BaseException] = []
        config = RetryConfig(
            retry_delay_s=0.001,
            on_retry_attempt=lambda attempt, error: errors.append(error),
        )
        client, seen, remaining = scripted_client(
            httpx.ReadError("[Errno 104] Connection reset by peer"), 200
        )
        async with client:
            response = await fetch_r(URL, client=client, retry_config=config)
        assert response.status_code == 200
        assert len(errors) == 1
        assert isinstance(errors[0], httpx.ReadError)

    run_async(scenario())


def test_other_network_errors_are_raised_without_retry():
    async def scenario() -> None:
        client, seen, remaining = scripted_client(
            httpx.ConnectError("Name or service not known"), 200
        )
        async with client:
            with pytest.raises(httpx.ConnectError):
                await fetch_r(URL, client=client, retry_config=RetryConfig(retry_delay_s=0))
        assert len(seen) == 1

    run_async(scenario())


def test_fails_after_timeouts():
    async def slow(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(0.5)
        return httpx.Response(200)

    async def scenario() -> None:
        client, seen, remaining = scripted_client(slow, slow)
        config = RetryConfig(retry_attempts=1, retry_delay_s=0.001, timeout_s=0.05)
        async with client:
            with pytest.raises(TimeoutError):
                await fetch_r(URL, client=client, retry_config=config)
        assert len(seen) == 2

    run_async(scenario())


def test_retries_after_first_timeout():
    async def slow(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(0.5)
        return httpx.Response(200)

    async def scenario() -> None:
        attempts: list[int] = []
        config = RetryConfig(
            retry_attempts=2,
            retry_delay_s=0.001,
            timeout_s=0.05,
            on_retry_attempt=lambda attempt, error: attempts.append(attempt),
        )
        client, seen, remaining = scripted_client(slow, 200)
        async with client:
            response = await fetch_r(URL, client=client, retry_config=config)
        assert response.status_code == 200
        assert attempts == [1]

    run_async(scenario())


def test_forwards_method_and_request_options():
    async def scenario() -> None:
        client, seen, remaining = scripted_client(201)
        async with client:
            response = await fetch_r(
                URL,
                method="POST",
                client=client,
                json={"grant_type": "client_credentials"},
                headers={"x-trace": "abc"},
            )
        assert response.status_code == 201
        assert seen[0].method == "POST"
        assert seen[0].headers["x-trace"] == "abc"
        assert b"client_credentials" in seen[0].content

    run_async(scenario())


def test_is_retryable_classification():
    response = httpx.Response(503)
    assert is_retryable(RetryableResponseError(response))
    assert is_retryable(TimeoutError())
    assert is_retryable(httpx.ReadTimeout("read timed out"))

    wrapped = RuntimeError("transport failed")
    wrapped.__cause__ = ConnectionResetError(104, "Connection reset by peer")
    assert is_retryable(wrapped)

    assert not is_retryable(ValueError("boom"))
    assert not is_retryable(httpx.ConnectError("refused"))


def test_reset_only_in_implicit_context_is_not_retried():
    try:
        raise httpx.ReadError("connection reset")
    except httpx.ReadError:
        try:
            raise ValueError("bad payload while handling read error")
        except ValueError as error:
            handled = error

    assert isinstance(handled.__context__, httpx.ReadError)
    assert handled.__cause__ is None
    assert not is_retryable(handled)


def test_opens_private_client_when_none_given(monkeypatch):
    real_client = httpx.AsyncClient
    opened: list[httpx.AsyncClient] = []
    statuses = [502, 200]

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(statuses.pop(0))

    def client_factory(*args, **kwargs) -> httpx.AsyncClient:
        client = real_client(transport=httpx.MockTransport(handler))
        opened.append(client)
        return client

    monkeypatch.setattr(httpx, "AsyncClient", client_factory)

    async def scenario() -> None:
        response = await fetch_r(URL, retry_config=RetryConfig(retry_delay_s=0))
        assert response.status_code == 200

    run_async(scenario())

    assert len(opened) == 1
    assert opened[0].is_closed
    assert statuses == []
