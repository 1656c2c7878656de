from __future__ import annotations

import asyncio

import pytest

from requestable.base.errors import ErrorKind, NetworkError
from requestable.base.models import HTTPMethod
from requestable.base.resilience.retry import (
    DEFAULT_RETRY_CONFIG,
    RetryConfig,
    RetryDecorator,
    retrying,
)


def test_default_config_values():
    cfg = DEFAULT_RETRY_CONFIG
    assert cfg.max_attempts == 3  # nosec B101 - asserts are appropriate in unit tests
    assert cfg.initial_delay == 0.3  # nosec B101
    assert cfg.backoff_factor == 2.0  # nosec B101
    assert cfg.max_delay == 3.0  # nosec B101
    assert cfg.retryable_kinds == {ErrorKind.NETWORK_FAILURE, ErrorKind.TIMEOUT, ErrorKind.HTTP_ERROR}  # nosec B101


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_attempts": 0},
        {"initial_delay": -1.0},
        {"backoff_factor": 0.5},
        {"initial_delay": 2.0, "max_delay": 1.0},
    ],
)
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ValueError):
        RetryConfig(**kwargs)


def test_delays_grow_and_cap():
    cfg = RetryConfig(max_attempts=6, initial_delay=0.5, backoff_factor=2.0, max_delay=3.0)
    assert list(cfg.delays()) == [0.5, 1.0, 2.0, 3.0, 3.0]  # nosec B101


@pytest.mark.asyncio
async def test_always_failing_network_error_invoked_max_attempts(mock_requestable, recording_sleep):
    error = NetworkError.network_failure("connection reset")
    mock_requestable.mock_error("/status", HTTPMethod.GET, error)
    layer = retrying(mock_requestable, sleep=recording_sleep)

    with pytest.raises(NetworkError) as ei:
        await layer.request("/status", HTTPMethod.GET)

    assert ei.value is error  # nosec B101
    assert mock_requestable.call_count == 3  # nosec B101
    assert recording_sleep.delays == pytest.approx([0.3, 0.6])  # nosec B101


@pytest.mark.asyncio
async def test_client_http_error_not_retried(mock_requestable, recording_sleep):
    mock_requestable.mock_error("/missing", HTTPMethod.GET, NetworkError.http_error(404))
    layer = RetryDecorator(mock_requestable, sleep=recording_sleep)

    with pytest.raises(NetworkError) as ei:
        await layer.request("/missing", HTTPMethod.GET)

    assert ei.value.status_code == 404  # nosec B101
    assert mock_requestable.call_count == 1  # nosec B101
    assert recording_sleep.delays == []  # nosec B101


@pytest.mark.asyncio
async def test_server_error_retried_then_succeeds(mock_requestable, recording_sleep):
    mock_requestable.mock_response_sequence(
        "/jobs", HTTPMethod.GET, [NetworkError.http_error(503), NetworkError.timeout(), {"jobs": []}]
    )
    attempts = []

    def attempt_logger(**kw):
        attempts.append(kw)

    cfg = RetryConfig(max_attempts=4, initial_delay=0.1, attempt_logger=attempt_logger)
    layer = RetryDecorator(mock_requestable, cfg, sleep=recording_sleep)

    assert await layer.request("/jobs", HTTPMethod.GET) == {"jobs": []}  # nosec B101
    assert mock_requestable.call_count == 3  # nosec B101
    assert recording_sleep.delays == pytest.approx([0.1, 0.2])  # nosec B101
    assert [a["attempt"] for a in attempts] == [0, 1]  # nosec B101
    assert attempts[0]["error"].kind is ErrorKind.HTTP_ERROR  # nosec B101


@pytest.mark.asyncio
async def test_kind_outside_configured_set_not_retried(mock_requestable, recording_sleep):
    mock_requestable.mock_error("/x", HTTPMethod.GET, NetworkError.unauthorized())
    layer = RetryDecorator(mock_requestable, sleep=recording_sleep)

    with pytest.raises(NetworkError):
        await layer.request("/x", HTTPMethod.GET)
    assert mock_requestable.call_count == 1  # nosec B101


@pytest.mark.asyncio
async def test_custom_kind_retried_when_configured(mock_requestable, recording_sleep):
    mock_requestable.mock_response_sequence("/x", HTTPMethod.GET, [NetworkError.custom("blip"), "ok"])
    cfg = RetryConfig(retryable_kinds={ErrorKind.CUSTOM})
    layer = RetryDecorator(mock_requestable, cfg, sleep=recording_sleep)

    assert await layer.request("/x", HTTPMethod.GET) == "ok"  # nosec B101
    assert mock_requestable.call_count == 2  # nosec B101


@pytest.mark.asyncio
async def test_foreign_error_propagates_immediately(mock_requestable, recording_sleep):
    mock_requestable.mock_error("/x", HTTPMethod.GET, ValueError("bad input"))
    layer = RetryDecorator(mock_requestable, sleep=recording_sleep)

    with pytest.raises(ValueError):
        await layer.request("/x", HTTPMethod.GET)
    assert mock_requestable.call_count == 1  # nosec B101
    assert recording_sleep.delays == []  # nosec B101


@pytest.mark.asyncio
async def test_single_attempt_config_never_sleeps(mock_requestable, recording_sleep):
    mock_requestable.mock_error("/x", HTTPMethod.GET, NetworkError.timeout())
    layer = RetryDecorator(mock_requestable, RetryConfig(max_attempts=1), sleep=recording_sleep)

    with pytest.raises(NetworkError):
        await layer.request("/x", HTTPMethod.GET)
    assert mock_requestable.call_count == 1  # nosec B101
    assert recording_sleep.delays == []  # nosec B101


@pytest.mark.asyncio
async def test_parameters_forwarded_unchanged(mock_requestable, recording_sleep):
    mock_requestable.mock_response("/items", HTTPMethod.PUT, {"saved": True}, body={"id": 7})
    layer = RetryDecorator(mock_requestable, sleep=recording_sleep)

    await layer.request("/items", HTTPMethod.PUT, {"id": 7}, dict, {"X-Trace": "t1"})

    sent = mock_requestable.request_history[0]
    assert sent.body == {"id": 7}  # nosec B101
    assert sent.headers == {"X-Trace": "t1"}  # nosec B101
    assert sent.response_hint is dict  # nosec B101


@pytest.mark.asyncio
async def test_backoff_wait_does_not_block_other_requests(mock_requestable, secondary_requestable):
    mock_requestable.mock_response_sequence(
        "/slow", HTTPMethod.GET, [NetworkError.network_failure("reset"), "slow"]
    )
    secondary_requestable.mock_response("/fast", HTTPMethod.GET, "fast")
    layer = RetryDecorator(mock_requestable, RetryConfig(initial_delay=0.3))
    finished = []

    async def run(requestable, endpoint):
        result = await requestable.request(endpoint, HTTPMethod.GET)
        finished.append(result)
        return result

    results = await asyncio.gather(run(layer, "/slow"), run(secondary_requestable, "/fast"))

    assert results == ["slow", "fast"]  # nosec B101
    assert finished == ["fast", "slow"]  # nosec B101
    assert mock_requestable.call_count == 2  # nosec B101
