from __future__ import annotations

import pytest

from requestable.base.auth import AuthenticatedDecorator, authenticated
from requestable.base.auth.authenticated import bearer_value, merge_header
from requestable.base.errors import ErrorKind, NetworkError
from requestable.base.models import HTTPMethod


def _never_called():
    raise AssertionError("token provider must not be consulted")


def test_bearer_value_prefixes_once():
    assert bearer_value("abc") == "Bearer abc"  # nosec B101 - assert is appropriate in unit tests
    assert bearer_value("Bearer abc") == "Bearer abc"  # nosec B101


def test_merge_header_replaces_case_variants():
    merged = merge_header({"authorization": "old", "X-Other": "1"}, "Authorization", "Bearer new")
    assert merged == {"X-Other": "1", "Authorization": "Bearer new"}  # nosec B101


@pytest.mark.asyncio
async def test_public_endpoint_skips_provider_and_passes_headers(mock_requestable):
    mock_requestable.mock_response("/public", HTTPMethod.GET, "ok")
    layer = AuthenticatedDecorator(mock_requestable, _never_called, needs_auth=lambda endpoint: False)
    headers = {"X-Trace": "t1"}

    await layer.request("/public", HTTPMethod.GET, headers=headers)

    assert mock_requestable.request_history[0].headers == {"X-Trace": "t1"}  # nosec B101


@pytest.mark.asyncio
async def test_token_added_as_bearer_header(mock_requestable):
    mock_requestable.mock_response("/me", HTTPMethod.GET, {"id": 1})
    layer = authenticated(mock_requestable, lambda: "abc")

    await layer.request("/me", HTTPMethod.GET)

    assert mock_requestable.request_history[0].headers == {"Authorization": "Bearer abc"}  # nosec B101


@pytest.mark.asyncio
async def test_prefixed_token_not_double_prefixed(mock_requestable):
    mock_requestable.mock_response("/me", HTTPMethod.GET, {"id": 1})
    layer = authenticated(mock_requestable, lambda: "Bearer abc")

    await layer.request("/me", HTTPMethod.GET)

    assert mock_requestable.request_history[0].headers["Authorization"] == "Bearer abc"  # nosec B101


@pytest.mark.asyncio
async def test_caller_headers_kept_and_not_mutated(mock_requestable):
    mock_requestable.mock_response("/me", HTTPMethod.GET, {"id": 1})
    layer = authenticated(mock_requestable, lambda: "abc")
    headers = {"X-Trace": "t1", "authorization": "stale"}

    await layer.request("/me", HTTPMethod.GET, headers=headers)

    assert mock_requestable.request_history[0].headers == {"X-Trace": "t1", "Authorization": "Bearer abc"}  # nosec B101
    assert headers == {"X-Trace": "t1", "authorization": "stale"}  # nosec B101


@pytest.mark.asyncio
async def test_custom_header_name(mock_requestable):
    mock_requestable.mock_response("/me", HTTPMethod.GET, {"id": 1})
    layer = authenticated(mock_requestable, lambda: "abc", header_name="X-Api-Token")

    await layer.request("/me", HTTPMethod.GET)

    assert mock_requestable.request_history[0].headers == {"X-Api-Token": "Bearer abc"}  # nosec B101


@pytest.mark.asyncio
@pytest.mark.parametrize("token", [None, ""])
async def test_missing_token_rejects_without_calling_wrapped(mock_requestable, token):
    layer = authenticated(mock_requestable, lambda: token)

    with pytest.raises(NetworkError) as ei:
        await layer.request("/me", HTTPMethod.GET)

    assert ei.value.kind is ErrorKind.UNAUTHORIZED  # nosec B101
    assert mock_requestable.call_count == 0  # nosec B101


@pytest.mark.asyncio
async def test_async_token_provider(mock_requestable):
    mock_requestable.mock_response("/me", HTTPMethod.GET, {"id": 1})

    async def refresh():
        return "fresh"

    layer = authenticated(mock_requestable, refresh)
    await layer.request("/me", HTTPMethod.GET)

    assert mock_requestable.request_history[0].headers == {"Authorization": "Bearer fresh"}  # nosec B101


@pytest.mark.asyncio
async def test_needs_auth_receives_endpoint(mock_requestable):
    seen = []
    mock_requestable.mock_response("/private/x", HTTPMethod.GET, 1)
    mock_requestable.mock_response("/health", HTTPMethod.GET, 2)

    def needs_auth(endpoint):
        seen.append(endpoint)
        return endpoint.startswith("/private")

    layer = authenticated(mock_requestable, lambda: "abc", needs_auth)
    await layer.request("/private/x", HTTPMethod.GET)
    await layer.request("/health", HTTPMethod.GET)

    assert seen == ["/private/x", "/health"]  # nosec B101
    assert [r.headers for r in mock_requestable.request_history] == [{"Authorization": "Bearer abc"}, {}]  # nosec B101
