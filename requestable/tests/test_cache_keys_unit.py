from __future__ import annotations

import datetime as dt

from requestable.base.cache_keys import canonical_body, generate_cache_key
from requestable.base.models import HTTPMethod, RequestDescriptor


def test_key_without_body_has_empty_suffix():
    assert generate_cache_key("/users", HTTPMethod.GET) == "GET:/users:"  # nosec B101 - assert is appropriate in unit tests


def test_key_accepts_plain_method_string():
    assert generate_cache_key("/users", "POST", {"a": 1}) == 'POST:/users:{"a":1}'  # nosec B101


def test_field_order_does_not_change_key():
    k1 = generate_cache_key("/search", HTTPMethod.POST, {"q": "x", "page": 2, "filters": {"b": 1, "a": 2}})
    k2 = generate_cache_key("/search", HTTPMethod.POST, {"filters": {"a": 2, "b": 1}, "page": 2, "q": "x"})
    assert k1 == k2  # nosec B101


def test_distinct_bodies_give_distinct_keys():
    bodies = [
        None,
        {},
        {"id": 1},
        {"id": "1"},
        {"id": 2},
        {"id": 1, "extra": None},
        {"tags": ["a", "b"]},
        {"tags": ["b", "a"]},
    ]
    keys = {generate_cache_key("/items", HTTPMethod.POST, b) for b in bodies}
    assert len(keys) == len(bodies)  # nosec B101


def test_method_and_endpoint_are_part_of_key():
    assert generate_cache_key("/a", HTTPMethod.GET) != generate_cache_key("/a", HTTPMethod.HEAD)  # nosec B101
    assert generate_cache_key("/a", HTTPMethod.GET) != generate_cache_key("/b", HTTPMethod.GET)  # nosec B101


def test_non_json_values_are_stringified():
    body = {"at": dt.date(2024, 1, 2)}
    assert canonical_body(body) == '{"at":"2024-01-02"}'  # nosec B101


def test_request_descriptor_cache_key_matches_function():
    descriptor = RequestDescriptor(endpoint="/users/1", method=HTTPMethod.GET)
    assert descriptor.cache_key() == generate_cache_key("/users/1", HTTPMethod.GET)  # nosec B101
    assert descriptor.to_dict() == {  # nosec B101
        "endpoint": "/users/1",
        "method": "GET",
        "body": None,
        "headers": {},
    }
