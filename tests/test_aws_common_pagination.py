"""Tests for shared AWS pagination and error helpers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import pytest
from botocore.exceptions import EndpointConnectionError, OperationNotPageableError

from contracts.errors import CollaboratorError
from services._common import aws_call, guarded_iter, paginate_items, strip_zone_id
from tests.aws_mocks import make_client_error


class _FakePaginator:
    def __init__(self, pages: list[Mapping[str, Any]]) -> None:
        self._pages = pages

    def paginate(self, **_kwargs: Any) -> Iterable[Mapping[str, Any]]:
        yield from self._pages


class _PaginatorClient:
    def __init__(self, pages: list[Mapping[str, Any]]) -> None:
        self._pages = pages

    def get_paginator(self, _op: str) -> _FakePaginator:
        return _FakePaginator(self._pages)


class _MarkerClient:
    def __init__(self, pages: list[Mapping[str, Any]]) -> None:
        self._pages = list(pages)
        self.requests: list[dict[str, Any]] = []

    def describe_items(self, **kwargs: Any) -> Mapping[str, Any]:
        self.requests.append(dict(kwargs))
        return self._pages[len(self.requests) - 1]


class _NotPageableClient(_MarkerClient):
    def get_paginator(self, op: str) -> _FakePaginator:
        raise OperationNotPageableError(operation_name=op)


def test_paginate_items_prefers_paginator() -> None:
    client = _PaginatorClient(
        pages=[
            {"Items": [{"id": "a"}, "skip"]},
            {"Items": [{"id": "b"}]},
        ]
    )
    out = list(paginate_items(client, "describe_items", "Items"))
    assert [x["id"] for x in out] == ["a", "b"]


def test_paginate_items_falls_back_to_marker_loop() -> None:
    client = _NotPageableClient(
        pages=[
            {"Items": [{"id": "a"}], "NextMarker": "m1"},
            {"Items": [{"id": "b"}]},
        ]
    )
    out = list(paginate_items(client, "describe_items", "Items"))
    assert [x["id"] for x in out] == ["a", "b"]
    assert client.requests == [{}, {"Marker": "m1"}]


def test_paginate_items_multi_key_continuation() -> None:
    client = _MarkerClient(
        pages=[
            {
                "Items": [{"id": "a"}],
                "IsTruncated": True,
                "NextRecordName": "b.example.com.",
                "NextRecordType": "A",
            },
            {"Items": [{"id": "b"}], "IsTruncated": False},
        ]
    )
    out = list(
        paginate_items(
            client,
            "describe_items",
            "Items",
            params={"HostedZoneId": "Z2"},
            continuation_keys={"NextRecordName": "StartRecordName", "NextRecordType": "StartRecordType"},
        )
    )
    assert [x["id"] for x in out] == ["a", "b"]
    assert client.requests == [
        {"HostedZoneId": "Z2"},
        {"HostedZoneId": "Z2", "StartRecordName": "b.example.com.", "StartRecordType": "A"},
    ]


def test_paginate_items_raises_when_operation_missing() -> None:
    with pytest.raises(AttributeError):
        list(paginate_items(object(), "missing_op", "Items"))


def test_aws_call_wraps_client_error() -> None:
    with pytest.raises(CollaboratorError) as excinfo:
        with aws_call("ListHostedZones"):
            raise make_client_error("ListHostedZones", code="Throttling", message="Rate exceeded")
    assert excinfo.value.code == "Throttling"
    assert str(excinfo.value) == "ListHostedZones failed: Throttling: Rate exceeded"
    assert excinfo.value.__cause__ is not None


def test_guarded_iter_wraps_errors_raised_mid_listing() -> None:
    def _pages():
        yield 1
        raise EndpointConnectionError(endpoint_url="https://elasticloadbalancing.us-west-2.amazonaws.com")

    it = guarded_iter("DescribeLoadBalancers", _pages)
    assert next(it) == 1
    with pytest.raises(CollaboratorError) as excinfo:
        next(it)
    assert excinfo.value.operation == "DescribeLoadBalancers"


def test_strip_zone_id() -> None:
    assert strip_zone_id("/hostedzone/Z2") == "Z2"
    assert strip_zone_id("Z2") == "Z2"
    assert strip_zone_id(None) == ""
