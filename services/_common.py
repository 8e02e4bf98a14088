"""Shared helpers for the AWS adapter.

- paginate boto3 operations into a flat item iterator
- wrap botocore failures into :class:`contracts.errors.CollaboratorError`
- small normalizers for the loosely-typed boto3 response dicts
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any, Dict, Optional, Tuple

from botocore.exceptions import BotoCoreError, ClientError, OperationNotPageableError

from contracts.errors import CollaboratorError


def _paginator_or_none(
    client: Any,
    operation: str,
    fallback_exceptions: Tuple[type[Exception], ...],
) -> Any:
    if not hasattr(client, "get_paginator"):
        return None
    try:
        return client.get_paginator(operation)
    except fallback_exceptions:
        return None


def _page_items(page: Mapping[str, Any], result_key: str) -> Iterator[Dict[str, Any]]:
    for item in page.get(result_key, []) or []:
        if isinstance(item, dict):
            yield item


def paginate_items(
    client: Any,
    operation: str,
    result_key: str,
    *,
    params: Optional[Dict[str, Any]] = None,
    request_token_key: str = "Marker",
    response_token_keys: Sequence[str] = ("NextMarker",),
    continuation_keys: Optional[Mapping[str, str]] = None,
    paginator_fallback_exceptions: Tuple[type[Exception], ...] = (OperationNotPageableError,),
) -> Iterator[Dict[str, Any]]:
    """Yield dict items from paginator when available, else marker-loop fallback.

    The fallback keeps unit-test fakes that do not implement boto3 paginators
    usable. Items are produced lazily, one page at a time.

    ``continuation_keys`` maps response keys to request keys for APIs whose
    continuation spans several fields (Route 53 record sets); when given, it
    replaces ``request_token_key``/``response_token_keys`` and the loop runs
    while the response says ``IsTruncated``.
    """
    params = dict(params or {})

    paginator = _paginator_or_none(client, operation, paginator_fallback_exceptions)
    if paginator is not None:
        for page in paginator.paginate(**params):
            yield from _page_items(page, result_key)
        return

    call = getattr(client, operation, None)
    if call is None:
        raise AttributeError(f"client has no operation {operation}")

    if continuation_keys:
        req = dict(params)
        while True:
            resp = call(**req)
            yield from _page_items(resp, result_key)
            if not resp.get("IsTruncated"):
                break
            req = dict(params)
            for response_key, request_key in continuation_keys.items():
                if resp.get(response_key):
                    req[request_key] = resp[response_key]
        return

    next_token: Optional[str] = None
    while True:
        req = dict(params)
        if next_token:
            req[request_token_key] = next_token
        resp = call(**req) if req else call()
        yield from _page_items(resp, result_key)

        next_token = None
        for key in response_token_keys:
            token = resp.get(key)
            if token:
                next_token = str(token)
                break
        if not next_token:
            break


def client_error_code(exc: ClientError) -> str:
    try:
        return str(exc.response.get("Error", {}).get("Code") or "")
    except (AttributeError, TypeError, ValueError):
        return ""


def client_error_message(exc: ClientError) -> str:
    try:
        return str(exc.response.get("Error", {}).get("Message") or "")
    except (AttributeError, TypeError, ValueError):
        return ""


@contextmanager
def aws_call(operation: str) -> Iterator[None]:
    """Translate botocore failures raised inside the block into CollaboratorError."""
    try:
        yield
    except ClientError as exc:
        raise CollaboratorError(
            operation, code=client_error_code(exc), message=client_error_message(exc)
        ) from exc
    except BotoCoreError as exc:
        raise CollaboratorError(operation, message=str(exc)) from exc


def guarded_iter(operation: str, factory: Callable[[], Iterator[Any]]) -> Iterator[Any]:
    """Iterate ``factory()`` lazily, translating botocore failures page by page."""
    with aws_call(operation):
        yield from factory()


def text(value: Any) -> str:
    """Best-effort string conversion (None -> empty string)."""
    if value is None:
        return ""
    return str(value)


def strip_zone_id(raw_id: Any) -> str:
    """Return a hosted zone id without the ``/hostedzone/`` prefix."""
    value = text(raw_id)
    prefix = "/hostedzone/"
    if value.startswith(prefix):
        return value[len(prefix):]
    return value
