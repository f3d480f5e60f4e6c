"""Entity variants and the classification step that produces them.

Serializers receive loosely typed runtime objects: httpx requests and
responses, request-config dicts, ASGI/WSGI-ish server requests, exceptions,
arbitrary event payloads. Each ``classify_*`` function reads a raw value once
and returns a typed variant, or ``None`` when the value does not carry the
variant's shape marker.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import httpx

_MISSING = object()


class EntityKind(str, Enum):
    """Entity variants, valued by the log field each one is serialized under."""

    OUTBOUND_REQUEST = "axios_req"
    OUTBOUND_RESPONSE = "axios_res"
    INBOUND_REQUEST = "req"
    INBOUND_RESPONSE = "res"
    EVENT = "event"
    ERROR = "err"


def read(source: Any, *names: str, default: Any = None) -> Any:
    """Return the first of *names* present on *source*.

    Mapping keys are checked for mappings, attributes for everything else.
    Attributes whose getter raises count as absent.
    """
    if source is None:
        return default
    for name in names:
        if isinstance(source, Mapping):
            if name in source:
                return source[name]
            continue
        try:
            value = getattr(source, name, _MISSING)
        except Exception:
            value = _MISSING
        if value is not _MISSING:
            return value
    return default


def _call(accessor: Callable[[], Any]) -> Any:
    """Call a zero-argument accessor; one that raises counts as absent."""
    try:
        return accessor()
    except Exception:
        return None


def plain_headers(headers: Any) -> dict[str, Any]:
    """Copy a header collection into a ``dict``; anything unreadable becomes ``{}``."""
    if isinstance(headers, (Mapping, httpx.Headers)):
        return dict(headers.items())
    return {}


def _plain_params(params: Any) -> Any:
    if isinstance(params, (Mapping, httpx.QueryParams)):
        return dict(params.items())
    return params


def _text_url(url: Any) -> Any:
    if url is None or isinstance(url, str):
        return url
    return str(url)


@dataclass(frozen=True)
class OutboundRequest:
    method: Any
    url: Any
    headers: dict[str, Any]
    params: Any
    data: Any


@dataclass(frozen=True)
class OutboundResponse:
    status: Any
    headers: dict[str, Any]
    data: Any


@dataclass(frozen=True)
class InboundRequest:
    method: Any
    url: Any
    headers: dict[str, Any]
    params: Any
    remote_address: Any
    remote_port: Any
    body: Any


@dataclass(frozen=True)
class InboundResponse:
    status_code: int
    headers: dict[str, Any]
    body: Any


@dataclass(frozen=True)
class Event:
    payload: Any


@dataclass(frozen=True)
class ErrorEntity:
    """An exception, or an error-like object carrying a ``stack``."""

    error: Any
    name: Any
    message: Any
    fields: dict[str, Any] = field(default_factory=dict)


Entity = (
    OutboundRequest | OutboundResponse | InboundRequest | InboundResponse | Event | ErrorEntity
)


def _request_content(request: httpx.Request) -> bytes | None:
    try:
        content = request.content
    except httpx.RequestNotRead:
        return None
    return content or None


def _response_data(response: httpx.Response) -> Any:
    try:
        content = response.content
    except httpx.ResponseNotRead:
        return None
    if not content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def classify_outbound_request(value: Any) -> OutboundRequest | None:
    """Recognise an ``httpx.Request`` or a request-config object with a ``url``."""
    if isinstance(value, httpx.Request):
        return OutboundRequest(
            method=value.method,
            url=str(value.url),
            headers=plain_headers(value.headers),
            params=_plain_params(value.url.params),
            data=_request_content(value),
        )
    if not value or read(value, "url") is None:
        return None
    return OutboundRequest(
        method=read(value, "method"),
        url=_text_url(read(value, "url")),
        headers=plain_headers(read(value, "headers")),
        params=_plain_params(read(value, "params")),
        data=read(value, "data"),
    )


def classify_outbound_response(value: Any) -> OutboundResponse | None:
    """Recognise an ``httpx.Response`` or a response object with a ``status``."""
    if isinstance(value, httpx.Response):
        return OutboundResponse(
            status=value.status_code,
            headers=plain_headers(value.headers),
            data=_response_data(value),
        )
    if not value or read(value, "status") is None:
        return None
    return OutboundResponse(
        status=read(value, "status"),
        headers=plain_headers(read(value, "headers")),
        data=read(value, "data"),
    )


def _peer(socket: Any) -> tuple[Any, Any]:
    getpeername = read(socket, "getpeername")
    if callable(getpeername):
        socket = _call(getpeername)
        if socket is None:
            return None, None
    # ASGI scopes and starlette's Address carry the peer as (host, port).
    if isinstance(socket, (tuple, list)):
        host = socket[0] if len(socket) > 0 else None
        port = socket[1] if len(socket) > 1 else None
        return host, port
    return (
        read(socket, "remote_address", "remoteAddress", "host"),
        read(socket, "remote_port", "remotePort", "port"),
    )


def classify_inbound_request(value: Any) -> InboundRequest | None:
    """Recognise a server-side request by its ``socket`` (or ``client``) field."""
    socket = read(value, "socket", "client")
    if not value or not socket:
        return None

    remote_address, remote_port = _peer(socket)
    body = read(value, "body")
    if callable(body):
        # Frameworks that expose the body as a coroutine method have not parsed it yet.
        body = None
    return InboundRequest(
        method=read(value, "method"),
        url=_text_url(read(value, "url")),
        headers=plain_headers(read(value, "headers")),
        params=_plain_params(read(value, "params", "path_params")),
        remote_address=remote_address,
        remote_port=remote_port,
        body=body,
    )


def classify_inbound_response(value: Any) -> InboundResponse | None:
    """Recognise a server-side response by a non-zero integer status code."""
    status_code = read(value, "status_code", "statusCode")
    if not isinstance(status_code, int) or isinstance(status_code, bool) or not status_code:
        return None

    accessor = read(value, "get_headers", "getHeaders")
    headers = _call(accessor) if callable(accessor) else read(value, "headers")
    return InboundResponse(
        status_code=status_code,
        headers=plain_headers(headers),
        body=read(read(value, "locals"), "body"),
    )


def _own_fields(value: Any) -> dict[str, Any]:
    if isinstance(value, Mapping):
        return dict(value.items())
    try:
        attributes = vars(value)
    except TypeError:
        return {}
    return {
        key: item
        for key, item in attributes.items()
        if not (key.startswith("__") and key.endswith("__"))
    }


def classify_error(value: Any) -> ErrorEntity | None:
    """Recognise an exception, or any object with a non-empty ``stack``."""
    if isinstance(value, BaseException):
        return ErrorEntity(
            error=value,
            name=type(value).__name__,
            message=str(value),
            fields=_own_fields(value),
        )
    if not value or not read(value, "stack"):
        return None
    return ErrorEntity(
        error=value,
        name=read(value, "name"),
        message=read(value, "message"),
        fields=_own_fields(value),
    )


def classify_event(value: Any) -> Event:
    return Event(payload=value)


def classify(value: Any) -> Entity:
    """Pick the variant for *value*, falling back to :class:`Event`."""
    classifiers: tuple[Callable[[Any], Entity | None], ...]
    if isinstance(value, (httpx.Request, httpx.Response)):
        classifiers = (classify_outbound_response, classify_outbound_request)
    else:
        classifiers = (
            classify_error,
            classify_inbound_request,
            classify_inbound_response,
            classify_outbound_response,
            classify_outbound_request,
        )

    for classifier in classifiers:
        entity = classifier(value)
        if entity is not None:
            return entity
    return classify_event(value)


__all__ = [
    "Entity",
    "EntityKind",
    "ErrorEntity",
    "Event",
    "InboundRequest",
    "InboundResponse",
    "OutboundRequest",
    "OutboundResponse",
    "classify",
    "classify_error",
    "classify_event",
    "classify_inbound_request",
    "classify_inbound_response",
    "classify_outbound_request",
    "classify_outbound_response",
    "plain_headers",
    "read",
]
