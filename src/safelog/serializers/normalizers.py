"""Normalizers: turn classified entities into redacted log records.

Every normalizer takes the same arguments (entity, redaction paths, config)
and returns a plain ``dict``. Bodies and payloads go through the redaction
engine; the input entity is never modified.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from typing import Any

from safelog.config.models import SerializerConfig
from safelog.redaction.engine import sanitize
from safelog.redaction.paths import RedactionPath, coerce_paths
from safelog.serializers.entities import (
    Entity,
    ErrorEntity,
    Event,
    InboundRequest,
    InboundResponse,
    OutboundRequest,
    OutboundResponse,
    classify,
)
from safelog.serializers.errors import normalize_error
from safelog.serializers.records import (
    InboundRequestRecord,
    InboundResponseRecord,
    OutboundRequestRecord,
    OutboundResponseRecord,
)

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = SerializerConfig()


def _decode_body(data: Any) -> Any:
    """Parse textual request bodies as JSON so their fields can be redacted."""
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8", errors="replace")
    if not isinstance(data, str):
        return data
    try:
        return json.loads(data)
    except ValueError:
        logger.debug("Request body is not JSON (%d chars); logging it verbatim.", len(data))
        return data


def normalize_outbound_request(
    entity: OutboundRequest,
    paths: tuple[RedactionPath, ...] = (),
    config: SerializerConfig | None = None,
) -> dict[str, Any]:
    config = config or _DEFAULT_CONFIG
    excluded = set(config.excluded_header_groups)
    fields: dict[str, Any] = {
        "method": entity.method,
        "url": entity.url,
        "headers": {k: v for k, v in entity.headers.items() if k not in excluded},
        "params": entity.params,
    }

    data = _decode_body(entity.data)
    if data:
        fields["body"] = sanitize(data, paths, max_depth=config.max_depth)

    return OutboundRequestRecord(**fields).to_log()


def normalize_outbound_response(
    entity: OutboundResponse,
    paths: tuple[RedactionPath, ...] = (),
    config: SerializerConfig | None = None,
) -> dict[str, Any]:
    config = config or _DEFAULT_CONFIG
    return OutboundResponseRecord(
        status_code=entity.status,
        headers=entity.headers,
        body=sanitize(entity.data, paths, max_depth=config.max_depth),
    ).to_log()


def normalize_inbound_request(
    entity: InboundRequest,
    paths: tuple[RedactionPath, ...] = (),
    config: SerializerConfig | None = None,
) -> dict[str, Any]:
    config = config or _DEFAULT_CONFIG
    fields: dict[str, Any] = {
        "method": entity.method,
        "url": entity.url,
        "headers": entity.headers,
        "params": entity.params,
        "remote_address": entity.remote_address,
        "remote_port": entity.remote_port,
    }
    if entity.body:
        fields["body"] = sanitize(entity.body, paths, max_depth=config.max_depth)

    return InboundRequestRecord(**fields).to_log()


def normalize_inbound_response(
    entity: InboundResponse,
    paths: tuple[RedactionPath, ...] = (),
    config: SerializerConfig | None = None,
) -> dict[str, Any]:
    config = config or _DEFAULT_CONFIG
    fields: dict[str, Any] = {"status_code": entity.status_code, "headers": entity.headers}
    # Servers do not keep the body they sent; callers attach it under ``locals.body``.
    if entity.body:
        fields["body"] = sanitize(entity.body, paths, max_depth=config.max_depth)

    return InboundResponseRecord(**fields).to_log()


def normalize_event(
    entity: Event,
    paths: tuple[RedactionPath, ...] = (),
    config: SerializerConfig | None = None,
) -> Any:
    config = config or _DEFAULT_CONFIG
    return sanitize(entity.payload, paths, max_depth=config.max_depth)


def normalize(
    entity: Entity,
    paths: tuple[RedactionPath, ...] = (),
    config: SerializerConfig | None = None,
) -> Any:
    """Dispatch *entity* to the normalizer for its variant."""
    if isinstance(entity, OutboundRequest):
        return normalize_outbound_request(entity, paths, config)
    if isinstance(entity, OutboundResponse):
        return normalize_outbound_response(entity, paths, config)
    if isinstance(entity, InboundRequest):
        return normalize_inbound_request(entity, paths, config)
    if isinstance(entity, InboundResponse):
        return normalize_inbound_response(entity, paths, config)
    if isinstance(entity, ErrorEntity):
        return normalize_error(entity, paths, config)
    if isinstance(entity, Event):
        return normalize_event(entity, paths, config)
    raise TypeError(f"Unknown entity variant: {type(entity).__name__}")


def serialize_any(
    value: Any,
    paths: Iterable[str | RedactionPath | Sequence[str]] = (),
    config: SerializerConfig | None = None,
) -> Any:
    """Classify *value* and serialize it with the matching normalizer."""
    entity = classify(value)
    logger.debug("Classified %s as %s", type(value).__name__, type(entity).__name__)
    return normalize(entity, coerce_paths(paths), config)


__all__ = [
    "normalize",
    "normalize_event",
    "normalize_inbound_request",
    "normalize_inbound_response",
    "normalize_outbound_request",
    "normalize_outbound_response",
    "serialize_any",
]
