"""Serializer registry.

``default_serializers`` builds the mapping from log field name to serializer
that a logger's per-field serializer configuration expects:

- ``axios_req`` / ``axios_res``: requests made and responses received by HTTP clients
- ``req`` / ``res``: requests received and responses sent by servers
- ``event``: arbitrary payloads, e.g. messages handled by a consumer
- ``err``: exceptions, with their full cause chain
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from safelog.config.models import SerializerConfig
from safelog.redaction.paths import RedactionPath, coerce_paths
from safelog.serializers.entities import (
    EntityKind,
    classify_error,
    classify_event,
    classify_inbound_request,
    classify_inbound_response,
    classify_outbound_request,
    classify_outbound_response,
)
from safelog.serializers.errors import normalize_error
from safelog.serializers.normalizers import (
    normalize_event,
    normalize_inbound_request,
    normalize_inbound_response,
    normalize_outbound_request,
    normalize_outbound_response,
)

logger = logging.getLogger(__name__)

Serializer = Callable[[Any], Any]
PathArg = str | RedactionPath | Sequence[str]

SERIALIZER_NAMES: tuple[str, ...] = tuple(kind.value for kind in EntityKind)


def _resolve(
    paths: Sequence[PathArg], config: SerializerConfig | None
) -> tuple[tuple[RedactionPath, ...], SerializerConfig]:
    config = config or SerializerConfig()
    return coerce_paths([*paths, *config.redact_paths]), config


def _build(
    kind: EntityKind,
    classifier: Callable[[Any], Any],
    normalizer: Callable[..., Any],
    paths: tuple[RedactionPath, ...],
    config: SerializerConfig,
) -> Serializer:
    def serialize(value: Any) -> Any:
        entity = classifier(value)
        if entity is None:
            logger.debug(
                "Value of type %s has no %s shape; logging it unchanged.",
                type(value).__name__,
                kind.value,
            )
            return value
        return normalizer(entity, paths, config)

    serialize.__name__ = f"serialize_{kind.value}"
    return serialize


def outbound_request_serializer(*paths: PathArg, config: SerializerConfig | None = None) -> Serializer:
    """Create the serializer for requests made by an HTTP client."""
    resolved, config = _resolve(paths, config)
    return _build(
        EntityKind.OUTBOUND_REQUEST,
        classify_outbound_request,
        normalize_outbound_request,
        resolved,
        config,
    )


def outbound_response_serializer(*paths: PathArg, config: SerializerConfig | None = None) -> Serializer:
    """Create the serializer for responses received by an HTTP client."""
    resolved, config = _resolve(paths, config)
    return _build(
        EntityKind.OUTBOUND_RESPONSE,
        classify_outbound_response,
        normalize_outbound_response,
        resolved,
        config,
    )


def inbound_request_serializer(*paths: PathArg, config: SerializerConfig | None = None) -> Serializer:
    """Create the serializer for requests received by a server."""
    resolved, config = _resolve(paths, config)
    return _build(
        EntityKind.INBOUND_REQUEST,
        classify_inbound_request,
        normalize_inbound_request,
        resolved,
        config,
    )


def inbound_response_serializer(*paths: PathArg, config: SerializerConfig | None = None) -> Serializer:
    """Create the serializer for responses sent by a server."""
    resolved, config = _resolve(paths, config)
    return _build(
        EntityKind.INBOUND_RESPONSE,
        classify_inbound_response,
        normalize_inbound_response,
        resolved,
        config,
    )


def event_serializer(*paths: PathArg, config: SerializerConfig | None = None) -> Serializer:
    """Create the serializer that redacts whole event payloads."""
    resolved, config = _resolve(paths, config)
    return _build(EntityKind.EVENT, classify_event, normalize_event, resolved, config)


def error_serializer(config: SerializerConfig | None = None) -> Serializer:
    """Create the exception serializer. Error records are never redacted."""
    config = config or SerializerConfig()
    return _build(EntityKind.ERROR, classify_error, normalize_error, (), config)


def default_serializers(
    *paths: PathArg, config: SerializerConfig | None = None
) -> dict[str, Serializer]:
    """Build the six field serializers, all sharing the same redaction paths.

    Args:
        *paths: Paths to remove from every body and payload, wherever they occur
            (``"password"``, ``"user.token"``, ``"items[0].secret"``).
        config: Optional settings; its ``redact_paths`` are added after *paths*.

    Returns:
        A new dict keyed by ``axios_req``, ``axios_res``, ``req``, ``res``,
        ``event`` and ``err``.
    """
    resolved, config = _resolve(paths, config)
    serializers = {
        EntityKind.OUTBOUND_REQUEST.value: outbound_request_serializer(*resolved, config=config),
        EntityKind.OUTBOUND_RESPONSE.value: outbound_response_serializer(*resolved, config=config),
        EntityKind.INBOUND_REQUEST.value: inbound_request_serializer(*resolved, config=config),
        EntityKind.INBOUND_RESPONSE.value: inbound_response_serializer(*resolved, config=config),
        EntityKind.EVENT.value: event_serializer(*resolved, config=config),
        EntityKind.ERROR.value: error_serializer(config=config),
    }
    logger.debug(
        "Built %d serializers redacting %d path(s).", len(serializers), len(resolved)
    )
    return serializers


__all__ = [
    "SERIALIZER_NAMES",
    "Serializer",
    "default_serializers",
    "error_serializer",
    "event_serializer",
    "inbound_request_serializer",
    "inbound_response_serializer",
    "outbound_request_serializer",
    "outbound_response_serializer",
]
