"""Log field serializers for HTTP traffic, events and errors."""

from safelog.serializers.entities import (
    Entity,
    EntityKind,
    ErrorEntity,
    Event,
    InboundRequest,
    InboundResponse,
    OutboundRequest,
    OutboundResponse,
    classify,
)
from safelog.serializers.errors import flatten_stack, serialize_err
from safelog.serializers.normalizers import normalize, serialize_any
from safelog.serializers.records import (
    ErrorRecord,
    InboundRequestRecord,
    InboundResponseRecord,
    OutboundRequestRecord,
    OutboundResponseRecord,
)
from safelog.serializers.registry import (
    SERIALIZER_NAMES,
    Serializer,
    default_serializers,
    error_serializer,
    event_serializer,
    inbound_request_serializer,
    inbound_response_serializer,
    outbound_request_serializer,
    outbound_response_serializer,
)

__all__ = [
    "SERIALIZER_NAMES",
    "Entity",
    "EntityKind",
    "ErrorEntity",
    "ErrorRecord",
    "Event",
    "InboundRequest",
    "InboundRequestRecord",
    "InboundResponse",
    "InboundResponseRecord",
    "OutboundRequest",
    "OutboundRequestRecord",
    "OutboundResponse",
    "OutboundResponseRecord",
    "Serializer",
    "classify",
    "default_serializers",
    "error_serializer",
    "event_serializer",
    "flatten_stack",
    "inbound_request_serializer",
    "inbound_response_serializer",
    "normalize",
    "outbound_request_serializer",
    "outbound_response_serializer",
    "serialize_any",
    "serialize_err",
]
