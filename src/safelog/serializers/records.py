"""Log records produced by the serializers.

Records are dumped by alias, so the emitted keys keep the camelCase names log
pipelines already index on (``statusCode``, ``remoteAddress``...). Optional
``body`` keys are left out entirely unless a body was produced.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LogRecordModel(BaseModel):
    """Base for serializer output records."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, arbitrary_types_allowed=True)

    def to_log(self) -> dict[str, Any]:
        """Return the record as a plain dict, omitting fields never set."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class OutboundRequestRecord(LogRecordModel):
    """Snapshot of a request made by an HTTP client."""

    method: Any = Field(default=None, description="HTTP method.")
    url: Any = Field(default=None, description="Request URL.")
    headers: dict[Any, Any] = Field(
        default_factory=dict, description="Caller-set headers, without client default groups."
    )
    params: Any = Field(default=None, description="Query parameters.")
    body: Any = Field(default=None, description="Redacted request payload.")


class OutboundResponseRecord(LogRecordModel):
    """Snapshot of a response received by an HTTP client."""

    status_code: Any = Field(default=None, alias="statusCode")
    headers: dict[Any, Any] = Field(default_factory=dict)
    body: Any = Field(default=None, description="Redacted response payload.")


class InboundRequestRecord(LogRecordModel):
    """Snapshot of a request received by a server."""

    method: Any = None
    url: Any = None
    headers: dict[Any, Any] = Field(default_factory=dict)
    params: Any = None
    remote_address: Any = Field(default=None, alias="remoteAddress")
    remote_port: Any = Field(default=None, alias="remotePort")
    body: Any = Field(default=None, description="Redacted request payload.")


class InboundResponseRecord(LogRecordModel):
    """Snapshot of a response sent by a server."""

    status_code: int = Field(..., alias="statusCode")
    headers: dict[Any, Any] = Field(default_factory=dict)
    body: Any = Field(default=None, description="Redacted response payload.")


# Serialized exception: stack, message and name, then the error's own fields.
ErrorRecord = dict[str, Any]


__all__ = [
    "ErrorRecord",
    "InboundRequestRecord",
    "InboundResponseRecord",
    "LogRecordModel",
    "OutboundRequestRecord",
    "OutboundResponseRecord",
]
