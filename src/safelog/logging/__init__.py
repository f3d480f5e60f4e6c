"""
Secret-safe logging for safelog.

Hooks the serializers into the standard :mod:`logging` module. Entities are
attached to a record through ``extra`` and replaced by their redacted form
before any handler formats them::

    install_serializers(logger, "password", "user.token")
    logger.info("outbound call", extra={"axios_req": request})
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from safelog.config.models import SerializerConfig
from safelog.redaction.paths import RedactionPath
from safelog.serializers.registry import default_serializers

logger = logging.getLogger(__name__)

# Record attribute listing the fields already serialized, so a record passing
# through several filtered handlers is only serialized once.
_SERIALIZED_ATTR = "_safelog_serialized"


class SerializerFilter(logging.Filter):
    """Replace record attributes named after serializer keys with their serialized value."""

    def __init__(self, serializers: Mapping[str, Callable[[Any], Any]], name: str = "") -> None:
        super().__init__(name)
        self._serializers = dict(serializers)

    @property
    def fields(self) -> list[str]:
        """Record attributes this filter serializes."""
        return sorted(self._serializers)

    def filter(self, record: logging.LogRecord) -> bool:
        attributes = record.__dict__
        done: tuple[str, ...] = attributes.get(_SERIALIZED_ATTR, ())
        pending = [
            field for field in self._serializers if field in attributes and field not in done
        ]
        if not pending:
            return True

        for field in pending:
            attributes[field] = self._serializers[field](attributes[field])
        attributes[_SERIALIZED_ATTR] = (*done, *pending)
        return True


def install_serializers(
    target: logging.Logger | logging.Handler,
    *paths: str | RedactionPath | Sequence[str],
    config: SerializerConfig | None = None,
) -> SerializerFilter:
    """Attach a :class:`SerializerFilter` with the default serializers to *target*.

    Filters on a logger only see records logged through that logger; attach to
    a handler to cover records propagated from child loggers too.
    """
    serializer_filter = SerializerFilter(default_serializers(*paths, config=config))
    target.addFilter(serializer_filter)
    logger.debug("Installed safelog serializers on %r", target)
    return serializer_filter


__all__ = ["SerializerFilter", "install_serializers"]
