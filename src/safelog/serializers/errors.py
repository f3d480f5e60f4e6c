"""Exception serialization with full cause chains.

Dumps long stack traces for exceptions that carry a cause: Python's
``__cause__``/``__context__`` links, or a zero-argument ``cause()`` method in
the style of verror-like error objects. Each link is appended as
``"\\nCaused by: <stack>"``.
"""

from __future__ import annotations

import traceback
from typing import Any

from safelog.config.models import DEFAULT_MAX_CAUSES, SerializerConfig
from safelog.exceptions import CauseChainTooLongError, CyclicReferenceError
from safelog.redaction.paths import RedactionPath
from safelog.serializers.entities import ErrorEntity, classify_error, read
from safelog.serializers.records import ErrorRecord

CAUSED_BY = "\nCaused by: "


def error_stack(error: Any) -> str:
    """Return the stack text of a single error, without its causes."""
    if isinstance(error, BaseException):
        lines = traceback.format_exception(type(error), error, error.__traceback__, chain=False)
        return "".join(lines).rstrip("\n")
    stack = read(error, "stack")
    return str(stack) if stack else str(error)


def error_cause(error: Any) -> Any:
    """Return the error that caused *error*, or None."""
    getter = read(error, "cause")
    if callable(getter):
        return getter()
    if isinstance(error, BaseException):
        if error.__cause__ is not None:
            return error.__cause__
        if not error.__suppress_context__:
            return error.__context__
    return None


def flatten_stack(error: Any, *, max_causes: int = DEFAULT_MAX_CAUSES) -> str:
    """Join the stacks of *error* and every error in its cause chain.

    Raises:
        CyclicReferenceError: If an error appears twice in its own chain.
        CauseChainTooLongError: If the chain has more than *max_causes* links.
    """
    chain = [error]
    cause = error_cause(error)
    while cause:
        if any(seen is cause for seen in chain):
            raise CyclicReferenceError("exception cause chain")
        if len(chain) > max_causes:
            raise CauseChainTooLongError(max_causes)
        chain.append(cause)
        cause = error_cause(cause)
    return CAUSED_BY.join(error_stack(link) for link in chain)


def normalize_error(
    entity: ErrorEntity,
    paths: tuple[RedactionPath, ...] = (),
    config: SerializerConfig | None = None,
) -> ErrorRecord:
    """Build the error record.

    Own fields of the error are applied last, so an error defining its own
    ``stack``, ``message`` or ``name`` attribute wins over the computed value.
    Error records are not redacted.
    """
    max_causes = config.max_causes if config is not None else DEFAULT_MAX_CAUSES
    record: ErrorRecord = {
        "stack": flatten_stack(entity.error, max_causes=max_causes),
        "message": entity.message,
        "name": entity.name,
    }
    record.update(entity.fields)
    return record


def serialize_err(error: Any) -> Any:
    """Serialize an exception, passing anything without a stack through untouched."""
    entity = classify_error(error)
    if entity is None:
        return error
    return normalize_error(entity)


__all__ = [
    "CAUSED_BY",
    "error_cause",
    "error_stack",
    "flatten_stack",
    "normalize_error",
    "serialize_err",
]
