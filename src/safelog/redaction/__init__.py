"""Deep, path-based redaction of arbitrary object graphs."""

from safelog.redaction.engine import DEFAULT_MAX_DEPTH, sanitize, to_plain, unset
from safelog.redaction.paths import RedactionPath, coerce_paths, split_path

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "RedactionPath",
    "coerce_paths",
    "sanitize",
    "split_path",
    "to_plain",
    "unset",
]
