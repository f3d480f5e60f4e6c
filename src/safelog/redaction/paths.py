"""Redaction path values.

A redaction path names a value relative to some node of an object graph,
e.g. ``user.token`` or ``items[0].secret``. Paths are parsed once, when the
serializers are built, and matched structurally at log time.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

# Property-path grammar: bare names, [index] and ["quoted key"] segments, and
# the empty segments produced by "a..b" or a trailing "a.".
_SEGMENT_PATTERN = re.compile(
    r"[^.\[\]]+"
    r"|\[(?:([^\"'\[\]][^\[\]]*)|([\"'])((?:(?!\2)[^\\]|\\.)*?)\2)\]"
    r"|(?=(?:\.|\[\])(?:\.|\[\]|$))"
)
_ESCAPE_PATTERN = re.compile(r"\\(\\)?")


def split_path(raw: str) -> tuple[str, ...]:
    """Split a property-path string into its keys.

    Never rejects input: anything that is not a recognised segment is skipped,
    and a string with no segments yields a single empty key.
    """
    keys: list[str] = []
    if raw.startswith("."):
        keys.append("")
    for match in _SEGMENT_PATTERN.finditer(raw):
        index, quote, quoted = match.group(1), match.group(2), match.group(3)
        if quote:
            keys.append(_ESCAPE_PATTERN.sub(r"\1", quoted))
        elif index is not None:
            keys.append(index.strip())
        else:
            keys.append(match.group(0))
    return tuple(keys) or ("",)


@dataclass(frozen=True)
class RedactionPath:
    """An ordered, non-empty sequence of keys to remove wherever it occurs."""

    raw: str
    keys: tuple[str, ...]
    # Whether a key spelled exactly like ``raw`` is removed as well.
    match_raw: bool = True

    def __post_init__(self) -> None:
        if not self.keys:
            raise ValueError("A redaction path needs at least one key.")

    def __str__(self) -> str:
        return self.raw

    @classmethod
    def parse(cls, raw: str) -> RedactionPath:
        """Build a path from its string form (``"user.token"``)."""
        return cls(raw=raw, keys=split_path(raw))

    @classmethod
    def from_keys(cls, *keys: str) -> RedactionPath:
        """Build a path from already separated keys."""
        return cls(raw=".".join(keys), keys=tuple(keys), match_raw=False)

    @classmethod
    def coerce(cls, value: str | RedactionPath | Sequence[str]) -> RedactionPath:
        """Accept a path object, a path string or a sequence of keys."""
        if isinstance(value, RedactionPath):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        return cls.from_keys(*(str(key) for key in value))


def coerce_paths(paths: Iterable[str | RedactionPath | Sequence[str]]) -> tuple[RedactionPath, ...]:
    """Normalize a mix of path strings and path objects, dropping duplicates."""
    seen: dict[RedactionPath, None] = {}
    for path in paths:
        seen.setdefault(RedactionPath.coerce(path), None)
    return tuple(seen)


__all__ = ["RedactionPath", "coerce_paths", "split_path"]
