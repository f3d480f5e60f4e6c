"""Deep redaction engine.

``sanitize`` clones an arbitrary object graph and removes every value reachable
by a redaction path, at every depth where the path's key chain occurs. A
single-key path such as ``password`` therefore removes that field wherever it
appears; ``user.token`` is removed from the root and from beneath any nested
mapping that has a ``user`` entry holding a ``token``.
"""

from __future__ import annotations

import copy
import dataclasses
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from safelog.exceptions import CyclicReferenceError, MaxDepthExceededError
from safelog.redaction.paths import RedactionPath, coerce_paths

DEFAULT_MAX_DEPTH = 64

_MISSING = object()


def to_plain(value: Any) -> Any:
    """Convert models, dataclasses and foreign mappings to a plain ``dict``.

    Dataclasses are converted one level deep; their field values are left for
    the caller to walk. Anything else is returned as is.
    """
    if isinstance(value, BaseModel):
        return value.model_dump()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {field.name: getattr(value, field.name) for field in dataclasses.fields(value)}
    if isinstance(value, Mapping) and not isinstance(value, dict):
        return dict(value.items())
    return value


def sanitize(
    value: Any,
    paths: Iterable[str | RedactionPath | Sequence[str]],
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Any:
    """Return a redacted deep copy of *value*.

    Falsy values, scalars and empty containers are returned unchanged without
    copying. The input is never modified.

    Raises:
        CyclicReferenceError: If a container (directly or indirectly) contains itself.
        MaxDepthExceededError: If containers are nested deeper than *max_depth*.
    """
    value = to_plain(value)
    if not value or not isinstance(value, (dict, list, tuple)):
        return value

    resolved = coerce_paths(paths)
    # Tuples are cloned as lists so their slots can be blanked, then restored.
    tuples: set[int] = set()
    clone = _clone(value, max_depth, 0, set(), tuples)
    if resolved:
        _redact_node(clone, resolved)
    return _restore_tuples(clone, tuples)


def _clone(
    node: Any, max_depth: int, depth: int, ancestors: set[int], tuples: set[int]
) -> Any:
    plain = to_plain(node)
    if not isinstance(plain, (dict, list, tuple)):
        return copy.deepcopy(plain)
    if depth > max_depth:
        raise MaxDepthExceededError(max_depth)

    marker = id(node)
    if marker in ancestors:
        raise CyclicReferenceError("object graph")
    ancestors.add(marker)

    result: Any
    if isinstance(plain, dict):
        result = {
            key: _clone(child, max_depth, depth + 1, ancestors, tuples)
            for key, child in plain.items()
        }
    else:
        result = [_clone(child, max_depth, depth + 1, ancestors, tuples) for child in plain]
        if isinstance(plain, tuple):
            tuples.add(id(result))

    ancestors.discard(marker)
    return result


def _restore_tuples(node: Any, tuples: set[int]) -> Any:
    if not tuples:
        return node
    if isinstance(node, dict):
        for key, child in node.items():
            node[key] = _restore_tuples(child, tuples)
        return node
    if isinstance(node, list):
        node[:] = [_restore_tuples(child, tuples) for child in node]
        return tuple(node) if id(node) in tuples else node
    return node


def _redact_node(node: Any, paths: tuple[RedactionPath, ...]) -> None:
    if isinstance(node, dict):
        for path in paths:
            unset(node, path)
        children: Iterable[Any] = list(node.values())
    elif isinstance(node, (list, tuple)):
        children = node
    else:
        return

    for child in children:
        _redact_node(child, paths)


def unset(node: dict[Any, Any], path: RedactionPath) -> bool:
    """Remove the value at *path* relative to *node*, in place.

    For paths parsed from a string, a key equal to the whole raw string wins
    over following the chain.
    Returns True if something was removed.
    """
    if path.match_raw and path.raw in node:
        del node[path.raw]
        return True

    parent: Any = node
    for key in path.keys[:-1]:
        parent = _child(parent, key)
        if parent is _MISSING:
            return False
    return _remove(parent, path.keys[-1])


def _index(container: Sequence[Any], key: str) -> int | None:
    if key.isascii() and key.isdigit() and int(key) < len(container):
        return int(key)
    return None


def _child(container: Any, key: str) -> Any:
    if isinstance(container, dict):
        return container.get(key, _MISSING)
    if isinstance(container, (list, tuple)):
        index = _index(container, key)
        return _MISSING if index is None else container[index]
    return _MISSING


def _remove(container: Any, key: str) -> bool:
    if isinstance(container, dict):
        if key in container:
            del container[key]
            return True
        return False
    if isinstance(container, list):
        # Blank the slot so sibling indexes stay where they were.
        index = _index(container, key)
        if index is not None:
            container[index] = None
            return True
    return False


__all__ = ["DEFAULT_MAX_DEPTH", "sanitize", "to_plain", "unset"]
