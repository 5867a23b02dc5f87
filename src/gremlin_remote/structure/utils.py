"""Formatting and comparison helpers shared by the structure models."""

from __future__ import annotations

from typing import Any

from gremlin_remote.core.config import StructureConfig

_SUMMARY_LENGTH = StructureConfig().summary_length


def summarize(value: Any, length: int | None = None) -> Any:
    """Return a short string form of ``value`` for display.

    Falsy values are returned unchanged.
    """
    if not value:
        return value
    text = str(value)
    limit = _SUMMARY_LENGTH if length is None else length
    return text[:limit] if len(text) > limit else text


def are_equal(left: Any, right: Any) -> bool:
    """Compare two values, recursing element-wise into lists and tuples.

    Objects that define their own equality (elements, properties, paths)
    are compared with it.
    """
    if left is right:
        return True
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        if len(left) != len(right):
            return False
        return all(are_equal(a, b) for a, b in zip(left, right))
    return bool(left == right)


def stable_hash(value: Any) -> int:
    """Hash ``value``, freezing dicts, lists and sets when it is unhashable.

    Values that compare equal hash equally, whatever their key order.
    """
    try:
        return hash(value)
    except TypeError:
        return hash(_freeze(value))


def _freeze(value: Any) -> Any:
    if isinstance(value, dict):
        return frozenset((_freeze(k), _freeze(v)) for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(_freeze(v) for v in value)
    try:
        hash(value)
    except TypeError:
        return repr(value)
    return value
